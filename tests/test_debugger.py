import re

import pytest

from inetbox.uart.component import UARTComponent
from inetbox.uart.debugger import (
    Direction,
    UARTDebugger,
    UARTDummyReceiver,
    format_binary,
    format_hex,
    format_int,
    format_string,
)


class FakeBus(UARTComponent):
    def __init__(self, incoming=b""):
        super().__init__()
        self.rx = bytearray(incoming)

    def _write(self, data):
        pass

    def _read(self, length):
        out = bytes(self.rx[:length])
        del self.rx[:length]
        return out

    def _peek(self):
        return self.rx[0]

    def available(self):
        return len(self.rx)

    def flush(self):
        pass


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, direction, data):
        self.calls.append((direction, data))


def make(**kwargs):
    rec = Recorder()
    dbg = UARTDebugger(actions=[rec], **kwargs)
    return dbg, rec


def test_direction_change_fires_previous_bytes():
    dbg, rec = make()
    dbg.on_byte(Direction.RX, 1)
    dbg.on_byte(Direction.RX, 2)
    dbg.on_byte(Direction.TX, 3)
    assert rec.calls == [(Direction.RX, b"\x01\x02")]
    assert dbg.buffered == b"\x03"


def test_other_direction_is_ignored():
    dbg, rec = make(direction=Direction.RX, after_bytes=1)
    dbg.on_byte(Direction.TX, 5)
    assert dbg.buffered == b""
    dbg.on_byte(Direction.RX, 6)
    assert rec.calls == [(Direction.RX, b"\x06")]


def test_single_direction_does_not_fire_on_change():
    dbg, rec = make(direction=Direction.TX)
    dbg.on_byte(Direction.TX, 1)
    dbg.on_byte(Direction.TX, 2)
    assert rec.calls == []
    assert dbg.buffered == b"\x01\x02"


def test_after_bytes():
    dbg, rec = make(after_bytes=3)
    for byte in b"abcdef":
        dbg.on_byte(Direction.TX, byte)
    assert rec.calls == [(Direction.TX, b"abc"), (Direction.TX, b"def")]
    assert dbg.buffered == b""


def test_delimiter():
    dbg, rec = make(delimiter=b"\r\n")
    for byte in b"hi\r\nyo":
        dbg.on_byte(Direction.RX, byte)
    assert rec.calls == [(Direction.RX, b"hi\r\n")]
    assert dbg.buffered == b"yo"


def test_add_delimiter_byte():
    dbg, rec = make()
    dbg.add_delimiter_byte(0x0A)
    for byte in b"ab\ncd\n":
        dbg.on_byte(Direction.RX, byte)
    assert rec.calls == [(Direction.RX, b"ab\n"), (Direction.RX, b"cd\n")]


def test_add_delimiter_byte_out_of_range():
    dbg, _ = make()
    with pytest.raises(ValueError):
        dbg.add_delimiter_byte(256)


def test_timeout():
    now = [1000]
    dbg, rec = make(after_timeout=100, clock=lambda: now[0])
    dbg.on_byte(Direction.RX, 7)
    now[0] = 1050
    dbg.loop()
    assert rec.calls == []
    now[0] = 1100
    dbg.loop()
    assert rec.calls == [(Direction.RX, b"\x07")]


def test_timeout_zero_never_fires():
    now = [0]
    dbg, rec = make(clock=lambda: now[0])
    dbg.on_byte(Direction.RX, 7)
    now[0] = 10_000
    dbg.loop()
    assert rec.calls == []
    assert dbg.buffered == b"\x07"


def test_bytes_fed_during_trigger_are_ignored():
    calls = []
    dbg = UARTDebugger(after_bytes=1)

    def action(direction, data):
        calls.append(data)
        dbg.on_byte(direction, 0xFF)

    dbg.actions.append(action)
    dbg.on_byte(Direction.TX, 1)
    assert calls == [b"\x01"]
    assert dbg.buffered == b""


def test_dummy_receiver_reads_bounded_batch():
    bus = FakeBus(bytes(range(60)))
    receiver = UARTDummyReceiver(bus)
    receiver.loop()
    assert bus.available() == 10
    receiver.loop()
    assert bus.available() == 0


def test_format_hex_pinned():
    assert format_hex(Direction.RX, b"\x01\xab", ":") == "<<< 01:AB"


@pytest.mark.parametrize("direction", [Direction.RX, Direction.TX])
def test_format_hex_round_trip(direction):
    data = bytes([0, 15, 16, 200, 255])
    text = format_hex(direction, data, ord(" "))
    assert text[:4] == ("<<< " if direction is Direction.RX else ">>> ")
    assert bytes.fromhex(text[4:]) == data


def test_format_int_round_trip():
    data = bytes([0, 9, 10, 255])
    text = format_int(Direction.TX, data, ",")
    assert text.startswith(">>> ")
    assert [int(part) for part in text[4:].split(",")] == list(data)


def test_format_binary_round_trip():
    data = bytes([0, 5, 128, 255])
    text = format_binary(Direction.RX, data, ";")
    parts = text[4:].split(";")
    assert len(parts) == len(data)
    for part, byte in zip(parts, data):
        match = re.fullmatch(r"0b([01]{8}) \(0x([0-9A-F]{2})\)", part)
        assert match is not None
        assert int(match.group(1), 2) == byte
        assert int(match.group(2), 16) == byte


def test_format_string_printable():
    assert format_string(Direction.RX, b"Hello") == '<<< "Hello"'


def test_format_string_escapes():
    text = format_string(Direction.TX, b'\r\n"\\\x00\xff')
    assert text == '>>> "\\r\\n\\"\\\\\\x00\\xFF"'