"""Debugging aids for a UART bus: byte accumulation, a dummy reader and log formatters."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from enum import Enum

from inetbox.uart.component import UARTComponent, UARTDevice

_LOGGER = logging.getLogger(__name__)

DUMMY_RECEIVER_BATCH = 50


class Direction(Enum):
    RX = "RX"
    TX = "TX"
    BOTH = "BOTH"


def _millis() -> int:
    return int(time.monotonic() * 1000)


TriggerAction = Callable[[Direction, bytes], None]


class UARTDebugger:
    """Accumulates bytes seen on a bus and hands them to actions at the right moment.

    The buffered bytes are passed on when the direction of the stream changes
    (when watching both directions), when a delimiter sequence is seen, when
    ``after_bytes`` bytes have been gathered, or when no byte has arrived for
    ``after_timeout`` milliseconds. Zero disables the byte and timeout limits.
    """

    def __init__(
        self,
        direction: Direction = Direction.BOTH,
        after_bytes: int = 0,
        after_timeout: int = 0,
        delimiter: Iterable[int] = b"",
        actions: Iterable[TriggerAction] = (),
        *,
        clock: Callable[[], int] = _millis,
    ) -> None:
        self.direction = direction
        self.after_bytes = after_bytes
        self.after_timeout = after_timeout
        self.delimiter = bytearray(delimiter)
        self.actions: list[TriggerAction] = list(actions)
        self.clock = clock
        self._buffer = bytearray()
        self._last_direction = Direction.RX
        self._last_time = 0
        self._delimiter_pos = 0
        self._triggering = False

    @property
    def buffered(self) -> bytes:
        """Bytes gathered since the last trigger."""
        return bytes(self._buffer)

    def add_delimiter_byte(self, byte: int) -> None:
        """Append a byte to the delimiter sequence."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"delimiter byte out of range: {byte}")
        self.delimiter.append(byte)

    def on_byte(self, direction: Direction, byte: int) -> None:
        """Feed one byte that travelled over the bus."""
        if not self._is_my_direction(direction) or self._triggering:
            return
        if self._buffer and self.direction is Direction.BOTH and self._last_direction is not direction:
            self._fire()
        self._buffer.append(byte & 0xFF)
        self._last_direction = direction
        self._last_time = self.clock()
        self._check_delimiter(byte & 0xFF)
        if self._buffer and self.after_bytes > 0 and len(self._buffer) >= self.after_bytes:
            self._fire()

    def loop(self) -> None:
        """Pass on the buffered bytes once the stream has been quiet long enough."""
        if (
            self._buffer
            and self.after_timeout > 0
            and (self.clock() - self._last_time) & 0xFFFFFFFF >= self.after_timeout
        ):
            self._fire()

    def _is_my_direction(self, direction: Direction) -> bool:
        return self.direction is Direction.BOTH or self.direction is direction

    def _check_delimiter(self, byte: int) -> None:
        if not self.delimiter or not self._buffer:
            return
        if self.delimiter[self._delimiter_pos] != byte:
            self._delimiter_pos = 0
            return
        self._delimiter_pos += 1
        if self._delimiter_pos == len(self.delimiter):
            self._fire()
            self._delimiter_pos = 0

    def _fire(self) -> None:
        self._triggering = True
        try:
            data = bytes(self._buffer)
            for action in self.actions:
                action(self._last_direction, data)
        finally:
            self._buffer.clear()
            self._triggering = False


class UARTDummyReceiver(UARTDevice):
    """Reads and discards incoming bytes so that a debugger sees the traffic."""

    def __init__(self, parent: UARTComponent | None = None) -> None:
        super().__init__(parent)

    def loop(self) -> None:
        """Discard up to a bounded number of available bytes."""
        for _ in range(DUMMY_RECEIVER_BATCH):
            if not self.available():
                break
            self.read_byte()


def _prefix(direction: Direction) -> str:
    return "<<< " if direction is Direction.RX else ">>> "


def _separator(separator: str | int) -> str:
    return chr(separator) if isinstance(separator, int) else separator


def _emit(text: str) -> str:
    _LOGGER.debug("%s", text)
    return text


def format_hex(direction: Direction, data: Iterable[int], separator: str | int = ":") -> str:
    """Bytes as two-digit upper-case hex values."""
    body = _separator(separator).join(f"{byte:02X}" for byte in bytes(data))
    return _emit(_prefix(direction) + body)


_ESCAPES = {
    7: "\\a",
    8: "\\b",
    9: "\\t",
    10: "\\n",
    11: "\\v",
    12: "\\f",
    13: "\\r",
    27: "\\e",
    34: '\\"',
    39: "\\'",
    92: "\\\\",
}


def _escape(byte: int) -> str:
    escaped = _ESCAPES.get(byte)
    if escaped is not None:
        return escaped
    if byte < 32 or byte > 127:
        return f"\\x{byte:02X}"
    return chr(byte)


def format_string(direction: Direction, data: Iterable[int]) -> str:
    """Bytes as a quoted string with unprintable characters escaped."""
    body = "".join(_escape(byte) for byte in bytes(data))
    return _emit(f'{_prefix(direction)}"{body}"')


def format_int(direction: Direction, data: Iterable[int], separator: str | int = ",") -> str:
    """Bytes as decimal integers."""
    body = _separator(separator).join(str(byte) for byte in bytes(data))
    return _emit(_prefix(direction) + body)


def format_binary(direction: Direction, data: Iterable[int], separator: str | int = ",") -> str:
    """Bytes as ``0b<bits> (0x<hex>)`` values."""
    body = _separator(separator).join(f"0b{byte:08b} (0x{byte:02X})" for byte in bytes(data))
    return _emit(_prefix(direction) + body)