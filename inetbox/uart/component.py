"""UART bus abstraction, devices attached to a bus and the write action."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from enum import IntEnum

_LOGGER = logging.getLogger(__name__)


class Parity(IntEnum):
    NONE = 0
    EVEN = 1
    ODD = 2


def parity_to_str(parity: int) -> str:
    """Name of a parity setting; ``"UNKNOWN"`` for values outside the enumeration."""
    try:
        return Parity(parity).name
    except ValueError:
        return "UNKNOWN"


class UARTComponent(ABC):
    """A UART bus.

    Subclasses move the bytes (``_write``, ``_read``, ``_peek``) and report
    ``available`` and ``flush``; reads wait up to ``read_timeout`` seconds for
    enough bytes and raise ``TimeoutError`` otherwise.
    """

    read_timeout: float = 0.1

    def __init__(
        self,
        baud_rate: int = 9600,
        *,
        stop_bits: int = 1,
        data_bits: int = 8,
        parity: Parity = Parity.NONE,
        rx_buffer_size: int = 256,
        tx_pin: int | None = None,
        rx_pin: int | None = None,
    ) -> None:
        self.baud_rate = baud_rate
        self.stop_bits = stop_bits
        self.data_bits = data_bits
        self.parity = parity
        self.rx_buffer_size = rx_buffer_size
        self.tx_pin = tx_pin
        self.rx_pin = rx_pin

    @abstractmethod
    def _write(self, data: bytes) -> None:
        """Send bytes on the bus."""

    @abstractmethod
    def _read(self, length: int) -> bytes:
        """Take ``length`` bytes that are known to be available."""

    @abstractmethod
    def _peek(self) -> int:
        """Return the next byte, known to be available, without consuming it."""

    @abstractmethod
    def available(self) -> int:
        """Number of bytes ready to be read."""

    @abstractmethod
    def flush(self) -> None:
        """Block until all written bytes have left the bus."""

    def _wait_for(self, length: int) -> None:
        if self.available() >= length:
            return
        start = time.monotonic()
        while self.available() < length:
            if time.monotonic() - start > self.read_timeout:
                count = self.available()
                _LOGGER.error("Reading from UART timed out at byte %u!", count)
                raise TimeoutError(f"UART read timed out at byte {count} of {length}")
            time.sleep(0.001)

    def write_array(self, data: Iterable[int]) -> None:
        self._write(bytes(data))

    def write_byte(self, data: int) -> None:
        self.write_array(bytes((data,)))

    def write_str(self, text: str) -> None:
        self.write_array(text.encode())

    def read_byte(self) -> int:
        return self.read_array(1)[0]

    def peek_byte(self) -> int:
        self._wait_for(1)
        return self._peek()

    def read_array(self, length: int) -> bytes:
        if length < 0:
            raise ValueError(f"cannot read a negative number of bytes: {length}")
        self._wait_for(length)
        return self._read(length)


class UARTDevice:
    """Something attached to a UART bus; forwards I/O to its parent bus."""

    def __init__(self, parent: UARTComponent | None = None) -> None:
        self.parent = parent

    def _bus(self) -> UARTComponent:
        if self.parent is None:
            raise RuntimeError("device is not attached to a UART bus")
        return self.parent

    def write_byte(self, data: int) -> None:
        self._bus().write_byte(data)

    def write_array(self, data: Iterable[int]) -> None:
        self._bus().write_array(data)

    def write_str(self, text: str) -> None:
        self._bus().write_str(text)

    def read_byte(self) -> int:
        return self._bus().read_byte()

    def peek_byte(self) -> int:
        return self._bus().peek_byte()

    def read_array(self, length: int) -> bytes:
        return self._bus().read_array(length)

    def available(self) -> int:
        return self._bus().available()

    def flush(self) -> None:
        self._bus().flush()

    def read(self) -> int:
        """Next byte, or -1 when none arrives in time."""
        try:
            return self.read_byte()
        except TimeoutError:
            return -1

    def peek(self) -> int:
        """Next byte without consuming it, or -1 when none arrives in time."""
        try:
            return self.peek_byte()
        except TimeoutError:
            return -1

    def check_uart_settings(
        self,
        baud_rate: int,
        stop_bits: int = 1,
        parity: Parity = Parity.NONE,
        data_bits: int = 8,
    ) -> list[str]:
        """Compare the bus settings with those required; log and return each mismatch."""
        bus = self._bus()
        problems = []
        if bus.baud_rate != baud_rate:
            problems.append(
                f"Invalid baud_rate: Integration requested baud_rate {baud_rate} "
                f"but you have {bus.baud_rate}!"
            )
        if bus.stop_bits != stop_bits:
            problems.append(
                f"Invalid stop bits: Integration requested stop_bits {stop_bits} "
                f"but you have {bus.stop_bits}!"
            )
        if bus.data_bits != data_bits:
            problems.append(
                f"Invalid number of data bits: Integration requested {data_bits} "
                f"data bits but you have {bus.data_bits}!"
            )
        if bus.parity != parity:
            problems.append(
                f"Invalid parity: Integration requested parity {parity_to_str(parity)} "
                f"but you have {parity_to_str(bus.parity)}!"
            )
        for problem in problems:
            _LOGGER.error("  %s", problem)
        return problems


class UARTWriteAction:
    """Automation action writing fixed bytes, or bytes computed from its arguments."""

    def __init__(
        self,
        parent: UARTComponent,
        data: Iterable[int] | Callable[..., Iterable[int]] = b"",
    ) -> None:
        self.parent = parent
        self.data = data if callable(data) else bytes(data)

    def play(self, *args) -> None:
        payload = self.data(*args) if callable(self.data) else self.data
        self.parent.write_array(payload)