"""Checksums, parity and temperature conversions for the Truma LIN protocol."""

from __future__ import annotations

import math
from collections.abc import Iterable

from inetbox.enums import ElectricPowerLevel, OperatingStatus, TargetTemp

# First byte is the service identifier and is ignored. The last three bytes
# may also be 0x00. Both headers must have the same size.
TRUMA_MESSAGE_HEADER = bytes((0x00, 0x00, 0x1F, 0x00, 0x1E, 0x00, 0x00, 0x22, 0xFF, 0xFF, 0xFF))
ALDE_MESSAGE_HEADER = bytes((0x00, 0x00, 0x1F, 0x00, 0x1A, 0x00, 0x00, 0x22, 0xFF, 0xFF, 0xFF))


def addr_parity(pid: int) -> int:
    """Return the two LIN parity bits (P0 | P1 << 1) for a frame identifier."""
    p0 = ((pid >> 0) + (pid >> 1) + (pid >> 2) + (pid >> 4)) & 1
    p1 = ~((pid >> 1) + (pid >> 3) + (pid >> 4) + (pid >> 5)) & 1
    return p0 | (p1 << 1)


def data_checksum(message: Iterable[int], seed: int = 0) -> int:
    """LIN checksum: seed 0 gives the classic 1.x sum, seed PID the enhanced 2.x sum."""
    total = seed
    for byte in message:
        total += byte & 0xFF
        if total >= 256:
            total -= 255
    return ~total & 0xFF


def temp_code_to_decimal(val: int, zero: float = math.nan) -> float:
    """Convert a tenths-of-kelvin code to degrees Celsius; code 0 maps to ``zero``."""
    if val == 0:
        return zero
    return int(val) / 10.0 - 273.0


def water_temp_200_fix(val: float) -> float:
    """Report the 200 °C boost setting as 80 °C."""
    return 80 if val == 200 else val


def decimal_to_temp(val: float) -> int:
    """Convert degrees Celsius to a tenths-of-kelvin code."""
    return int((val + 273) * 10) & 0xFFFF


def _clamped(val: float, low: int, high_limit: int, high: TargetTemp) -> int:
    if math.isnan(val) or val < low:
        return TargetTemp.OFF
    if val >= high_limit:
        return high
    return decimal_to_temp(val)


def decimal_to_room_temp(val: float) -> int:
    """Room target: off below 5 °C, capped at 30 °C."""
    return _clamped(val, 5, 30, TargetTemp.ROOM_MAX)


def decimal_to_aircon_manual_temp(val: float) -> int:
    """Manual aircon target: off below 16 °C, capped at 31 °C."""
    return _clamped(val, 16, 31, TargetTemp.AIRCON_MAX)


def decimal_to_aircon_auto_temp(val: float) -> int:
    """Automatic aircon target: off below 16 °C, capped at 31 °C."""
    return _clamped(val, 16, 31, TargetTemp.AIRCON_MAX)


def decimal_to_water_temp(val: float) -> TargetTemp:
    """Map a water temperature onto the off/eco/high/boost steps."""
    if math.isnan(val) or val < 40:
        return TargetTemp.OFF
    if val < 60:
        return TargetTemp.WATER_ECO
    if val < 80:
        return TargetTemp.WATER_HIGH
    return TargetTemp.WATER_BOOST


_STATUS_NAMES = {
    OperatingStatus.OFF: "OFF",
    OperatingStatus.WARNING: "WARNING",
    OperatingStatus.START_OR_COOL_DOWN: "START/COOL DOWN",
    OperatingStatus.ON_5: "ON (5)",
    OperatingStatus.ON_6: "ON (6)",
    OperatingStatus.ON_7: "ON (7)",
    OperatingStatus.ON_8: "ON (8)",
    OperatingStatus.ON_9: "ON (9)",
}


def operating_status_to_str(val: int) -> str:
    """Human-readable operating status."""
    code = int(val) & 0xFF
    name = _STATUS_NAMES.get(code)
    if name is not None:
        return name
    return f"ON {code}"[:6]


def decimal_to_el_power_level(val: int) -> ElectricPowerLevel:
    """Round a power in watts down to a supported electric level."""
    if val >= 1800:
        return ElectricPowerLevel.LEVEL_1800
    if val >= 900:
        return ElectricPowerLevel.LEVEL_900
    return ElectricPowerLevel.LEVEL_0