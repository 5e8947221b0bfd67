"""Enumerations and small records used on the Truma LIN bus."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum, auto


class HeatingMode(IntEnum):
    """Heating mode of the room heater."""

    OFF = 0x0
    # Combi
    ECO = 0x1
    # Vario Heat
    VARIO_HEAT_NIGHT = 0x2
    VARIO_HEAT_AUTO = 0x3
    # Combi
    HIGH = 0xA
    # Combi, Vario Heat
    BOOST = 0xB


class ElectricPowerLevel(IntEnum):
    """Electric heating power in watts."""

    LEVEL_0 = 0
    LEVEL_900 = 900
    LEVEL_1800 = 1800


def _kelvin_code(celsius: int) -> int:
    return (celsius + 273) * 10


class TargetTemp(IntEnum):
    """Temperatures as transmitted: tenths of a kelvin, zero meaning off."""

    OFF = 0x0

    WATER_ECO = _kelvin_code(40)
    WATER_HIGH = _kelvin_code(60)
    WATER_BOOST = _kelvin_code(200)

    TEMP_05C = _kelvin_code(5)
    TEMP_06C = _kelvin_code(6)
    TEMP_07C = _kelvin_code(7)
    TEMP_08C = _kelvin_code(8)
    TEMP_09C = _kelvin_code(9)
    TEMP_10C = _kelvin_code(10)
    TEMP_11C = _kelvin_code(11)
    TEMP_12C = _kelvin_code(12)
    TEMP_13C = _kelvin_code(13)
    TEMP_14C = _kelvin_code(14)
    TEMP_15C = _kelvin_code(15)
    TEMP_16C = _kelvin_code(16)
    TEMP_17C = _kelvin_code(17)
    TEMP_18C = _kelvin_code(18)
    TEMP_19C = _kelvin_code(19)
    TEMP_20C = _kelvin_code(20)
    TEMP_21C = _kelvin_code(21)
    TEMP_22C = _kelvin_code(22)
    TEMP_23C = _kelvin_code(23)
    TEMP_24C = _kelvin_code(24)
    TEMP_25C = _kelvin_code(25)
    TEMP_26C = _kelvin_code(26)
    TEMP_27C = _kelvin_code(27)
    TEMP_28C = _kelvin_code(28)
    TEMP_29C = _kelvin_code(29)
    TEMP_30C = _kelvin_code(30)
    TEMP_31C = _kelvin_code(31)

    ROOM_MIN = _kelvin_code(5)
    ROOM_MAX = _kelvin_code(30)

    AIRCON_MIN = _kelvin_code(16)
    AIRCON_MAX = _kelvin_code(31)

    AIRCON_AUTO_MIN = _kelvin_code(18)
    AIRCON_AUTO_MAX = _kelvin_code(25)


class EnergyMix(IntEnum):
    """Energy source selection."""

    NONE = 0b00
    GAS = 0b01
    DIESEL = 0b01
    ELECTRICITY = 0b10
    MIX = 0b11


class OperatingStatus(IntEnum):
    """Operating status reported by the heater."""

    UNSET = 0x0
    OFF = 0x0
    WARNING = 0x1
    START_OR_COOL_DOWN = 0x4
    ON_5 = 0x5
    ON_6 = 0x6
    ON_7 = 0x7
    ON_8 = 0x8
    ON_9 = 0x9


class OperatingUnits(IntEnum):
    CELSIUS = 0x0
    FAHRENHEIT = 0x1


class Language(IntEnum):
    GERMAN = 0x0
    ENGLISH = 0x1
    FRENCH = 0x2
    ITALY = 0x3


class ResponseAckResult(IntEnum):
    OKAY = 0x0
    ERROR_INVALID_MSG = 0x2
    # The response status frame message type is unknown.
    ERROR_INVALID_ID = 0x3


class ClockMode(IntEnum):
    MODE_24H = 0x0
    MODE_12H = 0x1


class TimerActive(IntEnum):
    ON = 0x1
    OFF = 0x0


class ClockSource(IntEnum):
    # Set by user
    MANUAL = 0x1
    # Set by message
    PROG = 0x2


class TrumaCompany(IntEnum):
    UNKNOWN = 0x00
    TRUMA = 0x1E
    ALDE = 0x1A


class TrumaDevice(IntEnum):
    """Device identifiers; some share a value."""

    UNKNOWN = 0x00
    # Saphir Compact AC
    AIRCON_DEVICE = 0x01
    # CP Plus for Combi
    CPPLUS_COMBI = 0x04
    # CP Plus for Vario Heat
    CPPLUS_VARIO = 0x05
    # Combi 4
    HEATER_COMBI4 = 0x02
    # Vario Heat Comfort (non E)
    HEATER_VARIO = 0x03
    # Old CP6
    HEATER_CP6 = 0x05
    # Combi 6 D
    HEATER_COMBI6D = 0x06


class TrumaDeviceState(IntEnum):
    OFFLINE = 0x00
    ONLINE = 0x01


class AirconMode(IntEnum):
    OFF = 0x00
    VENTILATION = 0x04
    COOLING = 0x05
    HEATING = 0x06
    AUTO = 0x07

    # Legacy aliases
    AC_VENTILATION = 0x04
    AC_COOLING = 0x05


class AirconVentMode(IntEnum):
    LOW = 0x71
    MID = 0x72
    HIGH = 0x73
    NIGHT = 0x74
    AUTO = 0x77


class AirconOperation(IntEnum):
    AC_ONLY = 0x71
    # Heater and aircon
    AUTO = 0x72


class _Labelled(IntEnum):
    @property
    def label(self) -> str:
        """Name used in configuration dumps; empty for UNKNOWN."""
        return "" if self.name == "UNKNOWN" else self.name


class NumberType(_Labelled):
    UNKNOWN = 0
    TARGET_ROOM_TEMPERATURE = 1
    TARGET_WATER_TEMPERATURE = 2
    ELECTRIC_POWER_LEVEL = 3
    AIRCON_MANUAL_TEMPERATURE = 4


class SelectType(_Labelled):
    UNKNOWN = 0
    HEATER_FAN_MODE = 1
    HEATER_ENERGY_MIX = 2
    AIRCON_MODE = 3
    AIRCON_VENT_MODE = 4


class HeaterFanModeOption(IntEnum):
    """Option index of the heater fan mode select."""

    OFF = 0
    ECO = 1
    VARIO_HEAT_NIGHT = 1
    COMBI_HIGH = 2
    VARIO_HEAT_AUTO = 2
    BOOST = 3


class HeaterEnergyMixOption(IntEnum):
    """Option index of the heater energy mix select."""

    GAS = 0
    MIX_1 = 1
    MIX_2 = 2
    ELECTRIC_1 = 3
    ELECTRIC_2 = 4


class AirconModeOption(IntEnum):
    """Option index of the aircon mode select."""

    OFF = 0
    VENTILATION = 1
    COOLING = 2
    HEATING = 3
    AUTO = 4


class AirconVentModeOption(IntEnum):
    """Option index of the aircon vent mode select."""

    VENT_LOW = 0
    VENT_MID = 1
    VENT_HIGH = 2
    VENT_NIGHT = 3
    VENT_AUTO = 4


class SensorType(_Labelled):
    UNKNOWN = 0
    CURRENT_ROOM_TEMPERATURE = 1
    CURRENT_WATER_TEMPERATURE = 2
    TARGET_ROOM_TEMPERATURE = 3
    TARGET_WATER_TEMPERATURE = 4
    HEATING_MODE = 5
    ELECTRIC_POWER_LEVEL = 6
    ENERGY_MIX = 7
    OPERATING_STATUS = 8
    HEATER_ERROR_CODE = 9
    AIRCON_TARGET_TEMPERATURE = 10
    AIRCON_CURRENT_TEMPERATURE = 11
    AIRCON_MODE = 12
    AIRCON_VENT_MODE = 13


class LogMessageType(Enum):
    """Kinds of messages queued by the LIN bus reader for later logging."""

    UNKNOWN = auto()
    ERROR_LIN_ANSWER_CAN_WRITE_LIN_ANSWER = auto()
    ERROR_LIN_ANSWER_TOO_LONG = auto()
    VERBOSE_LIN_ANSWER_RESPONSE = auto()
    ERROR_CHECK_FOR_LIN_FAULT_DETECTED = auto()
    INFO_CHECK_FOR_LIN_FAULT_FIXED = auto()
    ERROR_READ_LIN_FRAME_UNABLE_TO_ANSWER = auto()
    ERROR_READ_LIN_FRAME_LOST_MSG = auto()
    VV_READ_LIN_FRAME_BREAK_EXPECTED = auto()
    VV_READ_LIN_FRAME_SYNC_EXPECTED = auto()
    WARN_READ_LIN_FRAME_SID_CRC = auto()
    WARN_READ_LIN_FRAME_LINV1_CRC = auto()
    WARN_READ_LIN_FRAME_LINV2_CRC = auto()
    VERBOSE_READ_LIN_FRAME_MSG = auto()


MAX_LOG_DATA = 9


@dataclass(frozen=True)
class LogMessage:
    """A log entry captured while reading the bus, carrying up to nine data bytes."""

    type: LogMessageType
    current_pid: int = 0
    data: bytes = b""
    current_data_valid: bool = False
    message_source_known: bool = False
    message_from_master: bool = False

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) > MAX_LOG_DATA:
            raise ValueError(f"log message holds at most {MAX_LOG_DATA} bytes, got {len(data)}")
        if not 0 <= self.current_pid <= 0xFF:
            raise ValueError(f"PID out of range: {self.current_pid}")
        object.__setattr__(self, "data", data)

    @property
    def length(self) -> int:
        return len(self.data)