"""Binary layout of the status frames exchanged with the CP Plus panel.

Every payload is a little-endian, byte-packed record. Fields typed with an
enumeration are decoded to the enum member when the value is known and left
as a plain integer otherwise, so unexpected values from the bus survive a
round trip unchanged.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field, fields
from enum import IntEnum
from functools import lru_cache
from typing import NamedTuple, TypeVar

from inetbox.enums import (
    AirconMode,
    AirconVentMode,
    ClockMode,
    ClockSource,
    ElectricPowerLevel,
    EnergyMix,
    HeatingMode,
    Language,
    OperatingStatus,
    OperatingUnits,
    ResponseAckResult,
    TargetTemp,
    TimerActive,
    TrumaDeviceState,
)

LIN_SID_RESPONSE = 0x40
LIN_SID_READ_STATE_BUFFER = 0xBA
LIN_SID_FILL_STATE_BUFFER = 0xBB

# An init request is answered with the device, heater, timer, config and clock frames.
STATUS_FRAME_RESPONSE_INIT_REQUEST = 0x0A
STATUS_FRAME_DEVICES = 0x0B
STATUS_FRAME_RESPONSE_ACK = 0x0D
STATUS_FRAME_CLOCK = 0x15
STATUS_FRAME_CLOCK_RESPONSE = STATUS_FRAME_CLOCK - 1
STATUS_FRAME_CONFIG = 0x17
STATUS_FRAME_CONFIG_RESPONSE = STATUS_FRAME_CONFIG - 1
STATUS_FRAME_HEATER = 0x33
STATUS_FRAME_HEATER_RESPONSE = STATUS_FRAME_HEATER - 1
STATUS_FRAME_AIRCON_MANUAL = 0x35
STATUS_FRAME_AIRCON_MANUAL_RESPONSE = STATUS_FRAME_AIRCON_MANUAL - 1
STATUS_FRAME_AIRCON_AUTO = 0x37
STATUS_FRAME_AIRCON_AUTO_RESPONSE = STATUS_FRAME_AIRCON_AUTO - 1
STATUS_FRAME_TIMER = 0x3D
STATUS_FRAME_TIMER_RESPONSE = STATUS_FRAME_TIMER - 1
STATUS_FRAME_AIRCON_MANUAL_INIT = 0x3F
STATUS_FRAME_AIRCON_MANUAL_INIT_RESPONSE = STATUS_FRAME_AIRCON_MANUAL_INIT - 1
STATUS_FRAME_AIRCON_AUTO_INIT = 0x41
STATUS_FRAME_AIRCON_AUTO_INIT_RESPONSE = STATUS_FRAME_AIRCON_AUTO_INIT - 1

FRAME_SIZE = 41

P = TypeVar("P", bound="Payload")


def _u8(enum: type[IntEnum] | None = None):
    return field(default=0, metadata={"fmt": "B", "enum": enum})


def _u16(enum: type[IntEnum] | None = None):
    return field(default=0, metadata={"fmt": "H", "enum": enum})


def _raw(size: int):
    return field(default=bytes(size), metadata={"fmt": f"{size}s", "size": size})


class _Layout(NamedTuple):
    codec: struct.Struct
    names: tuple[str, ...]
    enums: tuple[type[IntEnum] | None, ...]
    sizes: tuple[int | None, ...]


@lru_cache(maxsize=None)
def _layout(cls: type) -> _Layout:
    specs = fields(cls)
    fmt = "<" + "".join(spec.metadata["fmt"] for spec in specs)
    return _Layout(
        struct.Struct(fmt),
        tuple(spec.name for spec in specs),
        tuple(spec.metadata.get("enum") for spec in specs),
        tuple(spec.metadata.get("size") for spec in specs),
    )


def _coerce(enum: type[IntEnum] | None, value):
    if enum is None:
        return value
    try:
        return enum(value)
    except ValueError:
        return value


@dataclass
class Payload:
    """Base of all packed frame records."""

    @classmethod
    def from_bytes(cls: type[P], data: bytes) -> P:
        """Decode a record from the start of ``data``; extra trailing bytes are ignored."""
        layout = _layout(cls)
        data = bytes(data)
        if len(data) < layout.codec.size:
            raise ValueError(
                f"{cls.__name__} needs {layout.codec.size} bytes, got {len(data)}"
            )
        values = layout.codec.unpack_from(data)
        return cls(
            **{
                name: _coerce(enum, value)
                for name, enum, value in zip(layout.names, layout.enums, values)
            }
        )

    def to_bytes(self) -> bytes:
        """Encode the record in its packed wire form."""
        layout = _layout(type(self))
        values = []
        for name, size in zip(layout.names, layout.sizes):
            value = getattr(self, name)
            if size is not None:
                value = bytes(value)
                if len(value) != size:
                    raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
                values.append(value)
            else:
                values.append(int(value))
        try:
            return layout.codec.pack(*values)
        except struct.error as exc:
            raise ValueError(f"cannot encode {type(self).__name__}: {exc}") from exc


@dataclass
class StatusFrameHeader(Payload):
    service_identifier: int = _u8()
    header: bytes = _raw(10)
    header_2: int = _u8()
    header_3: int = _u8()
    message_length: int = _u8()
    message_type: int = _u8()
    command_counter: int = _u8()
    checksum: int = _u8()


@dataclass
class StatusFrameHeater(Payload):
    target_temp_room: int = _u16(TargetTemp)
    heating_mode: int = _u16(HeatingMode)
    el_power_level_a: int = _u16(ElectricPowerLevel)
    target_temp_water: int = _u16(TargetTemp)
    el_power_level_b: int = _u16(ElectricPowerLevel)
    energy_mix_a: int = _u8(EnergyMix)
    # Ignored by the response.
    energy_mix_b: int = _u8(EnergyMix)
    current_temp_water: int = _u16()
    current_temp_room: int = _u16()
    operating_status: int = _u8(OperatingStatus)
    error_code_low: int = _u8()
    error_code_high: int = _u8()
    heater_unknown_2: int = _u8()


@dataclass
class StatusFrameHeaterResponse(Payload):
    target_temp_room: int = _u16(TargetTemp)
    heating_mode: int = _u16(HeatingMode)
    el_power_level_a: int = _u16(ElectricPowerLevel)
    target_temp_water: int = _u16(TargetTemp)
    el_power_level_b: int = _u16(ElectricPowerLevel)
    energy_mix_a: int = _u8(EnergyMix)
    energy_mix_b: int = _u8(EnergyMix)


@dataclass
class StatusFrameTimer(Payload):
    timer_target_temp_room: int = _u16(TargetTemp)
    timer_heating_mode: int = _u16(HeatingMode)
    timer_el_power_level_a: int = _u16(ElectricPowerLevel)
    timer_target_temp_water: int = _u16(TargetTemp)
    timer_el_power_level_b: int = _u16(ElectricPowerLevel)
    timer_energy_mix_a: int = _u8(EnergyMix)
    timer_energy_mix_b: int = _u8(EnergyMix)
    # Used by the timer response message.
    unused: bytes = _raw(5)
    timer_unknown_3: int = _u8()
    timer_unknown_4: int = _u8()
    timer_active: int = _u8(TimerActive)
    timer_start_minutes: int = _u8()
    timer_start_hours: int = _u8()
    timer_stop_minutes: int = _u8()
    timer_stop_hours: int = _u8()


@dataclass
class StatusFrameTimerResponse(Payload):
    timer_target_temp_room: int = _u16(TargetTemp)
    timer_heating_mode: int = _u16(HeatingMode)
    timer_el_power_level_a: int = _u16(ElectricPowerLevel)
    timer_target_temp_water: int = _u16(TargetTemp)
    timer_el_power_level_b: int = _u16(ElectricPowerLevel)
    timer_energy_mix_a: int = _u8(EnergyMix)
    timer_energy_mix_b: int = _u8(EnergyMix)
    timer_resp_active: int = _u8(TimerActive)
    timer_resp_start_minutes: int = _u8()
    timer_resp_start_hours: int = _u8()
    timer_resp_stop_minutes: int = _u8()
    timer_resp_stop_hours: int = _u8()


@dataclass
class StatusFrameResponseAck(Payload):
    error_code: int = _u8(ResponseAckResult)
    unknown: int = _u8()


@dataclass
class StatusFrameClock(Payload):
    clock_hour: int = _u8()
    clock_minute: int = _u8()
    clock_second: int = _u8()
    # Must be below 0x9.
    display_1: int = _u8()
    # Must be 0x1.
    display_2: int = _u8()
    display_3: int = _u8()
    clock_mode: int = _u8(ClockMode)
    clock_source: int = _u8(ClockSource)
    display_4: int = _u8()
    display_5: int = _u8()


@dataclass
class StatusFrameConfig(Payload):
    # 0x01 .. 0x0A
    display_brightness: int = _u8()
    language: int = _u8(Language)
    # Offset between cooling and heating, in 0.5 °C steps from 0 to +5 °C.
    ac_offset: int = _u16(TargetTemp)
    temp_offset: int = _u16(TargetTemp)
    temp_units: int = _u8(OperatingUnits)
    unknown_6: int = _u8()
    unknown_7: int = _u8()
    unknown_8: int = _u8()


@dataclass
class StatusFrameDevice(Payload):
    device_count: int = _u8()
    device_id: int = _u8()
    state: int = _u8(TrumaDeviceState)
    unknown_1: int = _u8()
    hardware_revision_major: int = _u16()
    hardware_revision_minor: int = _u8()
    # The first byte identifies the device kind.
    software_revision: bytes = _raw(3)
    unknown_2: int = _u8()
    unknown_3: int = _u8()


@dataclass
class StatusFrameAirconManual(Payload):
    mode: int = _u8(AirconMode)
    unknown_02: int = _u8()
    vent_mode: int = _u8(AirconVentMode)
    energy_mix: int = _u8(EnergyMix)
    target_temp_aircon: int = _u16(TargetTemp)
    unknown_07: int = _u8()
    unknown_08: int = _u8()
    current_temp_aircon: int = _u16(TargetTemp)
    unknown_11: int = _u8()
    unknown_12: int = _u8()
    el_power_level: int = _u16(ElectricPowerLevel)
    unknown_15: int = _u8()
    unknown_16: int = _u8()
    current_temp_room: int = _u16(TargetTemp)


@dataclass
class StatusFrameAirconManualResponse(Payload):
    mode: int = _u8(AirconMode)
    unknown_02: int = _u8()
    vent_mode: int = _u8(AirconVentMode)
    # Must be 0x01 for commands to be accepted.
    aircon_on: int = _u8()
    target_temp_aircon: int = _u16(TargetTemp)
    padding: bytes = _raw(6)


@dataclass
class StatusFrameAirconManualInit(Payload):
    unknown_01: int = _u8()
    unknown_02: int = _u8()
    vent_mode: int = _u8(AirconVentMode)
    energy_mix: int = _u8(EnergyMix)
    reserved: bytes = _raw(18)


@dataclass
class StatusFrameAirconAuto(Payload):
    energy_mix_a: int = _u8(EnergyMix)
    unknown_02: int = _u8()
    energy_mix_b: int = _u8(EnergyMix)
    unknown_04: int = _u8()
    unknown_05: int = _u8()
    unknown_06: int = _u8()
    target_temp_aircon_auto: int = _u16(TargetTemp)
    el_power_level_a: int = _u16(ElectricPowerLevel)
    unknown_11: int = _u8()
    unknown_12: int = _u8()
    el_power_level_b: int = _u16(ElectricPowerLevel)
    current_temp: int = _u16(TargetTemp)
    target_temp: int = _u16(TargetTemp)


@dataclass
class StatusFrameAirconAutoResponse(Payload):
    energy_mix_a: int = _u8(EnergyMix)
    unknown_02: int = _u8()
    energy_mix_b: int = _u8(EnergyMix)
    unknown_04: int = _u8()
    unknown_05: int = _u8()
    unknown_06: int = _u8()
    target_temp_aircon_auto: int = _u16(TargetTemp)
    el_power_level_a: int = _u16(ElectricPowerLevel)
    unknown_11: int = _u8()
    unknown_12: int = _u8()
    el_power_level_b: int = _u16(ElectricPowerLevel)


@dataclass
class StatusFrameAirconAutoInit(Payload):
    energy_mix_a: int = _u8(EnergyMix)
    unknown_02: int = _u8()
    energy_mix_b: int = _u8(EnergyMix)
    reserved: bytes = _raw(17)


HEADER_SIZE = _layout(StatusFrameHeader).codec.size
PAYLOAD_SIZE = FRAME_SIZE - HEADER_SIZE


@dataclass
class StatusFrame:
    """A complete status frame: header followed by the payload area.

    The payload is kept raw; decode it with the record class that matches
    ``header.message_type``.
    """

    header: StatusFrameHeader = field(default_factory=StatusFrameHeader)
    payload: bytes = bytes(PAYLOAD_SIZE)

    def __post_init__(self) -> None:
        payload = bytes(self.payload)
        if len(payload) > PAYLOAD_SIZE:
            raise ValueError(f"payload holds at most {PAYLOAD_SIZE} bytes, got {len(payload)}")
        self.payload = payload.ljust(PAYLOAD_SIZE, b"\x00")

    @classmethod
    def from_bytes(cls, data: bytes) -> StatusFrame:
        """Split raw frame bytes into header and zero-padded payload."""
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise ValueError(f"status frame needs at least {HEADER_SIZE} bytes, got {len(data)}")
        if len(data) > FRAME_SIZE:
            raise ValueError(f"status frame holds at most {FRAME_SIZE} bytes, got {len(data)}")
        return cls(StatusFrameHeader.from_bytes(data[:HEADER_SIZE]), data[HEADER_SIZE:])

    def to_bytes(self) -> bytes:
        """Encode the full frame; always ``FRAME_SIZE`` bytes."""
        return self.header.to_bytes() + self.payload