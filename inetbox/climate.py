"""Climate entities for the room heater, the water boiler and the aircon."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from inetbox.enums import AirconMode, AirconVentMode, HeatingMode, TargetTemp
from inetbox.frames import StatusFrameAirconManual, StatusFrameHeater
from inetbox.helpers import temp_code_to_decimal, water_temp_200_fix


class ClimateMode(Enum):
    OFF = "OFF"
    HEAT_COOL = "HEAT_COOL"
    COOL = "COOL"
    HEAT = "HEAT"
    FAN_ONLY = "FAN_ONLY"
    DRY = "DRY"
    AUTO = "AUTO"


class ClimateFanMode(Enum):
    ON = "ON"
    OFF = "OFF"
    AUTO = "AUTO"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    MIDDLE = "MIDDLE"
    FOCUS = "FOCUS"
    DIFFUSE = "DIFFUSE"
    QUIET = "QUIET"


@dataclass(frozen=True)
class ClimateCall:
    """A user request; fields left as None are not to be changed."""

    target_temperature: float | None = None
    mode: ClimateMode | None = None
    fan_mode: ClimateFanMode | None = None


@dataclass(frozen=True)
class ClimateTraits:
    """Capabilities a climate entity advertises."""

    supports_current_temperature: bool = False
    supported_modes: frozenset[ClimateMode] = frozenset()
    supported_fan_modes: frozenset[ClimateFanMode] = frozenset()
    visual_min_temperature: float = 10.0
    visual_max_temperature: float = 30.0
    visual_temperature_step: float = 0.1


class HeaterControl(Protocol):
    def get_status(self) -> StatusFrameHeater: ...

    def action_heater_room(self, temperature: int, heating_mode: HeatingMode = ...) -> object: ...

    def action_heater_water(self, temperature: int) -> object: ...


class AirconManualControl(Protocol):
    def get_status(self) -> StatusFrameAirconManual: ...

    def action_aircon_manual(
        self, temperature: int, mode: AirconMode, vent_mode: AirconVentMode
    ) -> object: ...


def _u8(value: float) -> int:
    return int(value) & 0xFF


_AIRCON_TO_CLIMATE = {
    AirconMode.COOLING: ClimateMode.COOL,
    AirconMode.HEATING: ClimateMode.HEAT,
    AirconMode.AUTO: ClimateMode.HEAT_COOL,
    AirconMode.VENTILATION: ClimateMode.FAN_ONLY,
    AirconMode.OFF: ClimateMode.OFF,
}

_CLIMATE_TO_AIRCON = {
    ClimateMode.COOL: AirconMode.COOLING,
    ClimateMode.HEAT: AirconMode.HEATING,
    ClimateMode.HEAT_COOL: AirconMode.AUTO,
    ClimateMode.AUTO: AirconMode.AUTO,
    ClimateMode.FAN_ONLY: AirconMode.VENTILATION,
    ClimateMode.OFF: AirconMode.OFF,
}

_VENT_TO_FAN = {
    AirconVentMode.AUTO: ClimateFanMode.AUTO,
    AirconVentMode.LOW: ClimateFanMode.LOW,
    AirconVentMode.NIGHT: ClimateFanMode.LOW,
    AirconVentMode.MID: ClimateFanMode.MEDIUM,
    AirconVentMode.HIGH: ClimateFanMode.HIGH,
}

_FAN_TO_VENT = {
    ClimateFanMode.AUTO: AirconVentMode.AUTO,
    ClimateFanMode.LOW: AirconVentMode.LOW,
    ClimateFanMode.MEDIUM: AirconVentMode.MID,
    ClimateFanMode.HIGH: AirconVentMode.HIGH,
}

_HEATING_TO_FAN = {
    HeatingMode.ECO: ClimateFanMode.LOW,
    HeatingMode.HIGH: ClimateFanMode.MEDIUM,
    HeatingMode.BOOST: ClimateFanMode.HIGH,
}

_FAN_TO_HEATING = {
    ClimateFanMode.LOW: HeatingMode.ECO,
    ClimateFanMode.MEDIUM: HeatingMode.HIGH,
    ClimateFanMode.HIGH: HeatingMode.BOOST,
}


def aircon_mode_to_climate_mode(mode: int) -> ClimateMode:
    """Climate mode shown for an aircon mode; unknown modes show as off."""
    return _AIRCON_TO_CLIMATE.get(mode, ClimateMode.OFF)


def climate_mode_to_aircon_mode(mode: ClimateMode) -> AirconMode:
    """Aircon mode requested by a climate mode; unsupported modes switch off."""
    return _CLIMATE_TO_AIRCON.get(mode, AirconMode.OFF)


def vent_mode_to_fan_mode(vent_mode: int) -> ClimateFanMode:
    """Fan mode shown for an aircon vent mode; unknown modes show as low."""
    return _VENT_TO_FAN.get(vent_mode, ClimateFanMode.LOW)


def fan_mode_to_vent_mode(fan_mode: ClimateFanMode) -> AirconVentMode:
    """Vent mode requested by a fan mode; unsupported modes select low."""
    return _FAN_TO_VENT.get(fan_mode, AirconVentMode.LOW)


@dataclass
class _Climate:
    supported_modes: set[ClimateMode] = field(default_factory=set)
    on_state: Callable[[_Climate], None] | None = None
    target_temperature: float = field(default=math.nan, init=False)
    current_temperature: float = field(default=math.nan, init=False)
    mode: ClimateMode = field(default=ClimateMode.OFF, init=False)
    fan_mode: ClimateFanMode | None = field(default=None, init=False)

    def publish_state(self) -> None:
        if self.on_state is not None:
            self.on_state(self)


@dataclass
class TrumaAirconClimate(_Climate):
    """The aircon in manual mode."""

    aircon: AirconManualControl | None = None
    visual_min_temperature: float = 16.0
    visual_max_temperature: float = 31.0
    visual_temperature_step: float = 1.0

    def _aircon(self) -> AirconManualControl:
        if self.aircon is None:
            raise RuntimeError("climate has no aircon to control")
        return self.aircon

    def on_aircon_status(self, frame: StatusFrameAirconManual) -> None:
        """Update and publish state from a manual aircon status frame."""
        self.target_temperature = temp_code_to_decimal(frame.target_temp_aircon)
        self.current_temperature = temp_code_to_decimal(frame.current_temp_aircon)
        self.mode = aircon_mode_to_climate_mode(frame.mode)
        self.fan_mode = vent_mode_to_fan_mode(frame.vent_mode)
        self.publish_state()

    def control(self, call: ClimateCall) -> None:
        """Send the requested temperature, mode and fan speed in one command."""
        aircon = self._aircon()
        status = aircon.get_status()
        temp = temp_code_to_decimal(status.target_temp_aircon, 22)
        mode = status.mode
        vent_mode = status.vent_mode

        if call.target_temperature is not None:
            temp = call.target_temperature
        if call.mode is not None:
            mode = climate_mode_to_aircon_mode(call.mode)
        if call.fan_mode is not None:
            vent_mode = fan_mode_to_vent_mode(call.fan_mode)

        if mode == AirconMode.OFF:
            vent_mode = AirconVentMode.LOW
        elif mode == AirconMode.AUTO:
            vent_mode = AirconVentMode.AUTO
        elif vent_mode == AirconVentMode.AUTO:
            vent_mode = AirconVentMode.LOW

        aircon.action_aircon_manual(_u8(temp), mode, vent_mode)

    def traits(self) -> ClimateTraits:
        return ClimateTraits(
            supports_current_temperature=True,
            supported_modes=frozenset(self.supported_modes),
            supported_fan_modes=frozenset(
                {ClimateFanMode.AUTO, ClimateFanMode.LOW, ClimateFanMode.MEDIUM, ClimateFanMode.HIGH}
            ),
            visual_min_temperature=self.visual_min_temperature,
            visual_max_temperature=self.visual_max_temperature,
            visual_temperature_step=self.visual_temperature_step,
        )


@dataclass
class _HeaterClimate(_Climate):
    heater: HeaterControl | None = None

    def _heater(self) -> HeaterControl:
        if self.heater is None:
            raise RuntimeError("climate has no heater to control")
        return self.heater


@dataclass
class TrumaRoomClimate(_HeaterClimate):
    """Room heating; the fan mode selects the heating mode."""

    def on_heater_status(self, frame: StatusFrameHeater) -> None:
        """Update and publish state from a heater status frame."""
        self.target_temperature = temp_code_to_decimal(frame.target_temp_room)
        self.current_temperature = temp_code_to_decimal(frame.current_temp_room)
        self.mode = ClimateMode.OFF if math.isnan(self.target_temperature) else ClimateMode.HEAT
        self.fan_mode = _HEATING_TO_FAN.get(frame.heating_mode, ClimateFanMode.OFF)
        self.publish_state()

    def control(self, call: ClimateCall) -> None:
        """Forward a user request to the heater."""
        heater = self._heater()
        if call.target_temperature is not None and call.fan_mode is None:
            heater.action_heater_room(_u8(call.target_temperature))

        if call.mode is not None:
            status = heater.get_status()
            if call.mode is ClimateMode.HEAT:
                if status.target_temp_room == TargetTemp.OFF:
                    heater.action_heater_room(20)
            else:
                heater.action_heater_room(0)

        if call.fan_mode is not None:
            status = heater.get_status()
            temp = temp_code_to_decimal(status.target_temp_room, 0)
            if call.target_temperature is not None:
                temp = call.target_temperature
            heating_mode = _FAN_TO_HEATING.get(call.fan_mode)
            if heating_mode is None:
                heater.action_heater_room(0)
            else:
                if temp < 5:
                    temp = 5
                heater.action_heater_room(_u8(temp), heating_mode)

    def traits(self) -> ClimateTraits:
        return ClimateTraits(
            supports_current_temperature=True,
            supported_modes=frozenset(self.supported_modes),
            supported_fan_modes=frozenset(
                {ClimateFanMode.OFF, ClimateFanMode.LOW, ClimateFanMode.MEDIUM, ClimateFanMode.HIGH}
            ),
            visual_min_temperature=5,
            visual_max_temperature=30,
            visual_temperature_step=1,
        )


@dataclass
class TrumaWaterClimate(_HeaterClimate):
    """Hot water boiler."""

    def on_heater_status(self, frame: StatusFrameHeater) -> None:
        """Update and publish state from a heater status frame."""
        self.target_temperature = water_temp_200_fix(temp_code_to_decimal(frame.target_temp_water))
        self.current_temperature = temp_code_to_decimal(frame.current_temp_water)
        self.mode = (
            ClimateMode.OFF if frame.target_temp_water == TargetTemp.OFF else ClimateMode.HEAT
        )
        self.publish_state()

    def control(self, call: ClimateCall) -> None:
        """Forward a user request to the heater."""
        heater = self._heater()
        if call.target_temperature is not None:
            heater.action_heater_water(_u8(call.target_temperature))

        if call.mode is not None:
            status = heater.get_status()
            if call.mode is ClimateMode.HEAT:
                if status.target_temp_water == TargetTemp.OFF:
                    heater.action_heater_water(40)
            else:
                heater.action_heater_water(0)

    def traits(self) -> ClimateTraits:
        return ClimateTraits(
            supports_current_temperature=True,
            supported_modes=frozenset(self.supported_modes),
            visual_min_temperature=40,
            visual_max_temperature=80,
            visual_temperature_step=20,
        )