import math
from dataclasses import dataclass, field

import pytest

from inetbox.climate import (
    ClimateCall,
    ClimateFanMode,
    ClimateMode,
    TrumaAirconClimate,
    TrumaRoomClimate,
    TrumaWaterClimate,
    aircon_mode_to_climate_mode,
    climate_mode_to_aircon_mode,
    fan_mode_to_vent_mode,
    vent_mode_to_fan_mode,
)
from inetbox.enums import AirconMode, AirconVentMode, HeatingMode, TargetTemp
from inetbox.frames import StatusFrameAirconManual, StatusFrameHeater
from inetbox.helpers import temp_code_to_decimal


@dataclass
class FakeHeater:
    status: StatusFrameHeater = field(default_factory=StatusFrameHeater)
    calls: list = field(default_factory=list)

    def get_status(self):
        return self.status

    def action_heater_room(self, temperature, heating_mode=None):
        self.calls.append(("room", temperature, heating_mode))

    def action_heater_water(self, temperature):
        self.calls.append(("water", temperature))


@dataclass
class FakeAircon:
    status: StatusFrameAirconManual = field(default_factory=StatusFrameAirconManual)
    calls: list = field(default_factory=list)

    def get_status(self):
        return self.status

    def action_aircon_manual(self, temperature, mode, vent_mode):
        self.calls.append((temperature, mode, vent_mode))


@pytest.mark.parametrize(
    "mode, expected",
    [
        (AirconMode.COOLING, ClimateMode.COOL),
        (AirconMode.HEATING, ClimateMode.HEAT),
        (AirconMode.AUTO, ClimateMode.HEAT_COOL),
        (AirconMode.VENTILATION, ClimateMode.FAN_ONLY),
        (AirconMode.OFF, ClimateMode.OFF),
        (0x42, ClimateMode.OFF),
    ],
)
def test_aircon_mode_to_climate_mode(mode, expected):
    assert aircon_mode_to_climate_mode(mode) is expected


@pytest.mark.parametrize(
    "mode, expected",
    [
        (ClimateMode.AUTO, AirconMode.AUTO),
        (ClimateMode.HEAT_COOL, AirconMode.AUTO),
        (ClimateMode.DRY, AirconMode.OFF),
        (ClimateMode.OFF, AirconMode.OFF),
    ],
)
def test_climate_mode_to_aircon_mode(mode, expected):
    assert climate_mode_to_aircon_mode(mode) is expected


@pytest.mark.parametrize(
    "mode",
    [AirconMode.OFF, AirconMode.VENTILATION, AirconMode.COOLING, AirconMode.HEATING, AirconMode.AUTO],
)
def test_aircon_mode_round_trip(mode):
    assert climate_mode_to_aircon_mode(aircon_mode_to_climate_mode(mode)) is mode


@pytest.mark.parametrize(
    "vent, expected",
    [
        (AirconVentMode.AUTO, ClimateFanMode.AUTO),
        (AirconVentMode.LOW, ClimateFanMode.LOW),
        (AirconVentMode.NIGHT, ClimateFanMode.LOW),
        (AirconVentMode.MID, ClimateFanMode.MEDIUM),
        (AirconVentMode.HIGH, ClimateFanMode.HIGH),
        (0x00, ClimateFanMode.LOW),
    ],
)
def test_vent_mode_to_fan_mode(vent, expected):
    assert vent_mode_to_fan_mode(vent) is expected


@pytest.mark.parametrize(
    "fan, expected",
    [
        (ClimateFanMode.AUTO, AirconVentMode.AUTO),
        (ClimateFanMode.LOW, AirconVentMode.LOW),
        (ClimateFanMode.MEDIUM, AirconVentMode.MID),
        (ClimateFanMode.HIGH, AirconVentMode.HIGH),
        (ClimateFanMode.QUIET, AirconVentMode.LOW),
    ],
)
def test_fan_mode_to_vent_mode(fan, expected):
    assert fan_mode_to_vent_mode(fan) is expected


def test_aircon_status_publishes_state():
    published = []
    climate = TrumaAirconClimate(on_state=published.append)
    frame = StatusFrameAirconManual(
        mode=AirconMode.COOLING,
        vent_mode=AirconVentMode.HIGH,
        target_temp_aircon=TargetTemp.TEMP_22C,
        current_temp_aircon=TargetTemp.TEMP_25C,
    )
    climate.on_aircon_status(frame)
    assert climate.target_temperature == temp_code_to_decimal(TargetTemp.TEMP_22C)
    assert climate.current_temperature == temp_code_to_decimal(TargetTemp.TEMP_25C)
    assert climate.mode is ClimateMode.COOL
    assert climate.fan_mode is ClimateFanMode.HIGH
    assert published == [climate]


def test_aircon_control_defaults_to_22_when_off():
    aircon = FakeAircon()
    TrumaAirconClimate(aircon=aircon).control(ClimateCall())
    assert aircon.calls == [(22, AirconMode.OFF, AirconVentMode.LOW)]


def test_aircon_control_auto_forces_auto_vent():
    aircon = FakeAircon(
        StatusFrameAirconManual(target_temp_aircon=TargetTemp.TEMP_20C, vent_mode=AirconVentMode.HIGH)
    )
    TrumaAirconClimate(aircon=aircon).control(ClimateCall(mode=ClimateMode.AUTO))
    assert aircon.calls[0][1:] == (AirconMode.AUTO, AirconVentMode.AUTO)


def test_aircon_control_manual_mode_rejects_auto_vent():
    aircon = FakeAircon(StatusFrameAirconManual(vent_mode=AirconVentMode.AUTO))
    TrumaAirconClimate(aircon=aircon).control(ClimateCall(mode=ClimateMode.COOL))
    assert aircon.calls[0][1:] == (AirconMode.COOLING, AirconVentMode.LOW)


def test_aircon_control_full_request():
    aircon = FakeAircon()
    TrumaAirconClimate(aircon=aircon).control(
        ClimateCall(target_temperature=24.0, mode=ClimateMode.COOL, fan_mode=ClimateFanMode.HIGH)
    )
    assert aircon.calls == [(24, AirconMode.COOLING, AirconVentMode.HIGH)]


def test_aircon_traits():
    climate = TrumaAirconClimate(supported_modes={ClimateMode.OFF, ClimateMode.COOL})
    traits = climate.traits()
    assert traits.supports_current_temperature
    assert traits.supported_modes == {ClimateMode.OFF, ClimateMode.COOL}
    assert traits.supported_fan_modes == {
        ClimateFanMode.AUTO,
        ClimateFanMode.LOW,
        ClimateFanMode.MEDIUM,
        ClimateFanMode.HIGH,
    }
    assert (traits.visual_min_temperature, traits.visual_max_temperature) == (16, 31)
    assert traits.visual_temperature_step == 1


def test_aircon_control_without_aircon_raises():
    with pytest.raises(RuntimeError):
        TrumaAirconClimate().control(ClimateCall())


def test_room_status_off():
    climate = TrumaRoomClimate()
    climate.on_heater_status(StatusFrameHeater(heating_mode=HeatingMode.VARIO_HEAT_NIGHT))
    assert math.isnan(climate.target_temperature)
    assert climate.mode is ClimateMode.OFF
    assert climate.fan_mode is ClimateFanMode.OFF


@pytest.mark.parametrize(
    "heating, fan",
    [
        (HeatingMode.ECO, ClimateFanMode.LOW),
        (HeatingMode.HIGH, ClimateFanMode.MEDIUM),
        (HeatingMode.BOOST, ClimateFanMode.HIGH),
    ],
)
def test_room_status_heating(heating, fan):
    climate = TrumaRoomClimate()
    climate.on_heater_status(
        StatusFrameHeater(target_temp_room=TargetTemp.TEMP_21C, heating_mode=heating)
    )
    assert climate.target_temperature == temp_code_to_decimal(TargetTemp.TEMP_21C)
    assert climate.mode is ClimateMode.HEAT
    assert climate.fan_mode is fan


def test_room_control_temperature_only():
    heater = FakeHeater()
    TrumaRoomClimate(heater=heater).control(ClimateCall(target_temperature=21.0))
    assert heater.calls == [("room", 21, None)]


def test_room_control_temperature_with_fan():
    heater = FakeHeater()
    TrumaRoomClimate(heater=heater).control(
        ClimateCall(target_temperature=21.0, fan_mode=ClimateFanMode.HIGH)
    )
    assert heater.calls == [("room", 21, HeatingMode.BOOST)]


def test_room_control_heat_when_off_sets_default():
    heater = FakeHeater()
    TrumaRoomClimate(heater=heater).control(ClimateCall(mode=ClimateMode.HEAT))
    assert heater.calls == [("room", 20, None)]


def test_room_control_heat_when_on_does_nothing():
    heater = FakeHeater(StatusFrameHeater(target_temp_room=TargetTemp.TEMP_18C))
    TrumaRoomClimate(heater=heater).control(ClimateCall(mode=ClimateMode.HEAT))
    assert heater.calls == []


def test_room_control_off():
    heater = FakeHeater(StatusFrameHeater(target_temp_room=TargetTemp.TEMP_18C))
    TrumaRoomClimate(heater=heater).control(ClimateCall(mode=ClimateMode.OFF))
    assert heater.calls == [("room", 0, None)]


def test_room_control_fan_raises_temperature_to_minimum():
    heater = FakeHeater()
    TrumaRoomClimate(heater=heater).control(ClimateCall(fan_mode=ClimateFanMode.LOW))
    assert heater.calls == [("room", 5, HeatingMode.ECO)]


def test_room_control_fan_keeps_current_target():
    heater = FakeHeater(StatusFrameHeater(target_temp_room=TargetTemp.TEMP_18C))
    TrumaRoomClimate(heater=heater).control(ClimateCall(fan_mode=ClimateFanMode.MEDIUM))
    expected = int(temp_code_to_decimal(TargetTemp.TEMP_18C))
    assert heater.calls == [("room", expected, HeatingMode.HIGH)]


def test_room_control_fan_off():
    heater = FakeHeater()
    TrumaRoomClimate(heater=heater).control(ClimateCall(fan_mode=ClimateFanMode.OFF))
    assert heater.calls == [("room", 0, None)]


def test_room_traits():
    traits = TrumaRoomClimate(supported_modes={ClimateMode.HEAT}).traits()
    assert traits.supported_modes == {ClimateMode.HEAT}
    assert traits.supported_fan_modes == {
        ClimateFanMode.OFF,
        ClimateFanMode.LOW,
        ClimateFanMode.MEDIUM,
        ClimateFanMode.HIGH,
    }
    assert (traits.visual_min_temperature, traits.visual_max_temperature) == (5, 30)
    assert traits.visual_temperature_step == 1


def test_water_status_boost_shown_as_80():
    climate = TrumaWaterClimate()
    climate.on_heater_status(StatusFrameHeater(target_temp_water=TargetTemp.WATER_BOOST))
    assert climate.target_temperature == 80
    assert climate.mode is ClimateMode.HEAT


def test_water_status_off():
    published = []
    climate = TrumaWaterClimate(on_state=published.append)
    climate.on_heater_status(StatusFrameHeater())
    assert climate.mode is ClimateMode.OFF
    assert math.isnan(climate.target_temperature)
    assert published == [climate]


def test_water_control_temperature():
    heater = FakeHeater()
    TrumaWaterClimate(heater=heater).control(ClimateCall(target_temperature=60.0))
    assert heater.calls == [("water", 60)]


def test_water_control_heat_when_off():
    heater = FakeHeater()
    TrumaWaterClimate(heater=heater).control(ClimateCall(mode=ClimateMode.HEAT))
    assert heater.calls == [("water", 40)]


def test_water_control_heat_when_on_does_nothing():
    heater = FakeHeater(StatusFrameHeater(target_temp_water=TargetTemp.WATER_HIGH))
    TrumaWaterClimate(heater=heater).control(ClimateCall(mode=ClimateMode.HEAT))
    assert heater.calls == []


def test_water_control_off():
    heater = FakeHeater(StatusFrameHeater(target_temp_water=TargetTemp.WATER_HIGH))
    TrumaWaterClimate(heater=heater).control(ClimateCall(mode=ClimateMode.OFF))
    assert heater.calls == [("water", 0)]


def test_water_traits():
    traits = TrumaWaterClimate().traits()
    assert traits.supported_fan_modes == frozenset()
    assert (traits.visual_min_temperature, traits.visual_max_temperature) == (40, 80)
    assert traits.visual_temperature_step == 20


def test_water_control_without_heater_raises():
    with pytest.raises(RuntimeError):
        TrumaWaterClimate().control(ClimateCall(mode=ClimateMode.OFF))