"""Values published by the heater and aircon sensors."""

from __future__ import annotations

from inetbox.enums import SensorType
from inetbox.frames import StatusFrameAirconManual, StatusFrameHeater
from inetbox.helpers import temp_code_to_decimal

_HEATER_TYPES = frozenset(
    {
        SensorType.CURRENT_ROOM_TEMPERATURE,
        SensorType.CURRENT_WATER_TEMPERATURE,
        SensorType.TARGET_ROOM_TEMPERATURE,
        SensorType.TARGET_WATER_TEMPERATURE,
        SensorType.HEATING_MODE,
        SensorType.ELECTRIC_POWER_LEVEL,
        SensorType.ENERGY_MIX,
        SensorType.OPERATING_STATUS,
        SensorType.HEATER_ERROR_CODE,
    }
)

_AIRCON_TYPES = frozenset(
    {
        SensorType.AIRCON_TARGET_TEMPERATURE,
        SensorType.AIRCON_CURRENT_TEMPERATURE,
        SensorType.AIRCON_MODE,
        SensorType.AIRCON_VENT_MODE,
    }
)


def uses_heater_frame(sensor_type: SensorType) -> bool:
    """Whether the sensor is fed by heater status frames."""
    return sensor_type in _HEATER_TYPES


def uses_aircon_frame(sensor_type: SensorType) -> bool:
    """Whether the sensor is fed by manual aircon status frames."""
    return sensor_type in _AIRCON_TYPES


def _heater_value(sensor_type: SensorType, frame: StatusFrameHeater) -> float:
    if sensor_type is SensorType.CURRENT_ROOM_TEMPERATURE:
        return temp_code_to_decimal(frame.current_temp_room)
    if sensor_type is SensorType.CURRENT_WATER_TEMPERATURE:
        return temp_code_to_decimal(frame.current_temp_water)
    if sensor_type is SensorType.TARGET_ROOM_TEMPERATURE:
        return temp_code_to_decimal(frame.target_temp_room)
    if sensor_type is SensorType.TARGET_WATER_TEMPERATURE:
        return temp_code_to_decimal(frame.target_temp_water)
    if sensor_type is SensorType.HEATING_MODE:
        return float(frame.heating_mode)
    if sensor_type is SensorType.ELECTRIC_POWER_LEVEL:
        return float(frame.el_power_level_a)
    if sensor_type is SensorType.ENERGY_MIX:
        return float(frame.energy_mix_a)
    if sensor_type is SensorType.OPERATING_STATUS:
        return float(frame.operating_status)
    return frame.error_code_high * 100.0 + frame.error_code_low


def _aircon_value(sensor_type: SensorType, frame: StatusFrameAirconManual) -> float:
    if sensor_type is SensorType.AIRCON_TARGET_TEMPERATURE:
        return temp_code_to_decimal(frame.target_temp_aircon)
    if sensor_type is SensorType.AIRCON_CURRENT_TEMPERATURE:
        return temp_code_to_decimal(frame.current_temp_aircon)
    if sensor_type is SensorType.AIRCON_MODE:
        return float(frame.mode)
    return float(frame.vent_mode)


def sensor_value(
    sensor_type: SensorType, frame: StatusFrameHeater | StatusFrameAirconManual
) -> float | None:
    """Value a sensor of ``sensor_type`` publishes for ``frame``.

    Returns None when the sensor is not fed by that kind of frame.
    """
    sensor_type = SensorType(sensor_type)
    if isinstance(frame, StatusFrameHeater) and uses_heater_frame(sensor_type):
        return _heater_value(sensor_type, frame)
    if isinstance(frame, StatusFrameAirconManual) and uses_aircon_frame(sensor_type):
        return _aircon_value(sensor_type, frame)
    return None