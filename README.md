# inetbox

Pure-Python building blocks for acting as an iNet box towards a Truma (or
Alde) CP Plus control panel on the LIN bus: protocol enumerations, checksums
and temperature conversions, status frame encoding, and the logic that turns
received frames into published values and user requests into heater or
aircon commands. It has no dependencies outside the standard library.

## Modules

- `inetbox.enums`: protocol enumerations (`HeatingMode`, `ElectricPowerLevel`,
  `TargetTemp`, `EnergyMix`, `OperatingStatus`, `AirconMode`,
  `AirconVentMode`, `TrumaDevice`, ...), entity type enumerations
  (`NumberType`, `SelectType`, `SensorType`, with a `label` property), the
  option indices of the selects (`HeaterFanModeOption`,
  `HeaterEnergyMixOption`, `AirconModeOption`, `AirconVentModeOption`), and
  `LogMessage` / `LogMessageType` for bus log entries of up to nine bytes.
- `inetbox.helpers`: LIN address parity (`addr_parity`), LIN 1.x and 2.x data
  checksums (`data_checksum`), conversions between degrees Celsius and the
  protocol's tenths-of-kelvin codes (`temp_code_to_decimal`,
  `decimal_to_temp`, `decimal_to_room_temp`, `decimal_to_water_temp`,
  `decimal_to_aircon_manual_temp`, `decimal_to_aircon_auto_temp`,
  `water_temp_200_fix`), `decimal_to_el_power_level`,
  `operating_status_to_str`, and the `TRUMA_MESSAGE_HEADER` /
  `ALDE_MESSAGE_HEADER` bytes.
- `inetbox.frames`: little-endian packed payload records with `from_bytes`
  and `to_bytes` (`StatusFrameHeader`, `StatusFrameHeater`,
  `StatusFrameTimer`, `StatusFrameClock`, `StatusFrameConfig`,
  `StatusFrameDevice`, `StatusFrameAirconManual`, ... and their response
  variants), the 41-byte `StatusFrame` (17-byte header plus raw payload), and
  the frame type constants (`STATUS_FRAME_HEATER`, `STATUS_FRAME_CLOCK`, ...).
  Enum-typed fields decode to the enum member when the value is known and
  stay plain integers otherwise.
- `inetbox.sensor`: `sensor_value(sensor_type, frame)` gives the value a
  sensor publishes for a heater or manual aircon frame (or `None` if that
  sensor is not fed by the frame); `uses_heater_frame` and
  `uses_aircon_frame` tell which frames feed a sensor.
- `inetbox.climate`: `TrumaRoomClimate`, `TrumaWaterClimate` and
  `TrumaAirconClimate`, with `ClimateCall`, `ClimateTraits`, `ClimateMode`,
  `ClimateFanMode` and the aircon/climate mode mapping functions.
- `inetbox.uart.component`: an abstract UART bus (`UARTComponent`), devices
  attached to it (`UARTDevice`, including `check_uart_settings`), the
  `UARTWriteAction` automation action, and `Parity` / `parity_to_str`.
- `inetbox.uart.debugger`: `UARTDebugger` accumulates bus traffic and hands
  it to actions on direction change, delimiter, byte count or timeout;
  `UARTDummyReceiver` discards incoming bytes; `format_hex`,
  `format_string`, `format_int` and `format_binary` render bytes for logs.

## Installation

```
pip install .
```

## Examples

```python
from inetbox.enums import TargetTemp
from inetbox.helpers import addr_parity, data_checksum, temp_code_to_decimal

temp_code_to_decimal(TargetTemp.TEMP_20C, 0)   # 20.0
temp_code_to_decimal(0, 0)                     # 0 (code 0 means "off")
addr_parity(0x18)                              # 3
data_checksum(bytes([0x01, 0x02, 0x03]), 0)    # 249, the classic checksum
```

```python
from inetbox.enums import SensorType, TargetTemp
from inetbox.frames import StatusFrameHeater
from inetbox.sensor import sensor_value

frame = StatusFrameHeater(target_temp_room=TargetTemp.TEMP_21C)
same = StatusFrameHeater.from_bytes(frame.to_bytes())
sensor_value(SensorType.TARGET_ROOM_TEMPERATURE, same)   # 21.0
```

The climate entities do not talk to the bus themselves. Give them an object
with `get_status()` and the action methods (`action_heater_room`,
`action_heater_water` for the heater, `action_aircon_manual` for the aircon),
feed them frames with `on_heater_status` / `on_aircon_status`, and pass
`on_state` to be called whenever they publish:

```python
from inetbox.climate import ClimateCall, ClimateMode, TrumaWaterClimate

climate = TrumaWaterClimate(heater=my_heater, on_state=print)
climate.control(ClimateCall(mode=ClimateMode.HEAT))
```

```python
from inetbox.uart.debugger import Direction, format_hex

format_hex(Direction.RX, b"\x01\xab", ord(":"))   # '<<< 01:AB'
```

## What it does not do

- There is no LIN bus driver: nothing here reads break/sync fields, answers
  the panel, or keeps the heater and aircon state that the climate entities
  are given as `heater` / `aircon`. You supply those objects.
- There is no concrete serial port. `UARTComponent` is abstract; subclass it
  and implement `_write`, `_read`, `_peek`, `available` and `flush`.
- There are no number, select, clock or switch entities, and no command-line
  program.

## Running the tests

```
pip install ".[test]"
pytest
```