# aprskit

Parsing and encoding of the fields found in APRS (Automatic Packet Reporting
System) information fields: positions (uncompressed, compressed, with
ambiguity and with DAO refinement), timestamps, symbols, data extensions,
weather reports, telemetry and user-defined packets.

The parsers take `bytes`. Malformed input raises a subclass of
`aprskit.util.AprsError` (itself a `ValueError`). The encoders return
`bytes`, and parsing then encoding gives back the original wire form.

## Installation

```
pip install aprskit
```

## Modules

- `aprskit.position` – `Position.parse`, `Position.encode_uncompressed`,
  `Position.encode_compressed`, DAO tokens (`find_dao`, `parse_dao_token`,
  `HumanReadableDao`, `Base91Dao`) and `altitude_in_comment`.
- `aprskit.lonlat` – `Latitude`, `Longitude`, `Precision` and the base-91
  helpers `base91_decode4`, `base91_encode4`, `base91_decode1`,
  `base91_encode1`.
- `aprskit.compressed` – the csT block of compressed positions:
  `CompressedCs`, `CompressionType`, `CourseSpeed`, `RadioRange`,
  `CompressedAltitude`, `Altitude`.
- `aprskit.timestamp` – `Timestamp` and `TimestampKind`.
- `aprskit.symbol` – `Symbol` with table checks and descriptions.
- `aprskit.extensions` – `parse_extension` / `require_extension` for
  `DirectionSpeed`, `Phg`, `Rng` and `Dfs`.
- `aprskit.weather` – `WeatherData`, `PositionlessWeather` and unit types
  (`WindSpeed`, `Temperature`, `Rainfall`, `Pressure`, `Snowfall`, ...).
- `aprskit.telemetry` – `Telemetry`, `TelemetryEquation`, `TelemetryMetadata`.
- `aprskit.user_defined` – `UserDefined`.
- `aprskit.util` – the error classes, `parse_int` and `extract_frequency_mhz`.

## Examples

### Positions

```python
from aprskit.position import Position

comment, pos = Position.parse(b"4903.50N/07201.75W-/A=003054")
print(pos.latitude.value, pos.longitude.value)  # 49.0583..., -72.0291...
print(pos.symbol.description())                 # House
print(pos.altitude.feet)                        # 3054.0
print(comment)                                  # b'/A=003054'
print(pos.encode_uncompressed())                # b'4903.50N/07201.75W-'
```

### Timestamps

```python
from aprskit.timestamp import Timestamp

ts = Timestamp.parse(b"092345z")
print(ts.fields)     # (9, 23, 45)
print(ts.encode())   # b'092345z'
```

A day, hour, minute or second out of range raises `TimestampRangeError`.
Local-time and non-standard designators are kept verbatim with kind
`TimestampKind.UNSUPPORTED`.

### Weather

```python
from aprskit.weather import WeatherData, PositionlessWeather

wx = WeatherData.parse(b"220/004g005t077r000p000P000h50b09900")
print(wx.temperature.celsius())      # 25.0
print(wx.barometric_pressure.hpa())  # 990.0

report = PositionlessWeather.parse(b"_10071820220/004g005t077")
print(report.encode())               # b'_10071820220/004g005t077'
```

### Telemetry

```python
from aprskit.telemetry import Telemetry, TelemetryMetadata

t = Telemetry.parse(b"T#001,100,200,300,400,500,10101010")
print(t.analog)        # (100.0, 200.0, 300.0, 400.0, 500.0)
print(bin(t.digital))  # 0b10101010

equations = TelemetryMetadata.parse_eqns(b"0,0.01,0,0,0.01,0,0,1,0,0,1,0,0,1,0")
print(equations[0].apply(100.0))  # about 1.0 (coefficients are single precision)
```

### Extensions and symbols

```python
from aprskit.extensions import parse_extension
from aprskit.symbol import Symbol

print(parse_extension(b"322/103"))      # DirectionSpeed(direction_degrees=322, speed_knots=103)
print(Symbol("\\", "@").description())  # Tornado
```

## What this package does not do

It works on the individual fields of an information field. It does not
decode a whole packet: there is no parsing of the source, destination and
digipeater path header, no AX.25 frame handling, and no decoders for
messages, status reports, objects, items, Mic-E, grid locators, NMEA,
third-party, capabilities or query packets. There is no command-line tool.

## Running the tests

```
pip install aprskit[test]
pytest
```