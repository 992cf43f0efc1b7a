"""APRS weather data: position-embedded and positionless reports.

Values are kept in their native APRS wire units; each unit type offers
conversions to other units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from .util import TruncatedPacketError, parse_int

__all__ = [
    "WindDirection",
    "WindSpeed",
    "Temperature",
    "Rainfall",
    "Humidity",
    "Pressure",
    "Luminosity",
    "Snowfall",
    "WeatherData",
    "PositionlessWeather",
]

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_WEATHER_HEADER_LEN = 7
_POSITIONLESS_HEADER_LEN = 9


@dataclass(frozen=True)
class WindDirection:
    """Wind direction in degrees (0 means unknown or variable)."""

    degrees: int


@dataclass(frozen=True)
class WindSpeed:
    """Wind speed in statute miles per hour."""

    mph: int

    def knots(self) -> float:
        return self.mph * 0.868976

    def kph(self) -> float:
        return self.mph * 1.609344

    def m_per_s(self) -> float:
        return self.mph * 0.44704


@dataclass(frozen=True)
class Temperature:
    """Temperature in degrees Fahrenheit."""

    fahrenheit: int

    def celsius(self) -> float:
        return (self.fahrenheit - 32.0) * 5.0 / 9.0

    def kelvin(self) -> float:
        return self.celsius() + 273.15


@dataclass(frozen=True)
class Rainfall:
    """Rainfall in hundredths of an inch."""

    hundredths_inch: int

    def inches(self) -> float:
        return self.hundredths_inch / 100.0

    def mm(self) -> float:
        return self.inches() * 25.4


@dataclass(frozen=True)
class Humidity:
    """Relative humidity in percent (the wire value ``00`` means 100%)."""

    percent: int


@dataclass(frozen=True)
class Pressure:
    """Barometric pressure in tenths of a millibar."""

    tenths_mbar: int

    def hpa(self) -> float:
        return self.tenths_mbar / 10.0

    def mbar(self) -> float:
        return self.hpa()


@dataclass(frozen=True)
class Luminosity:
    """Solar radiation in watts per square metre."""

    w_per_m2: int


@dataclass(frozen=True)
class Snowfall:
    """Snowfall over the last 24 hours, in tenths of an inch."""

    tenths_inch: float

    def inches(self) -> float:
        return self.tenths_inch / 10.0

    def cm(self) -> float:
        return self.inches() * 2.54


def _blank(data: bytes) -> bool:
    return all(ch in b". " for ch in data)


def _parse_unsigned(data: bytes, maximum: int) -> int | None:
    if data.startswith(b"-"):
        return None
    value = parse_int(data)
    if value is None or value > maximum:
        return None
    return value


def _opt_u16(data: bytes) -> int | None:
    """A u16 field; None when blank (dots or spaces) or malformed."""
    if _blank(data):
        return None
    return _parse_unsigned(data, _U16_MAX)


def _opt_i16(data: bytes) -> int | None:
    """A signed field such as a temperature; None when blank or malformed."""
    if _blank(data):
        return None
    value = parse_int(data)
    if value is None or not -0x8000 <= value <= 0x7FFF:
        return None
    return value


def _mapped(parse: Callable[[bytes], int | None], build: Callable[[int], object]):
    def convert(data: bytes):
        value = parse(data)
        return None if value is None else build(value)

    return convert


def _humidity(value: int) -> Humidity:
    return Humidity(100 if value == 0 else value & 0xFF)


# key byte -> (field name, width, converter)
_FIELDS: dict[int, tuple[str, int, Callable[[bytes], object]]] = {
    ord("g"): ("wind_gust", 3, _mapped(_opt_u16, WindSpeed)),
    ord("t"): ("temperature", 3, _mapped(_opt_i16, Temperature)),
    ord("r"): ("rain_last_hour", 3, _mapped(_opt_u16, Rainfall)),
    ord("p"): ("rain_last_24h", 3, _mapped(_opt_u16, Rainfall)),
    ord("P"): ("rain_since_midnight", 3, _mapped(_opt_u16, Rainfall)),
    ord("h"): ("humidity", 2, _mapped(_opt_u16, _humidity)),
    ord("b"): (
        "barometric_pressure",
        5,
        _mapped(lambda d: _parse_unsigned(d, _U32_MAX), Pressure),
    ),
    ord("L"): ("luminosity", 3, _mapped(_opt_u16, lambda v: Luminosity(v + 1000))),
    ord("l"): ("luminosity", 3, _mapped(_opt_u16, Luminosity)),
    ord("s"): ("snow_last_24h", 3, _mapped(_opt_u16, lambda v: Snowfall(v / 10.0))),
    ord("#"): ("raw_rain_counter", 3, _opt_u16),
}


def _snow_code(tenths_inch: float) -> int:
    scaled = tenths_inch * 10.0
    if math.isnan(scaled) or scaled <= 0:
        return 0
    return min(int(scaled), _U16_MAX)


@dataclass(frozen=True)
class WeatherData:
    """Weather fields; any of them may be absent."""

    wind_direction: Optional[WindDirection] = None
    wind_speed: Optional[WindSpeed] = None
    wind_gust: Optional[WindSpeed] = None
    temperature: Optional[Temperature] = None
    rain_last_hour: Optional[Rainfall] = None
    rain_last_24h: Optional[Rainfall] = None
    rain_since_midnight: Optional[Rainfall] = None
    humidity: Optional[Humidity] = None
    barometric_pressure: Optional[Pressure] = None
    luminosity: Optional[Luminosity] = None
    snow_last_24h: Optional[Snowfall] = None
    raw_rain_counter: Optional[int] = None

    @classmethod
    def parse(cls, data: bytes) -> WeatherData:
        """Decode a ``DDD/SSS`` block followed by lettered fields.

        Parsing stops at the first unknown field letter; the rest is comment.
        """
        data = bytes(data)
        if len(data) < _WEATHER_HEADER_LEN or data[3:4] != b"/":
            raise TruncatedPacketError(_WEATHER_HEADER_LEN, len(data))

        direction = _opt_u16(data[0:3])
        speed = _opt_u16(data[4:7])
        fields: dict[str, object] = {
            "wind_direction": None if direction is None else WindDirection(direction),
            "wind_speed": None if speed is None else WindSpeed(speed),
        }

        pos = _WEATHER_HEADER_LEN
        while pos < len(data):
            spec = _FIELDS.get(data[pos])
            pos += 1
            if spec is None:
                break
            name, width, convert = spec
            if pos + width <= len(data):
                fields[name] = convert(data[pos : pos + width])
                pos += width
        return cls(**fields)

    def encode(self) -> bytes:
        """The weather block, without any header."""
        parts = [
            b"..." if self.wind_direction is None else b"%03d" % self.wind_direction.degrees,
            b"/",
            b"..." if self.wind_speed is None else b"%03d" % self.wind_speed.mph,
        ]
        if self.wind_gust is not None:
            parts.append(b"g%03d" % self.wind_gust.mph)
        if self.temperature is not None:
            parts.append(f"t{self.temperature.fahrenheit:03}".encode("ascii"))
        if self.rain_last_hour is not None:
            parts.append(b"r%03d" % self.rain_last_hour.hundredths_inch)
        if self.rain_last_24h is not None:
            parts.append(b"p%03d" % self.rain_last_24h.hundredths_inch)
        if self.rain_since_midnight is not None:
            parts.append(b"P%03d" % self.rain_since_midnight.hundredths_inch)
        if self.humidity is not None:
            percent = self.humidity.percent
            parts.append(b"h%02d" % (0 if percent == 100 else percent))
        if self.barometric_pressure is not None:
            parts.append(b"b%05d" % self.barometric_pressure.tenths_mbar)
        if self.luminosity is not None:
            watts = self.luminosity.w_per_m2
            if watts >= 1000:
                parts.append(b"L%03d" % (watts - 1000))
            else:
                parts.append(b"l%03d" % watts)
        if self.snow_last_24h is not None:
            parts.append(b"s%03d" % _snow_code(self.snow_last_24h.tenths_inch))
        if self.raw_rain_counter is not None:
            parts.append(b"#%03d" % self.raw_rain_counter)
        return b"".join(parts)


@dataclass(frozen=True)
class PositionlessWeather:
    """A positionless weather report: ``_MMDDHHMM`` plus weather fields."""

    timestamp: bytes
    weather: WeatherData
    comment: bytes = b""

    @classmethod
    def parse(cls, info: bytes) -> PositionlessWeather:
        """Decode from the information field, including the leading ``_``."""
        info = bytes(info)
        if len(info) < _POSITIONLESS_HEADER_LEN:
            raise TruncatedPacketError(_POSITIONLESS_HEADER_LEN, len(info))
        return cls(
            timestamp=info[1:_POSITIONLESS_HEADER_LEN],
            weather=WeatherData.parse(info[_POSITIONLESS_HEADER_LEN:]),
        )

    def encode(self) -> bytes:
        """The information field, including the leading ``_``."""
        return b"_" + self.timestamp + self.weather.encode() + self.comment