"""Compressed-position csT block: course/speed, radio range and altitude."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Union

from .lonlat import base91_decode1, base91_encode1
from .util import InvalidCompressedByteError

__all__ = [
    "GpsFix",
    "NmeaSource",
    "Origin",
    "CompressionType",
    "CourseSpeed",
    "RadioRange",
    "CompressedAltitude",
    "Altitude",
    "CsKind",
    "CompressedCs",
]

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_LN_1_08 = math.log(1.08)
_LN_1_002 = math.log(1.002)


def _ln(x: float) -> float:
    if math.isnan(x) or x < 0.0:
        return math.nan
    if x == 0.0:
        return -math.inf
    return math.log(x)


def _round_half_away(x: float) -> float:
    if math.isnan(x) or math.isinf(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x)


def _saturate(x: float, low: int, high: int) -> int:
    """Convert a float to an integer, clamping to [low, high]; NaN becomes 0."""
    if math.isnan(x):
        return 0
    if x <= low:
        return low
    if x >= high:
        return high
    return int(x)


class GpsFix(enum.Enum):
    """Whether the GPS fix is old or current."""

    OLD = 0
    CURRENT = 1


class NmeaSource(enum.Enum):
    """Which NMEA sentence the position came from."""

    OTHER = 0
    GLL = 1
    GGA = 2
    RMC = 3


class Origin(enum.Enum):
    """Where the compressed position was generated."""

    COMPRESSED = 0
    TNC_BTEXT = 1
    SOFTWARE = 2
    TBD = 3
    KPC3 = 4
    PICO = 5
    OTHER = 6
    DIGIPEATER = 7


@dataclass(frozen=True)
class CompressionType:
    """The compression-type (T) byte of a compressed position."""

    gps_fix: GpsFix
    nmea_source: NmeaSource
    origin: Origin

    @classmethod
    def from_byte(cls, value: int) -> CompressionType:
        """Decode from the T value (already reduced by 33)."""
        return cls(
            gps_fix=GpsFix.CURRENT if value & 0x20 else GpsFix.OLD,
            nmea_source=NmeaSource((value >> 3) & 0x03),
            origin=Origin(value & 0x07),
        )

    def to_byte(self) -> int:
        """Encode to the T value (before adding 33)."""
        return (self.gps_fix.value << 5) | (self.nmea_source.value << 3) | self.origin.value


@dataclass(frozen=True)
class CourseSpeed:
    """Course in degrees and speed in knots."""

    course_degrees: int
    speed_knots: float

    @classmethod
    def from_cs(cls, c: int, s: int) -> CourseSpeed:
        return cls(course_degrees=c * 4, speed_knots=1.08**s - 1.0)

    def to_cs(self) -> tuple[int, int]:
        c = (self.course_degrees // 4) & 0xFF
        s = _saturate(_round_half_away(_ln(self.speed_knots + 1.0) / _LN_1_08), 0, 255)
        return c, s


@dataclass(frozen=True)
class RadioRange:
    """Pre-calculated radio range in miles."""

    range_miles: float

    @classmethod
    def from_s(cls, s: int) -> RadioRange:
        return cls(range_miles=2.0 * 1.08**s)

    def to_s(self) -> int:
        return _saturate(_round_half_away(_ln(self.range_miles / 2.0) / _LN_1_08), 0, 255)


@dataclass(frozen=True)
class CompressedAltitude:
    """Altitude in feet carried in the cs bytes of a GGA-sourced position."""

    feet: float

    def meters(self) -> float:
        return self.feet * 0.3048

    @classmethod
    def from_cs(cls, c: int, s: int) -> CompressedAltitude:
        return cls(feet=1.002 ** (c * 91 + s))

    def to_cs(self) -> tuple[int, int]:
        v = _saturate(_round_half_away(_ln(self.feet) / _LN_1_002), _I32_MIN, _I32_MAX)
        quotient = abs(v) // 91 * (1 if v >= 0 else -1)
        remainder = v - quotient * 91
        return quotient & 0xFF, remainder & 0xFF


@dataclass(frozen=True)
class Altitude:
    """Altitude in feet, from ``/A=NNNNNN`` or a compressed position."""

    feet: float

    def meters(self) -> float:
        return self.feet * 0.3048


class CsKind(enum.Enum):
    """What a csT block carries."""

    COURSE_SPEED = "course_speed"
    RADIO_RANGE = "radio_range"
    ALTITUDE = "altitude"
    NONE = "none"


CsData = Union[CourseSpeed, RadioRange, CompressedAltitude, None]

_KIND_TYPES: dict[CsKind, type | None] = {
    CsKind.COURSE_SPEED: CourseSpeed,
    CsKind.RADIO_RANGE: RadioRange,
    CsKind.ALTITUDE: CompressedAltitude,
    CsKind.NONE: None,
}


@dataclass(frozen=True)
class CompressedCs:
    """The csT block of a compressed position."""

    kind: CsKind
    compression_type: CompressionType
    data: CsData = None

    def __post_init__(self) -> None:
        expected = _KIND_TYPES[self.kind]
        if expected is None:
            if self.data is not None:
                raise ValueError("a NONE csT block carries no data")
        elif not isinstance(self.data, expected):
            raise ValueError(f"{self.kind.name} csT block needs {expected.__name__} data")

    @classmethod
    def parse(cls, c: int, s: int, t: int) -> CompressedCs:
        """Decode the c, s and T bytes."""
        if c == 0x20:
            return cls(CsKind.NONE, CompressionType.from_byte(max(t - 33, 0)))
        c_val = base91_decode1(c)
        s_val = base91_decode1(s)
        if c_val is None or s_val is None:
            return cls(CsKind.NONE, CompressionType.from_byte(0))
        ctype = CompressionType.from_byte(max(t - 33, 0))
        if ctype.nmea_source is NmeaSource.GGA:
            return cls(CsKind.ALTITUDE, ctype, CompressedAltitude.from_cs(c_val, s_val))
        if c_val <= 89:
            return cls(CsKind.COURSE_SPEED, ctype, CourseSpeed.from_cs(c_val, s_val))
        if c_val == 90:
            return cls(CsKind.RADIO_RANGE, ctype, RadioRange.from_s(s_val))
        raise InvalidCompressedByteError(c)

    def encode(self) -> bytes:
        """The three csT bytes."""
        t_byte = self.compression_type.to_byte() + 33
        if self.kind is CsKind.RADIO_RANGE:
            return bytes((0x7B, base91_encode1(self.data.to_s()), t_byte))
        if self.kind is CsKind.NONE:
            return bytes((0x20, 0x73, t_byte))
        c, s = self.data.to_cs()
        return bytes((base91_encode1(c), base91_encode1(s), t_byte))