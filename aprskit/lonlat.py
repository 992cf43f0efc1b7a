"""Latitude and longitude fields, position ambiguity and base-91 helpers."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .util import InvalidLatitudeError, InvalidLongitudeError, parse_int

__all__ = [
    "Precision",
    "Latitude",
    "Longitude",
    "base91_decode4",
    "base91_encode4",
    "base91_decode1",
    "base91_encode1",
]

_DIGITS = b"0123456789"
_U32_MAX = 0xFFFFFFFF


class Precision(enum.IntEnum):
    """Granularity of a coordinate, inferred from trailing-space ambiguity."""

    TEN_DEGREE = 0
    ONE_DEGREE = 1
    TEN_MINUTE = 2
    ONE_MINUTE = 3
    TENTH_MINUTE = 4
    HUNDREDTH_MINUTE = 5

    def width(self) -> float:
        """Width of the precision cell in degrees."""
        return _WIDTHS[self]

    def range(self, center: float) -> tuple[float, float]:
        """The inclusive (low, high) bounds of the cell around ``center``."""
        half = self.width() / 2.0
        return (center - half, center + half)

    @property
    def blank_digits(self) -> int:
        """How many trailing digits are replaced by spaces on the wire."""
        return Precision.HUNDREDTH_MINUTE - self

    @classmethod
    def from_blank_digits(cls, blanks: int) -> Precision | None:
        if not 0 <= blanks <= 5:
            return None
        return cls(Precision.HUNDREDTH_MINUTE - blanks)


_WIDTHS = {
    Precision.HUNDREDTH_MINUTE: 1.0 / 6000.0,
    Precision.TENTH_MINUTE: 1.0 / 600.0,
    Precision.ONE_MINUTE: 1.0 / 60.0,
    Precision.TEN_MINUTE: 1.0 / 6.0,
    Precision.ONE_DEGREE: 1.0,
    Precision.TEN_DEGREE: 10.0,
}


def _round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _to_u32(x: float) -> int:
    return min(max(_round_half_away(x), 0), _U32_MAX)


def _dmh(value: float) -> tuple[int, int, int, bool]:
    positive = value >= 0.0
    v = value if positive else -value
    deg = int(v)
    minutes = int((v - deg) * 60.0)
    hdths = max(_round_half_away((v - deg - minutes / 60.0) * 6000.0), 0)
    if hdths >= 100:
        hdths = 0
        minutes += 1
    if minutes >= 60:
        minutes = 0
        deg += 1
    return deg, minutes, hdths, positive


def _parse_pair_ambiguous(pair: bytes, must_be_spaces: bool) -> tuple[int, int] | None:
    """Parse two digits allowing trailing spaces; returns (value, spaces)."""
    if must_be_spaces:
        return (0, 2) if pair == b"  " else None
    first, second = pair[0], pair[1]
    if pair == b"  ":
        return (0, 2)
    if first in _DIGITS and second == 0x20:
        return ((first - 0x30) * 10, 1)
    if first in _DIGITS and second in _DIGITS:
        return ((first - 0x30) * 10 + (second - 0x30), 0)
    return None


def _parse_unsigned(data: bytes) -> int | None:
    if data.startswith(b"-"):
        return None
    return parse_int(data)


@dataclass(frozen=True, order=True)
class Latitude:
    """Latitude in decimal degrees (positive north, negative south)."""

    value: float = 0.0

    def __post_init__(self) -> None:
        if math.isnan(self.value) or not -90.0 <= self.value <= 90.0:
            raise ValueError(f"latitude out of range: {self.value}")

    def __float__(self) -> float:
        return float(self.value)

    def dmh(self) -> tuple[int, int, int, bool]:
        """(degrees, whole minutes, hundredths of a minute, is_north)."""
        return _dmh(self.value)

    @classmethod
    def parse_uncompressed(cls, data: bytes) -> tuple[Latitude, Precision]:
        """Decode ``DDmm.mmN``/``DDmm.mmS``; trailing spaces lower the precision."""
        data = bytes(data)
        if len(data) != 8 or data[4:5] != b".":
            raise InvalidLatitudeError(data)
        direction = data[7:8]
        if direction not in (b"N", b"S"):
            raise InvalidLatitudeError(data)
        deg = _parse_pair_ambiguous(data[0:2], False)
        if deg is None:
            raise InvalidLatitudeError(data)
        minutes = _parse_pair_ambiguous(data[2:4], deg[1] > 0)
        if minutes is None:
            raise InvalidLatitudeError(data)
        hdths = _parse_pair_ambiguous(data[5:7], minutes[1] > 0)
        if hdths is None:
            raise InvalidLatitudeError(data)
        precision = Precision.from_blank_digits(deg[1] + minutes[1] + hdths[1])
        if precision is None:
            raise InvalidLatitudeError(data)
        value = deg[0] + minutes[0] / 60.0 + hdths[0] / 6000.0
        if direction == b"S":
            value = -value
        try:
            return cls(value), precision
        except ValueError:
            raise InvalidLatitudeError(data) from None

    @classmethod
    def parse_compressed(cls, data: bytes) -> Latitude:
        """Decode a 4-byte base-91 compressed latitude."""
        data = bytes(data)
        encoded = base91_decode4(data)
        if encoded is None:
            raise InvalidLatitudeError(data)
        try:
            return cls(90.0 - encoded / 380926.0)
        except ValueError:
            raise InvalidLatitudeError(data) from None

    def encode_uncompressed(
        self, precision: Precision = Precision.HUNDREDTH_MINUTE
    ) -> bytes:
        """The 8-byte ``DDmm.mmN`` form, blanking digits for ambiguity."""
        deg, minutes, hdths, is_north = self.dmh()
        digits = f"{deg:02}{minutes:02}{hdths:02}".encode("ascii")
        end = max(6 - precision.blank_digits, 0)
        buf = digits[:end] + b" " * (6 - end)
        return buf[:4] + b"." + buf[4:6] + (b"N" if is_north else b"S")

    def encode_compressed(self) -> bytes:
        """The 4-byte base-91 compressed form."""
        return base91_encode4(_to_u32((90.0 - self.value) * 380926.0))


@dataclass(frozen=True, order=True)
class Longitude:
    """Longitude in decimal degrees (positive east, negative west)."""

    value: float = 0.0

    def __post_init__(self) -> None:
        if math.isnan(self.value) or not -180.0 <= self.value <= 180.0:
            raise ValueError(f"longitude out of range: {self.value}")

    def __float__(self) -> float:
        return float(self.value)

    def dmh(self) -> tuple[int, int, int, bool]:
        """(degrees, whole minutes, hundredths of a minute, is_east)."""
        return _dmh(self.value)

    @classmethod
    def parse_uncompressed(
        cls, data: bytes, precision: Precision = Precision.HUNDREDTH_MINUTE
    ) -> Longitude:
        """Decode ``DDDmm.mmE``/``DDDmm.mmW``, masking digits by ``precision``."""
        data = bytes(data)
        if len(data) != 9 or data[5:6] != b".":
            raise InvalidLongitudeError(data)
        direction = data[8:9]
        if direction not in (b"E", b"W"):
            raise InvalidLongitudeError(data)
        digits = data[0:5] + data[6:8]
        keep = max(7 - precision.blank_digits, 0)
        digits = digits[:keep] + b"0" * (7 - keep)
        deg = _parse_unsigned(digits[0:3])
        minutes = _parse_unsigned(digits[3:5])
        hdths = _parse_unsigned(digits[5:7])
        if deg is None or minutes is None or hdths is None:
            raise InvalidLongitudeError(data)
        value = deg + minutes / 60.0 + hdths / 6000.0
        if direction == b"W":
            value = -value
        try:
            return cls(value)
        except ValueError:
            raise InvalidLongitudeError(data) from None

    @classmethod
    def parse_compressed(cls, data: bytes) -> Longitude:
        """Decode a 4-byte base-91 compressed longitude."""
        data = bytes(data)
        encoded = base91_decode4(data)
        if encoded is None:
            raise InvalidLongitudeError(data)
        try:
            return cls(encoded / 190463.0 - 180.0)
        except ValueError:
            raise InvalidLongitudeError(data) from None

    def encode_uncompressed(self) -> bytes:
        """The 9-byte ``DDDmm.mmE`` form."""
        deg, minutes, hdths, is_east = self.dmh()
        direction = "E" if is_east else "W"
        return f"{deg:03}{minutes:02}.{hdths:02}{direction}".encode("ascii")

    def encode_compressed(self) -> bytes:
        """The 4-byte base-91 compressed form."""
        return base91_encode4(_to_u32((180.0 + self.value) * 190463.0))


def base91_decode4(data: bytes) -> float | None:
    """Decode the first four base-91 characters (``!``..``{``) of ``data``."""
    if len(data) < 4:
        return None
    value = 0.0
    for byte in bytes(data[:4]):
        digit = byte - 33
        if not 0 <= digit <= 90:
            return None
        value = value * 91.0 + digit
    return value


def base91_encode4(value: int) -> bytes:
    """Encode the low four base-91 digits of ``value``."""
    out = bytearray(4)
    for i in reversed(range(4)):
        out[i] = value % 91 + 33
        value //= 91
    return bytes(out)


def base91_decode1(byte: int) -> int | None:
    """Decode one base-91 character; None if below ``!``."""
    return byte - 33 if byte >= 33 else None


def base91_encode1(value: int) -> int:
    """Encode one base-91 digit as a byte value."""
    result = value + 33
    if not 0 <= result <= 0xFF:
        raise ValueError(f"base-91 digit out of range: {value}")
    return result