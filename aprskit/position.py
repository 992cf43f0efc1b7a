"""Parsed APRS positions, DAO precision extension and altitude in comments."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from .compressed import Altitude, CompressedCs, CsKind
from .lonlat import Latitude, Longitude, Precision
from .symbol import Symbol
from .util import TruncatedPacketError, UnsupportedPositionFormatError

__all__ = [
    "HumanReadableDao",
    "Base91Dao",
    "Dao",
    "find_dao",
    "parse_dao_token",
    "Position",
    "altitude_in_comment",
]

_ASCII_WHITESPACE = b" \t\n\x0c\r"
_DIGITS = b"0123456789"
_LEADING_DIGITS = re.compile(rb"[0-9]*")
_U32_MAX = 0xFFFFFFFF
_UNCOMPRESSED_LEN = 19
_COMPRESSED_LEN = 13


@dataclass(frozen=True)
class HumanReadableDao:
    """DAO ``!WXY!`` with decimal digits: thousandths of a minute."""

    lat_digit: int
    lon_digit: int

    def offsets_degrees(self) -> tuple[float, float]:
        """Non-negative (latitude, longitude) refinements in degrees."""
        return self.lat_digit / 60_000.0, self.lon_digit / 60_000.0


@dataclass(frozen=True)
class Base91Dao:
    """DAO ``!wxy!`` with base-91 offsets within the hundredth-minute cell."""

    lat_offset: int
    lon_offset: int

    def offsets_degrees(self) -> tuple[float, float]:
        """Non-negative (latitude, longitude) refinements in degrees."""
        scale = 91.0 * 6000.0
        return self.lat_offset / scale, self.lon_offset / scale


Dao = Union[HumanReadableDao, Base91Dao]


def _hr_digit(byte: int) -> int | None:
    if byte in _DIGITS:
        return byte - 0x30
    if byte == 0x20:
        return 0
    return None


def _b91_digit(byte: int) -> int | None:
    if 0x21 <= byte <= 0x7B:
        return byte - 33
    if byte == 0x20:
        return 0
    return None


def parse_dao_token(token: bytes) -> Dao | None:
    """Decode a single 5-byte ``!Xyy!`` token.

    An uppercase datum letter selects decimal digits, a lowercase one
    base-91 offsets; a space marks an unused axis.
    """
    token = bytes(token)
    if len(token) != 5 or token[0] != 0x21 or token[4] != 0x21:
        return None
    prefix, d1, d2 = token[1], token[2], token[3]
    if 0x41 <= prefix <= 0x5A:
        lat, lon = _hr_digit(d1), _hr_digit(d2)
        if lat is None or lon is None:
            return None
        return HumanReadableDao(lat, lon)
    if 0x61 <= prefix <= 0x7A:
        lat, lon = _b91_digit(d1), _b91_digit(d2)
        if lat is None or lon is None:
            return None
        return Base91Dao(lat, lon)
    return None


def find_dao(data: bytes) -> Dao | None:
    """Decode a DAO token that forms the last non-whitespace of a comment."""
    trimmed = bytes(data).rstrip(_ASCII_WHITESPACE)
    if len(trimmed) < 5:
        return None
    return parse_dao_token(trimmed[-5:])


def altitude_in_comment(data: bytes) -> Altitude | None:
    """Extract ``/A=NNNNNN`` altitude in feet from a comment field."""
    data = bytes(data)
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return None
    start = data.find(b"/A=")
    if start < 0:
        return None
    digits = _LEADING_DIGITS.match(data, start + 3).group()
    if not digits:
        return None
    feet = int(digits)
    if feet > _U32_MAX:
        return None
    return Altitude(float(feet))


def _shift(coord_cls, value: float, delta: float):
    try:
        return coord_cls(value + delta)
    except ValueError:
        return None


def _char_byte(ch: str) -> int:
    return ord(ch) & 0xFF


@dataclass(frozen=True)
class Position:
    """A parsed position: coordinates, symbol and optional metadata.

    DAO offsets, when present, are already applied to ``latitude`` and
    ``longitude``.
    """

    latitude: Latitude
    longitude: Longitude
    precision: Precision
    symbol: Symbol
    compressed_cs: Optional[CompressedCs] = None
    altitude: Optional[Altitude] = None
    dao: Optional[Dao] = None

    def latitude_bounding(self) -> tuple[float, float]:
        """Inclusive latitude bounds implied by the precision."""
        return self.precision.range(self.latitude.value)

    def longitude_bounding(self) -> tuple[float, float]:
        """Inclusive longitude bounds implied by the precision."""
        return self.precision.range(self.longitude.value)

    @classmethod
    def parse(cls, data: bytes) -> tuple[bytes, Position]:
        """Decode a compressed or uncompressed position from the head of ``data``.

        Returns ``(remaining, position)`` where ``remaining`` is the comment
        field that follows the position bytes.
        """
        data = bytes(data)
        if not data:
            raise UnsupportedPositionFormatError()
        if data[0] in _DIGITS:
            return cls._parse_uncompressed(data)
        return cls._parse_compressed(data)

    @classmethod
    def _parse_uncompressed(cls, data: bytes) -> tuple[bytes, Position]:
        if len(data) < _UNCOMPRESSED_LEN:
            raise TruncatedPacketError(_UNCOMPRESSED_LEN, len(data))
        lat, precision = Latitude.parse_uncompressed(data[0:8])
        lon = Longitude.parse_uncompressed(data[9:18], precision)
        symbol = Symbol(chr(data[8]), chr(data[18]))
        comment = data[_UNCOMPRESSED_LEN:]

        altitude = altitude_in_comment(comment)
        dao = find_dao(comment)
        if dao is not None:
            dlat, dlon = dao.offsets_degrees()
            lat_sign = 1.0 if lat.value >= 0.0 else -1.0
            lon_sign = 1.0 if lon.value >= 0.0 else -1.0
            lat = _shift(Latitude, lat.value, lat_sign * dlat) or lat
            lon = _shift(Longitude, lon.value, lon_sign * dlon) or lon

        return comment, cls(
            latitude=lat,
            longitude=lon,
            precision=precision,
            symbol=symbol,
            altitude=altitude,
            dao=dao,
        )

    @classmethod
    def _parse_compressed(cls, data: bytes) -> tuple[bytes, Position]:
        if len(data) < _COMPRESSED_LEN:
            raise TruncatedPacketError(_COMPRESSED_LEN, len(data))
        lat = Latitude.parse_compressed(data[1:5])
        lon = Longitude.parse_compressed(data[5:9])
        symbol = Symbol(chr(data[0]), chr(data[9]))
        cst = CompressedCs.parse(data[10], data[11], data[12])
        altitude = Altitude(cst.data.feet) if cst.kind is CsKind.ALTITUDE else None
        return data[_COMPRESSED_LEN:], cls(
            latitude=lat,
            longitude=lon,
            precision=Precision.HUNDREDTH_MINUTE,
            symbol=symbol,
            compressed_cs=cst,
            altitude=altitude,
        )

    def _base_coords(self) -> tuple[Latitude, Longitude]:
        """Coordinates with any DAO refinement removed."""
        if self.dao is None:
            return self.latitude, self.longitude
        dlat, dlon = self.dao.offsets_degrees()
        lat = self.latitude.value
        lon = self.longitude.value
        lat_sign = 1.0 if lat >= 0.0 else -1.0
        lon_sign = 1.0 if lon >= 0.0 else -1.0
        base_lat = _shift(Latitude, lat, -lat_sign * dlat) or self.latitude
        base_lon = _shift(Longitude, lon, -lon_sign * dlon) or self.longitude
        return base_lat, base_lon

    def encode_uncompressed(self) -> bytes:
        """The 19-byte uncompressed form (DAO offset excluded; it lives in the comment)."""
        lat, lon = self._base_coords()
        return (
            lat.encode_uncompressed(self.precision)
            + bytes((_char_byte(self.symbol.table),))
            + lon.encode_uncompressed()
            + bytes((_char_byte(self.symbol.code),))
        )

    def encode_compressed(self) -> bytes:
        """The 13-byte compressed form."""
        cst = self.compressed_cs.encode() if self.compressed_cs is not None else b" sT"
        return (
            bytes((_char_byte(self.symbol.table),))
            + self.latitude.encode_compressed()
            + self.longitude.encode_compressed()
            + bytes((_char_byte(self.symbol.code),))
            + cst
        )