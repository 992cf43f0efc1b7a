"""Data extensions that follow a position: course/speed, PHG, RNG and DFS."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from .util import UnsupportedPositionFormatError, parse_int

__all__ = [
    "Directivity",
    "DirectionSpeed",
    "Phg",
    "Rng",
    "Dfs",
    "Extension",
    "parse_extension",
    "require_extension",
]

_DIGITS = b"0123456789"


def _all_digits(data: bytes) -> bool:
    return all(ch in _DIGITS for ch in data)


@dataclass(frozen=True)
class Directivity:
    """Antenna directivity: omnidirectional when ``degrees`` is None."""

    degrees: int | None = None

    @property
    def is_omni(self) -> bool:
        return self.degrees is None

    @classmethod
    def from_digit(cls, digit: int) -> Directivity | None:
        """Decode a directivity digit 0-8; None for anything else."""
        if digit == 0:
            return cls()
        if 0 < digit < 9:
            return cls(digit * 45)
        return None

    def as_digit(self) -> int:
        if self.degrees is None:
            return 0
        return (self.degrees % 360) // 45


def _height_code(height_feet: int) -> int:
    if height_feet >= 10:
        return int(math.log2(height_feet // 10)) + 48
    return 48


@dataclass(frozen=True)
class DirectionSpeed:
    """Course in degrees and speed in knots: ``DDD/SSS``."""

    direction_degrees: int
    speed_knots: int

    def encode(self) -> bytes:
        return f"{self.direction_degrees:03}/{self.speed_knots:03}".encode("ascii")


@dataclass(frozen=True)
class Phg:
    """Power, height, gain and directivity: ``PHGphgd``."""

    power_watts: int
    antenna_height_feet: int
    antenna_gain_db: int
    directivity: Directivity

    def encode(self) -> bytes:
        power_code = min(int(math.sqrt(self.power_watts)), 255)
        return b"PHG" + bytes(
            (
                power_code + 48,
                _height_code(self.antenna_height_feet),
                self.antenna_gain_db + 48,
                self.directivity.as_digit() + 48,
            )
        )


@dataclass(frozen=True)
class Rng:
    """Pre-calculated radio range in miles: ``RNGrrrr``."""

    range_miles: int

    def encode(self) -> bytes:
        return f"RNG{self.range_miles:04}".encode("ascii")


@dataclass(frozen=True)
class Dfs:
    """DF strength, height, gain and directivity: ``DFSshgd``."""

    s_points: int
    antenna_height_feet: int
    antenna_gain_db: int
    directivity: Directivity

    def encode(self) -> bytes:
        return b"DFS" + bytes(
            (
                self.s_points + 48,
                _height_code(self.antenna_height_feet),
                self.antenna_gain_db + 48,
                self.directivity.as_digit() + 48,
            )
        )


Extension = Union[DirectionSpeed, Phg, Rng, Dfs]


def parse_extension(data: bytes) -> Extension | None:
    """Decode the first seven bytes of ``data`` as an extension, or None."""
    data = bytes(data)
    if len(data) < 7:
        return None
    b = data[:7]

    if b[3:4] == b"/" and _all_digits(b[0:3]) and _all_digits(b[4:7]):
        return DirectionSpeed(parse_int(b[0:3]), parse_int(b[4:7]))

    if b[:3] in (b"PHG", b"DFS") and _all_digits(b[3:7]):
        first, height, gain, direction = (ch - 48 for ch in b[3:7])
        directivity = Directivity.from_digit(direction)
        if directivity is None:
            return None
        height_feet = 10 * (1 << height)
        if b[:3] == b"PHG":
            return Phg(first * first, height_feet, gain, directivity)
        return Dfs(first, height_feet, gain, directivity)

    if b[:3] == b"RNG" and _all_digits(b[3:7]):
        return Rng(parse_int(b[3:7]))

    return None


def require_extension(data: bytes) -> Extension:
    """Like :func:`parse_extension`, but raise when nothing is recognised."""
    ext = parse_extension(data)
    if ext is None:
        raise UnsupportedPositionFormatError()
    return ext