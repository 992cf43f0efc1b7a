"""APRS telemetry reports and telemetry metadata messages.

A data packet looks like ``T#SSS,V1,V2,V3,V4,V5,BBBBBBBB[,comment]``.
Metadata arrives as directed messages whose text starts with ``PARM.``,
``UNIT.``, ``EQNS.`` or ``BITS.``; the parsers here take the text after
that prefix.
"""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from .util import TruncatedPacketError

__all__ = ["Telemetry", "TelemetryEquation", "TelemetryMetadata"]

_ANALOG_CHANNELS = 5
_DIGITAL_BITS = 8
_MAX_CSV_FIELDS = 13
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE | re.ASCII,
)


def _to_f32(value: float) -> float:
    """Round a float to single precision, overflowing to infinity."""
    if not math.isfinite(value):
        return value
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_f32(data: bytes) -> float | None:
    """Parse a trimmed decimal number as a single-precision float."""
    try:
        text = bytes(data).decode("utf-8").strip()
    except UnicodeDecodeError:
        return None
    if not _FLOAT_RE.fullmatch(text):
        return None
    return _to_f32(float(text))


def _format_f32(value: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = repr(value)
    for digits in range(1, 10):
        candidate = f"{value:.{digits}g}"
        if _to_f32(float(candidate)) == value:
            text = candidate
            break
    return format(Decimal(text), "f")


def _format_analog(value: float) -> str:
    v = _to_f32(value)
    if math.isfinite(v) and v == math.trunc(v):
        return str(min(max(int(v), _I64_MIN), _I64_MAX))
    return _format_f32(v)


def _parse_digital(part: bytes) -> int:
    bits = part[:_DIGITAL_BITS]
    if len(bits) < _DIGITAL_BITS or any(ch not in b"01" for ch in bits):
        return 0
    return int(bits, 2)


@dataclass(frozen=True)
class Telemetry:
    """A telemetry data packet: sequence, five analog values and eight bits.

    ``digital`` packs the bits with channel 1 in the most significant bit.
    An analog value is None when it was absent or unparseable.
    """

    sequence: bytes
    analog: tuple[Optional[float], ...] = (None,) * _ANALOG_CHANNELS
    digital: int = 0
    comment: bytes = b""

    def __post_init__(self) -> None:
        if len(self.analog) != _ANALOG_CHANNELS:
            raise ValueError(f"telemetry needs {_ANALOG_CHANNELS} analog values")
        if not 0 <= self.digital <= 0xFF:
            raise ValueError(f"digital bits out of range: {self.digital}")

    @classmethod
    def parse(cls, info: bytes) -> Telemetry:
        """Decode from the information field, including the leading ``T``."""
        info = bytes(info)
        if len(info) < 2 or info[1:2] != b"#":
            raise TruncatedPacketError(2, len(info))
        parts = info[2:].split(b",")
        analog = tuple(
            _parse_f32(parts[i]) if i < len(parts) else None
            for i in range(1, _ANALOG_CHANNELS + 1)
        )
        digital = _parse_digital(parts[6]) if len(parts) > 6 else 0
        comment = b",".join(parts[7:])
        return cls(sequence=parts[0], analog=analog, digital=digital, comment=comment)

    def encode(self) -> bytes:
        """The information field, including the leading ``T#``."""
        fields = [self.sequence]
        fields.extend(
            b"" if value is None else _format_analog(value).encode("ascii")
            for value in self.analog
        )
        fields.append(format(self.digital, "08b").encode("ascii"))
        if self.comment:
            fields.append(self.comment)
        return b"T#" + b",".join(fields)


@dataclass(frozen=True)
class TelemetryEquation:
    """Coefficients for one analog channel: ``value = a + b*raw + c*raw**2``."""

    a: float = 0.0
    b: float = 1.0
    c: float = 0.0

    def apply(self, raw: float) -> float:
        """Convert a raw reading to its engineering value."""
        return self.a + self.b * raw + self.c * raw * raw


def _parse_csv_fields(text: bytes, limit: int) -> list[Optional[bytes]]:
    fields = []
    for part in bytes(text).split(b",")[:limit]:
        trimmed = part.lstrip(b" ")
        fields.append(trimmed or None)
    return fields


@dataclass
class TelemetryMetadata:
    """Telemetry metadata assembled from PARM., UNIT., EQNS. and BITS. messages."""

    param_names: list[Optional[bytes]] = field(default_factory=list)
    unit_labels: list[Optional[bytes]] = field(default_factory=list)
    equations: list[TelemetryEquation] = field(default_factory=list)
    bit_sense: int = 0
    project_name: bytes = b""

    @staticmethod
    def parse_parm(text: bytes) -> list[Optional[bytes]]:
        """Up to 13 channel names (5 analog, 8 digital); empty names are None."""
        return _parse_csv_fields(text, _MAX_CSV_FIELDS)

    @staticmethod
    def parse_unit(text: bytes) -> list[Optional[bytes]]:
        """Up to 13 unit labels, laid out like the channel names."""
        return _parse_csv_fields(text, _MAX_CSV_FIELDS)

    @staticmethod
    def parse_eqns(text: bytes) -> list[TelemetryEquation]:
        """Five coefficient triples; missing or bad values default to (0, 1, 0)."""
        parts = bytes(text).split(b",")

        def coefficient(index: int, default: float) -> float:
            if index >= len(parts):
                return default
            value = _parse_f32(parts[index])
            return default if value is None else value

        return [
            TelemetryEquation(
                a=coefficient(i * 3, 0.0),
                b=coefficient(i * 3 + 1, 1.0),
                c=coefficient(i * 3 + 2, 0.0),
            )
            for i in range(_ANALOG_CHANNELS)
        ]

    @staticmethod
    def parse_bits(text: bytes) -> tuple[int, bytes]:
        """The bit-sense byte (channel 1 in the top bit) and the project name."""
        sense_bytes, _, project = bytes(text).partition(b",")
        sense = 0
        for i, ch in enumerate(sense_bytes[:_DIGITAL_BITS]):
            if ch == ord("1"):
                sense |= 0x80 >> i
        return sense, project