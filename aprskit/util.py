"""Shared errors and small byte-parsing helpers."""

from __future__ import annotations

import re

__all__ = [
    "AprsError",
    "TruncatedPacketError",
    "InvalidLatitudeError",
    "InvalidLongitudeError",
    "InvalidTimestampError",
    "TimestampRangeError",
    "InvalidCompressedByteError",
    "UnsupportedPositionFormatError",
    "parse_int",
    "extract_frequency_mhz",
]


class AprsError(ValueError):
    """Base class for every APRS decoding error."""


class TruncatedPacketError(AprsError):
    """The data is shorter than the format requires."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"truncated packet: expected at least {expected} bytes, got {got}")
        self.expected = expected
        self.got = got


class InvalidLatitudeError(AprsError):
    """A latitude field could not be decoded."""

    def __init__(self, raw: bytes) -> None:
        super().__init__(f"invalid latitude: {bytes(raw)!r}")
        self.raw = bytes(raw)


class InvalidLongitudeError(AprsError):
    """A longitude field could not be decoded."""

    def __init__(self, raw: bytes) -> None:
        super().__init__(f"invalid longitude: {bytes(raw)!r}")
        self.raw = bytes(raw)


class InvalidTimestampError(AprsError):
    """A timestamp field has the wrong shape."""

    def __init__(self, raw: bytes) -> None:
        super().__init__(f"invalid timestamp format: {bytes(raw)!r}")
        self.raw = bytes(raw)


class TimestampRangeError(AprsError):
    """A timestamp component lies outside its valid range."""

    def __init__(self, field: str, value: int) -> None:
        super().__init__(f"timestamp {field} out of range: {value}")
        self.field = field
        self.value = value


class InvalidCompressedByteError(AprsError):
    """A byte in a compressed position is outside the allowed range."""

    def __init__(self, byte: int) -> None:
        super().__init__(f"invalid compressed byte: {byte:#04x}")
        self.byte = byte


class UnsupportedPositionFormatError(AprsError):
    """The position data is in a format that cannot be decoded."""

    def __init__(self) -> None:
        super().__init__("unsupported position format")


_INT_RE = re.compile(rb"[+-]?[0-9]+")
_MHZ = b"MHz"


def parse_int(data: bytes) -> int | None:
    """Parse ASCII decimal bytes with an optional sign; None if malformed."""
    if not _INT_RE.fullmatch(data):
        return None
    return int(data)


def extract_frequency_mhz(comment: bytes) -> float | None:
    """Return the frequency in MHz written at the start of a comment, if any.

    The number must open the comment (leading spaces allowed) and be
    immediately followed by ``MHz``.
    """
    mhz_pos = comment.find(_MHZ)
    if mhz_pos <= 0:
        return None
    number = comment[:mhz_pos].lstrip(b" ")
    if not number:
        return None
    if any(ch not in b"0123456789." for ch in number):
        return None
    try:
        return float(number)
    except ValueError:
        return None