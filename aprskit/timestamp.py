"""APRS timestamp fields."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .util import InvalidTimestampError, TimestampRangeError, parse_int

__all__ = ["TimestampKind", "Timestamp"]


class TimestampKind(enum.Enum):
    """The wire format of a timestamp."""

    DDHHMM = "z"
    HHMMSS = "h"
    UNSUPPORTED = "/"


def _parse_field(data: bytes) -> int | None:
    if data.startswith(b"-"):
        return None
    return parse_int(data)


def _check(field: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise TimestampRangeError(field, value)


@dataclass(frozen=True)
class Timestamp:
    """A 7-byte APRS timestamp.

    For ``DDHHMM`` the fields are (day, hour, minute); for ``HHMMSS`` they
    are (hour, minute, second). Local-time and non-standard timestamps are
    kept verbatim in ``raw`` with kind ``UNSUPPORTED``.
    """

    kind: TimestampKind
    fields: tuple[int, int, int] = (0, 0, 0)
    raw: bytes = b""

    @classmethod
    def parse(cls, data: bytes) -> Timestamp:
        """Decode a 7-byte timestamp field."""
        data = bytes(data)
        if len(data) != 7:
            raise InvalidTimestampError(data)
        designator = data[6:7]
        if designator == b"/":
            return cls(TimestampKind.UNSUPPORTED, raw=data)
        values = [_parse_field(data[i : i + 2]) for i in (0, 2, 4)]
        if any(v is None for v in values):
            raise InvalidTimestampError(data)
        f1, f2, f3 = values
        if designator in (b"z", b"Z"):
            _check("day", f1, 1, 31)
            _check("hour", f2, 0, 23)
            _check("minute", f3, 0, 59)
            return cls(TimestampKind.DDHHMM, (f1, f2, f3))
        if designator in (b"h", b"H"):
            _check("hour", f1, 0, 23)
            _check("minute", f2, 0, 59)
            _check("second", f3, 0, 59)
            return cls(TimestampKind.HHMMSS, (f1, f2, f3))
        # Some trackers emit a non-standard designator; keep the bytes.
        return cls(TimestampKind.UNSUPPORTED, raw=data)

    def encode(self) -> bytes:
        """The timestamp in its wire format."""
        if self.kind is TimestampKind.UNSUPPORTED:
            return self.raw
        a, b, c = self.fields
        return f"{a:02}{b:02}{c:02}{self.kind.value}".encode("ascii")