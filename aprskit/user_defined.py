"""User-defined (experimental) APRS packets."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["UserDefined"]

_DTI = 0x7B  # '{'


@dataclass(frozen=True)
class UserDefined:
    """A user-defined packet: experimenter id, packet type and opaque data."""

    user_id: int
    packet_type: int
    data: bytes = b""

    @classmethod
    def parse(cls, info: bytes) -> UserDefined:
        """Decode from the information field, including the leading ``{``."""
        body = bytes(info[1:])
        return cls(
            user_id=body[0] if len(body) > 0 else 0,
            packet_type=body[1] if len(body) > 1 else 0,
            data=body[2:],
        )

    def encode(self) -> bytes:
        """The information field, including the leading ``{``."""
        return bytes((_DTI, self.user_id, self.packet_type)) + self.data