"""Parsing and encoding of APRS information-field components."""

__version__ = "0.1.2"

__all__ = [
    "compressed",
    "extensions",
    "lonlat",
    "position",
    "symbol",
    "telemetry",
    "timestamp",
    "user_defined",
    "util",
    "weather",
]