"""APRS symbol table identifiers and their descriptions."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Symbol"]

_OVERLAY_ONLY: dict[str, str] = {}


def _table(entries: dict[str, str]) -> dict[str, str]:
    return dict(entries)


_PRIMARY: dict[str, str] = {
    "!": "Police, Sheriff",
    "#": "Digipeater",
    "$": "Phone",
    "%": "DX Cluster",
    "&": "HF Gateway",
    "'": "Small Aircraft",
    "(": "Mobile Satellite Station",
    ")": "Wheelchair, Handicapped",
    "*": "Snowflake",
    "+": "Red Cross",
    ",": "Boy Scouts",
    "-": "House",
    ".": "X",
    "/": "Dot",
    "0": "Circle 0",
    "1": "Circle 1",
    "2": "Circle 2",
    "3": "Circle 3",
    "4": "Circle 4",
    "5": "Circle 5",
    "6": "Circle 6",
    "7": "Circle 7",
    "8": "Circle 8",
    "9": "Circle 9",
    ":": "Fire",
    ";": "Campground, Tent",
    "<": "Motorcycle",
    "=": "Railroad Engine",
    ">": "Car",
    "?": "File Server",
    "@": "Hurricane, Tropical Storm",
    "[": "Jogger",
    "\\": "Triangle",
    "]": "PBBS",
    "^": "Large Aircraft",
    "_": "Weather Station",
    "`": "Satellite Dish",
    "a": "Ambulance",
    "b": "Bike",
    "c": "Incident Command Post",
    "d": "Fire Dept",
    "e": "Horse, Equestrian",
    "f": "Fire Truck",
    "g": "Glider",
    "h": "Hospital",
    "i": "IOTA",
    "j": "Jeep",
    "k": "Truck",
    "l": "Laptop",
    "m": "Mic-E Repeater",
    "n": "Node",
    "o": "EOC",
    "p": "Rover, Dog",
    "q": "Grid Square",
    "r": "Antenna",
    "s": "Power Boat",
    "t": "Truck Stop",
    "u": "18-Wheeler",
    "v": "Van",
    "w": "Water Station",
    "x": "APRS",
    "y": "Yagi Antenna",
    "z": "Shelter",
}

_ALTERNATE: dict[str, str] = {
    "!": "Emergency",
    "#": "Digipeater (numbered)",
    "$": "ATM, Bank",
    "%": "Accident Scene",
    "&": "Haze",
    "'": "Flash",
    "(": "Cloud",
    ")": "Sunny, Partly Cloudy",
    "*": "Snow",
    "+": "Church",
    ",": "Girl Scouts",
    "-": "House, Shack",
    ".": "X",
    "/": "Circle",
    "0": "Circle 0 (overlay)",
    "1": "Circle 1 (overlay)",
    "2": "Circle 2 (overlay)",
    "3": "Circle 3 (overlay)",
    "4": "Circle 4 (overlay)",
    "5": "Circle 5 (overlay)",
    "6": "Circle 6 (overlay)",
    "7": "Circle 7 (overlay)",
    "8": "Circle 8 (overlay)",
    "9": "Circle 9 (overlay)",
    ":": "Hail",
    ";": "Park, Picnic",
    "<": "NWS Advisory",
    "=": "Railroad Station",
    ">": "Info Kiosk",
    "?": "Work Zone",
    "@": "Tornado",
    "[": "Wall Cloud",
    "\\": "Misc Aircraft",
    "]": "Rocket Launch",
    "^": "Jet Aircraft",
    "_": "Funnel Cloud",
    "`": "Rain Shower",
    "a": "ARES",
    "b": "Blowing Snow",
    "c": "Coast Guard",
    "d": "Drizzle",
    "e": "Smoke",
    "f": "Freezing Rain",
    "g": "Snow Shower",
    "h": "Haze",
    "i": "Rain Shower",
    "j": "Lightning",
    "k": "Kenwood Radio",
    "l": "Lighthouse",
    "m": "MARS",
    "n": "Navigation Buoy",
    "o": "Rocket",
    "p": "Parking",
    "q": "Earthquake",
    "r": "Restaurant",
    "s": "Satellite",
    "t": "Thunderstorm",
    "u": "Sunny",
    "v": "VORTAC, Nav Aid",
    "w": "NWS Site",
    "x": "Pharmacy",
    "y": "Radiosonde",
    "z": "Shelter",
    "{": "Fog",
}


@dataclass(frozen=True)
class Symbol:
    """An APRS symbol: a table identifier and a symbol code.

    ``table`` is ``/`` for the primary table, ``\\`` for the alternate
    table, or an alphanumeric overlay character on the alternate table.
    """

    table: str
    code: str

    def is_primary_table(self) -> bool:
        return self.table == "/"

    def is_alternate_table(self) -> bool:
        return self.table == "\\"

    def overlay(self) -> str | None:
        """The overlay character, if the table is an alphanumeric overlay."""
        if self.table.isascii() and self.table.isalnum():
            return self.table
        return None

    def description(self) -> str | None:
        """Human-readable name of the symbol, or None for reserved codes."""
        if len(self.code) != 1 or not 33 <= ord(self.code) <= 126:
            return None
        table = _PRIMARY if self.is_primary_table() else _ALTERNATE
        return table.get(self.code)