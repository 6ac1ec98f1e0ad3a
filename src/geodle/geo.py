"""
Great-circle helpers used to grade guesses. All coordinates are
(latitude, longitude) pairs in decimal degrees.
"""

import math
from enum import Enum

EARTH_RADIUS_KM = 6371.0

Coordinates = tuple[float, float]


class Direction(str, Enum):
    """
    Compass octant pointing from a guess toward the answer, or FOUND when the
    guess is the answer (or close enough to it).
    """

    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"
    FOUND = "FOUND"

    @property
    def arrow(self) -> str:
        return ARROWS[self]


ARROWS = {
    Direction.N: "⬆️",
    Direction.NE: "↗️",
    Direction.E: "➡️",
    Direction.SE: "↘️",
    Direction.S: "⬇️",
    Direction.SW: "↙️",
    Direction.W: "⬅️",
    Direction.NW: "↖️",
    Direction.FOUND: "🎯",
}

# Clockwise from north, one per 45 degree sector
OCTANTS = [
    Direction.N,
    Direction.NE,
    Direction.E,
    Direction.SE,
    Direction.S,
    Direction.SW,
    Direction.W,
    Direction.NW,
]


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """
    Haversine distance between two points in kilometers.
    """
    lat1, lon1 = a
    lat2, lon2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def bearing_degrees(a: Coordinates, b: Coordinates) -> float:
    """
    Forward azimuth from a to b, in degrees within [0, 360).
    """
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    d_lon = lon2 - lon1
    y = math.sin(d_lon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(y, x)) + 360) % 360


def octant_for_bearing(degrees: float) -> Direction:
    """
    Quantizes a bearing into one of the 8 octants. Sectors are half-open, so a
    bearing sitting on a boundary (22.5, 67.5, ...) belongs to the next octant
    clockwise.
    """
    index = math.floor(((degrees % 360) + 22.5) / 45) % 8
    return OCTANTS[index]


def bearing_octant(a: Coordinates, b: Coordinates) -> Direction:
    return octant_for_bearing(bearing_degrees(a, b))
