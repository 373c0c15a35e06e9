"""Great-circle distance helpers for location supplementation."""

from __future__ import annotations

import math
import re

EARTH_RADIUS_KM = 6371.0
MILES_PER_KM = 0.621371

COORDINATES_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")

Point = tuple[float, float]


def parse_coordinates(raw: object) -> Point | None:
    """Parse ``"lat, lng"`` into a float pair, or None if it doesn't match."""
    if not isinstance(raw, str):
        return None
    match = COORDINATES_RE.match(raw)
    if match is None:
        return None
    return float(match.group(1)), float(match.group(2))


def distance_km(point_a: Point, point_b: Point) -> float:
    """Haversine distance between two ``(latitude, longitude)`` points."""
    lat_a, lng_a = (math.radians(float(v)) for v in point_a)
    lat_b, lng_b = (math.radians(float(v)) for v in point_b)

    d_lat = lat_b - lat_a
    d_lng = lng_b - lng_a
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat_a) * math.cos(lat_b) * math.sin(d_lng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def km_to_miles(km: float) -> float:
    return km * MILES_PER_KM
