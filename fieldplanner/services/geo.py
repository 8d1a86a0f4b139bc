"""Great-circle distance, travel estimates and team service zones."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

EARTH_RADIUS_KM = 6371.0

Coordinate = Tuple[float, float]  # (lat, lng)


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Distance in kilometres between two (lat, lng) points."""
    lat1, lng1 = a
    lat2, lng2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def travel_minutes(distance_km: float, speed_kmh: float = 40.0) -> float:
    """Driving time at a constant average speed."""
    return distance_km / speed_kmh * 60


@dataclass(frozen=True)
class Zone:
    key: str
    name: str
    center: Coordinate
    north: float
    south: float
    east: float
    west: float

    def contains(self, point: Coordinate) -> bool:
        lat, lng = point
        return self.south <= lat <= self.north and self.west <= lng <= self.east


# Declaration order decides overlapping boxes (the two Johannesburg boxes share -26.2..-26.1)
ZONES: Tuple[Zone, ...] = (
    Zone("johannesburg_north", "Johannesburg North", (-26.0269, 28.0334),
         north=-25.8, south=-26.2, east=28.3, west=27.8),
    Zone("johannesburg_south", "Johannesburg South", (-26.2481, 28.0473),
         north=-26.1, south=-26.4, east=28.3, west=27.8),
    Zone("cape_town_north", "Cape Town North", (-33.8553, 18.4497),
         north=-33.7, south=-33.95, east=18.6, west=18.3),
    Zone("cape_town_south", "Cape Town South", (-34.0522, 18.4241),
         north=-33.9, south=-34.2, east=18.6, west=18.2),
)


def zone_for(point: Coordinate, zones: Tuple[Zone, ...] = ZONES) -> Zone:
    """First zone whose box contains the point, else the one with the nearest center."""
    for zone in zones:
        if zone.contains(point):
            return zone
    return min(zones, key=lambda z: haversine_km(point, z.center))
