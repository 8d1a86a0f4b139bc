"""Route planning helpers: depots, nearest-neighbour ordering, availability."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from fieldplanner.domain.models import Job, StaffMember
from fieldplanner.services.geo import Coordinate, haversine_km
from fieldplanner.services.timeplan import combine, to_date

ROUTE_SPEED_KMH = 30.0


@dataclass(frozen=True)
class StartLocation:
    address: str
    coordinates: Coordinate
    start_time: str


START_LOCATIONS = {
    "Johannesburg": StartLocation("5 Thora Cres, Wynberg, Sandton, 2090", (-26.1075, 28.0567), "05:00"),
    "Cape Town": StartLocation("10 Edison Way, Century City, Cape Town, 7441", (-33.8918, 18.4847), "05:00"),
}


def get_starting_location(member: StaffMember) -> Optional[StartLocation]:
    """Depot for the staff member's city, if known."""
    return START_LOCATIONS.get(member.city or "")


def estimate_route_minutes(origin: Coordinate, destination: Coordinate, speed_kmh: float = ROUTE_SPEED_KMH) -> int:
    return round(haversine_km(origin, destination) / speed_kmh * 60)


def calculate_optimal_route(jobs: Sequence[Job], start: Coordinate) -> List[Job]:
    """
    Order jobs by repeatedly visiting the nearest unvisited located job.

    Jobs without coordinates go last, in their input order.
    """
    located = [job for job in jobs if job.coordinates is not None]
    unlocated = [job for job in jobs if job.coordinates is None]

    route: List[Job] = []
    current = start
    while located:
        nearest = min(located, key=lambda job: haversine_km(current, job.coordinates))
        located.remove(nearest)
        route.append(nearest)
        current = nearest.coordinates
    return route + unlocated


def format_travel_time(minutes: float) -> str:
    if minutes < 60:
        return f"{round(minutes)}min"
    hours = int(minutes // 60)
    remaining = round(minutes % 60)
    if remaining == 60:
        hours, remaining = hours + 1, 0
    if remaining == 0:
        return f"{hours}h"
    return f"{hours}h {remaining}min"


def is_staff_available(member: StaffMember, moment: datetime, jobs: Sequence[Job]) -> bool:
    """False when one of the member's jobs that day spans the moment (inclusive)."""
    day = moment.date()
    for job in jobs:
        if job.assigned_to != member.id or to_date(job.scheduled_date) != day:
            continue
        if not (job.start_time and job.end_time):
            continue
        start = combine(day, job.start_time)
        end = combine(day, job.end_time)
        if start is None or end is None:
            continue
        if start <= moment <= end:
            return False
    return True
