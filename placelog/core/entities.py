from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Union

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class VisitType(str, Enum):
    VISITED = "visited"
    PLANNED = "planned"

    @property
    def label(self) -> str:
        return "Visited" if self is VisitType.VISITED else "Planning to visit"

    @property
    def icon(self) -> str:
        return "🌍" if self is VisitType.VISITED else "📍"


class Coordinates(NamedTuple):
    lat: float
    lng: float


def describe(visit_type: VisitType, location: str, created_at: datetime) -> str:
    return f"{visit_type.label} {location} - {MONTHS[created_at.month - 1]} {created_at.day}"


@dataclass(frozen=True)
class VisitedPlace:
    id: str
    coords: Coordinates
    location: str
    description: str
    rating: int
    companion: str = ""
    created_at: datetime | str | None = None
    visit_type: VisitType = field(default=VisitType.VISITED, init=False)


@dataclass(frozen=True)
class PlannedPlace:
    id: str
    coords: Coordinates
    location: str
    description: str
    planned_date: str
    companion: str = ""
    created_at: datetime | str | None = None
    visit_type: VisitType = field(default=VisitType.PLANNED, init=False)


Place = Union[VisitedPlace, PlannedPlace]
