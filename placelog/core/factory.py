from __future__ import annotations

import math
import uuid
from datetime import datetime
from typing import Any, Callable, Container

from .entities import Coordinates, Place, PlannedPlace, VisitedPlace, VisitType, describe
from .errors import ValidationError

MAX_ID_ATTEMPTS = 8


def parse_visit_type(value: Any) -> VisitType:
    if isinstance(value, VisitType):
        return value
    try:
        return VisitType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("invalid-visit-type") from None


def parse_rating(value: Any) -> int | None:
    """Return an integer rating in [1, 5], or None when ``value`` is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None
    if not isinstance(value, int) or not 1 <= value <= 5:
        return None
    return value


def parse_coordinates(value: Any) -> Coordinates:
    if isinstance(value, (str, bytes)):
        raise ValidationError("invalid-coordinates")
    try:
        lat, lng = (float(v) for v in value)
    except (TypeError, ValueError):
        raise ValidationError("invalid-coordinates") from None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise ValidationError("invalid-coordinates")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        raise ValidationError("invalid-coordinates")
    return Coordinates(lat, lng)


class PlaceFactory:
    def __init__(
        self,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)
        self._now = clock or datetime.now

    def _identity(self, taken: Container[str]) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._new_id()
            if candidate not in taken:
                return candidate
        raise RuntimeError(f"could not generate a free place id in {MAX_ID_ATTEMPTS} attempts")

    def create(
        self,
        visit_type: VisitType | str,
        coords: Any,
        location: str | None,
        companion: str | None = "",
        *,
        rating: Any = None,
        planned_date: str | None = None,
        taken: Container[str] = (),
    ) -> Place:
        kind = parse_visit_type(visit_type)
        location = (location or "").strip()
        if not location:
            raise ValidationError("missing-location")
        point = parse_coordinates(coords)
        companion = (companion or "").strip()

        if kind is VisitType.VISITED:
            stars = parse_rating(rating)
            if stars is None:
                raise ValidationError("invalid-rating")
            created_at = self._now()
            return VisitedPlace(
                id=self._identity(taken),
                coords=point,
                location=location,
                description=describe(kind, location, created_at),
                rating=stars,
                companion=companion,
                created_at=created_at,
            )
        if kind is VisitType.PLANNED:
            planned_date = (planned_date or "").strip()
            if not planned_date:
                raise ValidationError("missing-date")
            created_at = self._now()
            return PlannedPlace(
                id=self._identity(taken),
                coords=point,
                location=location,
                description=describe(kind, location, created_at),
                planned_date=planned_date,
                companion=companion,
                created_at=created_at,
            )
        raise TypeError(f"unhandled visit type: {kind!r}")
