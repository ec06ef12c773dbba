"""Conversion between Place variants and plain JSON-compatible records."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Mapping

from .entities import Coordinates, Place, PlannedPlace, VisitedPlace, VisitType
from .errors import CorruptStateError
from .factory import parse_rating


def to_record(place: Place) -> dict[str, Any]:
    created_at = place.created_at
    if isinstance(created_at, datetime):
        created_at = created_at.isoformat()
    record: dict[str, Any] = {
        "id": place.id,
        "coords": [place.coords.lat, place.coords.lng],
        "location": place.location,
        "companion": place.companion,
        "visit_type": place.visit_type.value,
        "description": place.description,
        "created_at": created_at,
    }
    if isinstance(place, VisitedPlace):
        record["rating"] = place.rating
    elif isinstance(place, PlannedPlace):
        record["planned_date"] = place.planned_date
    else:
        raise TypeError(f"unhandled place type: {type(place).__name__}")
    return record


def _text(record: Mapping[str, Any], key: str, *, required: bool = True) -> str:
    value = record.get(key)
    if value is None and not required:
        return ""
    if not isinstance(value, str) or (required and not value):
        raise CorruptStateError(f"field {key!r} must be a non-empty string")
    return value


def _coords(value: Any) -> Coordinates:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise CorruptStateError("field 'coords' must be a [lat, lng] pair")
    for v in value:
        if isinstance(v, bool) or not isinstance(v, (int, float)) or not math.isfinite(v):
            raise CorruptStateError("field 'coords' must hold finite numbers")
    return Coordinates(float(value[0]), float(value[1]))


def from_record(record: Any) -> Place:
    """Rebuild a Place from a stored record.

    Raises CorruptStateError for anything that does not look like a record
    written by :func:`to_record`. ``created_at`` is kept as the stored string.
    """
    if not isinstance(record, Mapping):
        raise CorruptStateError("record must be an object")
    try:
        kind = VisitType(record.get("visit_type"))
    except ValueError:
        raise CorruptStateError(f"unknown visit_type {record.get('visit_type')!r}") from None

    common = {
        "id": _text(record, "id"),
        "coords": _coords(record.get("coords")),
        "location": _text(record, "location"),
        "description": _text(record, "description"),
        "companion": _text(record, "companion", required=False),
        "created_at": record.get("created_at"),
    }
    if "rating" in record and "planned_date" in record:
        raise CorruptStateError("record carries both rating and planned_date")

    if kind is VisitType.VISITED:
        rating = record.get("rating")
        if not isinstance(rating, int) or parse_rating(rating) is None:
            raise CorruptStateError("field 'rating' must be an integer between 1 and 5")
        return VisitedPlace(rating=rating, **common)
    if kind is VisitType.PLANNED:
        return PlannedPlace(planned_date=_text(record, "planned_date"), **common)
    raise TypeError(f"unhandled visit type: {kind!r}")
