from __future__ import annotations

from html import escape
from typing import Any

from placelog.core.entities import Place, PlannedPlace, VisitedPlace


def companion_label(companion: str) -> str:
    return "Myself" if companion == "myself" else "Others"


def _detail(icon: str, value: Any) -> str:
    return (
        '<div class="place__details">'
        f'<span class="place__icon">{icon}</span>'
        f'<span class="place__value">{escape(str(value))}</span>'
        "</div>"
    )


def list_entry_html(place: Place) -> str:
    if isinstance(place, VisitedPlace):
        extra = _detail("⭐", place.rating)
    elif isinstance(place, PlannedPlace):
        extra = _detail("📅", place.planned_date)
    else:
        raise TypeError(f"unhandled place type: {type(place).__name__}")

    kind = place.visit_type.value
    return (
        f'<li class="place place--{kind}" data-id="{escape(place.id)}">'
        '<div class="place__delete"><span>X</span></div>'
        f'<h2 class="place__title">{escape(place.description)}</h2>'
        + _detail(place.visit_type.icon, place.location)
        + _detail("👥", companion_label(place.companion))
        + extra
        + "</li>"
    )


def popup_html(place: Place) -> str:
    return f"{place.visit_type.icon} {escape(place.description)}"


def popup_options(place: Place) -> dict[str, Any]:
    return {
        "maxWidth": 250,
        "minWidth": 100,
        "autoClose": False,
        "closeOnClick": False,
        "className": f"{place.visit_type.value}-popup",
    }
