from __future__ import annotations

from typing import Callable

from placelog.core.entities import Coordinates
from placelog.core.errors import GeolocationError


def parse_latlng(value: str) -> Coordinates:
    """Parse ``"lat,lng"`` as used on the command line and in PLACELOG_CENTER."""
    try:
        lat, lng = map(float, value.split(","))
    except ValueError:
        raise GeolocationError(f'expected "lat,lng", got {value!r}') from None
    return Coordinates(lat, lng)


class StaticGeolocator:
    def __init__(self, coords: Coordinates | None):
        self.coords = coords

    def get_current_position(
        self,
        on_success: Callable[[Coordinates], None],
        on_failure: Callable[[Exception | None], None],
    ) -> None:
        if self.coords is None:
            on_failure(None)
        else:
            on_success(self.coords)
