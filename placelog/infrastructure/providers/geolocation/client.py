from __future__ import annotations

import logging
from typing import Callable

import backoff
import requests

from placelog.core.entities import Coordinates
from placelog.core.errors import GeolocationError
from placelog.utils.config import IP_GEOLOCATION_URL

FIELDS = "status,message,lat,lon"


class IpGeolocationClient:
    """Approximates the current position from the public IP address."""

    logger = logging.getLogger(__name__)

    def __init__(self, url: str = IP_GEOLOCATION_URL, timeout: int = 10):
        self.url = url
        self.timeout = timeout

    @backoff.on_exception(backoff.expo, (requests.RequestException,), max_time=30)
    def locate(self) -> Coordinates:
        r = requests.get(self.url, params={"fields": FIELDS}, timeout=self.timeout)
        data = r.json()
        if r.status_code >= 400 or data.get("status") != "success":
            raise GeolocationError(f"IP geolocation error: {data.get('message') or data}")
        try:
            return Coordinates(float(data["lat"]), float(data["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeolocationError(f"IP geolocation returned no position: {data}") from exc

    def get_current_position(
        self,
        on_success: Callable[[Coordinates], None],
        on_failure: Callable[[Exception | None], None],
    ) -> None:
        try:
            coords = self.locate()
        except (requests.RequestException, GeolocationError) as exc:
            self.logger.warning(f"[GEO] lookup failed: {exc}")
            on_failure(exc)
            return
        self.logger.info(f"[GEO] {coords.lat},{coords.lng}")
        on_success(coords)
