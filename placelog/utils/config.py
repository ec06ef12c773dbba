import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

OSM_TILE_URL = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
OSM_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)
IP_GEOLOCATION_URL = "http://ip-api.com/json/"


@dataclass(frozen=True)
class Settings:
    db_path: str = "places.db"
    storage_key: str = "places"
    map_container: str = "map"
    map_zoom: int = 13
    tile_url: str = OSM_TILE_URL
    tile_attribution: str = OSM_ATTRIBUTION
    geolocation_url: str = IP_GEOLOCATION_URL
    center: str | None = None


def load_env():
    # load .env from the ROOT of the repo
    env_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(env_path)
    return os.getenv


def load_settings(getenv=os.getenv) -> Settings:
    zoom = getenv("PLACELOG_MAP_ZOOM")
    return Settings(
        db_path=getenv("PLACELOG_DB") or Settings.db_path,
        storage_key=getenv("PLACELOG_STORAGE_KEY") or Settings.storage_key,
        map_zoom=int(zoom) if zoom else Settings.map_zoom,
        tile_url=getenv("PLACELOG_TILE_URL") or OSM_TILE_URL,
        tile_attribution=getenv("PLACELOG_TILE_ATTRIBUTION") or OSM_ATTRIBUTION,
        geolocation_url=getenv("PLACELOG_GEOLOCATION_URL") or IP_GEOLOCATION_URL,
        center=getenv("PLACELOG_CENTER") or None,
    )
