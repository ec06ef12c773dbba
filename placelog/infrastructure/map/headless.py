from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable

from placelog.core.entities import Coordinates


@dataclass
class HeadlessMarker:
    id: int
    coords: Coordinates
    popup_html: str | None = None
    popup_options: dict[str, Any] = field(default_factory=dict)
    popup_open: bool = False


@dataclass
class HeadlessMap:
    container_id: str
    center: Coordinates
    zoom: int
    tile_layers: list[tuple[str, str]] = field(default_factory=list)
    markers: dict[int, HeadlessMarker] = field(default_factory=dict)
    click_handlers: list[Callable[[Coordinates], None]] = field(default_factory=list)
    animation: dict[str, Any] | None = None


class HeadlessMapWidget:
    """Map widget that only records state; nothing is drawn."""

    def __init__(self):
        self._marker_ids = itertools.count(1)

    def create_map(self, container_id: str, center: Coordinates, zoom: int) -> HeadlessMap:
        return HeadlessMap(container_id=container_id, center=Coordinates(*center), zoom=zoom)

    def add_tile_layer(self, map_: HeadlessMap, url: str, attribution: str) -> None:
        map_.tile_layers.append((url, attribution))

    def add_marker(self, map_: HeadlessMap, coords: Coordinates) -> HeadlessMarker:
        marker = HeadlessMarker(id=next(self._marker_ids), coords=Coordinates(*coords))
        map_.markers[marker.id] = marker
        return marker

    def bind_popup(self, marker: HeadlessMarker, html: str, options: dict[str, Any]) -> None:
        marker.popup_html = html
        marker.popup_options = dict(options)

    def open_popup(self, marker: HeadlessMarker) -> None:
        marker.popup_open = True

    def remove_marker(self, map_: HeadlessMap, marker: HeadlessMarker) -> None:
        map_.markers.pop(marker.id, None)

    def on_map_click(self, map_: HeadlessMap, handler: Callable[[Coordinates], None]) -> None:
        map_.click_handlers.append(handler)

    def set_view(
        self, map_: HeadlessMap, coords: Coordinates, zoom: int, animation: dict[str, Any]
    ) -> None:
        map_.center = Coordinates(*coords)
        map_.zoom = zoom
        map_.animation = animation

    def click(self, map_: HeadlessMap, coords: Coordinates) -> None:
        for handler in list(map_.click_handlers):
            handler(Coordinates(*coords))
