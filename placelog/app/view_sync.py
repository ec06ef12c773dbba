from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Any, Iterable

from placelog.app.markup import list_entry_html, popup_html, popup_options
from placelog.core.entities import Coordinates, Place
from placelog.core.ports import ListPanel, MapWidget

DEFAULT_ZOOM = 13
DEFAULT_ANIMATION = {"animate": True, "pan": {"duration": 1}}


class MapState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    UNAVAILABLE = "unavailable"


class ViewSync:
    """Keeps the list panel and the map markers in step with the store.

    The list panel is always available. Markers can only be drawn once the map
    exists, so until then they are buffered and replayed exactly once by
    :meth:`attach_map`. If the map never comes, :meth:`map_unavailable` drops
    the buffer and every later render is list-only.
    """

    logger = logging.getLogger(__name__)

    def __init__(
        self,
        list_panel: ListPanel,
        map_widget: MapWidget,
        *,
        zoom: int = DEFAULT_ZOOM,
        animation: dict[str, Any] | None = None,
    ):
        self.list_panel = list_panel
        self.map_widget = map_widget
        self.zoom = zoom
        self.animation = copy.deepcopy(animation or DEFAULT_ANIMATION)
        self.map_state = MapState.PENDING
        self._map: Any = None
        self._coords: dict[str, Coordinates] = {}
        self._markers: dict[str, Any] = {}
        self._pending: dict[str, Place] = {}

    @property
    def map(self) -> Any:
        return self._map

    def list_ids(self) -> list[str]:
        return self.list_panel.entry_ids()

    def marker_ids(self) -> list[str]:
        return list(self._markers)

    def pending_ids(self) -> list[str]:
        return list(self._pending)

    def _draw_marker(self, place: Place) -> None:
        marker = self.map_widget.add_marker(self._map, place.coords)
        self.map_widget.bind_popup(marker, popup_html(place), popup_options(place))
        self.map_widget.open_popup(marker)
        self._markers[place.id] = marker

    def render_added(self, place: Place) -> None:
        self.list_panel.insert_entry(place.id, list_entry_html(place))
        self._coords[place.id] = place.coords
        if self.map_state is MapState.READY:
            self._draw_marker(place)
        elif self.map_state is MapState.PENDING:
            self._pending[place.id] = place

    def render_all(self, places: Iterable[Place]) -> None:
        for place in places:
            self.render_added(place)

    def attach_map(self, map_: Any) -> int:
        if self.map_state is not MapState.PENDING:
            self.logger.warning(f"Map already {self.map_state.value}; ignoring readiness callback")
            return 0
        self._map = map_
        self.map_state = MapState.READY
        replay = list(self._pending.values())
        self._pending.clear()
        for place in replay:
            self._draw_marker(place)
        self.logger.info(f"Map ready, replayed {len(replay)} buffered marker(s)")
        return len(replay)

    def map_unavailable(self) -> None:
        if self.map_state is MapState.READY:
            self.logger.warning("Map already ready; ignoring unavailability")
            return
        self.map_state = MapState.UNAVAILABLE
        self._pending.clear()

    def remove_rendered(self, identity: str) -> bool:
        """Remove the list entry and marker for ``identity``.

        Returns False, after logging, when either half was missing.
        """
        listed = self.list_panel.remove_entry(identity)
        self._coords.pop(identity, None)
        was_pending = self._pending.pop(identity, None) is not None
        marker = self._markers.pop(identity, None)
        if marker is not None:
            self.map_widget.remove_marker(self._map, marker)

        ok = listed
        if not listed:
            self.logger.warning(f"No list entry rendered for place {identity}")
        if marker is None and not was_pending and self.map_state is MapState.READY:
            self.logger.warning(f"No marker rendered for place {identity}")
            ok = False
        return ok

    def focus(self, identity: str) -> bool:
        coords = self._coords.get(identity)
        if coords is None or self.map_state is not MapState.READY:
            return False
        self.map_widget.set_view(self._map, coords, self.zoom, self.animation)
        return True

    def clear(self) -> None:
        for identity in list(self._coords):
            self.remove_rendered(identity)
