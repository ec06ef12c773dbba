from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from .entities import Coordinates, VisitType


class KeyValueStore(ABC):
    @abstractmethod
    def set_item(self, key: str, value: str) -> None: ...
    @abstractmethod
    def get_item(self, key: str) -> str | None: ...
    @abstractmethod
    def remove_item(self, key: str) -> None: ...


class MapWidget(Protocol):
    def create_map(self, container_id: str, center: Coordinates, zoom: int) -> Any: ...

    def add_tile_layer(self, map_: Any, url: str, attribution: str) -> None: ...

    def add_marker(self, map_: Any, coords: Coordinates) -> Any: ...

    def bind_popup(self, marker: Any, html: str, options: dict[str, Any]) -> None: ...

    def open_popup(self, marker: Any) -> None: ...

    def remove_marker(self, map_: Any, marker: Any) -> None: ...

    def on_map_click(self, map_: Any, handler: Callable[[Coordinates], None]) -> None: ...

    def set_view(
        self, map_: Any, coords: Coordinates, zoom: int, animation: dict[str, Any]
    ) -> None: ...


class Geolocator(Protocol):
    def get_current_position(
        self,
        on_success: Callable[[Coordinates], None],
        on_failure: Callable[[Exception | None], None],
    ) -> None: ...


class ListPanel(Protocol):
    def insert_entry(self, identity: str, html: str) -> None: ...

    def remove_entry(self, identity: str) -> bool: ...

    def entry_ids(self) -> list[str]: ...


class FormView(Protocol):
    def show(self) -> None:
        """Reveal the form and focus the location input."""

    def hide(self) -> None: ...

    def clear(self) -> None:
        """Empty the location, rating and planned-date inputs."""

    def show_optional_field(self, visit_type: VisitType) -> None: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


@dataclass
class UIPorts:
    list_panel: ListPanel
    map_widget: MapWidget
    geolocator: Geolocator
    form: FormView
    notifier: Notifier
