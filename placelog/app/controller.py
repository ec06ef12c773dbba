from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from placelog.app.persistence import PersistenceAdapter
from placelog.app.view_sync import MapState, ViewSync
from placelog.core.entities import Coordinates, Place, VisitType
from placelog.core.errors import (
    VALIDATION_MESSAGES,
    CorruptStateError,
    DuplicateIdentityError,
    PersistenceError,
    ValidationError,
)
from placelog.core.factory import PlaceFactory, parse_visit_type
from placelog.core.ports import UIPorts
from placelog.core.store import PlaceStore
from placelog.utils.config import Settings

LOCATION_UNAVAILABLE = "Unable to get your location."
SAVE_FAILED = "The place could not be saved."
INTERNAL_ERROR = "Something went wrong, the place was not added."


class UIMode(str, Enum):
    IDLE = "idle"
    FORM_OPEN = "form_open"


@dataclass(frozen=True)
class FormInput:
    """Parsed, already-trimmed values of the place form."""

    visit_type: VisitType | str
    location: str
    companion: str = ""
    rating: Any = None
    planned_date: str = ""


class AppController:
    logger = logging.getLogger(__name__)

    def __init__(
        self,
        ports: UIPorts,
        persistence: PersistenceAdapter,
        *,
        factory: PlaceFactory | None = None,
        store: PlaceStore | None = None,
        view: ViewSync | None = None,
        settings: Settings | None = None,
    ):
        self.ports = ports
        self.persistence = persistence
        self.factory = factory or PlaceFactory()
        self.store = store or PlaceStore()
        self.settings = settings or Settings()
        self.view = view or ViewSync(
            ports.list_panel, ports.map_widget, zoom=self.settings.map_zoom
        )
        self.mode = UIMode.IDLE
        self.pending_coords: Coordinates | None = None
        self._started = False

    # -- startup -------------------------------------------------------------

    def start(self, *, locate: bool = True) -> None:
        """Restore saved places, render the list, then ask for the position once.

        With ``locate=False`` no position is requested and markers stay
        buffered; callers that never need the map use this.
        """
        if self._started:
            self.logger.warning("Controller already started")
            return
        self._started = True
        self._restore()
        self.view.render_all(self.store.all())
        if locate:
            self.ports.geolocator.get_current_position(self._on_position, self._on_position_failed)

    def _restore(self) -> None:
        try:
            records = self.persistence.load()
        except CorruptStateError as exc:
            self.logger.warning(f"Discarding saved places: {exc}")
            try:
                self.persistence.clear()
            except PersistenceError as clear_exc:
                self.logger.error(f"Could not discard corrupt saved places: {clear_exc}")
            self.ports.notifier.notify("Saved places could not be read and were discarded.")
            records = []
        except PersistenceError as exc:
            self.logger.error(f"Could not read saved places: {exc}")
            self.ports.notifier.notify("Saved places could not be read.")
            records = []

        skipped = self.store.hydrate(records)
        if skipped:
            self.ports.notifier.notify(f"{len(skipped)} saved place(s) could not be restored.")

    def _on_position(self, coords: Coordinates) -> None:
        if self.view.map_state is not MapState.PENDING:
            return
        widget = self.ports.map_widget
        s = self.settings
        map_ = widget.create_map(s.map_container, Coordinates(*coords), s.map_zoom)
        widget.add_tile_layer(map_, s.tile_url, s.tile_attribution)
        widget.on_map_click(map_, self.on_map_click)
        self.view.attach_map(map_)

    def _on_position_failed(self, exc: Exception | None = None) -> None:
        if self.view.map_state is not MapState.PENDING:
            return
        self.logger.warning(f"Geolocation failed, continuing without a map: {exc}")
        self.view.map_unavailable()
        self.ports.notifier.notify(LOCATION_UNAVAILABLE)

    # -- events --------------------------------------------------------------

    def on_map_click(self, coords: Any) -> None:
        self.pending_coords = coords
        self.mode = UIMode.FORM_OPEN
        self.ports.form.show()

    def on_type_changed(self, visit_type: VisitType | str) -> None:
        try:
            kind = parse_visit_type(visit_type)
        except ValidationError as exc:
            self.logger.info(f"Type change rejected: {exc.code}")
            self.ports.notifier.notify(exc.message)
            return
        self.ports.form.show_optional_field(kind)

    def submit(self, form: FormInput) -> Place | None:
        if self.mode is not UIMode.FORM_OPEN or self.pending_coords is None:
            self.ports.notifier.notify(VALIDATION_MESSAGES["no-pending-location"])
            return None
        try:
            place = self.factory.create(
                form.visit_type,
                self.pending_coords,
                form.location,
                form.companion,
                rating=form.rating,
                planned_date=form.planned_date,
                taken=self.store,
            )
            self._commit_add(place)
        except ValidationError as exc:
            self.logger.info(f"Place rejected: {exc.code}")
            self.ports.notifier.notify(exc.message)
            return None
        except DuplicateIdentityError as exc:
            self.logger.error(f"Refusing insert: {exc}")
            self.ports.notifier.notify(INTERNAL_ERROR)
            return None
        except PersistenceError as exc:
            self.logger.error(f"Could not persist new place: {exc}")
            self.ports.notifier.notify(SAVE_FAILED)
            return None

        self.ports.form.clear()
        self.ports.form.hide()
        self.mode = UIMode.IDLE
        self.pending_coords = None
        return place

    def _commit_add(self, place: Place) -> None:
        # everything that can fail runs before the store or views change
        if place.id in self.store:
            raise DuplicateIdentityError(place.id)
        self.persistence.write(self.persistence.dump((*self.store.all(), place)))
        self.store.add(place)
        self.view.render_added(place)
        self.logger.info(f"Added {place.visit_type.value} place {place.id}: {place.location}")

    def delete(self, identity: str) -> bool:
        if identity not in self.store:
            self.logger.warning(f"Delete ignored, no place with id {identity}")
            return False
        remaining = [p for p in self.store.all() if p.id != identity]
        try:
            self.persistence.write(self.persistence.dump(remaining))
        except PersistenceError as exc:
            self.logger.error(f"Could not persist removal of {identity}: {exc}")
            self.ports.notifier.notify(SAVE_FAILED)
            return False
        self.store.remove(identity)
        self.view.remove_rendered(identity)
        self.logger.info(f"Removed place {identity}")
        return True

    def navigate(self, identity: str) -> bool:
        moved = self.view.focus(identity)
        if not moved:
            self.logger.debug(f"Nothing to focus for {identity}")
        return moved

    def reset(self) -> None:
        self.persistence.clear()
        self.view.clear()
        self.store.clear()
        self.mode = UIMode.IDLE
        self.pending_coords = None
        self.ports.form.clear()
        self.ports.form.hide()
