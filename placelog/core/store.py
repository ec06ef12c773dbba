from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator

from .entities import Place
from .errors import CorruptStateError, DuplicateIdentityError, NotFoundError
from .records import from_record


class PlaceStore:
    """Ordered in-memory collection of places, keyed by identity.

    Insertion order is display order; nothing here ever re-sorts.
    """

    logger = logging.getLogger(__name__)

    def __init__(self, places: Iterable[Place] = ()):
        self._places: dict[str, Place] = {}
        for place in places:
            self.add(place)

    def __len__(self) -> int:
        return len(self._places)

    def __contains__(self, identity: object) -> bool:
        return identity in self._places

    def __iter__(self) -> Iterator[Place]:
        return iter(tuple(self._places.values()))

    def ids(self) -> list[str]:
        return list(self._places)

    def add(self, place: Place) -> None:
        if place.id in self._places:
            raise DuplicateIdentityError(place.id)
        self._places[place.id] = place

    def remove(self, identity: str) -> Place:
        try:
            return self._places.pop(identity)
        except KeyError:
            raise NotFoundError(identity) from None

    def find(self, identity: str) -> Place | None:
        return self._places.get(identity)

    def all(self) -> tuple[Place, ...]:
        return tuple(self._places.values())

    def clear(self) -> None:
        self._places.clear()

    def hydrate(self, records: Iterable[Any]) -> list[str]:
        """Replace the contents with previously stored records.

        Malformed and duplicate records are skipped; one warning per skipped
        record is logged and returned.
        """
        loaded: dict[str, Place] = {}
        warnings: list[str] = []
        for index, record in enumerate(records):
            try:
                place = from_record(record)
            except CorruptStateError as exc:
                warnings.append(f"record #{index} skipped: {exc}")
                continue
            if place.id in loaded:
                warnings.append(f"record #{index} skipped: duplicate id {place.id!r}")
                continue
            loaded[place.id] = place

        for message in warnings:
            self.logger.warning(message)
        self._places = loaded
        self.logger.info(f"Hydrated {len(loaded)} place(s)")
        return warnings
