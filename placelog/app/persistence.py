from __future__ import annotations

import json
import logging
from typing import Any, Iterable

from placelog.core.entities import Place
from placelog.core.errors import CorruptStateError
from placelog.core.ports import KeyValueStore
from placelog.core.records import to_record

STORAGE_KEY = "places"


class PersistenceAdapter:
    """Keeps the whole store in one key/value slot as a JSON array."""

    logger = logging.getLogger(__name__)

    def __init__(self, kv: KeyValueStore, key: str = STORAGE_KEY):
        self.kv = kv
        self.key = key

    def dump(self, places: Iterable[Place]) -> str:
        return json.dumps([to_record(p) for p in places], ensure_ascii=False)

    def write(self, payload: str) -> None:
        self.kv.set_item(self.key, payload)

    def save(self, places: Iterable[Place]) -> None:
        self.write(self.dump(places))

    def load(self) -> list[dict[str, Any]]:
        raw = self.kv.get_item(self.key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptStateError(f"slot {self.key!r} is not valid JSON") from exc
        if not isinstance(data, list):
            raise CorruptStateError(f"slot {self.key!r} must hold a JSON array")
        if not all(isinstance(item, dict) for item in data):
            raise CorruptStateError(f"slot {self.key!r} holds non-object records")
        return data

    def clear(self) -> None:
        self.kv.remove_item(self.key)
