from __future__ import annotations

import json

import pytest

from placelog.app.persistence import STORAGE_KEY, PersistenceAdapter
from placelog.core.entities import VisitType
from placelog.core.errors import CorruptStateError
from placelog.core.factory import PlaceFactory
from placelog.core.store import PlaceStore
from tests.fakes import MemoryKeyValueStore


def _two_places(factory: PlaceFactory):
    return [
        factory.create(VisitType.VISITED, (10.0, 20.0), "Lisbon", "myself", rating=5),
        factory.create(VisitType.PLANNED, (-33.8688, 151.2093), "Sydney", planned_date="2027-02-10"),
    ]


def test_load_missing_slot_returns_empty(persistence: PersistenceAdapter) -> None:
    assert persistence.load() == []


def test_save_overwrites_single_slot(
    persistence: PersistenceAdapter, kv: MemoryKeyValueStore, factory: PlaceFactory
) -> None:
    places = _two_places(factory)
    persistence.save(places)
    persistence.save(places[:1])

    assert list(kv.items) == [STORAGE_KEY]
    assert len(json.loads(kv.items[STORAGE_KEY])) == 1


def test_reload_reproduces_store(kv: MemoryKeyValueStore, factory: PlaceFactory) -> None:
    originals = _two_places(factory)
    PersistenceAdapter(kv).save(originals)

    fresh = PlaceStore()
    fresh.hydrate(PersistenceAdapter(kv).load())

    assert len(fresh) == 2
    for original, restored in zip(originals, fresh.all()):
        assert restored.id == original.id
        assert restored.description == original.description
        assert restored.coords == original.coords
        assert restored.visit_type is original.visit_type
    assert fresh.all()[0].rating == 5
    assert fresh.all()[1].planned_date == "2027-02-10"


def test_custom_key_is_used(kv: MemoryKeyValueStore, factory: PlaceFactory) -> None:
    PersistenceAdapter(kv, key="trips").save(_two_places(factory))
    assert "trips" in kv.items
    assert PersistenceAdapter(kv).load() == []


@pytest.mark.parametrize("raw", ["{not json", '{"id": "x"}', "[1, 2]", "null"])
def test_malformed_slot_raises_corrupt_state(kv: MemoryKeyValueStore, raw: str) -> None:
    kv.items[STORAGE_KEY] = raw
    with pytest.raises(CorruptStateError):
        PersistenceAdapter(kv).load()


def test_clear_removes_slot(persistence: PersistenceAdapter, kv: MemoryKeyValueStore, factory: PlaceFactory) -> None:
    persistence.save(_two_places(factory))
    persistence.clear()
    assert kv.items == {}
    assert persistence.load() == []


def test_dump_is_valid_json_with_unicode(persistence: PersistenceAdapter, factory: PlaceFactory) -> None:
    place = factory.create(VisitType.VISITED, (0.0, 0.0), "São Paulo", rating=4)
    payload = persistence.dump([place])
    assert "São Paulo" in payload
    assert json.loads(payload)[0]["location"] == "São Paulo"
