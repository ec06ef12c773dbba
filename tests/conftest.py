"""Shared fixtures for placelog tests."""

from __future__ import annotations

import itertools
from datetime import datetime

import pytest

from placelog.app.controller import AppController
from placelog.app.persistence import PersistenceAdapter
from placelog.core.factory import PlaceFactory
from placelog.core.ports import UIPorts
from placelog.infrastructure.map.headless import HeadlessMapWidget
from tests.fakes import (
    DeferredGeolocator,
    FakeForm,
    FakeListPanel,
    FakeNotifier,
    MemoryKeyValueStore,
)

FIXED_NOW = datetime(2026, 3, 14, 9, 30)


@pytest.fixture
def factory() -> PlaceFactory:
    """Factory with sequential ids and a frozen clock."""
    counter = itertools.count(1)
    return PlaceFactory(id_factory=lambda: f"p{next(counter)}", clock=lambda: FIXED_NOW)


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def persistence(kv: MemoryKeyValueStore) -> PersistenceAdapter:
    return PersistenceAdapter(kv)


@pytest.fixture
def ports() -> UIPorts:
    return UIPorts(
        list_panel=FakeListPanel(),
        map_widget=HeadlessMapWidget(),
        geolocator=DeferredGeolocator(),
        form=FakeForm(),
        notifier=FakeNotifier(),
    )


@pytest.fixture
def controller(
    ports: UIPorts, persistence: PersistenceAdapter, factory: PlaceFactory
) -> AppController:
    return AppController(ports, persistence, factory=factory)
