"""Shared fixtures: a small catalog, an in-memory port and a controllable clock."""

from datetime import datetime, timedelta

import pytest

from geotutor.classroom import InMemoryPersistence, ModuleCatalog, ProgressStore
from geotutor.schemas import ModuleRecord


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def modules():
    return [
        ModuleRecord(id="angles", title="Angles", order=2, review_interval=3),
        ModuleRecord(id="basic-shapes", title="Basic Shapes", order=1, review_interval=3),
        ModuleRecord(id="transformations", title="Transformations", order=8, review_interval=2),
    ]


@pytest.fixture
def catalog(modules):
    return ModuleCatalog(modules)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 10, 23, 59, 0))


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def store(catalog, persistence, clock):
    return ProgressStore(catalog, persistence, clock=clock)
