"""Test configuration: settings need a database URL before the package is imported."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("TIMEZONE", "America/New_York")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402

from tests.fakes.fake_stores import FakeAvailabilityStores, make_preparer  # noqa: E402

PREPARER_ID = 1


@pytest.fixture
def preparer():
    return make_preparer(id=PREPARER_ID)


@pytest.fixture
def stores(preparer) -> FakeAvailabilityStores:
    return FakeAvailabilityStores(preparers=[preparer])
