"""Root conftest: shared fixtures for storage and clipboard doubles."""

import os

import pytest

# Never create a SQLite file from tests that rely on default settings
os.environ.setdefault("QND_STORAGE_URL", "memory://")

from qnd_utils.infrastructure.clipboard import InMemoryClipboard  # noqa: E402
from qnd_utils.infrastructure.storage import InMemoryStorage, SqlKeyValueStorage  # noqa: E402


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def sql_storage():
    store = SqlKeyValueStorage("sqlite://")
    yield store
    store.dispose()


@pytest.fixture
def clipboard():
    return InMemoryClipboard()
