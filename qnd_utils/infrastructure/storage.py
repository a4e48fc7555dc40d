"""Key/Value Storage: persistent string storage behind the KeyValueStorage protocol.

Invariants:
    - get_item returns None for a missing key, never raises KeyError
    - remove_item on a missing key is a no-op
    - SqlKeyValueStorage rolls back on any SQLAlchemy error and raises StorageError
    - An unusable URL fails at construction with StorageError(operation="init")
    - One short-lived session per call; no state kept between calls besides the engine

Design Decisions:
    - InMemoryStorage for tests and single-process scripts, SqlKeyValueStorage when
      the value must survive restarts
    - create_storage() picks the backend from Settings.storage_url ("memory://" or a
      SQLAlchemy URL)
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker

from qnd_utils.config import Settings, get_settings
from qnd_utils.core.boundary_protocols import KeyValueStorage
from qnd_utils.core.errors import StorageError
from qnd_utils.db.base import Base
from qnd_utils.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)

MEMORY_STORAGE_URL = "memory://"


class InMemoryStorage:
    """Dict-backed storage; contents live as long as the instance."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)


class SqlKeyValueStorage:
    """SQLAlchemy-backed storage, one row per key in the storage_entries table."""

    def __init__(self, database_url: str, echo: bool = False):
        try:
            self.engine = create_engine(database_url, echo=echo, pool_pre_ping=True)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Storage initialisation failed: {e}", extra={"operation": "init"})
            raise StorageError("Could not initialise storage", "init") from e
        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    @contextmanager
    def session(self, operation: str) -> Iterator[Session]:
        """Provide a session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.error(f"Storage integrity error: {e}", extra={"operation": operation})
            raise StorageError("Integrity constraint violated", operation)
        except OperationalError as e:
            session.rollback()
            logger.error(f"Storage operational error: {e}", extra={"operation": operation})
            raise StorageError("Connection or operational error", operation)
        except DBAPIError as e:
            session.rollback()
            logger.error(f"Storage driver error: {e}", extra={"operation": operation})
            raise StorageError("Database driver error", operation)
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
            raise StorageError("Storage operation failed", operation)
        finally:
            session.close()

    def get_item(self, key: str) -> str | None:
        with self.session("get_item") as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry is not None else None

    def set_item(self, key: str, value: str) -> None:
        with self.session("set_item") as session:
            entry = session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value

    def remove_item(self, key: str) -> None:
        with self.session("remove_item") as session:
            entry = session.get(StorageEntry, key)
            if entry is not None:
                session.delete(entry)

    def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Storage health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def create_storage(settings: Settings | None = None) -> KeyValueStorage:
    """Build the storage backend configured by Settings.storage_url."""
    settings = settings or get_settings()
    if settings.storage_url == MEMORY_STORAGE_URL:
        return InMemoryStorage()
    return SqlKeyValueStorage(settings.storage_url, echo=settings.storage_echo)
