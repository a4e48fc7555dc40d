"""StorageEntry ORM: one row per key of the persistent key/value storage.

Invariants:
    - key is the primary key (at most one value per key)
    - value is stored verbatim as text
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from qnd_utils.db.base import Base


class StorageEntry(Base):
    """A single stored value, e.g. the auth token under "auth_token"."""
    __tablename__ = "storage_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
