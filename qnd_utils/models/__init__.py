"""ORM Models: SQLAlchemy declarative models backing the SQL key/value storage.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata knows every table before create_all
"""

from qnd_utils.models.storage_entry import StorageEntry  # noqa: F401
