"""REST Header Builders: static JSON headers plus an Authorization header from storage.

Invariants:
    - Every call returns a fresh dict (callers may mutate the result)
    - The auth token is read from and written to the injected KeyValueStorage only
    - A missing token yields {"Authorization": None}, never an exception
"""

from qnd_utils.core.boundary_protocols import KeyValueStorage


AUTH_STORAGE_KEY: str = "auth_token"
JSON_CONTENT_TYPE: str = "application/json"


def get_json_header() -> dict[str, str]:
    """Headers for a REST request exchanging JSON payloads."""
    return {
        "Content-Type": JSON_CONTENT_TYPE,
        "Accept": JSON_CONTENT_TYPE,
    }


def get_auth_header(
    storage: KeyValueStorage, storage_key: str = AUTH_STORAGE_KEY,
) -> dict[str, str | None]:
    """The Authorization header holding the stored token."""
    return {"Authorization": storage.get_item(storage_key)}


def set_auth_token(
    storage: KeyValueStorage, token: str, storage_key: str = AUTH_STORAGE_KEY,
) -> None:
    """Store the full Authorization value (e.g. "Bearer abc") for later requests."""
    storage.set_item(storage_key, token)


def logout(storage: KeyValueStorage, storage_key: str = AUTH_STORAGE_KEY) -> None:
    storage.remove_item(storage_key)


def get_auth_json_header(
    storage: KeyValueStorage, storage_key: str = AUTH_STORAGE_KEY,
) -> dict[str, str | None]:
    """Headers for an authenticated JSON request."""
    return {
        **get_auth_header(storage, storage_key),
        **get_json_header(),
    }
