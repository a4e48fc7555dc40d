"""REST Response Handling: turn an httpx response into parsed JSON or a typed error.

Invariants:
    - The body is read exactly once; the handler returns or raises exactly once
    - status < 400: parsed JSON body (None for an empty body)
    - status >= 400: RestResponseError(status, body) where body is parsed JSON when
      possible, otherwise the raw text
    - A success status with a non-JSON body raises ResponseDecodeError

Design Decisions:
    - Async variant for httpx.AsyncClient, sync variant for httpx.Client; both share
      the same decision function
"""

import json
import logging
from typing import Any

import httpx

from qnd_utils.core.errors import RestResponseError, ResponseDecodeError

logger = logging.getLogger(__name__)

REST_ERROR_THRESHOLD: int = 400


async def handle_rest_response(response: httpx.Response) -> Any:
    """Resolve an httpx response from AsyncClient into its JSON body."""
    await response.aread()
    return _resolve(response)


def handle_rest_response_sync(response: httpx.Response) -> Any:
    """Resolve an httpx response from Client into its JSON body."""
    response.read()
    return _resolve(response)


def _resolve(response: httpx.Response) -> Any:
    status = response.status_code
    body_text = response.text

    if status >= REST_ERROR_THRESHOLD:
        logger.warning(
            f"REST request failed with status {status}",
            extra={"status_code": status},
        )
        raise RestResponseError(status, _parse_error_body(body_text))

    if not body_text:
        return None
    try:
        return json.loads(body_text)
    except ValueError as e:
        raise ResponseDecodeError(status, body_text) from e


def _parse_error_body(body_text: str) -> Any:
    """Best effort: JSON if it parses, raw text otherwise."""
    try:
        return json.loads(body_text)
    except ValueError:
        return body_text
