"""File Downloads: serve string content as a save-as attachment from a FastAPI route.

Invariants:
    - Content is encoded as UTF-8
    - Content-Disposition is always "attachment"; non-ASCII or unsafe filenames use
      the RFC 5987 filename* form
"""

import json
import logging
from typing import Any
from urllib.parse import quote

from fastapi import Response

logger = logging.getLogger(__name__)

JSON_EXPORT_CONTENT_TYPE = "application/json;charset=utf-8"
DEFAULT_EXPORT_FILENAME = "export.json"


def download_file(string_content: str, content_type: str, filename: str) -> Response:
    """Response that makes the browser save string_content as filename."""
    logger.debug(f"Preparing download of {len(string_content)} chars", extra={"filename": filename})
    return Response(
        content=string_content.encode("utf-8"),
        media_type=content_type,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


def export_to_json(
    object_data: Any = None, filename: str = DEFAULT_EXPORT_FILENAME,
) -> Response:
    """Download object_data (default {}) as a JSON file."""
    if object_data is None:
        object_data = {}
    return download_file(
        json.dumps(object_data, ensure_ascii=False),
        JSON_EXPORT_CONTENT_TYPE,
        filename,
    )


def _content_disposition(filename: str) -> str:
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'
