"""File downloads: attachment responses and JSON export, standalone and via a FastAPI route."""

import json

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from qnd_utils.infrastructure.downloads import download_file, export_to_json


def test_download_file_sets_body_and_headers():
    response = download_file("a,b\n1,2\n", "text/csv", "data.csv")
    assert response.body == b"a,b\n1,2\n"
    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == 'attachment; filename="data.csv"'


def test_download_file_encodes_utf8():
    response = download_file("café", "text/plain", "note.txt")
    assert response.body == "café".encode("utf-8")


def test_download_file_quotes_non_ascii_filename():
    response = download_file("{}", "application/json", "résumé.json")
    assert response.headers["content-disposition"] == (
        "attachment; filename*=utf-8''r%C3%A9sum%C3%A9.json"
    )


def test_export_to_json_defaults():
    response = export_to_json()
    assert json.loads(response.body) == {}
    assert response.headers["content-type"] == "application/json;charset=utf-8"
    assert 'filename="export.json"' in response.headers["content-disposition"]


def test_export_to_json_with_data_and_filename():
    response = export_to_json([{"id": 1}], "rows.json")
    assert json.loads(response.body) == [{"id": 1}]
    assert 'filename="rows.json"' in response.headers["content-disposition"]


@pytest.mark.asyncio
async def test_export_served_from_fastapi_route():
    app = FastAPI()

    @app.get("/export")
    async def export():
        return export_to_json({"rows": [1, 2]}, "rows.json")

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as client:
        response = await client.get("/export")

    assert response.status_code == 200
    assert response.json() == {"rows": [1, 2]}
    assert response.headers["content-disposition"] == 'attachment; filename="rows.json"'
