"""Integration tests for the cast endpoint."""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from book_catalog.api.app import create_app
from book_catalog.core.settings import BookCatalogSettings


@pytest.fixture()
def client(services, cast_store):
    asyncio.run(cast_store.batch_put([
        {"bookId": 1, "name": "Paul Atreides", "roleName": "Protagonist"},
        {"bookId": 1, "name": "Piter De Vries", "roleName": "Mentat"},
        {"bookId": 1, "name": "Stilgar", "roleName": "Fremen Leader"},
    ]))
    app = create_app(settings=BookCatalogSettings(store_backend="memory"), services=services)
    with TestClient(app) as c:
        yield c


class TestCastEndpoint:
    def test_all_members(self, client):
        resp = client.get("/books/1/cast")
        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 3

    def test_name_prefix(self, client):
        resp = client.get("/books/1/cast", params={"name": "P"})
        assert [m["name"] for m in resp.json()["data"]] == ["Paul Atreides", "Piter De Vries"]

    def test_role_prefix_wins(self, client):
        resp = client.get("/books/1/cast", params={"name": "P", "roleName": "Fremen"})
        assert [m["name"] for m in resp.json()["data"]] == ["Stilgar"]
        assert resp.json()["metadata"]["plan"]["index"] == "roleIx"

    def test_unknown_book_is_empty(self, client):
        resp = client.get("/books/2/cast")
        assert resp.status_code == 200
        assert resp.json()["data"] == []

    def test_invalid_book_id(self, client):
        resp = client.get("/books/dune/cast")
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "INVALID_BOOK_ID"
        assert body["title"] == "Invalid bookId: dune"

    def test_other_params_ignored(self, client):
        resp = client.get("/books/1/cast", params={"age": "30"})
        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 3
