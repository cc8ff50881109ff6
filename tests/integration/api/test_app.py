"""Integration tests for the assembled FastAPI application."""

from pathlib import Path

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from zenager.api import create_app
from zenager.config import Settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(db_path=str(tmp_path / "zenager.db"), log_dir=str(tmp_path / "logs"))


@pytest.mark.integration
class TestApplication:
    """Tests for startup, routing and persistence through the real app."""

    def test_startup_creates_default_board(self, settings: Settings) -> None:
        with TestClient(create_app(settings)) as client:
            response = client.get("/api/v1/columns")

        assert response.status_code == status.HTTP_200_OK
        assert [c["id"] for c in response.json()["data"]] == [
            "backlog",
            "todo",
            "in-progress",
            "code-review",
            "blocked",
            "done",
        ]

    def test_state_survives_restart(self, settings: Settings) -> None:
        with TestClient(create_app(settings)) as client:
            client.post("/api/v1/sources", json={"url": "https://github.com/octo/board/issues"})
            client.post("/api/v1/columns", json={"name": "Someday"})
            client.post("/api/v1/columns/someday/issues", json={"title": "Learn Rust"})

        with TestClient(create_app(settings)) as client:
            sources = client.get("/api/v1/sources").json()["data"]
            columns = client.get("/api/v1/columns").json()["data"]

        assert [s["source_id"] for s in sources] == ["github:octo/board"]
        someday = next(c for c in columns if c["id"] == "someday")
        assert [i["title"] for i in someday["issues"]] == ["Learn Rust"]

    def test_sync_without_sources(self, settings: Settings) -> None:
        with TestClient(create_app(settings)) as client:
            response = client.post("/api/v1/sync")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["committed"] is False

    def test_error_envelope(self, settings: Settings) -> None:
        with TestClient(create_app(settings)) as client:
            response = client.put("/api/v1/sources/github:x/y/selected", json={"selected": True})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"data": None, "error": "Source not found"}
