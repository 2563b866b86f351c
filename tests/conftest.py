"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src and fixture generators to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent / "fixtures"))

from models.events import Event  # noqa: E402
from models.layout import LayoutConfig  # noqa: E402

TEST_API_KEY = "test-api-key"


def make_event(event_id: str, start: str, end: str, name: str | None = None) -> Event:
    """Build an Event from ISO date strings."""
    return Event(
        id=event_id,
        name=name or event_id,
        start_date=date.fromisoformat(start),
        end_date=date.fromisoformat(end),
        color="#A8D5FF",
    )


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def layout_config():
    """Pixel config matching the default grid dimensions."""
    return LayoutConfig(
        cell_width=128,
        cell_gap=0,
        lane_band_height=120,
        lane_top_offset=4,
        max_lanes=6,
        units="px",
    )


@pytest.fixture
def sample_events():
    """A, B, C from the minimal lane usage example: A and C both touch B only."""
    return [
        make_event("A", "2025-01-01", "2025-01-31"),
        make_event("B", "2025-01-15", "2025-02-15"),
        make_event("C", "2025-02-01", "2025-02-28"),
    ]


@pytest.fixture
def raw_event():
    """Raw event dictionary as sent by the web client."""
    return {
        "id": "evt-1",
        "name": "Summer trip",
        "startDate": "2025-07-01",
        "endDate": "2025-07-14",
        "color": "#FFD699",
        "calendarId": "personal",
    }


@pytest.fixture
def request_log_db(tmp_path, monkeypatch):
    """Fresh request log database, patched into config."""
    from core import config
    from scripts.init_db import create_database

    db_path = tmp_path / "db" / "birdseye.db"
    create_database(db_path)
    monkeypatch.setattr(config, "DB_PATH", db_path)
    return db_path


@pytest.fixture
def api_client(request_log_db, monkeypatch):
    """TestClient with a known API key and a temporary request log."""
    from fastapi.testclient import TestClient

    from api.main import app
    from core import config

    monkeypatch.setattr(config, "BIRDSEYE_API_KEY", TEST_API_KEY)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers():
    return {"X-API-Key": TEST_API_KEY}
