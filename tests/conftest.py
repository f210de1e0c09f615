"""Pytest fixtures for clustering and API tests."""

from datetime import datetime, timedelta, timezone

import pytest

from core.models import Report

BASE_TIME = datetime(2025, 1, 15, 14, 0, tzinfo=timezone.utc)
MAIN_STREET = (80.2707, 13.0827)  # (lon, lat)


@pytest.fixture
def make_report():
    """Factory: make_report("r1", "pothole on main road", hours_ago=1, location=(lon, lat))."""
    def _make(report_id, description="", hours_ago=0.0, location=MAIN_STREET, **kwargs):
        return Report(
            report_id=report_id,
            description=description,
            location=location,
            created_at=BASE_TIME - timedelta(hours=hours_ago),
            **kwargs,
        )
    return _make


@pytest.fixture
def pothole_pair(make_report):
    """Two reports of the same pothole, ~5 m and 1 hour apart, newest first."""
    return [
        make_report("r1", "Huge pothole on main road near bus stop", hours_ago=0),
        make_report("r2", "Huge pothole on main road near bus stop", hours_ago=1, location=(80.27075, 13.0827)),
    ]


@pytest.fixture
def app_client(monkeypatch):
    """FastAPI TestClient. Clears in-memory reports and assignments before each use."""
    from fastapi.testclient import TestClient
    import api.main as main_module
    main_module.reports.clear()
    main_module.assignments.clear()
    monkeypatch.setattr(main_module, "placeholder_default", False)
    return TestClient(main_module.app)
