"""Tests for core models: Report, Cluster, ClusterAssignment, PriorityTier."""

from datetime import datetime, timedelta, timezone

import pytest

from core.models import (
    Cluster,
    ClusterAssignment,
    Department,
    PriorityTier,
    Report,
    ReportStatus,
    utc,
)


class TestReport:
    def test_defaults(self):
        r = Report(report_id="r1")
        assert r.status == ReportStatus.PENDING
        assert r.location is None
        assert r.latitude is None
        assert r.longitude is None
        assert r.assignment_id is None

    def test_to_dict_with_location(self):
        r = Report(
            report_id="r1",
            description="pothole",
            location=(80.27, 13.08),
            created_at=datetime(2025, 1, 15, 14, 0, tzinfo=timezone.utc),
        )
        d = r.to_dict()
        assert d["id"] == "r1"
        assert d["location"] == {"type": "Point", "coordinates": [80.27, 13.08]}
        assert d["longitude"] == 80.27
        assert d["latitude"] == 13.08
        assert d["status"] == "Pending"
        assert d["author_name"] == "Anonymous"
        assert d["created_at"].startswith("2025-01-15T14:00:00")

    def test_to_dict_without_location(self):
        d = Report(report_id="r1", description="pothole").to_dict()
        assert d["location"] is None
        assert d["created_at"] is None


class TestCluster:
    def test_representative_is_first(self):
        c = Cluster(issues=[Report(report_id="a"), Report(report_id="b")], recommended_department=Department.WATER)
        assert c.representative.report_id == "a"
        assert c.cluster_id == "cluster-a"
        assert c.report_ids() == ["a", "b"]

    def test_to_dict(self):
        c = Cluster(issues=[Report(report_id="a", description="leak"), Report(report_id="b")],
                    recommended_department=Department.WATER)
        d = c.to_dict()
        assert d["cluster_id"] == "cluster-a"
        assert d["main_report"]["id"] == "a"
        assert d["main_report"]["description"] == "leak"
        assert d["recommended_department"] == "water"
        assert [i["id"] for i in d["issues"]] == ["a", "b"]


class TestPriorityTier:
    def test_ordering_and_labels(self):
        assert PriorityTier.HIGH < PriorityTier.MEDIUM < PriorityTier.LOW
        assert PriorityTier.HIGH.label == "High"
        assert PriorityTier(2).label == "Medium"
        assert PriorityTier.LOW.label == "Low"


class TestClusterAssignment:
    def _assignment(self, **kwargs):
        return ClusterAssignment(
            assignment_id="as-1",
            cluster_id="cluster-a",
            issues=["a", "b"],
            department=Department.ROADS,
            acknowledged_by="admin-1",
            **kwargs,
        )

    def test_defaults(self):
        a = self._assignment()
        assert a.status == ReportStatus.IN_PROGRESS
        assert a.total_issues == 2
        assert a.department_updates == []

    def test_overdue_after_three_days(self):
        acked = datetime(2025, 1, 1, tzinfo=timezone.utc)
        a = self._assignment(acknowledged_at=acked)
        assert a.is_overdue(now=acked + timedelta(days=2)) is False
        assert a.is_overdue(now=acked + timedelta(days=4)) is True

    def test_resolved_never_overdue(self):
        acked = datetime(2025, 1, 1, tzinfo=timezone.utc)
        a = self._assignment(acknowledged_at=acked, status=ReportStatus.RESOLVED)
        assert a.is_overdue(now=acked + timedelta(days=30)) is False

    def test_to_dict(self):
        d = self._assignment(admin_comment="send crew").to_dict()
        assert d["department"] == "roads"
        assert d["status"] == "In Progress"
        assert d["admin_comment"] == "send crew"
        assert d["total_issues"] == 2


def test_utc_marks_naive_datetimes():
    assert utc(datetime(2025, 1, 1)).tzinfo == timezone.utc
    aware = datetime(2025, 1, 1, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    assert utc(aware) is aware
