"""Tests for the report status workflow and assignment updates."""

import pytest

from core.models import ClusterAssignment, Department, Report, ReportStatus
from core.workflow import (
    InvalidStatusTransition,
    acknowledge,
    is_valid_transition,
    parse_status,
    record_update,
    transition,
)


@pytest.fixture
def members():
    return [Report(report_id="a"), Report(report_id="b")]


@pytest.fixture
def assignment():
    return ClusterAssignment(
        assignment_id="as-1",
        cluster_id="cluster-a",
        issues=["a", "b"],
        department=Department.ROADS,
        acknowledged_by="admin-1",
    )


class TestTransitions:
    def test_forward_allowed(self):
        assert is_valid_transition(ReportStatus.PENDING, ReportStatus.IN_PROGRESS)
        assert is_valid_transition(ReportStatus.IN_PROGRESS, ReportStatus.RESOLVED)

    def test_same_status_is_noop(self):
        assert is_valid_transition(ReportStatus.RESOLVED, ReportStatus.RESOLVED)

    def test_skip_and_backward_rejected(self):
        assert not is_valid_transition(ReportStatus.PENDING, ReportStatus.RESOLVED)
        assert not is_valid_transition(ReportStatus.RESOLVED, ReportStatus.PENDING)
        assert not is_valid_transition(ReportStatus.IN_PROGRESS, ReportStatus.PENDING)

    def test_transition_mutates_report(self):
        r = Report(report_id="a")
        transition(r, ReportStatus.IN_PROGRESS)
        assert r.status == ReportStatus.IN_PROGRESS
        with pytest.raises(InvalidStatusTransition):
            transition(r, ReportStatus.PENDING)

    def test_parse_status(self):
        assert parse_status("In Progress") == ReportStatus.IN_PROGRESS
        assert parse_status("InProgress") == ReportStatus.IN_PROGRESS
        assert parse_status("resolved") == ReportStatus.RESOLVED
        assert parse_status(ReportStatus.PENDING) == ReportStatus.PENDING
        with pytest.raises(ValueError):
            parse_status("Closed")


class TestAcknowledge:
    def test_moves_reports_and_logs_receipt(self, assignment, members):
        acknowledge(assignment, members)
        assert all(r.status == ReportStatus.IN_PROGRESS for r in members)
        assert all(r.assignment_id == "as-1" for r in members)
        assert assignment.department_updates[0].status == "Received"
        assert assignment.department_updates[0].comment == "Issue forwarded to department"

    def test_rejects_without_partial_update(self, assignment, members):
        members[1].status = ReportStatus.RESOLVED
        with pytest.raises(InvalidStatusTransition):
            acknowledge(assignment, members)
        assert members[0].status == ReportStatus.PENDING
        assert members[0].assignment_id is None
        assert assignment.department_updates == []


class TestRecordUpdate:
    def test_progress_update_keeps_status(self, assignment, members):
        acknowledge(assignment, members)
        record_update(assignment, members, "In Progress", "crew dispatched")
        assert assignment.status == ReportStatus.IN_PROGRESS
        assert assignment.department_updates[-1].comment == "crew dispatched"

    def test_completed_resolves_everything(self, assignment, members):
        acknowledge(assignment, members)
        record_update(assignment, members, "Completed", "patched")
        assert assignment.status == ReportStatus.RESOLVED
        assert all(r.status == ReportStatus.RESOLVED for r in members)
        assert len(assignment.department_updates) == 2
