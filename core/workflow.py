"""
Report status lifecycle driven by cluster acknowledgment and department updates.

Pending -> In Progress (cluster acknowledged) -> Resolved (department completed).
No skipping, no backward moves; repeating the current status is a no-op.
"""

import logging

from core.models import ClusterAssignment, DepartmentUpdate, Report, ReportStatus

logger = logging.getLogger("civic_api.workflow")

ALLOWED_TRANSITIONS = {
    ReportStatus.PENDING: (ReportStatus.IN_PROGRESS,),
    ReportStatus.IN_PROGRESS: (ReportStatus.RESOLVED,),
    ReportStatus.RESOLVED: (),
}

# Department update status that closes an assignment
COMPLETED = "Completed"
RECEIVED = "Received"


class InvalidStatusTransition(ValueError):
    def __init__(self, current: ReportStatus, target: ReportStatus):
        super().__init__(f"cannot move from {current.value!r} to {target.value!r}")
        self.current = current
        self.target = target


def parse_status(value) -> ReportStatus:
    """Accept a ReportStatus or its value ("In Progress"); also tolerates "InProgress"."""
    if isinstance(value, ReportStatus):
        return value
    text = str(value or "").strip()
    for s in ReportStatus:
        if text.lower() in (s.value.lower(), s.value.replace(" ", "").lower()):
            return s
    raise ValueError(f"unknown status {value!r}")


def is_valid_transition(current: ReportStatus, target: ReportStatus) -> bool:
    return current == target or target in ALLOWED_TRANSITIONS[current]


def check_transition(current: ReportStatus, target: ReportStatus) -> None:
    if not is_valid_transition(current, target):
        raise InvalidStatusTransition(current, target)


def transition(report: Report, target: ReportStatus) -> Report:
    check_transition(report.status, target)
    if report.status != target:
        logger.info("report %s status %s -> %s", report.report_id, report.status.value, target.value)
        report.status = target
    return report


def acknowledge(assignment: ClusterAssignment, reports: list) -> ClusterAssignment:
    """Attach reports to a freshly created assignment and move them to the assignment status.

    All transitions are checked before any report is touched.
    """
    for r in reports:
        check_transition(r.status, assignment.status)
    for r in reports:
        transition(r, assignment.status)
        r.assignment_id = assignment.assignment_id
    assignment.department_updates.append(DepartmentUpdate(status=RECEIVED, comment="Issue forwarded to department"))
    return assignment


def record_update(assignment: ClusterAssignment, reports: list, status: str, comment: str | None = None) -> ClusterAssignment:
    """Append a department update; "Completed" resolves the assignment and its reports."""
    if status == COMPLETED:
        check_transition(assignment.status, ReportStatus.RESOLVED)
        for r in reports:
            check_transition(r.status, ReportStatus.RESOLVED)
    assignment.department_updates.append(DepartmentUpdate(status=status, comment=comment))
    if status == COMPLETED:
        assignment.status = ReportStatus.RESOLVED
        for r in reports:
            transition(r, ReportStatus.RESOLVED)
        logger.info("assignment %s resolved (%d reports)", assignment.assignment_id, len(reports))
    return assignment
