"""Example cluster shown by the admin dashboard when nothing clusters. Boundary use only."""

from datetime import datetime, timezone

from core.models import Cluster, Department, Report, ReportStatus

PLACEHOLDER_LOCATION = (80.123, 13.456)


def placeholder_cluster(now: datetime | None = None) -> Cluster:
    now = now or datetime.now(timezone.utc)
    main = Report(
        report_id="placeholder_main",
        description="Road damaged near main street",
        location=PLACEHOLDER_LOCATION,
        created_at=now,
        author_name="TestUser",
    )
    issue = Report(
        report_id="placeholder_issue1",
        description="Huge pothole near bus stop",
        location=PLACEHOLDER_LOCATION,
        created_at=now,
        author_name="TestUser",
        status=ReportStatus.PENDING,
    )
    return Cluster(issues=[main, issue], recommended_department=Department.ROADS)


def with_placeholder(clusters: list[Cluster]) -> list[Cluster]:
    """Clusters unchanged, or just the example cluster when there are none."""
    if clusters:
        return clusters
    return [placeholder_cluster()]
