"""Report, cluster and assignment models. Reports are read-only input to the clustering core."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum, IntEnum
from typing import Optional

OVERDUE_AFTER = timedelta(days=3)


class ReportStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class Department(str, Enum):
    """Routing targets, in tie-break order (roads first)."""
    ROADS = "roads"
    WATER = "water"
    WASTE = "waste"
    ELECTRICITY = "electricity"
    PARKS = "parks"


class PriorityTier(IntEnum):
    HIGH = 1
    MEDIUM = 2
    LOW = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


def utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class Feedback:
    """Citizen rating of how a report was handled."""
    user_id: str
    rating: int  # 1 - 5
    comment: str
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {
            "user_id": self.user_id,
            "rating": self.rating,
            "comment": self.comment,
            "submitted_at": self.submitted_at.isoformat(),
        }


def average_rating(feedback: list) -> Optional[float]:
    if not feedback:
        return None
    return round(sum(f.rating for f in feedback) / len(feedback), 1)


@dataclass
class Report:
    report_id: str
    description: Optional[str] = None
    location: Optional[tuple] = None  # (lon, lat), GeoJSON order
    created_at: Optional[datetime] = None
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    assignment_id: Optional[str] = None
    feedback: list = field(default_factory=list)  # Feedback, at most one per user

    @property
    def avg_rating(self) -> Optional[float]:
        return average_rating(self.feedback)

    @property
    def longitude(self) -> Optional[float]:
        return self.location[0] if self.location else None

    @property
    def latitude(self) -> Optional[float]:
        return self.location[1] if self.location else None

    def to_dict(self):
        d = {
            "id": self.report_id,
            "description": self.description,
            "location": None,
            "created_at": utc(self.created_at).isoformat() if self.created_at else None,
            "author_id": self.author_id,
            "author_name": self.author_name or "Anonymous",
            "status": self.status.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "assignment_id": self.assignment_id,
            "avg_rating": self.avg_rating,
            "total_feedbacks": len(self.feedback),
        }
        if self.location:
            d["location"] = {"type": "Point", "coordinates": [self.location[0], self.location[1]]}
        return d


@dataclass
class Cluster:
    """Two or more reports routed together; issues[0] is the representative."""
    issues: list
    recommended_department: Department = Department.ROADS

    @property
    def representative(self) -> Report:
        return self.issues[0]

    @property
    def cluster_id(self) -> str:
        return f"cluster-{self.representative.report_id}"

    def report_ids(self) -> list:
        return [r.report_id for r in self.issues]

    def to_dict(self):
        rep = self.representative
        return {
            "cluster_id": self.cluster_id,
            "main_report": {
                "id": rep.report_id,
                "description": rep.description,
                "location": rep.to_dict()["location"],
                "created_at": utc(rep.created_at).isoformat() if rep.created_at else None,
            },
            "recommended_department": self.recommended_department.value,
            "issues": [r.to_dict() for r in self.issues],
        }


@dataclass
class DepartmentUpdate:
    status: str
    comment: Optional[str] = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self):
        return {"status": self.status, "comment": self.comment, "updated_at": self.updated_at.isoformat()}


@dataclass
class ClusterAssignment:
    assignment_id: str
    cluster_id: str
    issues: list  # report ids
    department: Department
    acknowledged_by: str
    status: ReportStatus = ReportStatus.IN_PROGRESS
    admin_comment: Optional[str] = None
    acknowledged_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    department_updates: list = field(default_factory=list)  # append-only

    @property
    def total_issues(self) -> int:
        return len(self.issues)

    def is_overdue(self, now: Optional[datetime] = None) -> bool:
        if self.status == ReportStatus.RESOLVED:
            return False
        now = utc(now) if now else datetime.now(timezone.utc)
        return now - utc(self.acknowledged_at) > OVERDUE_AFTER

    def to_dict(self):
        return {
            "assignment_id": self.assignment_id,
            "cluster_id": self.cluster_id,
            "issues": list(self.issues),
            "department": self.department.value,
            "admin_comment": self.admin_comment,
            "status": self.status.value,
            "acknowledged_by": self.acknowledged_by,
            "acknowledged_at": self.acknowledged_at.isoformat(),
            "department_updates": [u.to_dict() for u in self.department_updates],
            "total_issues": self.total_issues,
            "is_overdue": self.is_overdue(),
        }
