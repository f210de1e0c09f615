"""
FastAPI backend: report intake, priority listing, clustering of open reports,
cluster acknowledgment, department progress updates and citizen feedback.
Reports and assignments live in process memory; the clustering core is pure.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dotenv import load_dotenv

from clustering.builder import build_clusters
from clustering.placeholder import with_placeholder
from clustering.priority import filter_reports, newest_first, rank_reports, score
from core.config import load_thresholds, placeholder_enabled
from core.feedback import FeedbackError, assignment_rating, satisfaction_score, submit_feedback
from core.models import ClusterAssignment, Department, Report, ReportStatus, utc
from core.workflow import InvalidStatusTransition, acknowledge, parse_status, record_update

load_dotenv(override=True)

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("civic_api")

# -----------------------------------------------------------------------------
# Config (read once; a bad CLUSTER_* value fails here, at startup)
# -----------------------------------------------------------------------------
thresholds = load_thresholds()
placeholder_default = placeholder_enabled()

# -----------------------------------------------------------------------------
# Store (in-memory)
# -----------------------------------------------------------------------------
reports: dict[str, Report] = {}
assignments: dict[str, ClusterAssignment] = {}


def new_report_id() -> str:
    return "report-" + uuid.uuid4().hex[:12]


def new_assignment_id() -> str:
    return "assignment-" + uuid.uuid4().hex[:12]


def report_view(report: Report) -> dict:
    d = report.to_dict()
    tier = score(report.description)
    d["priority"] = int(tier)
    d["priority_label"] = tier.label
    return d


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("civic api up thresholds=%s placeholder=%s", thresholds.to_dict(), placeholder_default)
    yield


app = FastAPI(title="Civic Issue Clustering API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------
class ReportRequest(BaseModel):
    description: Optional[str] = None
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    created_at: Optional[datetime] = None  # defaults to now; seeding may backdate
    author_id: Optional[str] = None
    author_name: Optional[str] = None


class AcknowledgeRequest(BaseModel):
    cluster_id: str
    issues: list[str] = Field(min_length=1)
    department: Department
    acknowledged_by: str
    admin_comment: Optional[str] = None
    status: str = ReportStatus.IN_PROGRESS.value


class AssignmentUpdateRequest(BaseModel):
    status: str
    comment: Optional[str] = None


class FeedbackRequest(BaseModel):
    user_id: str
    rating: int
    comment: Optional[str] = None


NO_CACHE_HEADERS = {"Cache-Control": "no-store, no-cache, must-revalidate", "Pragma": "no-cache"}


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
@app.post("/reports")
def create_report(body: ReportRequest):
    """Store a new Pending report."""
    description = (body.description or "").strip()
    has_location = body.longitude is not None and body.latitude is not None
    if not description and not has_location:
        logger.warning("report rejected: no description and no location")
        return JSONResponse(
            status_code=400,
            content={"detail": "description or location is required"},
            headers=NO_CACHE_HEADERS,
        )
    report = Report(
        report_id=new_report_id(),
        description=description or None,
        location=(body.longitude, body.latitude) if has_location else None,
        created_at=utc(body.created_at) if body.created_at else datetime.now(timezone.utc),
        author_id=body.author_id,
        author_name=body.author_name,
    )
    reports[report.report_id] = report
    logger.info("report created id=%s has_location=%s desc_len=%d", report.report_id, has_location, len(description))
    return JSONResponse(status_code=201, content=report_view(report), headers=NO_CACHE_HEADERS)


@app.get("/reports")
def list_reports(priority: Optional[str] = None, status: Optional[str] = None, sort: Optional[str] = None):
    """Newest first. priority filters by tier (1/2/3 or High/Medium/Low); sort=priority ranks by urgency."""
    items = list(reports.values())
    if status:
        try:
            wanted_status = parse_status(status)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        items = [r for r in items if r.status == wanted_status]
    if priority:
        try:
            items = filter_reports(items, priority)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    items = rank_reports(items) if sort == "priority" else newest_first(items)
    return JSONResponse(content={"reports": [report_view(r) for r in items], "total": len(items)}, headers=NO_CACHE_HEADERS)


@app.get("/reports/{report_id}")
def get_report(report_id: str):
    if report_id not in reports:
        raise HTTPException(status_code=404, detail="Report not found")
    return JSONResponse(content=report_view(reports[report_id]), headers=NO_CACHE_HEADERS)


@app.post("/reports/{report_id}/feedback")
def post_feedback(report_id: str, body: FeedbackRequest):
    """Citizen rating (1-5) with a comment; one per user per report."""
    if report_id not in reports:
        raise HTTPException(status_code=404, detail="Report not found")
    report = reports[report_id]
    try:
        fb = submit_feedback(report, body.user_id, body.rating, body.comment)
    except FeedbackError as e:
        logger.warning("feedback rejected report=%s user=%s: %s", report_id, body.user_id, e)
        return JSONResponse(status_code=400, content={"detail": str(e)}, headers=NO_CACHE_HEADERS)
    return JSONResponse(
        content={
            "msg": "Feedback submitted successfully",
            "report_id": report_id,
            "your_rating": fb.rating,
            "your_comment": fb.comment,
            "average_rating": report.avg_rating,
            "total_feedbacks": len(report.feedback),
        },
        headers=NO_CACHE_HEADERS,
    )


@app.get("/clusters")
def get_clusters(placeholder: Optional[bool] = None):
    """Cluster the Pending reports, newest first. placeholder=true returns the example cluster when none form."""
    snapshot = newest_first(r for r in reports.values() if r.status == ReportStatus.PENDING)
    clusters = build_clusters(snapshot, thresholds)
    use_placeholder = placeholder_default if placeholder is None else placeholder
    if use_placeholder and not clusters:
        logger.info("no clusters among %d pending reports; returning placeholder", len(snapshot))
        clusters = with_placeholder(clusters)
    return JSONResponse(
        content={
            "clusters": [c.to_dict() for c in clusters],
            "total_issues": sum(len(c.issues) for c in clusters),
            "pending_reports": len(snapshot),
        },
        headers=NO_CACHE_HEADERS,
    )


@app.post("/clusters/acknowledge")
def acknowledge_cluster(body: AcknowledgeRequest):
    """Create a ClusterAssignment for the reports and move them to the requested status."""
    missing = [rid for rid in body.issues if rid not in reports]
    if missing:
        raise HTTPException(status_code=404, detail=f"Reports not found: {', '.join(missing)}")
    try:
        target = parse_status(body.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    assignment = ClusterAssignment(
        assignment_id=new_assignment_id(),
        cluster_id=body.cluster_id,
        issues=list(body.issues),
        department=body.department,
        acknowledged_by=body.acknowledged_by,
        admin_comment=body.admin_comment,
        status=target,
    )
    members = [reports[rid] for rid in body.issues]
    try:
        acknowledge(assignment, members)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    assignments[assignment.assignment_id] = assignment
    logger.info("cluster %s acknowledged -> %s dept=%s issues=%d",
                body.cluster_id, assignment.assignment_id, body.department.value, len(members))
    return JSONResponse(
        content={
            "msg": "Cluster acknowledged and forwarded to department",
            "department": body.department.value,
            "updated_issues": len(members),
            "assignment_id": assignment.assignment_id,
        },
        headers=NO_CACHE_HEADERS,
    )


def _assignment_view(assignment: ClusterAssignment) -> dict:
    d = assignment.to_dict()
    members = [reports[rid] for rid in assignment.issues if rid in reports]
    d["issues"] = [report_view(r) for r in members]
    d["average_rating"] = assignment_rating(members)
    d["citizen_satisfaction_score"] = satisfaction_score(members)
    return d


@app.get("/cluster-assignments/{assignment_id}")
def get_assignment(assignment_id: str):
    if assignment_id not in assignments:
        raise HTTPException(status_code=404, detail="Cluster assignment not found")
    return JSONResponse(content=_assignment_view(assignments[assignment_id]), headers=NO_CACHE_HEADERS)


@app.patch("/cluster-assignments/{assignment_id}")
def update_assignment(assignment_id: str, body: AssignmentUpdateRequest):
    """Append a department update; status "Completed" resolves the assignment and its reports."""
    if assignment_id not in assignments:
        raise HTTPException(status_code=404, detail="Cluster assignment not found")
    assignment = assignments[assignment_id]
    members = [reports[rid] for rid in assignment.issues if rid in reports]
    try:
        record_update(assignment, members, body.status, body.comment)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return JSONResponse(content=_assignment_view(assignment), headers=NO_CACHE_HEADERS)


@app.get("/health")
def health():
    return JSONResponse(
        content={"status": "ok", "thresholds": thresholds.to_dict(), "placeholder": placeholder_default},
        headers=NO_CACHE_HEADERS,
    )
