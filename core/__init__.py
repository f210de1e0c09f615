"""Core report models, clustering configuration and status workflow."""

from core.models import Report, ReportStatus, Cluster, ClusterAssignment, Department, PriorityTier
from core.config import ClusterThresholds, ConfigError, DEFAULT_THRESHOLDS, load_thresholds
from core.workflow import InvalidStatusTransition, transition

__all__ = [
    "Report",
    "ReportStatus",
    "Cluster",
    "ClusterAssignment",
    "Department",
    "PriorityTier",
    "ClusterThresholds",
    "ConfigError",
    "DEFAULT_THRESHOLDS",
    "load_thresholds",
    "InvalidStatusTransition",
    "transition",
]
