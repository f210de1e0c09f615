"""
Group open reports into clusters of near-duplicates and attach a recommended department.

Greedy single pass over the snapshot, O(n^2) pairs:
- reports are visited in input order (callers pass Pending reports, newest first);
- each unclaimed report P collects every other unclaimed Q with
  description similarity > min_similarity, distance < max_distance_m and time gap < max_hours;
- a Q is claimed as soon as it joins and is never reconsidered for a better fit;
- clusters of one are dropped, so a report with no match is not surfaced at all.

The first-come ordering decides each cluster's representative, which downstream
routing relies on; it is not a connected-components clustering.
"""

import logging

from clustering.department import DEFAULT_DEPARTMENT_KEYWORDS, recommend
from clustering.geo_distance import distance
from clustering.text_similarity import similarity
from clustering.time_window import hours_between
from core.config import DEFAULT_THRESHOLDS, ClusterThresholds
from core.models import Cluster, Report

logger = logging.getLogger("civic_api.clustering.builder")


def is_match(p: Report, q: Report, thresholds: ClusterThresholds = DEFAULT_THRESHOLDS) -> bool:
    desc_sim = similarity(p.description, q.description)
    if desc_sim <= thresholds.min_similarity:
        return False
    dist = distance(p.location, q.location)
    if dist >= thresholds.max_distance_m:
        return False
    hours = hours_between(p.created_at, q.created_at)
    if hours >= thresholds.max_hours:
        return False
    logger.debug("match %s ~ %s sim=%.3f dist=%.1fm hours=%.2f", p.report_id, q.report_id, desc_sim, dist, hours)
    return True


def build_clusters(
    reports,
    thresholds: ClusterThresholds = DEFAULT_THRESHOLDS,
    department_keywords=DEFAULT_DEPARTMENT_KEYWORDS,
) -> list[Cluster]:
    """Clusters of two or more reports; each report lands in at most one cluster."""
    reports = list(reports)
    processed: set[str] = set()
    clusters: list[Cluster] = []

    for p in reports:
        if p.report_id in processed:
            continue
        issues = [p]
        for q in reports:
            if q.report_id == p.report_id or q.report_id in processed:
                continue
            if is_match(p, q, thresholds):
                issues.append(q)
                processed.add(q.report_id)
        if len(issues) > 1:
            processed.add(p.report_id)
            clusters.append(Cluster(issues=issues, recommended_department=recommend(p.description, department_keywords)))

    logger.info(
        "clustered %d reports into %d clusters (%d reports grouped)",
        len(reports), len(clusters), sum(len(c.issues) for c in clusters),
    )
    return clusters
