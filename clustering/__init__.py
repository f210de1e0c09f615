"""Clustering: word overlap + haversine distance + time window -> report clusters, plus routing and priority."""

from clustering.text_similarity import similarity, tokenize
from clustering.geo_distance import distance, haversine_m
from clustering.time_window import hours_between
from clustering.department import recommend, DEFAULT_DEPARTMENT_KEYWORDS
from clustering.priority import score, label, rank_reports, filter_reports, DEFAULT_PRIORITY_KEYWORDS
from clustering.builder import build_clusters, is_match
from clustering.placeholder import with_placeholder, placeholder_cluster

__all__ = [
    "similarity",
    "tokenize",
    "distance",
    "haversine_m",
    "hours_between",
    "recommend",
    "DEFAULT_DEPARTMENT_KEYWORDS",
    "score",
    "label",
    "rank_reports",
    "filter_reports",
    "DEFAULT_PRIORITY_KEYWORDS",
    "build_clusters",
    "is_match",
    "with_placeholder",
    "placeholder_cluster",
]
