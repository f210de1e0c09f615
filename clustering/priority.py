"""
Coarse urgency tier for a report: 1 = High, 2 = Medium, 3 = Low.

Matching is on whole tokens, unlike department routing which matches substrings.
"""

from datetime import datetime, timezone
from types import MappingProxyType

from clustering.text_similarity import tokenize
from core.models import PriorityTier, utc

DEFAULT_PRIORITY_KEYWORDS = MappingProxyType({
    PriorityTier.HIGH: frozenset({
        "accident", "blocked", "blocking", "collapse", "collapsed", "danger", "dangerous",
        "electrocution", "emergency", "explosion", "fallen", "fire", "flood", "flooding",
        "injured", "injury", "sparking", "tree", "urgent",
    }),
    PriorityTier.MEDIUM: frozenset({
        "broken", "damaged", "drainage", "garbage", "leak", "leaking", "overflow", "overflowing",
        "pipe", "pothole", "potholes", "sewage", "smell", "streetlight", "trash", "waste",
    }),
})

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def score(description: str | None, keywords=DEFAULT_PRIORITY_KEYWORDS) -> PriorityTier:
    tokens = set(tokenize(description))
    if tokens & keywords.get(PriorityTier.HIGH, frozenset()):
        return PriorityTier.HIGH
    if tokens & keywords.get(PriorityTier.MEDIUM, frozenset()):
        return PriorityTier.MEDIUM
    return PriorityTier.LOW


def label(tier) -> str:
    return PriorityTier(tier).label


def parse_tier(value) -> PriorityTier:
    """1/2/3 or a label ("high", "Medium", ...)."""
    if isinstance(value, PriorityTier):
        return value
    text = str(value).strip()
    if text.isdigit():
        try:
            return PriorityTier(int(text))
        except ValueError:
            raise ValueError(f"unknown priority {value!r}") from None
    try:
        return PriorityTier[text.upper()]
    except KeyError:
        raise ValueError(f"unknown priority {value!r}") from None


def newest_first(reports) -> list:
    """By creation time, newest first; reports without a timestamp go last."""
    return sorted(reports, key=lambda r: utc(r.created_at) if r.created_at else _EPOCH, reverse=True)


def rank_reports(reports, keywords=DEFAULT_PRIORITY_KEYWORDS) -> list:
    """Most urgent first; newest first within a tier."""
    return sorted(newest_first(reports), key=lambda r: score(r.description, keywords))


def filter_reports(reports, tier, keywords=DEFAULT_PRIORITY_KEYWORDS) -> list:
    wanted = parse_tier(tier)
    return [r for r in reports if score(r.description, keywords) == wanted]
