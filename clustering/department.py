"""Recommend the municipal department for a report description by keyword counting."""

from types import MappingProxyType

from core.models import Department

# Table order is the tie-break order.
DEFAULT_DEPARTMENT_KEYWORDS = MappingProxyType({
    Department.ROADS: ("road", "pothole", "street", "footpath", "traffic", "bridge", "construction"),
    Department.WATER: ("water", "pipe", "leak", "drainage", "sewage", "flood"),
    Department.WASTE: ("garbage", "waste", "trash", "dump", "cleaning", "sanitation"),
    Department.ELECTRICITY: ("light", "electricity", "power", "streetlight", "electric", "wire"),
    Department.PARKS: ("park", "garden", "tree", "playground", "grass", "recreation"),
})

DEFAULT_DEPARTMENT = Department.ROADS


def keyword_matches(description: str | None, keywords=DEFAULT_DEPARTMENT_KEYWORDS) -> dict:
    """Number of each department's keywords found as substrings of the description."""
    text = (description or "").lower()
    return {dept: sum(1 for kw in words if kw in text) for dept, words in keywords.items()}


def recommend(description: str | None, keywords=DEFAULT_DEPARTMENT_KEYWORDS, default: Department = DEFAULT_DEPARTMENT) -> Department:
    """Department with the most keyword hits; earlier departments win ties, no hits -> default."""
    best = default
    best_count = 0
    for dept, count in keyword_matches(description, keywords).items():
        if count > best_count:
            best, best_count = dept, count
    return best
