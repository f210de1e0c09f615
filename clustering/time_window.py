"""Time gap between two report creation timestamps, in hours."""

import logging
import math
from datetime import datetime

from core.models import utc

logger = logging.getLogger("civic_api.clustering.time_window")


def parse_timestamp(ts) -> datetime | None:
    """Accept a datetime or an ISO string (with or without Z). Naive values are UTC."""
    if ts is None or ts == "":
        return None
    if isinstance(ts, datetime):
        return utc(ts)
    try:
        s = str(ts).strip().replace("Z", "+00:00")
        return utc(datetime.fromisoformat(s))
    except ValueError:
        logger.debug("unparseable timestamp %r", ts)
        return None


def hours_between(t1, t2) -> float:
    """Absolute difference in hours; +inf when either timestamp is unknown."""
    d1 = parse_timestamp(t1)
    d2 = parse_timestamp(t2)
    if d1 is None or d2 is None:
        return math.inf
    return abs((d1 - d2).total_seconds()) / 3600
