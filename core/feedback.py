"""Citizen feedback on reports: one rating per user per report, averaged per report and per assignment."""

import logging
from typing import Optional

from core.models import Feedback, Report, average_rating

logger = logging.getLogger("civic_api.feedback")

MIN_RATING = 1
MAX_RATING = 5
MIN_COMMENT_LENGTH = 5


class FeedbackError(ValueError):
    """Rejected feedback submission."""


def submit_feedback(report: Report, user_id: str, rating: int, comment: Optional[str]) -> Feedback:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        raise FeedbackError(f"Rating is required and must be between {MIN_RATING} and {MAX_RATING}")
    text = (comment or "").strip()
    if len(text) < MIN_COMMENT_LENGTH:
        raise FeedbackError(f"Comment is required and must be at least {MIN_COMMENT_LENGTH} characters long")
    if any(f.user_id == user_id for f in report.feedback):
        raise FeedbackError("You have already submitted feedback for this report")
    fb = Feedback(user_id=user_id, rating=rating, comment=text)
    report.feedback.append(fb)
    logger.info("feedback on %s rating=%d avg=%s total=%d", report.report_id, rating, report.avg_rating, len(report.feedback))
    return fb


def assignment_rating(reports) -> Optional[float]:
    """Average over all feedback left on the assignment's reports."""
    return average_rating([f for r in reports for f in r.feedback])


def satisfaction_score(reports) -> Optional[float]:
    """Average rating mapped onto 0 - 10."""
    avg = assignment_rating(reports)
    if avg is None:
        return None
    return round(avg / MAX_RATING * 10, 1)
