"""Tests for citizen feedback: validation, one-per-user, averages."""

import pytest

from core.feedback import FeedbackError, assignment_rating, satisfaction_score, submit_feedback
from core.models import Report


@pytest.fixture
def report():
    return Report(report_id="r1", description="pothole on main road")


class TestSubmitFeedback:
    def test_accepts_and_trims_comment(self, report):
        fb = submit_feedback(report, "u1", 4, "  patched well  ")
        assert fb.comment == "patched well"
        assert report.feedback == [fb]
        assert report.avg_rating == 4.0

    @pytest.mark.parametrize("rating", [0, 6, -1, True, "5", None])
    def test_rating_out_of_range(self, report, rating):
        with pytest.raises(FeedbackError):
            submit_feedback(report, "u1", rating, "patched well")
        assert report.feedback == []

    @pytest.mark.parametrize("comment", [None, "", "ok", "    abcd   "])
    def test_comment_too_short(self, report, comment):
        with pytest.raises(FeedbackError):
            submit_feedback(report, "u1", 3, comment)

    def test_one_per_user(self, report):
        submit_feedback(report, "u1", 5, "great job")
        with pytest.raises(FeedbackError):
            submit_feedback(report, "u1", 1, "actually bad")
        submit_feedback(report, "u2", 2, "took a while")
        assert report.avg_rating == 3.5

    def test_feedback_error_is_value_error(self, report):
        with pytest.raises(ValueError):
            submit_feedback(report, "u1", 9, "great job")


class TestAssignmentRating:
    def test_no_feedback(self):
        reports = [Report(report_id="a"), Report(report_id="b")]
        assert assignment_rating(reports) is None
        assert satisfaction_score(reports) is None
        assert reports[0].avg_rating is None

    def test_averages_across_reports(self):
        a, b = Report(report_id="a"), Report(report_id="b")
        submit_feedback(a, "u1", 5, "great job")
        submit_feedback(a, "u2", 4, "good work")
        submit_feedback(b, "u3", 3, "it was fine")
        assert assignment_rating([a, b]) == 4.0
        assert satisfaction_score([a, b]) == 8.0
