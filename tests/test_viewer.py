"""Tests for dashboard HTML rendering."""

from datetime import datetime

from geotutor.schemas import ModuleRecord, ProgressRecord, QuizResult, ReviewSchedule, Stage
from geotutor.viewer import (
    get_dashboard_css,
    render_module_card,
    render_progress_bar,
    render_quiz_score,
    render_review_badge,
    render_stage_indicator,
)


NOW = datetime(2026, 3, 10, 12, 0)


def scheduled_record(next_review, review_count=1):
    return ProgressRecord(
        lesson_completed=True,
        demo_completed=True,
        quiz_result=QuizResult(score=2, total_questions=3, completed_at=None),
        review_schedule=ReviewSchedule(next_review_date=next_review, review_count=review_count),
    )


class TestProgressBar:

    def test_default_label(self):
        html = render_progress_bar(42)
        assert "Overall Progress: 42% complete" in html
        assert "width: 42%" in html

    def test_clamped(self):
        assert "width: 100%" in render_progress_bar(150)
        assert "width: 0%" in render_progress_bar(-5)

    def test_label_escaped(self):
        assert "&lt;b&gt;" in render_progress_bar(10, label="<b>")


class TestStageIndicators:

    def test_locked_demo(self):
        html = render_stage_indicator(ProgressRecord.empty(), Stage.DEMONSTRATION, NOW)
        assert 'class="stage-locked"' in html
        assert "◌ Demonstration" in html

    def test_completed_lesson(self):
        record = ProgressRecord.empty().model_copy(update={"lesson_completed": True})
        assert "✓ Lesson" in render_stage_indicator(record, Stage.LESSON, NOW)


class TestReviewBadge:

    def test_not_scheduled(self):
        assert render_review_badge(ProgressRecord.empty(), NOW) == ""

    def test_due(self):
        assert "Review #1 due" in render_review_badge(scheduled_record(datetime(2026, 3, 9)), NOW)

    def test_upcoming(self):
        assert "Next review Mar 13" in render_review_badge(scheduled_record(datetime(2026, 3, 13)), NOW)


class TestModuleCard:

    def test_card_contents(self):
        module = ModuleRecord(
            id="angles", title="Angles & Lines", description="Types of angles",
            order=2, review_interval=3,
        )
        html = render_module_card(module, scheduled_record(datetime(2026, 3, 9)), NOW)
        assert "Angles &amp; Lines" in html
        assert "Types of angles" in html
        assert "100% complete" in html
        assert html.count('<span class="stage-') == 4
        assert "Review #1 due" in html

    def test_css_and_score(self):
        assert "<style>" in get_dashboard_css()
        assert "2/3" in render_quiz_score(2, 3)
