"""Tests for stage gating and recommendations."""

from datetime import datetime

from geotutor.classroom import (
    ModuleCatalog,
    StageAvailability,
    can_access_demo,
    can_access_quiz,
    can_access_review,
    due_reviews,
    is_module_complete,
    quiz_attempted,
    recommended_module,
    recommended_next_stage,
    review_due,
    stage_availability,
)
from geotutor.schemas import ProgressRecord, ProgressState, QuizResult, ReviewSchedule, Stage


NOW = datetime(2026, 3, 10, 12, 0)


def make_record(lesson=False, demo=False, score=0, total=0, next_review=None, review_count=0):
    return ProgressRecord(
        lesson_completed=lesson,
        demo_completed=demo,
        quiz_result=QuizResult(score=score, total_questions=total, completed_at=None),
        review_schedule=ReviewSchedule(next_review_date=next_review, review_count=review_count),
    )


class TestAccessPredicates:

    def test_demo_requires_lesson(self):
        assert not can_access_demo(make_record())
        assert can_access_demo(make_record(lesson=True))

    def test_quiz_requires_demo(self):
        assert not can_access_quiz(make_record(lesson=True))
        assert can_access_quiz(make_record(lesson=True, demo=True))

    def test_quiz_attempted_uses_score(self):
        assert quiz_attempted(make_record(score=1, total=3))
        # An all-wrong attempt reads as not attempted
        assert not quiz_attempted(make_record(score=0, total=3))

    def test_review_due(self):
        assert not review_due(ReviewSchedule(next_review_date=None, review_count=0), NOW)
        assert review_due(ReviewSchedule(next_review_date=NOW, review_count=1), NOW)
        assert review_due(ReviewSchedule(next_review_date=datetime(2026, 3, 9), review_count=1), NOW)
        assert not review_due(ReviewSchedule(next_review_date=datetime(2026, 3, 11), review_count=1), NOW)

    def test_review_requires_quiz_and_due_date(self):
        past = datetime(2026, 3, 1)
        assert can_access_review(make_record(score=2, total=3, next_review=past, review_count=1), NOW)
        assert not can_access_review(make_record(score=0, total=3, next_review=past, review_count=1), NOW)
        assert not can_access_review(make_record(score=2, total=3), NOW)
        assert not can_access_review(
            make_record(score=2, total=3, next_review=datetime(2026, 4, 1), review_count=1), NOW
        )


class TestRecommendedStage:

    def test_priority_order(self):
        assert recommended_next_stage(make_record()) == Stage.LESSON
        assert recommended_next_stage(make_record(lesson=True)) == Stage.DEMONSTRATION
        assert recommended_next_stage(make_record(lesson=True, demo=True)) == Stage.QUIZ
        assert recommended_next_stage(make_record(lesson=True, demo=True, score=3, total=3)) == Stage.REVIEW

    def test_lesson_first_even_if_later_stages_done(self):
        assert recommended_next_stage(make_record(demo=True, score=3, total=3)) == Stage.LESSON

    def test_steady_state_is_review(self):
        record = make_record(lesson=True, demo=True, score=3, total=3, next_review=datetime(2026, 5, 1), review_count=4)
        assert recommended_next_stage(record) == Stage.REVIEW
        assert is_module_complete(record)


class TestStageAvailability:

    def test_fresh_record(self):
        record = make_record()
        assert stage_availability(record, Stage.LESSON, NOW) == StageAvailability.AVAILABLE
        assert stage_availability(record, Stage.DEMONSTRATION, NOW) == StageAvailability.LOCKED
        assert stage_availability(record, Stage.QUIZ, NOW) == StageAvailability.LOCKED
        assert stage_availability(record, Stage.REVIEW, NOW) == StageAvailability.LOCKED

    def test_after_demo(self):
        record = make_record(lesson=True, demo=True)
        assert stage_availability(record, Stage.LESSON, NOW) == StageAvailability.COMPLETED
        assert stage_availability(record, Stage.DEMONSTRATION, NOW) == StageAvailability.COMPLETED
        assert stage_availability(record, Stage.QUIZ, NOW) == StageAvailability.AVAILABLE

    def test_review_due(self):
        record = make_record(lesson=True, demo=True, score=2, total=3, next_review=datetime(2026, 3, 9), review_count=1)
        assert stage_availability(record, Stage.QUIZ, NOW) == StageAvailability.COMPLETED
        assert stage_availability(record, Stage.REVIEW, NOW) == StageAvailability.AVAILABLE

    def test_review_waiting(self):
        waiting_first = make_record(lesson=True, demo=True, score=2, total=3, next_review=datetime(2026, 3, 13), review_count=1)
        assert stage_availability(waiting_first, Stage.REVIEW, NOW) == StageAvailability.LOCKED

        reviewed = make_record(lesson=True, demo=True, score=2, total=3, next_review=datetime(2026, 3, 15), review_count=2)
        assert stage_availability(reviewed, Stage.REVIEW, NOW) == StageAvailability.COMPLETED


class TestCatalogRecommendations:

    def test_recommended_module_first_incomplete(self, catalog):
        state = ProgressState.fresh(catalog.module_ids)
        assert recommended_module(catalog, state).id == "basic-shapes"

        done = make_record(lesson=True, demo=True, score=1, total=2)
        state = state.with_record("basic-shapes", done)
        assert recommended_module(catalog, state).id == "angles"

    def test_recommended_module_all_complete(self, catalog):
        done = make_record(lesson=True, demo=True, score=1, total=2)
        state = ProgressState(modules={mid: done for mid in catalog.module_ids}, overall_progress=100)
        assert recommended_module(catalog, state).id == "basic-shapes"

    def test_recommended_module_empty_catalog(self):
        assert recommended_module(ModuleCatalog([]), ProgressState.fresh([])) is None

    def test_due_reviews(self, catalog):
        state = ProgressState.fresh(catalog.module_ids)
        state = state.with_record("angles", make_record(score=1, total=1, next_review=datetime(2026, 3, 10, 11), review_count=1))
        state = state.with_record("transformations", make_record(score=1, total=1, next_review=datetime(2026, 3, 11), review_count=1))
        assert due_reviews(state, NOW) == ["angles"]
