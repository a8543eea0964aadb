"""
Gating - Stage ordering rules and navigation helpers.

Provides:
- Access predicates for demonstration, quiz and review stages
- Recommended next stage within a module
- Recommended module and due reviews across the catalog
- Stage availability for UI display

Everything here is a pure function of a progress snapshot, safe to call on
every Streamlit rerun.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from geotutor.schemas import ProgressRecord, ProgressState, ReviewSchedule, Stage, ModuleRecord

from .catalog import ModuleCatalog


class StageAvailability(str, Enum):
    """Stage availability status for UI display."""
    LOCKED = "locked"           # Earlier stage not done (or review not due)
    AVAILABLE = "available"     # Can be taken now
    COMPLETED = "completed"     # Done and not currently due


def quiz_attempted(record: ProgressRecord) -> bool:
    # A zero score reads as "not attempted"
    return record.quiz_result.score > 0


def review_due(schedule: ReviewSchedule, now: datetime) -> bool:
    return schedule.next_review_date is not None and schedule.next_review_date <= now


def can_access_demo(record: ProgressRecord) -> bool:
    return record.lesson_completed


def can_access_quiz(record: ProgressRecord) -> bool:
    return record.demo_completed


def can_access_review(record: ProgressRecord, now: datetime) -> bool:
    return quiz_attempted(record) and review_due(record.review_schedule, now)


def recommended_next_stage(record: ProgressRecord) -> Stage:
    """
    First stage of the module that is not yet satisfied.

    A module with lesson, demonstration and quiz done stays in review rotation,
    so REVIEW is returned both when a review is pending and when everything is done.
    """
    if not record.lesson_completed:
        return Stage.LESSON
    if not record.demo_completed:
        return Stage.DEMONSTRATION
    if not quiz_attempted(record):
        return Stage.QUIZ
    return Stage.REVIEW


def stage_availability(record: ProgressRecord, stage: Stage, now: datetime) -> StageAvailability:
    """
    Availability of one stage for sidebar display.

    Returns:
        LOCKED, AVAILABLE or COMPLETED
    """
    if stage == Stage.LESSON:
        return StageAvailability.COMPLETED if record.lesson_completed else StageAvailability.AVAILABLE

    if stage == Stage.DEMONSTRATION:
        if record.demo_completed:
            return StageAvailability.COMPLETED
        return StageAvailability.AVAILABLE if can_access_demo(record) else StageAvailability.LOCKED

    if stage == Stage.QUIZ:
        if quiz_attempted(record):
            return StageAvailability.COMPLETED
        return StageAvailability.AVAILABLE if can_access_quiz(record) else StageAvailability.LOCKED

    if can_access_review(record, now):
        return StageAvailability.AVAILABLE
    # Reviewed at least once past the initial scheduling and waiting for the next one
    if record.review_schedule.review_count > 1:
        return StageAvailability.COMPLETED
    return StageAvailability.LOCKED


def is_module_complete(record: ProgressRecord) -> bool:
    """Lesson, demonstration and quiz all done."""
    return record.lesson_completed and record.demo_completed and quiz_attempted(record)


def recommended_module(catalog: ModuleCatalog, state: ProgressState) -> Optional[ModuleRecord]:
    """
    Get the module to continue with.

    Priority:
    1. First module in catalog order that is not complete
    2. First module (everything complete)

    Returns None only for an empty catalog.
    """
    modules = catalog.get_ordered_modules()
    for module in modules:
        record = state.modules.get(module.id)
        if record is None or not is_module_complete(record):
            return module
    return modules[0] if modules else None


def due_reviews(state: ProgressState, now: datetime) -> list[str]:
    """Ids of modules whose scheduled review date has passed."""
    return [
        module_id for module_id, record in state.modules.items()
        if review_due(record.review_schedule, now)
    ]
