"""
ProgressStore - The single writer of student progress.

Stores per-module progress as one document behind a persistence port:
- Lesson and demonstration completion
- Quiz results
- Review schedules (spaced repetition)
- Cached overall progress

Every mutation builds a new frozen snapshot, persists it, and only then makes
it current, so a failed save leaves the previous state in place.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from pydantic import ValidationError

from geotutor.schemas import ModuleRecord, ProgressRecord, ProgressState, QuizResult, ReviewSchedule

from .aggregator import overall_progress
from .catalog import ModuleCatalog
from .errors import CorruptPersistedState, InvalidArgument, MissingCatalogEntry
from .persistence import PersistencePort
from .scheduling import add_calendar_days, next_interval_days


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def encode_state(state: ProgressState) -> str:
    """Serialize a progress snapshot to the persisted JSON document."""
    return state.to_document()


def decode_state(document: str, catalog: ModuleCatalog) -> ProgressState:
    """
    Parse a persisted document and align it with the catalog.

    Catalog modules missing from the document get fresh records; records for
    ids the catalog no longer knows are dropped. The cached overall progress
    is recomputed.

    Raises:
        CorruptPersistedState: If the document is not valid JSON or lacks expected fields
    """
    try:
        stored = ProgressState.from_document(document)
    except ValidationError as e:
        raise CorruptPersistedState(str(e)) from e

    modules = {}
    for module_id in catalog.module_ids:
        modules[module_id] = stored.modules.get(module_id) or ProgressRecord.empty()

    dropped = set(stored.modules) - set(modules)
    if dropped:
        logger.info(f"Dropping progress for modules not in catalog: {sorted(dropped)}")

    state = ProgressState(modules=modules, overall_progress=0)
    return state.with_overall_progress(overall_progress(state))


class ProgressStore:
    """
    Track student progress through lesson, demonstration, quiz and review.

    Gating is not enforced here; callers check the gating predicates before
    invoking a mutation. Mutations are serialized by a lock.
    """

    def __init__(
        self,
        catalog: ModuleCatalog,
        persistence: PersistencePort,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the store and load saved progress.

        Args:
            catalog: Module catalog (authority on module ids)
            persistence: Port holding the progress document
            clock: Returns the current time (default: datetime.now)
        """
        self.catalog = catalog
        self.persistence = persistence
        self.clock = clock or datetime.now
        self._lock = threading.RLock()
        self._state = self._load()

    def _fresh_state(self) -> ProgressState:
        return ProgressState.fresh(self.catalog.module_ids)

    def _load(self) -> ProgressState:
        document = self.persistence.load()
        if document is None:
            logger.info("No saved progress found, starting fresh")
            return self._fresh_state()
        try:
            return decode_state(document, self.catalog)
        except CorruptPersistedState as e:
            logger.warning(f"Saved progress is unreadable, starting fresh: {e}")
            return self._fresh_state()

    def _require_module(self, module_id: str) -> ModuleRecord:
        try:
            return self.catalog.require(module_id)
        except MissingCatalogEntry as e:
            raise InvalidArgument(str(e)) from e

    def _commit(self, state: ProgressState, recompute: bool = False):
        if recompute:
            state = state.with_overall_progress(overall_progress(state))
        self.persistence.save(encode_state(state))
        self._state = state

    # -------------------------------------------------------------------------
    # Transitions (pure: snapshot in, snapshot out)
    # -------------------------------------------------------------------------

    def _with_quiz_result(self, state: ProgressState, module_id: str, score: int, total_questions: int) -> ProgressState:
        result = QuizResult(score=score, total_questions=total_questions, completed_at=self.clock())
        record = state.record(module_id).model_copy(update={"quiz_result": result})
        return state.with_record(module_id, record)

    def _with_initial_review(self, state: ProgressState, module: ModuleRecord) -> ProgressState:
        record = state.record(module.id)
        schedule = ReviewSchedule(
            next_review_date=add_calendar_days(self.clock(), module.review_interval),
            review_count=record.review_schedule.review_count + 1,
        )
        return state.with_record(module.id, record.model_copy(update={"review_schedule": schedule}))

    # -------------------------------------------------------------------------
    # Stage Completion
    # -------------------------------------------------------------------------

    def complete_lesson(self, module_id: str):
        """Mark a module's lesson as completed."""
        with self._lock:
            self._require_module(module_id)
            record = self._state.record(module_id).model_copy(update={"lesson_completed": True})
            self._commit(self._state.with_record(module_id, record), recompute=True)
            logger.debug(f"Lesson completed: {module_id}")

    def complete_demonstration(self, module_id: str):
        """Mark a module's demonstration as completed."""
        with self._lock:
            self._require_module(module_id)
            record = self._state.record(module_id).model_copy(update={"demo_completed": True})
            self._commit(self._state.with_record(module_id, record), recompute=True)
            logger.debug(f"Demonstration completed: {module_id}")

    def save_quiz_result(self, module_id: str, score: int, total_questions: int):
        """
        Record a quiz result, replacing any previous attempt.

        Raises:
            InvalidArgument: Unknown module, non-integer values, or score outside 0..total_questions
        """
        with self._lock:
            self._require_module(module_id)
            _validate_quiz_result(score, total_questions)
            self._commit(
                self._with_quiz_result(self._state, module_id, score, total_questions),
                recompute=True,
            )
            logger.debug(f"Quiz result saved: {module_id} {score}/{total_questions}")

    # -------------------------------------------------------------------------
    # Review Scheduling
    # -------------------------------------------------------------------------

    def schedule_review(self, module_id: str):
        """
        Schedule the first review after the catalog's base interval.

        An id missing from the catalog is ignored.
        """
        with self._lock:
            module = self.catalog.get_module_by_id(module_id)
            if module is None:
                logger.warning(f"Cannot schedule review, module not in catalog: {module_id}")
                return
            self._commit(self._with_initial_review(self._state, module))
            logger.debug(f"Review scheduled: {module_id}")

    def complete_review(self, module_id: str):
        """Finish a review session and schedule the next one at a longer interval."""
        with self._lock:
            module = self._require_module(module_id)
            record = self._state.record(module_id)
            review_count = record.review_schedule.review_count
            interval = next_interval_days(review_count, module.review_interval)
            schedule = ReviewSchedule(
                next_review_date=add_calendar_days(self.clock(), interval),
                review_count=review_count + 1,
            )
            record = record.model_copy(update={"review_schedule": schedule})
            self._commit(self._state.with_record(module_id, record))
            logger.debug(f"Review completed: {module_id}, next in {interval} days")

    def record_quiz_completion(self, module_id: str, score: int, total_questions: int):
        """Save a quiz result and schedule the first review, persisted together."""
        with self._lock:
            module = self._require_module(module_id)
            _validate_quiz_result(score, total_questions)
            state = self._with_quiz_result(self._state, module_id, score, total_questions)
            state = self._with_initial_review(state, module)
            self._commit(state, recompute=True)
            logger.debug(f"Quiz completed: {module_id} {score}/{total_questions}")

    # -------------------------------------------------------------------------
    # State Access
    # -------------------------------------------------------------------------

    def reset_progress(self):
        """Replace all progress with fresh records for every catalog module."""
        with self._lock:
            self._commit(self._fresh_state())
            logger.info("Progress reset")

    def get_state(self) -> ProgressState:
        """Get the current immutable progress snapshot."""
        return self._state

    def get_record(self, module_id: str) -> ProgressRecord:
        """Get the progress record for one module."""
        self._require_module(module_id)
        return self._state.record(module_id)


def _validate_quiz_result(score: int, total_questions: int):
    for name, value in (("score", score), ("total_questions", total_questions)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if not 0 <= score <= total_questions:
        raise InvalidArgument(
            f"score must be between 0 and total_questions ({total_questions}), got {score}"
        )
