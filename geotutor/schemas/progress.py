"""
Progress tracking schemas for GeoTutor.

Defines Pydantic models for student progress including:
- Per-module stage completion
- Quiz results and review schedules
- The persisted progress document

All models are frozen. Mutations build a new snapshot with ``model_copy``.
Field aliases are camelCase so the serialized document matches the stored layout.
"""

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Stage(str, Enum):
    LESSON = "lesson"
    DEMONSTRATION = "demonstration"
    QUIZ = "quiz"
    REVIEW = "review"


STAGE_ORDER = (Stage.LESSON, Stage.DEMONSTRATION, Stage.QUIZ, Stage.REVIEW)


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _parse_optional_timestamp(value: Any) -> Any:
    # Empty string is the stored form of "not set"
    if value == "":
        return None
    return value


def _to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    # Clocks are naive local time; "...Z" and other offsets are converted to match
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def _format_optional_timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else ""


class QuizResult(_Snapshot):
    score: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    completed_at: Optional[datetime]

    @field_validator("completed_at", mode="before")
    @classmethod
    def parse_completed_at(cls, value: Any) -> Any:
        return _parse_optional_timestamp(value)

    @field_validator("completed_at")
    @classmethod
    def normalize_completed_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _to_local_naive(value)

    @field_serializer("completed_at")
    def serialize_completed_at(self, value: Optional[datetime]) -> str:
        return _format_optional_timestamp(value)

    @property
    def percent(self) -> float:
        """Score as a percentage of the question count (0 when nothing was asked)."""
        if self.total_questions == 0:
            return 0.0
        return self.score / self.total_questions * 100


class ReviewSchedule(_Snapshot):
    next_review_date: Optional[datetime]
    review_count: int = Field(ge=0)

    @field_validator("next_review_date", mode="before")
    @classmethod
    def parse_next_review_date(cls, value: Any) -> Any:
        return _parse_optional_timestamp(value)

    @field_validator("next_review_date")
    @classmethod
    def normalize_next_review_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _to_local_naive(value)

    @field_serializer("next_review_date")
    def serialize_next_review_date(self, value: Optional[datetime]) -> str:
        return _format_optional_timestamp(value)


class ProgressRecord(_Snapshot):
    """Progress for a single module. Every field is required in the stored form."""
    lesson_completed: bool
    demo_completed: bool
    quiz_result: QuizResult
    review_schedule: ReviewSchedule

    @classmethod
    def empty(cls) -> "ProgressRecord":
        return cls(
            lesson_completed=False,
            demo_completed=False,
            quiz_result=QuizResult(score=0, total_questions=0, completed_at=None),
            review_schedule=ReviewSchedule(next_review_date=None, review_count=0),
        )


class ProgressState(_Snapshot):
    """
    Full progress state: one record per catalog module plus the cached
    overall percentage.

    ``overall_progress`` is the last computed value, never ground truth.
    ``modules`` is a read-only mapping; use ``with_record`` to change it.
    """
    modules: Mapping[str, ProgressRecord]
    overall_progress: int = Field(ge=0, le=100)

    @model_validator(mode="before")
    @classmethod
    def accept_flat_layout(cls, data: Any) -> Any:
        """
        Accept documents that keep module records at the top level.

        Older documents store each module id next to ``overallProgress``
        instead of under a ``modules`` key.
        """
        if isinstance(data, dict) and "modules" not in data and "overallProgress" in data:
            return {
                "modules": {key: value for key, value in data.items() if key != "overallProgress"},
                "overallProgress": data["overallProgress"],
            }
        return data

    @field_validator("modules")
    @classmethod
    def freeze_modules(cls, value: Mapping[str, ProgressRecord]) -> Mapping[str, ProgressRecord]:
        return MappingProxyType(dict(value))

    @field_serializer("modules", mode="wrap")
    def serialize_modules(self, value: Mapping[str, ProgressRecord], handler):
        return handler(dict(value))

    @classmethod
    def fresh(cls, module_ids: list[str]) -> "ProgressState":
        """Freshly initialized state with an empty record for every module id."""
        return cls(
            modules={module_id: ProgressRecord.empty() for module_id in module_ids},
            overall_progress=0,
        )

    def record(self, module_id: str) -> ProgressRecord:
        return self.modules[module_id]

    def with_record(self, module_id: str, record: ProgressRecord) -> "ProgressState":
        """Return a new snapshot with one module's record replaced."""
        modules = dict(self.modules)
        modules[module_id] = record
        # model_copy skips validation, so freeze here as well
        return self.model_copy(update={"modules": MappingProxyType(modules)})

    def with_overall_progress(self, value: int) -> "ProgressState":
        return self.model_copy(update={"overall_progress": value})

    def to_document(self) -> str:
        """Serialize to the persisted JSON document."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_document(cls, document: str) -> "ProgressState":
        """Parse a persisted JSON document. Raises ``pydantic.ValidationError``."""
        return cls.model_validate_json(document)
