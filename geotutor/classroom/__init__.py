"""
GeoTutor Classroom - Runtime components for progress, gating and review scheduling.

This module provides:
- ModuleCatalog: Read-only module catalog
- ProgressStore: Track student progress (single writer)
- Gating: Stage ordering rules and recommendations
- Scheduling: Spaced-repetition review dates
- Aggregation: Completion percentages
- Persistence ports: In-memory, JSON file, SQLite
"""

from .errors import (
    ProgressError,
    InvalidArgument,
    CorruptPersistedState,
    MissingCatalogEntry,
    CatalogError,
)

from .catalog import (
    ModuleCatalog,
    DEFAULT_CATALOG_PATH,
)

from .scheduling import (
    FOLLOW_UP_INTERVALS,
    MAX_INTERVAL_DAYS,
    next_interval_days,
    add_calendar_days,
    next_review_date,
)

from .gating import (
    StageAvailability,
    quiz_attempted,
    review_due,
    can_access_demo,
    can_access_quiz,
    can_access_review,
    recommended_next_stage,
    stage_availability,
    is_module_complete,
    recommended_module,
    due_reviews,
)

from .aggregator import (
    completed_components,
    overall_progress,
    module_progress,
    quiz_strengths,
    quiz_weaknesses,
)

from .persistence import (
    PersistencePort,
    InMemoryPersistence,
    JsonFilePersistence,
    SqlitePersistence,
)

from .store import (
    ProgressStore,
    encode_state,
    decode_state,
)

__all__ = [
    # Errors
    "ProgressError",
    "InvalidArgument",
    "CorruptPersistedState",
    "MissingCatalogEntry",
    "CatalogError",
    # Catalog
    "ModuleCatalog",
    "DEFAULT_CATALOG_PATH",
    # Scheduling
    "FOLLOW_UP_INTERVALS",
    "MAX_INTERVAL_DAYS",
    "next_interval_days",
    "add_calendar_days",
    "next_review_date",
    # Gating
    "StageAvailability",
    "quiz_attempted",
    "review_due",
    "can_access_demo",
    "can_access_quiz",
    "can_access_review",
    "recommended_next_stage",
    "stage_availability",
    "is_module_complete",
    "recommended_module",
    "due_reviews",
    # Aggregation
    "completed_components",
    "overall_progress",
    "module_progress",
    "quiz_strengths",
    "quiz_weaknesses",
    # Persistence
    "PersistencePort",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "SqlitePersistence",
    # Store
    "ProgressStore",
    "encode_state",
    "decode_state",
]
