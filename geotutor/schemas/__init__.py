"""
GeoTutor Schemas - Pydantic models for the geometry learning app.

This module exports all schema classes for:
- Catalog: module metadata and review intervals
- Progress: per-module stage completion, quiz results, review schedules
"""

# Catalog schemas
from .catalog import (
    ModuleRecord,
    ModuleCatalogDocument,
)

# Progress schemas
from .progress import (
    Stage,
    STAGE_ORDER,
    QuizResult,
    ReviewSchedule,
    ProgressRecord,
    ProgressState,
)

__all__ = [
    # Catalog
    'ModuleRecord',
    'ModuleCatalogDocument',
    # Progress
    'Stage',
    'STAGE_ORDER',
    'QuizResult',
    'ReviewSchedule',
    'ProgressRecord',
    'ProgressState',
]
