"""
Catalog schemas for GeoTutor.

Defines Pydantic models for the static module catalog:
- Module metadata (title, ordering)
- Per-module base review interval
"""

from pydantic import BaseModel, Field
from typing import Optional


class ModuleRecord(BaseModel):
    """A topic with lesson, demonstration, quiz and review stages."""
    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    order: int                                # sort key for the dashboard
    review_interval: int = Field(..., ge=0)   # days until the first review
    lesson_title: Optional[str] = None
    demonstration_title: Optional[str] = None
    quiz_title: Optional[str] = None
    review_title: Optional[str] = None


class ModuleCatalogDocument(BaseModel):
    """Top-level layout of modules.yaml."""
    modules: list[ModuleRecord]
