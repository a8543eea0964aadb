"""
GeoTutor Viewer - Rendering components for the dashboard.

This module provides:
- Progress bars
- Module cards with stage indicators
- Review badges and quiz scores
"""

from .dashboard import (
    get_dashboard_css,
    render_progress_bar,
    render_stage_indicator,
    render_review_badge,
    render_module_card,
    render_quiz_score,
    STAGE_LABELS,
    STATUS_INDICATORS,
)

__all__ = [
    "get_dashboard_css",
    "render_progress_bar",
    "render_stage_indicator",
    "render_review_badge",
    "render_module_card",
    "render_quiz_score",
    "STAGE_LABELS",
    "STATUS_INDICATORS",
]
