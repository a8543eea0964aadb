"""
Dashboard renderer - Progress display for modules and reviews.

Provides:
- Overall progress bar
- Per-module stage indicators
- Review due badges
- Quiz score summary
"""

import html
from datetime import datetime
from typing import Optional

from geotutor.classroom import (
    StageAvailability,
    module_progress,
    review_due,
    stage_availability,
)
from geotutor.schemas import STAGE_ORDER, ModuleRecord, ProgressRecord, Stage


STAGE_LABELS = {
    Stage.LESSON: "Lesson",
    Stage.DEMONSTRATION: "Demonstration",
    Stage.QUIZ: "Quiz",
    Stage.REVIEW: "Review",
}

STATUS_INDICATORS = {
    StageAvailability.COMPLETED: "✓",
    StageAvailability.AVAILABLE: "○",
    StageAvailability.LOCKED: "◌",
}


def get_dashboard_css() -> str:
    """Get CSS styles for dashboard display."""
    return """
    <style>
    .progress-bar {
        background: #e5e7eb;
        border-radius: 9999px;
        height: 0.6em;
        width: 100%;
    }
    .progress-bar-fill {
        background: #2563eb;
        border-radius: 9999px;
        height: 100%;
    }
    .progress-label {
        color: #1e40af;
        margin-bottom: 0.4em;
    }
    .module-card {
        background: white;
        border-left: 4px solid #3b82f6;
        border-radius: 8px;
        padding: 1em 1.2em;
        margin: 0.8em 0;
    }
    .module-title {
        font-weight: 600;
        font-size: 1.1em;
    }
    .module-description {
        color: #6b7280;
        margin-top: 0.3em;
    }
    .stage-list {
        display: flex;
        gap: 1em;
        margin-top: 0.6em;
        font-size: 0.9em;
    }
    .stage-completed { color: #388E3C; }
    .stage-available { color: #1976D2; }
    .stage-locked { color: #999; }
    .review-badge {
        display: inline-block;
        background: #fef3c7;
        color: #92400e;
        border-radius: 9999px;
        padding: 0.2em 0.8em;
        font-size: 0.85em;
    }
    .quiz-score-box {
        text-align: center;
        margin-top: 1em;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #2563eb;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def render_progress_bar(percent: int, label: Optional[str] = None) -> str:
    """Render a progress bar for a 0-100 value."""
    width = max(0, min(100, percent))
    text = label if label is not None else f"Overall Progress: {width}% complete"
    return (
        f'<div class="progress-label">{html.escape(text)}</div>'
        f'<div class="progress-bar"><div class="progress-bar-fill" style="width: {width}%"></div></div>'
    )


def render_stage_indicator(record: ProgressRecord, stage: Stage, now: datetime) -> str:
    """Render one stage with its status indicator."""
    availability = stage_availability(record, stage, now)
    return (
        f'<span class="stage-{availability.value}">'
        f'{STATUS_INDICATORS[availability]} {STAGE_LABELS[stage]}</span>'
    )


def render_review_badge(record: ProgressRecord, now: datetime) -> str:
    """
    Render review status.

    Returns:
        "Review due" when the review date has passed, the next date when
        one is scheduled, or "" when nothing is scheduled
    """
    schedule = record.review_schedule
    if schedule.next_review_date is None:
        return ""
    if review_due(schedule, now):
        return f'<span class="review-badge">Review #{schedule.review_count} due</span>'
    date_text = schedule.next_review_date.strftime("%b %d")
    return f'<span class="review-badge">Next review {html.escape(date_text)}</span>'


def render_module_card(module: ModuleRecord, record: ProgressRecord, now: datetime) -> str:
    """Render a module summary with stage indicators and review status."""
    parts = ['<div class="module-card">']
    parts.append(f'<div class="module-title">{html.escape(module.title)}</div>')
    if module.description:
        parts.append(f'<div class="module-description">{html.escape(module.description)}</div>')

    parts.append('<div class="stage-list">')
    for stage in STAGE_ORDER:
        parts.append(render_stage_indicator(record, stage, now))
    parts.append('</div>')

    percent = module_progress(record)
    parts.append(render_progress_bar(percent, label=f"{percent}% complete"))

    badge = render_review_badge(record, now)
    if badge:
        parts.append(f'<div>{badge}</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(score: int, total_questions: int) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score}/{total_questions}</div>
        <div class="quiz-score-label">{score} of {total_questions} correct</div>
    </div>
    """
