"""
Progress aggregation - completion percentages and quiz rankings.

Each module contributes three one-time components: lesson, demonstration and
quiz. Reviews recur and are not counted.
"""

import math

from geotutor.schemas import ProgressRecord, ProgressState

from .gating import quiz_attempted


COMPONENTS_PER_MODULE = 3


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def completed_components(record: ProgressRecord) -> int:
    """Number of finished one-time components (0-3) for one module."""
    return sum((record.lesson_completed, record.demo_completed, quiz_attempted(record)))


def overall_progress(state: ProgressState) -> int:
    """
    Overall completion percentage.

    Returns:
        round(100 * completed / (3 * module_count)), 0 for an empty state
    """
    if not state.modules:
        return 0
    completed = sum(completed_components(record) for record in state.modules.values())
    total = COMPONENTS_PER_MODULE * len(state.modules)
    return _round_half_up(100 * completed / total)


def module_progress(record: ProgressRecord) -> int:
    """Completion percentage of a single module."""
    return _round_half_up(100 * completed_components(record) / COMPONENTS_PER_MODULE)


def _ranked_quiz_scores(state: ProgressState) -> list[tuple[str, float]]:
    scored = [
        (module_id, record.quiz_result.percent)
        for module_id, record in state.modules.items()
        if quiz_attempted(record)
    ]
    # Stable sort keeps catalog order among ties
    return sorted(scored, key=lambda item: item[1], reverse=True)


def quiz_strengths(state: ProgressState, limit: int = 3) -> list[str]:
    """Attempted modules with the highest quiz percentage, best first."""
    return [module_id for module_id, _ in _ranked_quiz_scores(state)[:limit]]


def quiz_weaknesses(state: ProgressState, limit: int = 3) -> list[str]:
    """Attempted modules with the lowest quiz percentage, weakest first."""
    if limit <= 0:
        return []
    ranked = _ranked_quiz_scores(state)
    return [module_id for module_id, _ in reversed(ranked[-limit:])]
