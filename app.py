"""
GeoTutor - Self-paced Geometry Learning

Streamlit application: each module is studied through a lesson, a
demonstration and a quiz, then comes back for spaced review.

Usage:
    streamlit run app.py
"""

import logging
from datetime import datetime
from typing import Optional

import streamlit as st

from geotutor.classroom import (
    CatalogError,
    ModuleCatalog,
    ProgressStore,
    StageAvailability,
    can_access_demo,
    can_access_quiz,
    can_access_review,
    due_reviews,
    module_progress,
    quiz_attempted,
    quiz_strengths,
    quiz_weaknesses,
    recommended_module,
    recommended_next_stage,
    stage_availability,
)
from geotutor.config import configure_logging, create_persistence, get_catalog_path
from geotutor.schemas import STAGE_ORDER, Stage
from geotutor.viewer import (
    STAGE_LABELS,
    STATUS_INDICATORS,
    get_dashboard_css,
    render_module_card,
    render_progress_bar,
    render_quiz_score,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="GeoTutor",
    page_icon="📐",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "catalog" not in st.session_state:
        try:
            st.session_state.catalog = ModuleCatalog.from_yaml(get_catalog_path())
        except CatalogError as e:
            logger.error(f"Failed to load module catalog: {e}")
            st.session_state.catalog = None

    if "store" not in st.session_state and st.session_state.catalog:
        st.session_state.store = ProgressStore(st.session_state.catalog, create_persistence())

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "dashboard"  # dashboard, module, progress, settings

    if "current_module_id" not in st.session_state:
        st.session_state.current_module_id = None

    if "current_stage" not in st.session_state:
        st.session_state.current_stage = Stage.LESSON


# -----------------------------------------------------------------------------
# Sidebar: Module List
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with module list and overall progress."""
    st.sidebar.title("📐 GeoTutor")

    if not st.session_state.catalog:
        st.sidebar.error("Module catalog not found. Check GEOTUTOR_CATALOG_PATH.")
        return

    state = st.session_state.store.get_state()
    st.sidebar.markdown(f"**Progress:** {state.overall_progress}%")
    st.sidebar.progress(state.overall_progress / 100)

    st.sidebar.divider()

    st.sidebar.radio(
        "View",
        ["Dashboard", "Progress", "Settings"],
        key="view_choice",
        on_change=on_view_change,
        horizontal=True,
        label_visibility="collapsed",
    )
    if st.session_state.view_mode == "module":
        if st.sidebar.button("← Back to view", use_container_width=True):
            on_view_change()
            st.rerun()

    st.sidebar.divider()
    st.sidebar.subheader("Modules")

    for module in st.session_state.catalog.get_ordered_modules():
        record = state.record(module.id)
        label = f"{module.title} ({module_progress(record)}%)"
        if st.sidebar.button(label, key=f"module_{module.id}", use_container_width=True):
            select_module(module.id)


def on_view_change():
    st.session_state.view_mode = st.session_state.view_choice.lower()


def select_module(module_id: str, stage: Optional[Stage] = None):
    """Open a module at the given stage (default: its recommended stage)."""
    store = st.session_state.store
    st.session_state.current_module_id = module_id
    st.session_state.current_stage = stage or recommended_next_stage(store.get_record(module_id))
    st.session_state.view_mode = "module"
    st.rerun()


# -----------------------------------------------------------------------------
# Dashboard
# -----------------------------------------------------------------------------

def render_dashboard_view():
    """Render the landing dashboard: overall progress, continue card, due reviews."""
    catalog = st.session_state.catalog
    state = st.session_state.store.get_state()
    now = datetime.now()

    st.title("Welcome to GeoTutor")
    st.markdown(get_dashboard_css(), unsafe_allow_html=True)
    st.markdown(render_progress_bar(state.overall_progress), unsafe_allow_html=True)

    st.subheader("Continue Learning")
    next_module = recommended_module(catalog, state)
    if next_module:
        st.markdown(render_module_card(next_module, state.record(next_module.id), now), unsafe_allow_html=True)
        if st.button("Continue", type="primary"):
            select_module(next_module.id)

    st.subheader("Reviews Due")
    due = due_reviews(state, now)
    if not due:
        st.info("No reviews due. Finish a quiz to schedule your first review.")
    for module_id in due:
        module = catalog.get_module_by_id(module_id)
        if st.button(f"Review {module.title}", key=f"review_{module_id}"):
            select_module(module_id, Stage.REVIEW)

    st.subheader("All Modules")
    for module in catalog.get_ordered_modules():
        st.markdown(render_module_card(module, state.record(module.id), now), unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Module View
# -----------------------------------------------------------------------------

def render_module_view():
    """Render the current module with stage navigation and the active stage."""
    catalog = st.session_state.catalog
    store = st.session_state.store
    module = catalog.get_module_by_id(st.session_state.current_module_id)
    if not module:
        st.error(f"Module not found: {st.session_state.current_module_id}")
        return

    now = datetime.now()
    record = store.get_record(module.id)

    st.title(module.title)
    st.caption(module.description)

    cols = st.columns(len(STAGE_ORDER))
    for col, stage in zip(cols, STAGE_ORDER):
        availability = stage_availability(record, stage, now)
        with col:
            if st.button(
                f"{STATUS_INDICATORS[availability]} {STAGE_LABELS[stage]}",
                key=f"stage_{stage.value}",
                disabled=availability == StageAvailability.LOCKED,
                use_container_width=True,
            ):
                st.session_state.current_stage = stage
                st.rerun()

    st.divider()

    stage = st.session_state.current_stage
    if stage == Stage.LESSON:
        render_lesson_stage(module)
    elif stage == Stage.DEMONSTRATION:
        render_demonstration_stage(module, record)
    elif stage == Stage.QUIZ:
        render_quiz_stage(module, record)
    else:
        render_review_stage(module, record, now)


def render_lesson_stage(module):
    store = st.session_state.store
    st.subheader(module.lesson_title or "Lesson")
    if store.get_record(module.id).lesson_completed:
        st.success("Lesson completed!")
    if st.button("Mark lesson as complete", type="primary"):
        store.complete_lesson(module.id)
        select_module(module.id, Stage.DEMONSTRATION)


def render_demonstration_stage(module, record):
    store = st.session_state.store
    st.subheader(module.demonstration_title or "Demonstration")
    if not can_access_demo(record):
        st.warning("Complete the lesson first.")
        return
    if st.button("Mark demonstration as complete", type="primary"):
        store.complete_demonstration(module.id)
        select_module(module.id, Stage.QUIZ)


def render_quiz_stage(module, record):
    store = st.session_state.store
    st.subheader(module.quiz_title or "Quiz")
    if not can_access_quiz(record):
        st.warning("Complete the demonstration first.")
        return

    if quiz_attempted(record):
        result = record.quiz_result
        st.markdown(get_dashboard_css(), unsafe_allow_html=True)
        st.markdown(render_quiz_score(result.score, result.total_questions), unsafe_allow_html=True)
        return

    with st.form(key=f"quiz_form_{module.id}"):
        total = st.number_input("Questions", min_value=0, step=1, value=0)
        score = st.number_input("Correct answers", min_value=0, step=1, value=0)
        submitted = st.form_submit_button("Submit quiz")

    if submitted:
        if score > total:
            st.error("Correct answers cannot exceed the number of questions.")
            return
        store.record_quiz_completion(module.id, int(score), int(total))
        st.rerun()


def render_review_stage(module, record, now):
    store = st.session_state.store
    st.subheader(module.review_title or "Review")
    schedule = record.review_schedule

    if not can_access_review(record, now):
        if schedule.next_review_date:
            st.info(f"Next review on {schedule.next_review_date:%Y-%m-%d}.")
        else:
            st.info("No review scheduled yet. Finish the quiz first.")
        return

    st.markdown(f"Review #{schedule.review_count}")
    if st.button("Finish review", type="primary"):
        store.complete_review(module.id)
        st.session_state.view_mode = "dashboard"
        st.rerun()


# -----------------------------------------------------------------------------
# Progress View
# -----------------------------------------------------------------------------

def render_progress_view():
    """Render per-module progress with quiz strengths and weaknesses."""
    catalog = st.session_state.catalog
    state = st.session_state.store.get_state()

    st.title("Your Progress")
    st.markdown(get_dashboard_css(), unsafe_allow_html=True)
    st.markdown(render_progress_bar(state.overall_progress), unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    with col1:
        st.subheader("Strengths")
        for module_id in quiz_strengths(state):
            st.markdown(f"- {catalog.get_module_by_id(module_id).title}")
    with col2:
        st.subheader("Needs Practice")
        for module_id in quiz_weaknesses(state):
            st.markdown(f"- {catalog.get_module_by_id(module_id).title}")

    st.subheader("Modules")
    for module in catalog.get_ordered_modules():
        record = state.record(module.id)
        st.markdown(
            f"**{module.title}**: {module_progress(record)}% "
            f"(reviews: {record.review_schedule.review_count})"
        )


# -----------------------------------------------------------------------------
# Settings View
# -----------------------------------------------------------------------------

def render_settings_view():
    st.title("Settings")
    st.subheader("Reset Progress")
    confirm = st.checkbox("I understand this erases all progress")
    if st.button("Reset all progress", disabled=not confirm):
        st.session_state.store.reset_progress()
        st.success("Progress reset.")
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if not st.session_state.catalog:
        st.error("Module catalog not found.")
        return

    if st.session_state.view_mode == "module" and st.session_state.current_module_id:
        render_module_view()
    elif st.session_state.view_mode == "progress":
        render_progress_view()
    elif st.session_state.view_mode == "settings":
        render_settings_view()
    else:
        render_dashboard_view()


if __name__ == "__main__":
    main()
