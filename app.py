"""FitMatch - Streamlit App."""

import logging
from datetime import date
from typing import Any, Dict

import streamlit as st

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from google.oauth2.credentials import Credentials

from fitmatch.catalog.repository import CatalogRepository, load_default_catalog
from fitmatch.config import AppConfig, load_config
from fitmatch.engine.formulas import (
    LACTOSE_FREE_ALTERNATIVES,
    format_calories,
    format_weight_change,
    progress_percent,
    total_calories,
)
from fitmatch.engine.goal_classifier import goal_label
from fitmatch.engine.matcher import ProgramMatcher
from fitmatch.engine.records import best_one_rep_max, last_record
from fitmatch.engine.routine import daily_meal_plan, daily_routine, routine_info
from fitmatch.engine.weekly_adjustment import recommend_weekly_adjustment
from fitmatch.engine.weekly_stats import (
    compute_weekly_stats,
    grade_emoji,
    recent_logs,
    report_grade,
    report_recommendations,
    report_score,
    window_start,
)
from fitmatch.exceptions import ChatServiceError, StorageError
from fitmatch.memory.base import BaseStorage
from fitmatch.memory.daily_log_session import DailyLogSession
from fitmatch.memory.gdrive_memory import GoogleDriveStorage
from fitmatch.memory.in_memory import InMemoryStorage
from fitmatch.models.enums import DayOfWeek, ExperienceLevel, Gender, GoalChoice, Lifestyle, MealSlot, WorkoutTime
from fitmatch.models.onboarding import OnboardingAnswers
from fitmatch.models.user_profile import UserProfile
from fitmatch.utils.action_handlers import apply_action
from fitmatch.utils.context_builder import build_system_prompt
from fitmatch.utils.langchain_client import TrainerChatClient
from fitmatch.utils.prompts import get_initial_greeting, get_quick_replies

LOCAL_USER_ID = "local-user"

# Page config
st.set_page_config(
    page_title="FitMatch",
    page_icon="🏋️",
    layout="wide",
    initial_sidebar_state="expanded",
)


def read_secrets() -> Dict[str, Any]:
    try:
        return dict(st.secrets)
    except FileNotFoundError:
        return {}


def create_storage(config: AppConfig) -> BaseStorage:
    if config.storage_backend == "gdrive" and config.google_drive_token:
        credentials = Credentials.from_authorized_user_info(config.google_drive_token)
        return GoogleDriveStorage(credentials)
    return InMemoryStorage()


def create_catalog(config: AppConfig) -> CatalogRepository:
    if config.catalog_dir:
        return CatalogRepository.from_directory(config.catalog_dir)
    return load_default_catalog()


def initialize_session_state() -> None:
    """Initialize all session state variables."""
    if "config" not in st.session_state:
        st.session_state.config = load_config(read_secrets())
    if "storage" not in st.session_state:
        st.session_state.storage = create_storage(st.session_state.config)
    if "catalog" not in st.session_state:
        st.session_state.catalog = create_catalog(st.session_state.config)
    if "chat_history" not in st.session_state:
        st.session_state.chat_history = []
    if "chat_client" not in st.session_state:
        st.session_state.chat_client = None
    if "pending_actions" not in st.session_state:
        st.session_state.pending_actions = []


def load_profile() -> UserProfile:
    storage: BaseStorage = st.session_state.storage
    profile = storage.get_profile(LOCAL_USER_ID)
    if profile is None:
        profile = storage.create_profile(LOCAL_USER_ID)
    return profile


def get_daily_session() -> DailyLogSession:
    """Today's log session; recreated when the date rolls over."""
    session = st.session_state.get("daily_session")
    if session is None or session.day != date.today():
        session = DailyLogSession(st.session_state.storage, LOCAL_USER_ID)
        st.session_state.daily_session = session
    return session


def onboarding_page() -> None:
    """Display the onboarding questionnaire."""
    st.title("🏋️ FitMatch")
    st.markdown("### Tell us about yourself and get a matched workout and meal plan")

    with st.form("onboarding"):
        col1, col2 = st.columns(2)
        with col1:
            nickname = st.text_input("Nickname")
            gender = st.radio("Gender", [g.value for g in Gender], horizontal=True)
            birth_year = st.number_input("Birth year", min_value=1950, max_value=2010, value=1995)
            height = st.number_input("Height (cm)", min_value=100.0, max_value=250.0, value=170.0)
            current_weight = st.number_input("Current weight (kg)", min_value=30.0, max_value=250.0, value=60.0, step=0.1)
            target_weight = st.number_input("Target weight (kg)", min_value=30.0, max_value=250.0, value=65.0, step=0.1)
        with col2:
            goal_type = st.radio("Goal", [g.value for g in GoalChoice], horizontal=True)
            experience = st.radio("Experience", [e.value for e in ExperienceLevel], horizontal=True)
            days = st.slider("Workouts per week", min_value=2, max_value=7, value=3)
            lactose = st.checkbox("Lactose intolerance")
            vegetarian = st.checkbox("Vegetarian")
            lifestyle = st.radio("Lifestyle", [l.value for l in Lifestyle], horizontal=True)
            workout_time = st.radio("Preferred workout time", [t.value for t in WorkoutTime], index=2, horizontal=True)
            gym = st.checkbox("I have gym access", value=True)

        submitted = st.form_submit_button("Get my plan", type="primary")

    if submitted:
        answers = OnboardingAnswers(
            nickname=nickname or None,
            gender=gender,
            birth_year=birth_year,
            height=height,
            current_weight=current_weight,
            target_weight=target_weight,
            goal_type=goal_type,
            experience_level=experience,
            workout_days_per_week=days,
            lactose_intolerance=lactose,
            vegetarian=vegetarian,
            lifestyle=lifestyle,
            preferred_workout_time=workout_time,
            has_gym_access=gym,
        )
        try:
            st.session_state.storage.complete_onboarding(LOCAL_USER_ID, **answers.to_profile_fields())
        except StorageError as e:
            logger.error(f"Onboarding failed: {e}", exc_info=True)
            st.error("Couldn't save your answers. Please try again.")
            return
        st.session_state.chat_client = None
        st.rerun()


def today_tab(profile: UserProfile) -> None:
    matched = ProgramMatcher(st.session_state.catalog).match(profile)
    session = get_daily_session()
    today = DayOfWeek.from_weekday(date.today().weekday())

    col1, col2 = st.columns(2)
    with col1:
        routine = daily_routine(matched.workout, profile, today)
        st.markdown(f"### 💪 {routine.part}")
        if routine.is_workout_day and session.log.workout_part != routine.part:
            session.set_workout_part(routine.part)
        for exercise in routine.exercises:
            done = exercise.name in session.log.completed_exercises
            label = f"{exercise.name} - {exercise.sets} x {exercise.reps}"
            if st.checkbox(label, value=done, key=f"ex_{exercise.name}") != done:
                session.toggle_exercise(exercise.name)
                st.rerun()
        st.caption(f"Rest between sets: {routine_info(profile).rest_time_guide}")
        if routine.is_workout_day:
            set_logger(routine.exercises)

    with col2:
        st.markdown(f"### 🍽️ Meals ({session.log.diet_score}/5)")
        if matched.diet is None:
            st.info("No matching diet plan. Aim for your calorie target with balanced meals.")
        else:
            plan = daily_meal_plan(matched.diet, profile, matched.calorie_info.target_calories)
            for slot in MealSlot:
                meal = plan.menu.slot(slot)
                done = slot.value in session.log.completed_meals
                label = f"{meal.icon} {meal.name}: {meal.detail} ({meal.calories}kcal)"
                if st.checkbox(label, value=done, key=f"meal_{slot.value}") != done:
                    session.toggle_meal(slot)
                    st.rerun()
            st.caption(f"Menu total {format_calories(total_calories(plan.menu))}")

    st.markdown("### ⚖️ Today's weight")
    weight = st.number_input(
        "Weight (kg)", min_value=30.0, max_value=250.0, step=0.1,
        value=float(session.log.weight_measured or profile.current_weight),
    )
    if st.button("Log weight"):
        session.log_weight(weight)
        st.rerun()

    if session.last_error:
        st.warning(session.last_error)


def set_logger(exercises) -> None:
    """Form for logging one set of today's exercises, with the PR check."""
    storage: BaseStorage = st.session_state.storage
    with st.expander("📝 Log a set"):
        with st.form("set_form", clear_on_submit=True):
            name = st.selectbox("Exercise", [e.name for e in exercises])
            c1, c2, c3 = st.columns(3)
            set_number = c1.number_input("Set", min_value=1, max_value=10, value=1)
            weight = c2.number_input("Weight (kg)", min_value=0.0, max_value=500.0, step=2.5)
            reps = c3.number_input("Reps", min_value=0, max_value=100, value=8)
            submitted = st.form_submit_button("Save set")

        try:
            if submitted:
                record = storage.add_workout_record(LOCAL_USER_ID, name, int(set_number), weight, int(reps))
                if record.is_pr:
                    st.success(f"New personal record: {record.weight:g}kg! 🏆")
            records = storage.list_workout_records(LOCAL_USER_ID, name)
        except StorageError as e:
            logger.error(f"Failed to log set of {name}: {e}", exc_info=True)
            st.warning("Couldn't save the set. Please try again.")
            return

        previous = last_record(records)
        if previous:
            st.caption(f"Last set: {previous.weight:g}kg x {previous.reps} ({previous.date.isoformat()})")
        one_rep_max = best_one_rep_max(records)
        if one_rep_max:
            st.caption(f"Estimated 1RM: {one_rep_max:.1f}kg")


def plan_tab(profile: UserProfile) -> None:
    matched = ProgramMatcher(st.session_state.catalog).match(profile)
    info = routine_info(profile)

    col1, col2, col3 = st.columns(3)
    col1.metric("Goal", goal_label(matched.goal_type))
    col2.metric("Daily calories", format_calories(matched.calorie_info.target_calories))
    col3.metric("Match score", f"{matched.match_score}/100")

    st.write(f"**Routine:** {info.routine_type}")
    st.write(f"**Workout days:** {', '.join(d.value for d in info.workout_days)}")
    st.write(f"**Rest days:** {', '.join(d.value for d in info.rest_days) or '-'}")

    if matched.workout:
        with st.expander(f"🏋️ {matched.workout.description}"):
            for day, workout in matched.workout.routines.items():
                st.write(f"**{day.value} - {workout.part}**")
                for exercise in workout.exercises:
                    st.write(f"- {exercise.name}: {exercise.sets} x {exercise.reps}")
    if matched.diet:
        with st.expander(f"🥗 {matched.diet.description}"):
            for slot in MealSlot:
                meal = matched.diet.menu_guide.slot(slot)
                st.write(f"{meal.icon} **{meal.name}**: {meal.detail} ({meal.calories}kcal)")
            if profile.lactose_intolerance:
                st.caption(f"Lactose-free swaps: {', '.join(LACTOSE_FREE_ALTERNATIVES)}")

    st.markdown("### 💡 Recommendations")
    for tip in matched.recommendations:
        st.write(tip)


def report_tab(profile: UserProfile) -> None:
    storage: BaseStorage = st.session_state.storage
    try:
        logs = storage.list_daily_logs(LOCAL_USER_ID, start=window_start())
    except StorageError as e:
        logger.error(f"Failed to load weekly logs: {e}", exc_info=True)
        st.error("Couldn't load this week's logs.")
        return

    stats = compute_weekly_stats(recent_logs(logs), profile.workout_days_per_week)
    score = report_score(stats)
    grade = report_grade(score)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Score", f"{score} {grade_emoji(grade)} {grade}")
    col2.metric("Workout days", stats.total_workouts, f"{stats.completion_rate:.0f}%")
    col3.metric("Avg. meals", f"{stats.avg_diet_score:.1f}/5")
    col4.metric("Weight change", f"{stats.weight_change:+.1f}kg")

    st.progress(progress_percent(profile.current_weight, profile.start_weight, profile.target_weight) / 100)
    st.caption(f"Since start: {format_weight_change(profile.current_weight, profile.start_weight)}")

    for note in report_recommendations(stats, profile):
        st.write(note)

    advice = recommend_weekly_adjustment(profile, stats.completion_rate, stats.avg_diet_score, stats.weight_change)
    st.markdown(f"### 📅 Next week: {advice.focus_area}")
    st.info(advice.overall_advice)
    for item in advice.exercise_adjustments + advice.meal_adjustments:
        st.write(f"- {item}")


def get_chat_client(profile: UserProfile) -> TrainerChatClient:
    logs = st.session_state.storage.list_daily_logs(LOCAL_USER_ID, start=window_start())
    system_prompt = build_system_prompt(profile, logs)

    client = st.session_state.chat_client
    if client is None:
        client = TrainerChatClient.from_config(st.session_state.config, system_prompt)
        client.start_chat(history=st.session_state.chat_history)
        st.session_state.chat_client = client
    elif client.system_instruction != system_prompt:
        client.update_system_instruction(system_prompt)
    return client


def chat_tab(profile: UserProfile) -> None:
    config: AppConfig = st.session_state.config
    if not config.chat_enabled:
        st.info(f"Set {config.chat_provider.upper()} API key to chat with the trainer.")
        return

    if not st.session_state.chat_history:
        st.session_state.chat_history.append({"role": "assistant", "content": get_initial_greeting(profile)})

    for message in st.session_state.chat_history:
        st.chat_message(message["role"]).write(message["content"])

    for i, action in enumerate(st.session_state.pending_actions):
        with st.container(border=True):
            st.write(f"**{action.label or action.type}** - {action.description}")
            col1, col2 = st.columns(2)
            if col1.button(action.confirm_message or "Apply", key=f"apply_{i}", type="primary"):
                result = apply_action(st.session_state.storage, LOCAL_USER_ID, action)
                (st.success if result.success else st.error)(result.message)
                st.session_state.pending_actions.pop(i)
                st.rerun()
            if col2.button("Dismiss", key=f"dismiss_{i}"):
                st.session_state.pending_actions.pop(i)
                st.rerun()

    cols = st.columns(4)
    quick_reply = None
    for col, reply in zip(cols, get_quick_replies("greeting" if len(st.session_state.chat_history) <= 1 else "general")):
        if col.button(reply, use_container_width=True):
            quick_reply = reply

    user_input = st.chat_input("Write a message...") or quick_reply
    if not user_input:
        return

    st.session_state.chat_history.append({"role": "user", "content": user_input})
    try:
        with st.spinner("The trainer is thinking..."):
            reply = get_chat_client(profile).send_message(user_input)
    except (ChatServiceError, StorageError) as e:
        st.session_state.chat_history.pop()
        st.error(str(e))
        return

    st.session_state.chat_history.append({"role": "assistant", "content": reply.text})
    st.session_state.pending_actions = [a for a in reply.actions if a.type != "none"]
    st.rerun()


def main_app(profile: UserProfile) -> None:
    """Main application UI."""
    st.title("🏋️ FitMatch")

    with st.sidebar:
        st.write(f"**{profile.nickname or 'Member'}**")
        st.write(f"{profile.current_weight:g}kg → {profile.target_weight:g}kg")
        st.progress(progress_percent(profile.current_weight, profile.start_weight, profile.target_weight) / 100)
        st.markdown("---")
        if st.button("✏️ Redo onboarding", use_container_width=True):
            st.session_state.storage.update_profile(LOCAL_USER_ID, onboarding_completed=False)
            st.rerun()

    today, plan, report, chat = st.tabs(["📋 Today", "🎯 Plan", "📊 Weekly report", "💬 Trainer"])
    with today:
        today_tab(profile)
    with plan:
        plan_tab(profile)
    with report:
        report_tab(profile)
    with chat:
        chat_tab(profile)


def main() -> None:
    """Main app entry point."""
    initialize_session_state()

    try:
        profile = load_profile()
    except StorageError as e:
        logger.error(f"Failed to load profile: {e}", exc_info=True)
        st.error("Couldn't load your profile. Please try again.")
        return

    if not profile.onboarding_completed:
        onboarding_page()
        return

    main_app(profile)


if __name__ == "__main__":
    main()
