import math
from typing import Callable, Optional

from ..schemas.goal import (
    COUNTER_TARGET,
    DEFAULT_PROGRESS_TARGET,
    DEFAULT_TASK_COUNT,
    MAX_TASK_COUNT,
    GOAL_KINDS,
    ChecklistGoal,
    CounterGoal,
    EditState,
    Goal,
    ProgressGoal,
    Task,
)
from ..utils.calendar import today_key
from ..utils.ids import next_goal_id, now_ms
from .state import GoalState, find_goal
from .streak import mark_done_for_today

GoalUpdater = Callable[[Goal], Goal]


def to_number(raw: object) -> Optional[float]:
    """Loose numeric parse used for form input; ``None`` when not a finite number."""
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return float(raw)
    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return 0.0
        if "_" in text:
            return None
        try:
            if text[:2].lower() in ("0x", "0o", "0b"):
                number = float(int(text, 0))
            else:
                number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _progress_target(sizing: object) -> float:
    number = to_number(sizing)
    return number if number is not None and number > 0 else DEFAULT_PROGRESS_TARGET


def _task_count(sizing: object) -> int:
    number = to_number(sizing)
    if number is None or number <= 0:
        return DEFAULT_TASK_COUNT
    # Fractions truncate, so a request below 1 builds an empty checklist.
    return min(int(number), MAX_TASK_COUNT)


def build_goal(goal_id: int, title: str, kind: str, sizing: object, created_at: int) -> Optional[Goal]:
    base = {"id": goal_id, "title": title, "priority": False, "createdAt": created_at, "streak": 0, "lastDone": None}
    if kind == "counter":
        # The requested target is ignored for counters.
        return CounterGoal(**base, count=0, target=COUNTER_TARGET)
    if kind == "progress":
        return ProgressGoal(**base, value=0, target=_progress_target(sizing))
    if kind == "checklist":
        tasks = [Task(id=n, label=f"Task {n}", done=False) for n in range(1, _task_count(sizing) + 1)]
        return ChecklistGoal(**base, tasks=tasks)
    return None


def _replace_goal(state: GoalState, goal_id: int, updater: GoalUpdater) -> GoalState:
    current = find_goal(state, goal_id)
    if current is None:
        return state
    updated = updater(current)
    if updated is current:
        return state
    goals = [updated if goal.id == goal_id else goal for goal in state.goals]
    return state.model_copy(update={"goals": goals})


def add_goal(state: GoalState, title: str, kind: str, sizing: object = None, *, now: Optional[int] = None) -> GoalState:
    cleaned = (title or "").strip()
    if not cleaned or kind not in GOAL_KINDS:
        return state
    created_at = now if now is not None else now_ms()
    goal_id = next_goal_id(state.lastId, created_at)
    goal = build_goal(goal_id, cleaned, kind, sizing, created_at)
    return state.model_copy(update={"goals": [goal, *state.goals], "lastId": goal_id})


def toggle_priority(state: GoalState, goal_id: int) -> GoalState:
    return _replace_goal(state, goal_id, lambda goal: goal.model_copy(update={"priority": not goal.priority}))


def delete_goal(state: GoalState, goal_id: int) -> GoalState:
    if find_goal(state, goal_id) is None:
        return state
    editing = state.editing
    if editing is not None and editing.goalId == goal_id:
        editing = None
    goals = [goal for goal in state.goals if goal.id != goal_id]
    return state.model_copy(update={"goals": goals, "editing": editing})


def rename_goal(state: GoalState, goal_id: int, new_title: str) -> GoalState:
    cleaned = (new_title or "").strip()
    if not cleaned:
        return state
    return _replace_goal(state, goal_id, lambda goal: goal.model_copy(update={"title": cleaned}))


def increment_counter(state: GoalState, goal_id: int, *, streak_enabled: bool = True, today: Optional[str] = None) -> GoalState:
    day = today or today_key()

    def _increment(goal: Goal) -> Goal:
        if not isinstance(goal, CounterGoal):
            return goal
        updated = goal.model_copy(update={"count": goal.count + 1})
        return mark_done_for_today(updated, day, streak_enabled)

    return _replace_goal(state, goal_id, _increment)


def set_progress_value(
    state: GoalState,
    goal_id: int,
    raw_value: object,
    *,
    streak_enabled: bool = True,
    today: Optional[str] = None,
) -> GoalState:
    day = today or today_key()
    number = to_number(raw_value)
    value = number if number is not None else 0.0

    def _set_value(goal: Goal) -> Goal:
        if not isinstance(goal, ProgressGoal):
            return goal
        updated = goal.model_copy(update={"value": value})
        return mark_done_for_today(updated, day, streak_enabled)

    return _replace_goal(state, goal_id, _set_value)


def toggle_task(
    state: GoalState,
    goal_id: int,
    task_id: int,
    *,
    streak_enabled: bool = True,
    today: Optional[str] = None,
) -> GoalState:
    day = today or today_key()

    def _toggle(goal: Goal) -> Goal:
        if not isinstance(goal, ChecklistGoal):
            return goal
        if not any(task.id == task_id for task in goal.tasks):
            return goal
        tasks = [task.model_copy(update={"done": not task.done}) if task.id == task_id else task for task in goal.tasks]
        # Un-checking counts as activity too.
        updated = goal.model_copy(update={"tasks": tasks})
        return mark_done_for_today(updated, day, streak_enabled)

    return _replace_goal(state, goal_id, _toggle)


def reset_all(state: GoalState) -> GoalState:
    # lastId survives so ids issued after a reset stay unique.
    return state.model_copy(update={"goals": [], "editing": None})


def start_edit(state: GoalState, goal_id: int) -> GoalState:
    goal = find_goal(state, goal_id)
    if goal is None:
        return state
    return state.model_copy(update={"editing": EditState(goalId=goal.id, title=goal.title)})


def update_edit_title(state: GoalState, title: str) -> GoalState:
    if state.editing is None:
        return state
    return state.model_copy(update={"editing": state.editing.model_copy(update={"title": title})})


def save_edit(state: GoalState) -> GoalState:
    editing = state.editing
    if editing is None or not editing.title.strip():
        return state
    renamed = rename_goal(state, editing.goalId, editing.title)
    return renamed.model_copy(update={"editing": None})


def cancel_edit(state: GoalState) -> GoalState:
    if state.editing is None:
        return state
    return state.model_copy(update={"editing": None})
