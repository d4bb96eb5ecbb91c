import math
from typing import Iterable, List, Optional, Sequence, Tuple

from ..schemas.board import Board
from ..schemas.goal import ChecklistGoal, CounterGoal, Goal, GoalCard, GoalMetrics, ProgressGoal, Task
from ..schemas.preferences import Preferences
from ..store.state import GoalState


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clean_value(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value) if math.isfinite(value) else 0.0


def sort_goals(goals: Iterable[Goal]) -> List[Goal]:
    """Priority goals first, newest first within each group; ties keep input order."""
    return sorted(goals, key=lambda goal: (not goal.priority, -(goal.createdAt or 0)))


def progress_percentage(value: object, target: float) -> int:
    safe_target = target if target > 0 else 1
    pct = _round_half_up(_clean_value(value) / safe_target * 100)
    return max(0, min(100, pct))


def progress_remaining(value: object, target: float) -> float:
    return max(0.0, target - _clean_value(value))


def checklist_completion(tasks: Sequence[Task]) -> Tuple[int, int, int]:
    total = len(tasks)
    done = len([task for task in tasks if task.done])
    pct = _round_half_up(done / total * 100) if total else 0
    return done, total, pct


def goal_metrics(goal: Goal, streak_enabled: bool = True) -> GoalMetrics:
    streak = (goal.streak or 0) if streak_enabled else None
    if isinstance(goal, ProgressGoal):
        return GoalMetrics(
            kind="progress",
            percentage=progress_percentage(goal.value, goal.target),
            remaining=progress_remaining(goal.value, goal.target),
            streak=streak,
        )
    if isinstance(goal, ChecklistGoal):
        done, total, pct = checklist_completion(goal.tasks)
        return GoalMetrics(kind="checklist", percentage=pct, done=done, total=total, streak=streak)
    if isinstance(goal, CounterGoal):
        return GoalMetrics(kind="counter", count=goal.count, streak=streak)
    raise TypeError(f"Unknown goal type: {type(goal).__name__}")


def build_board(state: GoalState, preferences: Optional[Preferences] = None) -> Board:
    prefs = preferences or Preferences()
    streak_enabled = bool(prefs.labs.streak)
    editing = state.editing
    cards = []
    for goal in sort_goals(state.goals):
        is_editing = editing is not None and editing.goalId == goal.id
        cards.append(
            GoalCard(
                goal=goal,
                metrics=goal_metrics(goal, streak_enabled),
                editing=is_editing,
                editTitle=editing.title if is_editing else None,
            )
        )
    return Board(view=prefs.view, theme=prefs.theme, streakEnabled=streak_enabled, cards=cards, empty=not cards)
