import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from goal_tracker.schemas.goal import CounterGoal
from goal_tracker.store.streak import mark_done_for_today

TODAY = "2024-05-10"


def _goal(streak=0, last_done=None):
    return CounterGoal(id=1, title="Pushups", createdAt=0, streak=streak, lastDone=last_done)


def test_first_credit_starts_streak():
    updated = mark_done_for_today(_goal(), TODAY)
    assert updated.streak == 1
    assert updated.lastDone == TODAY


def test_consecutive_day_extends_streak():
    updated = mark_done_for_today(_goal(streak=4, last_done="2024-05-09"), TODAY)
    assert updated.streak == 5
    assert updated.lastDone == TODAY


def test_missed_days_restart_streak():
    updated = mark_done_for_today(_goal(streak=4, last_done="2024-05-05"), TODAY)
    assert updated.streak == 1
    assert updated.lastDone == TODAY


def test_same_day_credit_is_idempotent():
    goal = _goal(streak=3, last_done=TODAY)
    assert mark_done_for_today(goal, TODAY) is goal


def test_future_last_done_keeps_streak_at_least_one():
    assert mark_done_for_today(_goal(streak=3, last_done="2024-05-12"), TODAY).streak == 3
    skewed = mark_done_for_today(_goal(streak=0, last_done="2024-05-12"), TODAY)
    assert skewed.streak == 1
    assert skewed.lastDone == TODAY


def test_malformed_last_done_counts_as_unset():
    updated = mark_done_for_today(_goal(streak=7, last_done="not-a-day"), TODAY)
    assert updated.streak == 1


def test_disabled_feature_leaves_goal_untouched():
    goal = _goal(streak=2, last_done="2024-05-09")
    assert mark_done_for_today(goal, TODAY, enabled=False) is goal


def test_month_boundary_is_consecutive():
    updated = mark_done_for_today(_goal(streak=1, last_done="2024-02-29"), "2024-03-01")
    assert updated.streak == 2
