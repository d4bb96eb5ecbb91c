from ..schemas.goal import Goal
from ..utils.calendar import days_between, is_day_key


def mark_done_for_today(goal: Goal, today: str, enabled: bool = True) -> Goal:
    """Credit ``goal`` for ``today`` under the daily chain rules.

    Repeated credits on the same day are idempotent, a one-day gap extends the
    chain, a longer gap restarts it at 1. A ``lastDone`` on or after ``today``
    (clock skew) keeps the current streak but never lets it drop below 1.
    """
    if not enabled:
        return goal

    last = goal.lastDone
    if last == today:
        return goal

    if not last or not is_day_key(last):
        return goal.model_copy(update={"lastDone": today, "streak": 1})

    gap = days_between(last, today)
    if gap == 1:
        streak = (goal.streak or 0) + 1
    elif gap > 1:
        streak = 1
    else:
        streak = max(1, goal.streak or 1)
    return goal.model_copy(update={"lastDone": today, "streak": streak})
