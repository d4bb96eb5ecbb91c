import pathlib
import sys
from datetime import datetime

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from goal_tracker.utils.calendar import days_between, is_day_key, today_key
from goal_tracker.utils.ids import next_goal_id


def test_today_key_ignores_time_of_day():
    assert today_key(datetime(2024, 3, 5, 0, 0)) == "2024-03-05"
    assert today_key(datetime(2024, 3, 5, 23, 59, 59)) == "2024-03-05"


def test_days_between_counts_calendar_days():
    assert days_between("2024-03-10", "2024-03-11") == 1
    assert days_between("2023-12-31", "2024-01-01") == 1
    assert days_between("2024-02-28", "2024-03-01") == 2
    assert days_between("2024-05-06", "2024-05-01") == -5
    assert days_between("2024-05-01", "2024-05-01") == 0


def test_is_day_key():
    assert is_day_key("2024-01-31")
    assert not is_day_key("2024-02-31")
    assert not is_day_key("yesterday")
    assert not is_day_key(None)


def test_next_goal_id_is_monotonic():
    assert next_goal_id(0, 1000) == 1000
    assert next_goal_id(1000, 1000) == 1001
    assert next_goal_id(5000, 1000) == 5001
