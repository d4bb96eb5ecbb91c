import time
from typing import Iterable, Optional


def now_ms() -> int:
    return int(time.time() * 1000)


def next_goal_id(last_id: int, now: Optional[int] = None) -> int:
    # Timestamp ids keep creation order across reloads; last_id + 1 covers bursts
    # within the same millisecond and clocks that moved backwards.
    candidate = now if now is not None else now_ms()
    return max(candidate, last_id + 1)


def highest_id(ids: Iterable[int]) -> int:
    return max(ids, default=0)
