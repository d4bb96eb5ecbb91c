from typing import List

from pydantic import BaseModel

from .goal import GoalCard
from .preferences import Theme, ViewMode


class Board(BaseModel):
    view: ViewMode
    theme: Theme
    streakEnabled: bool
    cards: List[GoalCard]
    empty: bool
