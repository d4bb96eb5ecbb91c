from typing import List, Optional

from pydantic import BaseModel, Field

from ..schemas.goal import EditState, Goal
from ..utils.ids import highest_id


class GoalState(BaseModel):
    goals: List[Goal] = Field(default_factory=list)
    editing: Optional[EditState] = None
    lastId: int = 0


def initial_state(goals: Optional[List[Goal]] = None) -> GoalState:
    loaded = list(goals or [])
    return GoalState(goals=loaded, lastId=highest_id(goal.id for goal in loaded))


def find_goal(state: GoalState, goal_id: int) -> Optional[Goal]:
    return next((goal for goal in state.goals if goal.id == goal_id), None)
