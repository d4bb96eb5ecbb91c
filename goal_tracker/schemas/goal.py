from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

GoalKind = Literal["counter", "progress", "checklist"]

GOAL_KINDS = ("counter", "progress", "checklist")
COUNTER_TARGET = 1000
DEFAULT_PROGRESS_TARGET = 100
DEFAULT_TASK_COUNT = 5
MAX_TASK_COUNT = 100


class Task(BaseModel):
    id: int
    label: str
    done: bool = False


class GoalBase(BaseModel):
    id: int
    title: str = Field(min_length=1)
    priority: bool = False
    createdAt: int
    streak: int = Field(default=0, ge=0)
    lastDone: Optional[str] = None


class CounterGoal(GoalBase):
    type: Literal["counter"] = "counter"
    count: int = Field(default=0, ge=0)
    target: int = COUNTER_TARGET


class ProgressGoal(GoalBase):
    type: Literal["progress"] = "progress"
    value: float = 0
    target: float = DEFAULT_PROGRESS_TARGET


class ChecklistGoal(GoalBase):
    type: Literal["checklist"] = "checklist"
    tasks: List[Task]


Goal = Annotated[Union[CounterGoal, ProgressGoal, ChecklistGoal], Field(discriminator="type")]

goal_list_adapter = TypeAdapter(List[Goal])
goal_adapter = TypeAdapter(Goal)


class EditState(BaseModel):
    goalId: int
    title: str


class GoalMetrics(BaseModel):
    kind: GoalKind
    percentage: Optional[int] = None
    remaining: Optional[float] = None
    done: Optional[int] = None
    total: Optional[int] = None
    count: Optional[int] = None
    streak: Optional[int] = None


class GoalCard(BaseModel):
    goal: Goal
    metrics: GoalMetrics
    editing: bool = False
    editTitle: Optional[str] = None
