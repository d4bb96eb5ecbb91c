import logging
from datetime import datetime
from typing import Callable, Optional, Set

from .derive.metrics import build_board
from .persistence.adapter import PersistenceAdapter
from .schemas.board import Board
from .schemas.preferences import THEMES, VIEW_MODES, Preferences
from .store import goals as store
from .store.state import GoalState, find_goal, initial_state
from .utils.calendar import today_key

logger = logging.getLogger(__name__)

Listener = Callable[[Board], None]
Confirm = Callable[[str], bool]
Clock = Callable[[], datetime]

DELETE_PROMPT = "Delete this goal?"
RESET_PROMPT = "Delete ALL goals?"


def _always_confirm(message: str) -> bool:
    return True


class GoalTrackerSession:
    """Hosting-side owner of the goal state and preferences.

    Each public method handles one user event: it runs a single store
    operation, persists whatever record changed and then notifies listeners
    with a fresh ``Board``. Destructive operations ask ``confirm`` first.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        confirm: Optional[Confirm] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.adapter = adapter
        self.confirm = confirm or _always_confirm
        self.clock = clock or datetime.now
        self._listeners: Set[Listener] = set()
        self.state: GoalState = initial_state()
        self.preferences: Preferences = Preferences()
        self.load()

    def load(self) -> None:
        self.state = initial_state(self.adapter.load_goals())
        self.preferences = self.adapter.load_preferences()
        logger.info("Loaded %d goals (view=%s, theme=%s)", len(self.state.goals), self.preferences.view, self.preferences.theme)

    def board(self) -> Board:
        return build_board(self.state, self.preferences)

    def subscribe(self, on_change: Listener) -> Callable[[], None]:
        self._listeners.add(on_change)

        def unsubscribe() -> None:
            self._listeners.discard(on_change)

        return unsubscribe

    def _notify_listeners(self) -> None:
        if not self._listeners:
            return
        snapshot = self.board()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Board listener failed")

    def _commit(self, next_state: GoalState) -> None:
        previous = self.state
        if next_state is previous:
            return
        self.state = next_state
        if next_state.goals is not previous.goals:
            self.adapter.save_goals(next_state.goals)
        self._notify_listeners()

    def _commit_preferences(self, preferences: Preferences) -> None:
        previous = self.preferences
        if preferences == previous:
            return
        self.preferences = preferences
        if preferences.view != previous.view:
            self.adapter.save_view(preferences.view)
        if preferences.labs != previous.labs:
            self.adapter.save_labs(preferences.labs)
        if preferences.theme != previous.theme:
            self.adapter.save_theme(preferences.theme)
        self._notify_listeners()

    @property
    def streak_enabled(self) -> bool:
        return bool(self.preferences.labs.streak)

    def _today(self) -> str:
        return today_key(self.clock())

    def _now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def add_goal(self, title: str, kind: str, sizing: object = None) -> None:
        self._commit(store.add_goal(self.state, title, kind, sizing, now=self._now_ms()))

    def toggle_priority(self, goal_id: int) -> None:
        self._commit(store.toggle_priority(self.state, goal_id))

    def delete_goal(self, goal_id: int) -> bool:
        if find_goal(self.state, goal_id) is None:
            return False
        if not self.confirm(DELETE_PROMPT):
            return False
        self._commit(store.delete_goal(self.state, goal_id))
        return True

    def rename_goal(self, goal_id: int, new_title: str) -> None:
        self._commit(store.rename_goal(self.state, goal_id, new_title))

    def start_edit(self, goal_id: int) -> None:
        self._commit(store.start_edit(self.state, goal_id))

    def update_edit_title(self, title: str) -> None:
        self._commit(store.update_edit_title(self.state, title))

    def save_edit(self) -> None:
        self._commit(store.save_edit(self.state))

    def cancel_edit(self) -> None:
        self._commit(store.cancel_edit(self.state))

    def increment_counter(self, goal_id: int) -> None:
        self._commit(store.increment_counter(self.state, goal_id, streak_enabled=self.streak_enabled, today=self._today()))

    def set_progress_value(self, goal_id: int, raw_value: object) -> None:
        self._commit(
            store.set_progress_value(self.state, goal_id, raw_value, streak_enabled=self.streak_enabled, today=self._today())
        )

    def toggle_task(self, goal_id: int, task_id: int) -> None:
        self._commit(
            store.toggle_task(self.state, goal_id, task_id, streak_enabled=self.streak_enabled, today=self._today())
        )

    def reset_all(self) -> bool:
        if not self.confirm(RESET_PROMPT):
            return False
        self.state = store.reset_all(self.state)
        self.preferences = Preferences()
        self.adapter.clear_all()
        logger.info("Reset all goals and preferences")
        self._notify_listeners()
        return True

    def set_view(self, view: str) -> None:
        if view not in VIEW_MODES:
            return
        self._commit_preferences(self.preferences.model_copy(update={"view": view}))

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            return
        self._commit_preferences(self.preferences.model_copy(update={"theme": theme}))

    def toggle_theme(self) -> None:
        self.set_theme("light" if self.preferences.theme == "dark" else "dark")

    def toggle_streak_lab(self) -> None:
        labs = self.preferences.labs.model_copy(update={"streak": not self.preferences.labs.streak})
        self._commit_preferences(self.preferences.model_copy(update={"labs": labs}))
