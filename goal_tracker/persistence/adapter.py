import json
import logging
from typing import Any, Callable, List, TypeVar

from pydantic import ValidationError

from ..schemas.goal import Goal, goal_adapter, goal_list_adapter
from ..schemas.preferences import DEFAULT_THEME, DEFAULT_VIEW, THEMES, VIEW_MODES, Labs, Preferences, Theme, ViewMode
from .storage import KeyValueStorage
from .validator import goal_errors, labs_errors

logger = logging.getLogger(__name__)

STORAGE_KEY = "goal_tracker_v2"

T = TypeVar("T")


class PersistenceAdapter:
    """Loads and saves the goal list and the three preference records.

    Every read falls back to the record's default and every write is
    best-effort: failures are logged and swallowed so the in-memory state
    stays authoritative.
    """

    def __init__(self, storage: KeyValueStorage, base_key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.goals_key = base_key
        self.view_key = f"{base_key}_view"
        self.labs_key = f"{base_key}_labs"
        self.theme_key = f"{base_key}_theme"

    @property
    def keys(self) -> List[str]:
        return [self.goals_key, self.view_key, self.labs_key, self.theme_key]

    def _read(self, key: str, parse: Callable[[str], T], default: Callable[[], T]) -> T:
        try:
            raw = self.storage.get_item(key)
            if raw is None:
                return default()
            return parse(raw)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Could not load %s, using default: %s", key, e)
            return default()

    def _write(self, key: str, value: str) -> bool:
        try:
            self.storage.set_item(key, value)
            return True
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Could not save %s: %s", key, e)
            return False

    def _parse_goals(self, raw: str) -> List[Goal]:
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError("goal record is not a list")
        goals: List[Goal] = []
        seen = set()
        for position, item in enumerate(data):
            errors = goal_errors(item)
            if errors:
                logger.warning("Dropping stored goal #%d: %s", position, "; ".join(errors))
                continue
            try:
                goal = goal_adapter.validate_python(item)
            except ValidationError as e:
                logger.warning("Dropping stored goal #%d: %s", position, e)
                continue
            if goal.id in seen:
                logger.warning("Dropping stored goal #%d: duplicate id %s", position, goal.id)
                continue
            seen.add(goal.id)
            goals.append(goal)
        return goals

    def load_goals(self) -> List[Goal]:
        return self._read(self.goals_key, self._parse_goals, list)

    def save_goals(self, goals: List[Goal]) -> bool:
        try:
            payload = json.dumps(goal_list_adapter.dump_python(list(goals), mode="json"))
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Could not serialize goals: %s", e)
            return False
        return self._write(self.goals_key, payload)

    @staticmethod
    def _parse_choice(raw: str, choices: tuple, label: str) -> Any:
        if raw not in choices:
            raise ValueError(f"unknown {label} {raw!r}")
        return raw

    def load_view(self) -> ViewMode:
        return self._read(self.view_key, lambda raw: self._parse_choice(raw, VIEW_MODES, "view"), lambda: DEFAULT_VIEW)

    def save_view(self, view: ViewMode) -> bool:
        return self._write(self.view_key, view)

    def _parse_labs(self, raw: str) -> Labs:
        data = json.loads(raw)
        errors = labs_errors(data)
        if errors:
            raise ValueError(f"invalid labs record: {'; '.join(errors)}")
        return Labs(**data)

    def load_labs(self) -> Labs:
        return self._read(self.labs_key, self._parse_labs, Labs)

    def save_labs(self, labs: Labs) -> bool:
        return self._write(self.labs_key, json.dumps(labs.model_dump()))

    def load_theme(self) -> Theme:
        return self._read(self.theme_key, lambda raw: self._parse_choice(raw, THEMES, "theme"), lambda: DEFAULT_THEME)

    def save_theme(self, theme: Theme) -> bool:
        return self._write(self.theme_key, theme)

    def load_preferences(self) -> Preferences:
        return Preferences(view=self.load_view(), labs=self.load_labs(), theme=self.load_theme())

    def clear_all(self) -> bool:
        cleared = True
        for key in self.keys:
            try:
                self.storage.remove_item(key)
            except Exception as e:  # pylint: disable=broad-except
                logger.warning("Could not clear %s: %s", key, e)
                cleared = False
        return cleared

