import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel

from .persistence.adapter import STORAGE_KEY, PersistenceAdapter
from .persistence.storage import InMemoryStorage, JsonFileStorage, KeyValueStorage

logger = logging.getLogger(__name__)

ENV_PREFIX = "GOAL_TRACKER_"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class GoalTrackerSettings(BaseModel):
    storage_key: str = STORAGE_KEY
    storage_path: Optional[Path] = None
    log_level: str = "INFO"


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read settings from %s: %s", path, e)
        return {}
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Settings file %s did not produce an object", path)
        return {}
    return parsed


def _env_overrides(environ: Dict[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for field_name in GoalTrackerSettings.model_fields:
        value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value:
            overrides[field_name] = value
    return overrides


def load_settings(path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None) -> GoalTrackerSettings:
    """Settings from an optional YAML file, then ``GOAL_TRACKER_*`` environment variables."""
    merged: Dict[str, Any] = {}
    if path is not None:
        merged.update(_read_yaml(Path(path)))
    merged.update(_env_overrides(dict(os.environ) if environ is None else environ))
    try:
        return GoalTrackerSettings(**merged)
    except ValueError as e:
        logger.warning("Invalid settings, using defaults: %s", e)
        return GoalTrackerSettings()


def configure_logging(settings: GoalTrackerSettings) -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def build_storage(settings: GoalTrackerSettings) -> KeyValueStorage:
    if settings.storage_path is not None:
        return JsonFileStorage(settings.storage_path)
    return InMemoryStorage()


def build_adapter(settings: GoalTrackerSettings) -> PersistenceAdapter:
    return PersistenceAdapter(build_storage(settings), settings.storage_key)
