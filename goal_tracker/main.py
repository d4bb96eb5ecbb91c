from pathlib import Path
from typing import Optional

from .config import build_adapter, configure_logging, load_settings
from .session import Clock, Confirm, GoalTrackerSession


def create_session(
    settings_path: Optional[Path] = None,
    confirm: Optional[Confirm] = None,
    clock: Optional[Clock] = None,
) -> GoalTrackerSession:
    settings = load_settings(settings_path)
    configure_logging(settings)
    return GoalTrackerSession(build_adapter(settings), confirm=confirm, clock=clock)
