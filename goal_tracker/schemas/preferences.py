from typing import Literal

from pydantic import BaseModel, ConfigDict

ViewMode = Literal["list", "grid"]
Theme = Literal["light", "dark"]

VIEW_MODES = ("list", "grid")
THEMES = ("light", "dark")
DEFAULT_VIEW: ViewMode = "list"
DEFAULT_THEME: Theme = "light"


class Labs(BaseModel):
    # Unknown toggles written by newer builds survive a load/save cycle.
    model_config = ConfigDict(extra="allow")

    streak: bool = True


class Preferences(BaseModel):
    view: ViewMode = DEFAULT_VIEW
    labs: Labs = Labs()
    theme: Theme = DEFAULT_THEME
