"""Chart visibility presets for the visualization view.

The engine only provides the lookup table. The current mode and any manual
toggles belong to the caller, who keeps a :class:`DisplayState` value and
replaces it on every change.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Union


class ViewMode(str, Enum):
    ALL = "all"
    BUSINESS = "business"
    GEOGRAPHIC = "geographic"
    DIGITAL = "digital"


@dataclass(frozen=True)
class Visibility:
    business_model: bool = True
    geographic: bool = True
    digital_presence: bool = True
    global_reach: bool = True

    def toggled(self, flag: str) -> "Visibility":
        if flag not in _FLAGS:
            raise ValueError(f"unknown chart flag: {flag}")
        return replace(self, **{flag: not getattr(self, flag)})


_FLAGS = ("business_model", "geographic", "digital_presence", "global_reach")

_PRESETS: Dict[ViewMode, Visibility] = {
    ViewMode.ALL: Visibility(),
    ViewMode.BUSINESS: Visibility(business_model=True, geographic=False, digital_presence=True, global_reach=False),
    ViewMode.GEOGRAPHIC: Visibility(business_model=False, geographic=True, digital_presence=False, global_reach=True),
    ViewMode.DIGITAL: Visibility(business_model=False, geographic=False, digital_presence=True, global_reach=False),
}


def parse_mode(value: Union[str, ViewMode]) -> ViewMode:
    try:
        return ViewMode(value)
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in ViewMode)
        raise ValueError(f"unknown view mode {value!r}; expected one of: {choices}") from exc


def visibility_for(mode: Union[str, ViewMode]) -> Visibility:
    return _PRESETS[parse_mode(mode)]


@dataclass(frozen=True)
class DisplayState:
    """Presentation toggles: selected mode, chart flags and the two panels."""

    mode: ViewMode = ViewMode.ALL
    visibility: Visibility = Visibility()
    show_insights: bool = True
    show_suggestions: bool = True

    def select_mode(self, mode: Union[str, ViewMode]) -> "DisplayState":
        parsed = parse_mode(mode)
        return replace(self, mode=parsed, visibility=visibility_for(parsed))

    def toggle_chart(self, flag: str) -> "DisplayState":
        # The recorded mode is kept even when the flags no longer match its preset.
        return replace(self, visibility=self.visibility.toggled(flag))

    def hide_insights(self) -> "DisplayState":
        return replace(self, show_insights=False)

    def hide_suggestions(self) -> "DisplayState":
        return replace(self, show_suggestions=False)
