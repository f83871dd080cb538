"""
Dashboard view-state, the reference consumer of dashboard actions.
"""
from typing import Callable, Dict, Iterable, List, Set

from pydantic import BaseModel, Field, PrivateAttr

from dashboard_assistant.schemas.actions import (
    Action, ChartType, HistKey, LiveKey, Mode,
)
from dashboard_assistant.services.catalogue import Catalogue, get_default_catalogue


class DashboardViewState(BaseModel):
    """
    What the dashboard currently shows.

    ``apply`` takes actions in order. Visibility actions edit the hidden set;
    the others overwrite a field. Picking a live window switches to realtime
    and picking a history range switches to history, as the dashboard does.
    """
    mode: Mode = "realtime"
    live_key: LiveKey = "1h"
    hist_key: HistKey = "yesterday"
    chart_type: ChartType = "line"
    hidden: Set[str] = Field(default_factory=set)

    _catalogue: Catalogue = PrivateAttr()

    def __init__(self, catalogue: Catalogue = None, **data):
        super().__init__(**data)
        self._catalogue = catalogue or get_default_catalogue()

    @property
    def visible(self) -> List[str]:
        return [pid for pid in self._catalogue.ids if pid not in self.hidden]

    def apply(self, actions: Iterable[Action]) -> None:
        handlers: Dict[str, Callable] = {
            "showOnlyParams": self._show_only,
            "showAllParams": self._show_all,
            "hideParam": self._hide,
            "showParam": self._show,
            "setMode": self._set_mode,
            "setLiveKey": self._set_live_key,
            "setHistKey": self._set_hist_key,
            "setChartType": self._set_chart_type,
        }
        for action in actions:
            handlers[action.type](action)

    def _show_only(self, action) -> None:
        self.hidden = {pid for pid in self._catalogue.ids if pid not in action.params}

    def _show_all(self, action) -> None:
        self.hidden = set()

    def _hide(self, action) -> None:
        self.hidden = self.hidden | {action.param}

    def _show(self, action) -> None:
        self.hidden = self.hidden - {action.param}

    def _set_mode(self, action) -> None:
        self.mode = action.mode

    def _set_live_key(self, action) -> None:
        self.mode = "realtime"
        self.live_key = action.live_key

    def _set_hist_key(self, action) -> None:
        self.mode = "history"
        self.hist_key = action.hist_key

    def _set_chart_type(self, action) -> None:
        self.chart_type = action.chart_type

    def snapshot(self) -> dict:
        return {
            "mode": self.mode,
            "live_key": self.live_key,
            "hist_key": self.hist_key,
            "chart_type": self.chart_type,
            "hidden": sorted(self.hidden),
            "visible": self.visible,
        }
