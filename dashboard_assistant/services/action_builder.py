"""
Builds dashboard actions and reply text from a classified intent.

Reply strings are fixed-format so the same intent always reads the same way.
Parameters are named by their display label, never by id.
"""
from typing import Callable, Dict, List, Tuple

from dashboard_assistant.schemas.actions import (
    Action, HideParam, SetChartType, SetHistKey, SetLiveKey, SetMode,
    ShowAllParams, ShowOnlyParams, ShowParam,
)
from dashboard_assistant.schemas.responses import InterpretationResult
from dashboard_assistant.services.catalogue import Catalogue
from dashboard_assistant.services.intent_classifier import Intent, IntentKind

UNCLEAR_REPLY = (
    "I didn't quite understand that. Try asking things like "
    "\"Show only pressure sensors\", \"Switch to 1-week history\", or \"Use spline chart\"."
)

HISTORY_REPLIES = {
    "yesterday": "Showing yesterday's data.",
    "1month": "Showing last 1-month history.",
    "1week": "Showing last 1-week history.",
}

TIME_WINDOW_REPLIES = {
    "24h": "Showing last 24 hours of live data.",
    "12h": "Showing last 12 hours of live data.",
    "1h": "Showing last 1 hour of live data.",
}

Built = Tuple[List[Action], str]


class ActionBuilder:
    def __init__(self, catalogue: Catalogue):
        self.catalogue = catalogue
        self._builders: Dict[IntentKind, Callable[[Intent], Built]] = {
            IntentKind.CHART_TYPE: self._chart_type,
            IntentKind.BARE_CHART_TYPE: self._bare_chart_type,
            IntentKind.LIVE_WINDOW: self._live_window,
            IntentKind.LIVE_MODE: self._live_mode,
            IntentKind.HISTORY_RANGE: self._history_range,
            IntentKind.HISTORY_MODE: self._history_mode,
            IntentKind.TIME_WINDOW: self._time_window,
            IntentKind.SHOW_ALL: self._show_all,
            IntentKind.SHOW_GROUP: self._show_group,
            IntentKind.SHOW_ONLY: self._show_only,
            IntentKind.HIDE_PARAMS: self._hide_params,
            IntentKind.SHOW_PARAMS: self._show_params,
            IntentKind.UNCLEAR: self._unclear,
        }

    def build(self, intent: Intent) -> InterpretationResult:
        actions, reply = self._builders[intent.kind](intent)
        return InterpretationResult(reply=reply, actions=actions)

    def labels(self, params) -> str:
        return ", ".join(self.catalogue.label(pid) for pid in params)

    def _chart_type(self, intent: Intent) -> Built:
        return [SetChartType(chart_type=intent.chart_type)], f"Switched to {intent.chart_type} chart type."

    def _bare_chart_type(self, intent: Intent) -> Built:
        return [SetChartType(chart_type=intent.chart_type)], f"Switched to {intent.chart_type} chart."

    def _live_window(self, intent: Intent) -> Built:
        return [SetLiveKey(live_key=intent.live_key)], f"Switched to live mode — last {intent.live_key}."

    def _live_mode(self, intent: Intent) -> Built:
        return [SetMode(mode="realtime")], "Switched to live (real-time) mode."

    def _history_range(self, intent: Intent) -> Built:
        return [SetHistKey(hist_key=intent.hist_key)], HISTORY_REPLIES[intent.hist_key]

    def _history_mode(self, intent: Intent) -> Built:
        return [SetMode(mode="history")], "Switched to history mode."

    def _time_window(self, intent: Intent) -> Built:
        return [SetLiveKey(live_key=intent.live_key)], TIME_WINDOW_REPLIES[intent.live_key]

    def _show_all(self, intent: Intent) -> Built:
        return [ShowAllParams()], "All parameters are now visible."

    def _show_group(self, intent: Intent) -> Built:
        reply = f"Showing only the {len(intent.params)} {intent.group} parameters."
        return [ShowOnlyParams(params=list(intent.params))], reply

    def _show_only(self, intent: Intent) -> Built:
        return [ShowOnlyParams(params=list(intent.params))], f"Showing only: {self.labels(intent.params)}."

    def _hide_params(self, intent: Intent) -> Built:
        actions = [HideParam(param=pid) for pid in intent.params]
        return actions, f"Hidden: {self.labels(intent.params)}."

    def _show_params(self, intent: Intent) -> Built:
        actions = [ShowParam(param=pid) for pid in intent.params]
        return actions, f"Showing: {self.labels(intent.params)}."

    def _unclear(self, intent: Intent) -> Built:
        return [], UNCLEAR_REPLY
