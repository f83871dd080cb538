"""
Unit tests for the local command interpreter.

Tests the full query -> reply + actions path without any network access.
"""
import json

import pytest

from dashboard_assistant.schemas.actions import (
    HideParam, SetChartType, SetHistKey, SetLiveKey, SetMode,
    ShowAllParams, ShowOnlyParams, ShowParam,
)
from dashboard_assistant.services.action_builder import UNCLEAR_REPLY

PRESSURE_IDS = ["tubing", "a_ann", "b_ann", "flowline_p"]


@pytest.mark.parametrize("query,reply,actions", [
    ("Use spline chart", "Switched to spline chart type.", [SetChartType(chart_type="spline")]),
    ("switch to bar chart", "Switched to column chart type.", [SetChartType(chart_type="column")]),
    ("area", "Switched to area chart.", [SetChartType(chart_type="area")]),
    ("Switch to realtime mode", "Switched to live (real-time) mode.", [SetMode(mode="realtime")]),
    ("Show last 24 hours live data", "Switched to live mode — last 24h.", [SetLiveKey(live_key="24h")]),
    ("live for the last 12", "Switched to live mode — last 12h.", [SetLiveKey(live_key="12h")]),
    ("Show yesterday's data", "Showing yesterday's data.", [SetHistKey(hist_key="yesterday")]),
    ("Switch to 1-week history", "Showing last 1-week history.", [SetHistKey(hist_key="1week")]),
    ("last 30 days", "Showing last 1-month history.", [SetHistKey(hist_key="1month")]),
    ("switch to history mode", "Switched to history mode.", [SetMode(mode="history")]),
    ("Show last 12 hours", "Switched to history mode.", [SetMode(mode="history")]),
    ("show last 2 hours", "Switched to history mode.", [SetMode(mode="history")]),
    ("12 hours", "Showing last 12 hours of live data.", [SetLiveKey(live_key="12h")]),
    ("1h", "Showing last 1 hour of live data.", [SetLiveKey(live_key="1h")]),
    ("Show all parameters", "All parameters are now visible.", [ShowAllParams()]),
    ("reset", "All parameters are now visible.", [ShowAllParams()]),
])
def test_canonical_replies(interpreter, query, reply, actions):
    result = interpreter.interpret(query)
    assert result.reply == reply
    assert result.actions == actions


def test_pressure_group(interpreter):
    for query in ("pressure", "Show only pressure sensors", "PRESSURE"):
        result = interpreter.interpret(query)
        assert result.reply == "Showing only the 4 pressure parameters."
        assert result.actions == [ShowOnlyParams(params=PRESSURE_IDS)]


def test_hide_several_parameters_in_mention_order(interpreter):
    result = interpreter.interpret("hide b-annulus and tubing")
    assert result.actions == [HideParam(param="b_ann"), HideParam(param="tubing")]
    assert result.reply == "Hidden: B-Ann Pressure, Tubing Pressure."


def test_remove_flowline_pressure(interpreter):
    result = interpreter.interpret("remove flowline pressure")
    assert result.actions == [HideParam(param="flowline_p")]
    assert result.reply == "Hidden: Flowline Pressure."


def test_show_only_named_parameters(interpreter):
    result = interpreter.interpret("Show A-annulus and tubing only")
    assert result.actions == [ShowOnlyParams(params=["a_ann", "tubing"])]
    assert result.reply == "Showing only: A-Ann Pressure, Tubing Pressure."


@pytest.mark.parametrize("query", [
    "pressure sensors only, no temperature",
    "pressure only, temporarily",
    "tubing pressure only",
])
def test_pressure_group_wins_over_stray_aliases(interpreter, query):
    result = interpreter.interpret(query)
    assert result.actions == [ShowOnlyParams(params=PRESSURE_IDS)]
    assert result.reply == "Showing only the 4 pressure parameters."


def test_show_parameters(interpreter):
    result = interpreter.interpret("show flowline temperature")
    assert result.actions == [ShowParam(param="flowline_t")]
    assert result.reply == "Showing: Flowline Temperature."


def test_show_word_beats_hide_word(interpreter):
    result = interpreter.interpret("turn off temp and show tubing")
    assert result.actions == [ShowParam(param="flowline_t"), ShowParam(param="tubing")]
    assert result.reply == "Showing: Flowline Temperature, Tubing Pressure."


def test_chart_rule_beats_later_rules(interpreter):
    result = interpreter.interpret("switch to line chart in live mode")
    assert result.actions == [SetChartType(chart_type="line")]


def test_unrecognized_query(interpreter):
    result = interpreter.interpret("xyzzy")
    assert result.reply == UNCLEAR_REPLY
    assert result.actions == []


def test_hide_all_is_not_show_all(interpreter):
    result = interpreter.interpret("hide all")
    assert result.actions == []
    assert result.reply == UNCLEAR_REPLY


@pytest.mark.parametrize("query", ["", "   ", "\n\t"])
def test_blank_query(interpreter, query):
    result = interpreter.interpret(query)
    assert result.reply == UNCLEAR_REPLY
    assert result.actions == []


def test_interpret_is_deterministic(interpreter):
    queries = ["hide b-annulus and tubing", "Use spline chart", "pressure", "xyzzy", "1 week"]
    for query in queries:
        first = interpreter.interpret(query)
        second = interpreter.interpret(query)
        assert first == second
        assert json.dumps(first.to_wire()) == json.dumps(second.to_wire())


def test_every_action_names_a_known_parameter(interpreter, catalogue):
    queries = ["pressure", "hide tbg, flt and bann", "show fl press only", "display a ann"]
    for query in queries:
        for action in interpreter.interpret(query).actions:
            params = getattr(action, "params", None) or [getattr(action, "param")]
            assert all(pid in catalogue for pid in params)


def test_wire_format(interpreter):
    assert interpreter.interpret("live 1 hour").to_wire() == {
        "reply": "Switched to live mode — last 1h.",
        "actions": [{"type": "setLiveKey", "liveKey": "1h"}],
    }
