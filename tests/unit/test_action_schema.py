"""
Unit tests for the dashboard action schemas and the command contract.
"""
import json

import pytest
from pydantic import ValidationError

from dashboard_assistant.schemas.actions import (
    ACTION_TYPES, HideParam, SetChartType, SetHistKey, SetLiveKey, SetMode,
    ShowAllParams, ShowOnlyParams, ShowParam, action_from_wire, action_to_wire,
)
from dashboard_assistant.schemas.responses import InterpretationResult

SAMPLE_ACTIONS = [
    ShowOnlyParams(params=["tubing", "flowline_t"]),
    ShowAllParams(),
    HideParam(param="b_ann"),
    ShowParam(param="flowline_p"),
    SetMode(mode="history"),
    SetLiveKey(live_key="12h"),
    SetHistKey(hist_key="1month"),
    SetChartType(chart_type="area"),
]


def test_every_action_kind_survives_json():
    assert [a.type for a in SAMPLE_ACTIONS] == list(ACTION_TYPES)
    for action in SAMPLE_ACTIONS:
        wire = json.loads(json.dumps(action_to_wire(action)))
        assert action_from_wire(wire) == action


def test_wire_field_names():
    assert action_to_wire(SetLiveKey(live_key="24h")) == {"type": "setLiveKey", "liveKey": "24h"}
    assert action_to_wire(SetHistKey(hist_key="yesterday")) == {"type": "setHistKey", "histKey": "yesterday"}
    assert action_to_wire(SetChartType(chart_type="spline")) == {"type": "setChartType", "chartType": "spline"}
    assert action_to_wire(ShowAllParams()) == {"type": "showAllParams"}


def test_fields_accept_wire_names():
    assert SetLiveKey(liveKey="1h").live_key == "1h"


@pytest.mark.parametrize("data", [
    {"type": "setMode", "mode": "weekly"},
    {"type": "setLiveKey", "liveKey": "6h"},
    {"type": "setHistKey", "histKey": "1year"},
    {"type": "setChartType", "chartType": "pie"},
    {"type": "hideParam"},
    {"type": "explode"},
    {"mode": "history"},
    {"type": "hideParam", "param": "b_ann", "mode": "history"},
])
def test_invalid_actions_are_rejected(data):
    with pytest.raises(ValidationError):
        action_from_wire(data)


def test_actions_are_immutable():
    action = HideParam(param="b_ann")
    with pytest.raises(ValidationError):
        action.param = "tubing"


def test_interpretation_result_from_wire():
    result = InterpretationResult.model_validate({
        "reply": "Done.",
        "actions": [{"type": "showAllParams"}, {"type": "setMode", "mode": "realtime"}],
    })
    assert result.actions == [ShowAllParams(), SetMode(mode="realtime")]


def test_interpretation_result_requires_actions():
    with pytest.raises(ValidationError):
        InterpretationResult(reply="Nothing to do.")
    assert InterpretationResult(reply="Nothing to do.", actions=[]).actions == []


def test_interpretation_result_requires_reply():
    with pytest.raises(ValidationError):
        InterpretationResult(reply="", actions=[])
    with pytest.raises(ValidationError):
        InterpretationResult.model_validate({"actions": []})
