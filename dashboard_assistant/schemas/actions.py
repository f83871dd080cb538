"""
Dashboard action schemas.

This module defines the Pydantic models for the command contract shared by the
local interpreter and the remote command service. Each action is a tagged
record; the ``type`` field is the discriminator and the kind-specific fields
use the camelCase names the dashboard expects on the wire.
"""
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

Mode = Literal["realtime", "history"]
LiveKey = Literal["1h", "12h", "24h"]
HistKey = Literal["yesterday", "1week", "1month"]
ChartType = Literal["line", "spline", "area", "column"]


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class ShowOnlyParams(_Action):
    """Show exactly the listed parameters and hide the rest."""
    type: Literal["showOnlyParams"] = "showOnlyParams"
    params: List[str]


class ShowAllParams(_Action):
    """Make every parameter visible."""
    type: Literal["showAllParams"] = "showAllParams"


class HideParam(_Action):
    type: Literal["hideParam"] = "hideParam"
    param: str


class ShowParam(_Action):
    type: Literal["showParam"] = "showParam"
    param: str


class SetMode(_Action):
    type: Literal["setMode"] = "setMode"
    mode: Mode


class SetLiveKey(_Action):
    type: Literal["setLiveKey"] = "setLiveKey"
    live_key: LiveKey = Field(..., alias="liveKey")


class SetHistKey(_Action):
    type: Literal["setHistKey"] = "setHistKey"
    hist_key: HistKey = Field(..., alias="histKey")


class SetChartType(_Action):
    type: Literal["setChartType"] = "setChartType"
    chart_type: ChartType = Field(..., alias="chartType")


Action = Annotated[
    Union[
        ShowOnlyParams,
        ShowAllParams,
        HideParam,
        ShowParam,
        SetMode,
        SetLiveKey,
        SetHistKey,
        SetChartType,
    ],
    Field(discriminator="type"),
]

ACTION_TYPES = (
    "showOnlyParams",
    "showAllParams",
    "hideParam",
    "showParam",
    "setMode",
    "setLiveKey",
    "setHistKey",
    "setChartType",
)

_action_adapter = TypeAdapter(Action)


def action_to_wire(action: Action) -> Dict[str, Any]:
    """Serialize an action to its command-contract JSON object."""
    return action.model_dump(mode="json", by_alias=True)


def action_from_wire(data: Dict[str, Any]) -> Action:
    """
    Parse a command-contract JSON object into an action.

    Raises:
        pydantic.ValidationError: If the object is not one of the 8 action kinds
    """
    return _action_adapter.validate_python(data)
