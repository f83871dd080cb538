"""
Response schemas for the dashboard assistant.

This module defines the Pydantic models for interpretation results, the chat
transcript and API responses.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from dashboard_assistant.schemas.actions import Action

CommandSourceName = Literal["local", "remote"]
RemoteStateName = Literal["not_configured", "active", "degraded"]


class InterpretationResult(BaseModel):
    """
    The command contract: a reply for the user and the ordered actions to apply.

    An empty action list means no command was recognized.
    """
    model_config = ConfigDict(frozen=True)

    reply: str = Field(..., min_length=1, description="Short explanation of what changed")
    actions: List[Action] = Field(..., description="Actions, applied in order")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Message(BaseModel):
    """A transcript entry in the in-memory chat session."""
    id: int
    role: Literal["user", "assistant", "error"]
    text: str
    actions: Optional[List[Action]] = None


class InterpretResponse(InterpretationResult):
    """Response model for the /interpret endpoint."""
    source: CommandSourceName = Field(..., description="Which interpreter produced the result")
    is_fallback: bool = Field(
        False,
        description="Indicates whether the local interpreter answered for a failed remote call"
    )


class ChatResponse(BaseModel):
    """Response model for the /chat endpoint."""
    message: Message = Field(..., description="The message appended to the transcript")
    tags: List[str] = Field(default_factory=list, description="Short descriptions of the applied actions")
    source: Optional[CommandSourceName] = Field(
        None,
        description="Which interpreter produced the reply. Omitted for error messages."
    )
    is_fallback: bool = Field(
        False,
        description="Indicates whether the local interpreter answered for a failed remote call"
    )
