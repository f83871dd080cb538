"""
In-memory chat session for the dashboard assistant.

The session keeps the transcript, rejects blank queries and queries sent while
another one is outstanding, and hands each non-empty action list to the action
consumer. The transcript is never fed back into interpretation.
"""
from typing import Callable, List, Optional

from pydantic import BaseModel

from dashboard_assistant.schemas.actions import Action
from dashboard_assistant.schemas.responses import Message
from dashboard_assistant.services.catalogue import Catalogue, get_default_catalogue
from dashboard_assistant.services.error_handler import ErrorHandler
from dashboard_assistant.services.interpreter import CommandOutcome, CommandSource

GREETING = (
    "Hi! I'm your AI dashboard assistant. Ask me things like "
    "\"Show only pressure readings\" or \"Switch to 1-week history\"."
)

ActionConsumer = Callable[[List[Action]], None]


class ChatTurn(BaseModel):
    """The message a turn appended, and the outcome when interpretation succeeded."""
    message: Message
    outcome: Optional[CommandOutcome] = None


def describe_action(action: Action, catalogue: Catalogue) -> str:
    if action.type == "showOnlyParams":
        return "Showing: " + ", ".join(catalogue.label(p) for p in action.params)
    if action.type == "showAllParams":
        return "All parameters shown"
    if action.type == "hideParam":
        return f"Hidden: {catalogue.label(action.param)}"
    if action.type == "showParam":
        return f"Shown: {catalogue.label(action.param)}"
    if action.type == "setMode":
        return "Mode → " + ("Live" if action.mode == "realtime" else "History")
    if action.type == "setLiveKey":
        return f"Time window → {action.live_key}"
    if action.type == "setHistKey":
        return f"History range → {action.hist_key}"
    if action.type == "setChartType":
        return f"Chart type → {action.chart_type}"
    return ""


def describe_actions(actions: List[Action], catalogue: Catalogue = None) -> List[str]:
    """Short transcript tags for a list of actions."""
    catalogue = catalogue or get_default_catalogue()
    return [tag for tag in (describe_action(a, catalogue) for a in actions) if tag]


class ChatSession:
    def __init__(self, source: CommandSource, on_actions: ActionConsumer = None,
                 error_handler: ErrorHandler = None, catalogue: Catalogue = None):
        self.source = source
        self.catalogue = catalogue or get_default_catalogue()
        self.on_actions = on_actions
        self.error_handler = error_handler or ErrorHandler()
        self._messages: List[Message] = []
        self._next_id = 0
        self._busy = False
        self._append("assistant", GREETING)

    @property
    def messages(self) -> List[Message]:
        return list(self._messages)

    @property
    def busy(self) -> bool:
        return self._busy

    def describe(self, actions: List[Action]) -> List[str]:
        return describe_actions(actions, self.catalogue)

    def _append(self, role: str, text: str, actions: List[Action] = None) -> Message:
        message = Message(id=self._next_id, role=role, text=text, actions=actions)
        self._next_id += 1
        self._messages.append(message)
        return message

    async def send(self, text: str) -> Optional[ChatTurn]:
        """
        Interpret one query and record it in the transcript.

        Returns None without touching the transcript when the query is blank
        or another query is still being answered.
        """
        query = (text or "").strip()
        if not query or self._busy:
            return None

        self._append("user", query)
        self._busy = True
        try:
            outcome = await self.source.resolve(query)
            actions = list(outcome.result.actions)
            if actions and self.on_actions:
                self.on_actions(actions)
            message = self._append("assistant", outcome.result.reply, actions=actions)
            return ChatTurn(message=message, outcome=outcome)
        except Exception as e:
            print(f"Error answering '{query}': {type(e).__name__}: {str(e)}")
            message = self._append("error", self.error_handler.get_user_friendly_error(e))
            return ChatTurn(message=message)
        finally:
            self._busy = False
