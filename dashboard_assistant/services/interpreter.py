"""
Command interpreters for the dashboard assistant.

This module provides:
1. ``CommandInterpreter``, the local, offline facade over resolver, classifier
   and action builder
2. The ``CommandSource`` interface shared by local and remote interpreters
3. ``FallbackInterpreter``, which tries a primary source and answers with a
   fallback source when the primary fails
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from dashboard_assistant.schemas.responses import CommandSourceName, InterpretationResult
from dashboard_assistant.services.action_builder import UNCLEAR_REPLY, ActionBuilder
from dashboard_assistant.services.alias_resolver import AliasResolver
from dashboard_assistant.services.catalogue import Catalogue, get_default_catalogue
from dashboard_assistant.services.error_handler import ErrorHandler, RemoteCommandError
from dashboard_assistant.services.intent_classifier import Intent, IntentClassifier


class RemoteState(str, Enum):
    NOT_CONFIGURED = "not_configured"
    ACTIVE = "active"
    DEGRADED = "degraded"


class CommandOutcome(BaseModel):
    """An interpretation result and where it came from."""
    result: InterpretationResult
    source: CommandSourceName
    state: Optional[RemoteState] = None
    degraded_reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.state is RemoteState.DEGRADED


class CommandInterpreter:
    """
    Local natural-language interpreter.

    ``interpret`` is a pure function of its input: the same query always
    produces the same result, and it never raises.
    """

    def __init__(self, catalogue: Catalogue = None):
        self.catalogue = catalogue or get_default_catalogue()
        self.resolver = AliasResolver(self.catalogue)
        self.classifier = IntentClassifier(self.catalogue, self.resolver)
        self.builder = ActionBuilder(self.catalogue)

    def classify(self, raw_query: str) -> Intent:
        return self.classifier.classify(raw_query)

    def interpret(self, raw_query: str) -> InterpretationResult:
        if not raw_query or not raw_query.strip():
            return InterpretationResult(reply=UNCLEAR_REPLY, actions=[])
        return self.builder.build(self.classify(raw_query))


class CommandSource(ABC):
    """Anything that turns a query into an ``InterpretationResult``."""
    name: CommandSourceName = "local"

    @property
    def is_available(self) -> bool:
        return True

    @abstractmethod
    async def interpret(self, query: str) -> InterpretationResult:
        ...

    async def resolve(self, query: str) -> CommandOutcome:
        return CommandOutcome(result=await self.interpret(query), source=self.name)


class LocalInterpreter(CommandSource):
    name = "local"

    def __init__(self, interpreter: CommandInterpreter = None):
        self.interpreter = interpreter or CommandInterpreter()

    async def interpret(self, query: str) -> InterpretationResult:
        return self.interpreter.interpret(query)


class FallbackInterpreter(CommandSource):
    """
    Tries ``primary`` and answers with ``fallback`` when it fails.

    The fallback is decided per call. Nothing is remembered between calls, so
    every query tries the primary again.
    """

    def __init__(self, primary: CommandSource, fallback: CommandSource,
                 error_handler: ErrorHandler = None):
        self.primary = primary
        self.fallback = fallback
        self.error_handler = error_handler or ErrorHandler()

    @property
    def name(self) -> CommandSourceName:
        return self.primary.name if self.primary.is_available else self.fallback.name

    async def interpret(self, query: str) -> InterpretationResult:
        return (await self.resolve(query)).result

    async def resolve(self, query: str) -> CommandOutcome:
        if not self.primary.is_available:
            result = await self.fallback.interpret(query)
            return CommandOutcome(result=result, source=self.fallback.name,
                                  state=RemoteState.NOT_CONFIGURED)
        try:
            result = await self.primary.interpret(query)
            return CommandOutcome(result=result, source=self.primary.name,
                                  state=RemoteState.ACTIVE)
        except RemoteCommandError as e:
            print(f"{self.primary.name} interpreter failed ({e.reason}): {e.message}. "
                  f"Answering with {self.fallback.name} interpreter.")
            self.error_handler.track_fallback(e, query)
            result = await self.fallback.interpret(query)
            return CommandOutcome(result=result, source=self.fallback.name,
                                  state=RemoteState.DEGRADED, degraded_reason=e.reason)
