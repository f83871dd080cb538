"""
LLM provider utilities for the dashboard assistant.

This module sends a query to an OpenAI-compatible chat completion service and
parses its reply as a dashboard command. Every failure is raised as a
``RemoteCommandError`` so callers can fall back to the local interpreter.
"""
import json
from typing import Any, Optional

import httpx
import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from dashboard_assistant.config import RemoteSettings, get_remote_settings, is_usable_api_key
from dashboard_assistant.schemas.responses import InterpretationResult
from dashboard_assistant.services.catalogue import Catalogue, get_default_catalogue
from dashboard_assistant.services.error_handler import (
    RemoteParseError, RemoteQuotaError, RemoteStatusError, RemoteTransportError,
)
from dashboard_assistant.services.interpreter import CommandSource, RemoteState
from dashboard_assistant.services.prompts import build_system_prompt

QUOTA_ERROR_CODES = ("insufficient_quota", "rate_limit_exceeded")


def parse_command_response(content: Optional[str]) -> InterpretationResult:
    """
    Parse a remote reply into an ``InterpretationResult``.

    The reply must be a bare JSON document. Prose, code fences and missing
    fields are all parse failures. Parameter ids are taken as given.

    Raises:
        RemoteParseError: If the reply does not match the command contract
    """
    if content is None or not content.strip():
        raise RemoteParseError("Empty response from command service")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise RemoteParseError(f"Response is not JSON: {str(e)}")
    if not isinstance(data, dict):
        raise RemoteParseError(f"Response must be a JSON object, got {type(data).__name__}")
    try:
        return InterpretationResult.model_validate(data)
    except ValidationError as e:
        raise RemoteParseError(f"Response does not match the command contract: {e.error_count()} errors")


def _is_quota_error(error: openai.APIStatusError) -> bool:
    if error.status_code == 429:
        return True
    return getattr(error, "code", None) in QUOTA_ERROR_CODES


class RemoteInterpreter(CommandSource):
    """
    Command source backed by a remote chat completion model.

    Not configured when no API key is set or the key is a placeholder; in that
    state ``is_available`` is False and no request is ever made.
    """
    name = "remote"

    def __init__(self, settings: RemoteSettings = None, catalogue: Catalogue = None,
                 client: Any = None):
        self.settings = settings or get_remote_settings()
        self.catalogue = catalogue or get_default_catalogue()
        self.system_prompt = build_system_prompt(self.catalogue)
        self._client = client

    @property
    def state(self) -> RemoteState:
        if is_usable_api_key(self.settings.api_key):
            return RemoteState.ACTIVE
        return RemoteState.NOT_CONFIGURED

    @property
    def is_available(self) -> bool:
        return self.state is RemoteState.ACTIVE

    @property
    def client(self):
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
                max_retries=0,
                http_client=httpx.AsyncClient(timeout=self.settings.timeout)
            )
        return self._client

    async def _chat(self, query: str) -> Optional[str]:
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.model,
                temperature=0,
                messages=[
                    {"role": "system", "content": self.system_prompt},
                    {"role": "user", "content": query}
                ]
            )
        except openai.APIStatusError as e:
            if _is_quota_error(e):
                raise RemoteQuotaError(f"Quota or rate limit reached: {e.message}", e.status_code)
            raise RemoteStatusError(f"HTTP {e.status_code}: {e.message}", e.status_code)
        except openai.APIConnectionError as e:
            raise RemoteTransportError(f"Connection failed: {str(e)}")
        except (openai.APIError, httpx.HTTPError) as e:
            raise RemoteTransportError(f"{type(e).__name__}: {str(e)}")

        try:
            return response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise RemoteParseError(f"Unexpected completion shape: {str(e)}")

    async def interpret(self, query: str) -> InterpretationResult:
        if not self.is_available:
            raise RemoteStatusError("Remote command service is not configured")
        content = await self._chat(query)
        return parse_command_response(content)
