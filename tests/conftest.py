"""
Test configuration and fixtures for the dashboard assistant.

This module provides common test fixtures for both unit and integration tests.
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from dashboard_assistant.config import RemoteSettings
from dashboard_assistant.services.catalogue import get_default_catalogue
from dashboard_assistant.services.error_handler import ErrorHandler
from dashboard_assistant.services.interpreter import (
    CommandInterpreter, FallbackInterpreter, LocalInterpreter,
)
from dashboard_assistant.services.llm_provider import RemoteInterpreter

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Make sure no real API key leaks into a test."""
    for name in ("OPENAI_API_KEY", "DEEPSEEK_API_KEY", "LLM_PROVIDER", "OPENAI_MODEL",
                 "OPENAI_BASE_URL", "CATALOGUE_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def catalogue():
    return get_default_catalogue()


@pytest.fixture
def interpreter(catalogue):
    return CommandInterpreter(catalogue)


@pytest.fixture
def error_handler():
    return ErrorHandler()


def completion(content):
    """Build an object shaped like an OpenAI chat completion."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def fake_openai_client(content=None, side_effect=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=completion(content), side_effect=side_effect)
    return client


def api_response(status_code: int) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("POST", COMPLETIONS_URL))


def api_request() -> httpx.Request:
    return httpx.Request("POST", COMPLETIONS_URL)


@pytest.fixture
def make_remote(catalogue):
    def _make(api_key="sk-test-key", content=None, side_effect=None):
        client = fake_openai_client(content=content, side_effect=side_effect)
        settings = RemoteSettings(api_key=api_key, model="gpt-4o-mini")
        return RemoteInterpreter(settings=settings, catalogue=catalogue, client=client)
    return _make


@pytest.fixture
def make_fallback(interpreter, error_handler):
    def _make(remote):
        return FallbackInterpreter(remote, LocalInterpreter(interpreter), error_handler=error_handler)
    return _make
