"""
Pipeline service for the dashboard assistant.

This module wires the interpreters together:
1. The local interpreter over the shared parameter catalogue
2. The remote interpreter, when an API key is configured
3. The fallback decorator that tries remote first and answers locally on failure
"""
from dashboard_assistant.config import RemoteSettings, get_remote_settings
from dashboard_assistant.services.catalogue import Catalogue, get_default_catalogue
from dashboard_assistant.services.error_handler import ErrorHandler
from dashboard_assistant.services.interpreter import (
    CommandInterpreter, CommandOutcome, CommandSource, FallbackInterpreter, LocalInterpreter,
)
from dashboard_assistant.services.llm_provider import RemoteInterpreter


def build_command_source(catalogue: Catalogue = None, settings: RemoteSettings = None,
                         error_handler: ErrorHandler = None) -> FallbackInterpreter:
    """Build the remote-then-local command source used by the service."""
    catalogue = catalogue or get_default_catalogue()
    settings = settings or get_remote_settings()
    remote = RemoteInterpreter(settings=settings, catalogue=catalogue)
    local = LocalInterpreter(CommandInterpreter(catalogue))
    if remote.is_available:
        print(f"Remote command service enabled: {settings.provider} ({settings.model})")
    else:
        print("No usable LLM API key found. Using the local interpreter only.")
    return FallbackInterpreter(remote, local, error_handler=error_handler)


async def process_query(query: str, source: CommandSource = None) -> CommandOutcome:
    """
    Interpret one query end-to-end without touching any chat session.

    Args:
        query: Natural language command
        source: Command source to use (defaults to a freshly built one)

    Returns:
        CommandOutcome with the result and which interpreter produced it
    """
    source = source or build_command_source()
    return await source.resolve(query)
