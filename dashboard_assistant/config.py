"""
Configuration for the dashboard assistant.

Settings come from environment variables, optionally loaded from a .env file.
"""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env file
load_dotenv()

SERVICES_DIR = Path(__file__).parent / "services"
DEFAULT_CATALOGUE_PATH = SERVICES_DIR / "parameters.yaml"

# Keys copied from sample .env files look like "sk-..." and are never valid
PLACEHOLDER_KEY_PREFIXES = ("sk-...",)

PROVIDER_DEFAULTS = {
    "openai": {
        "key_env": "OPENAI_API_KEY",
        "base_url": "https://api.openai.com/v1",
        "model": "gpt-4o-mini",
    },
    "deepseek": {
        "key_env": "DEEPSEEK_API_KEY",
        "base_url": "https://api.deepseek.com/v1",
        "model": "deepseek-chat",
    },
}


class RemoteSettings(BaseModel):
    """Connection settings for the remote command service."""
    provider: str = "openai"
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"
    timeout: float = 60.0

    @property
    def is_configured(self) -> bool:
        return is_usable_api_key(self.api_key)


def is_usable_api_key(api_key: Optional[str]) -> bool:
    """Check that a key is present and is not an obvious placeholder."""
    if not api_key or not api_key.strip():
        return False
    return not api_key.strip().startswith(PLACEHOLDER_KEY_PREFIXES)


def get_llm_provider() -> str:
    provider = os.getenv("LLM_PROVIDER", "").strip().lower()
    if provider:
        if provider not in PROVIDER_DEFAULTS:
            raise ValueError(
                "Unsupported LLM_PROVIDER '{}'. Use one of: {}".format(
                    provider, ", ".join(PROVIDER_DEFAULTS)
                )
            )
        return provider
    # Pick whichever provider has a key
    if os.getenv("OPENAI_API_KEY", "").strip():
        return "openai"
    if os.getenv("DEEPSEEK_API_KEY", "").strip():
        return "deepseek"
    return "openai"


def get_remote_settings() -> RemoteSettings:
    """Read the remote command service settings from the environment."""
    provider = get_llm_provider()
    defaults = PROVIDER_DEFAULTS[provider]
    api_key = os.getenv(defaults["key_env"], "").strip() or None
    return RemoteSettings(
        provider=provider,
        api_key=api_key,
        model=os.getenv("OPENAI_MODEL", defaults["model"]).strip(),
        base_url=os.getenv("OPENAI_BASE_URL", defaults["base_url"]).rstrip("/"),
        timeout=float(os.getenv("OPENAI_TIMEOUT", "60")),
    )


def get_catalogue_path() -> Path:
    return Path(os.getenv("CATALOGUE_PATH", str(DEFAULT_CATALOGUE_PATH)))
