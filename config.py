"""Application configuration"""
from typing import Optional

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Oracle (external suggestion service)
    oracle_enabled: bool = True
    oracle_timeout_seconds: float = 8.0

    # CLIProxyAPI gateway (OpenAI-compatible)
    cliproxy_base_url: str = ""
    cliproxy_api_key: str = ""
    cliproxy_model: str = "gemini-2.5-flash"

    # Direct Gemini SDK
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Fixed seed makes decoration variety reproducible (tests, debugging)
    random_seed: Optional[int] = None

    model_config = ConfigDict(env_file=".env", extra="ignore")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
