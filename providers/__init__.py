# Oracle providers: external suggestion services behind one interface

from .base import LLMProvider, TaskType, GenerationConfig, LLMResponse
from .cliproxy_provider import CLIProxyProvider
from .gemini_provider import GeminiProvider
from .router import ProviderRouter, get_router

__all__ = [
    "LLMProvider",
    "TaskType",
    "GenerationConfig",
    "LLMResponse",
    "CLIProxyProvider",
    "GeminiProvider",
    "ProviderRouter",
    "get_router",
]
