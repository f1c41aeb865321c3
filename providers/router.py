"""
Provider Router - picks the configured oracle provider for a request.

Order of preference: CLIProxyAPI gateway, then direct Gemini SDK.
Each request makes exactly one attempt against one provider, bounded by
a timeout. Any failure is returned as an error response so the caller
can switch to its deterministic fallback.
"""

import asyncio
import logging
from typing import Optional, List

from config import get_settings
from .base import LLMProvider, TaskType, GenerationConfig, LLMResponse, TASK_CONFIGS
from .cliproxy_provider import CLIProxyProvider
from .gemini_provider import GeminiProvider

logger = logging.getLogger(__name__)

UNAVAILABLE = "all_providers_unavailable"


class ProviderRouter:
    """
    Routes oracle requests to the first available provider.

    Usage:
        router = ProviderRouter()
        response = await router.generate_text(prompt, task_type=TaskType.LAYOUT)
        if response.error:
            ...  # use fallback
    """

    def __init__(
        self,
        providers: Optional[List[LLMProvider]] = None,
        timeout: Optional[float] = None,
        enabled: Optional[bool] = None,
    ):
        """
        Initialize router with providers.

        Args:
            providers: Providers in order of preference (default: CLIProxy, Gemini)
            timeout: Per-request timeout in seconds (default from settings)
            enabled: Set False to disable the oracle entirely
        """
        settings = get_settings()
        self.providers = providers if providers is not None else [CLIProxyProvider(), GeminiProvider()]
        self.timeout = timeout if timeout is not None else settings.oracle_timeout_seconds
        self.enabled = enabled if enabled is not None else settings.oracle_enabled

        names = ", ".join(p.name for p in self.providers) or "none"
        logger.info(f"ProviderRouter initialized: providers=[{names}], enabled={self.enabled}, timeout={self.timeout}s")

    def get_active_provider(self) -> Optional[LLMProvider]:
        """Get the first configured provider, if any."""
        if not self.enabled:
            return None
        for provider in self.providers:
            if provider.is_available():
                return provider
        return None

    def is_available(self) -> bool:
        return self.get_active_provider() is not None

    async def generate_text(
        self,
        prompt: str,
        task_type: TaskType = TaskType.DECORATION,
        model: Optional[str] = None,
        config: Optional[GenerationConfig] = None
    ) -> LLMResponse:
        """
        Generate text with the active provider.

        Args:
            prompt: Text prompt
            task_type: Task type for model and config selection
            model: Optional model override
            config: Generation config (default per task type)

        Returns:
            LLMResponse; error is set on any failure
        """
        provider = self.get_active_provider()
        if provider is None:
            return LLMResponse(
                text="",
                model_used="none",
                provider="none",
                error=UNAVAILABLE
            )

        model_name = model or provider.get_model_for_task(task_type)
        config = config or TASK_CONFIGS.get(task_type, GenerationConfig())

        logger.info(f"Oracle request ({task_type.value}) via {provider.name} with model {model_name}")

        try:
            return await asyncio.wait_for(
                provider.generate_text(prompt, model_name, config),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"{provider.name} timed out after {self.timeout}s")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=provider.name,
                error="timeout"
            )
        except Exception as e:
            logger.error(f"{provider.name} unexpected error: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=provider.name,
                error=f"unexpected: {str(e)}"
            )


# Global router instance (lazy initialization)
_router: Optional[ProviderRouter] = None


def get_router() -> ProviderRouter:
    """Get or create the global provider router."""
    global _router
    if _router is None:
        _router = ProviderRouter()
    return _router
