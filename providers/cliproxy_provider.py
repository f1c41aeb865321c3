"""
CLIProxyAPI Provider - Primary Oracle Provider

Uses the OpenAI-compatible API of a CLIProxyAPI gateway.
Configured through CLIPROXY_BASE_URL / CLIPROXY_API_KEY.
"""

import logging
from typing import Optional

from openai import AsyncOpenAI
from openai import APIError, APIConnectionError, RateLimitError

from config import get_settings
from .base import LLMProvider, TaskType, GenerationConfig, LLMResponse

logger = logging.getLogger(__name__)


class CLIProxyProvider(LLMProvider):
    """
    Oracle provider using a CLIProxyAPI gateway.

    Features:
    - OpenAI-compatible API
    - JSON response mode for structured suggestions
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None
    ):
        """
        Initialize CLIProxyAPI provider.

        Args:
            base_url: CLIProxyAPI base URL (default from settings)
            api_key: API key (default from settings)
            model: Model used for all task types
        """
        settings = get_settings()
        self.base_url = base_url or settings.cliproxy_base_url
        self.api_key = api_key or settings.cliproxy_api_key
        self.model = model or settings.cliproxy_model

        self._client: Optional[AsyncOpenAI] = None

        logger.info(f"CLIProxyProvider initialized with base_url={self.base_url or '<unset>'}")

    @property
    def name(self) -> str:
        return "cliproxy"

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                base_url=self.base_url,
                api_key=self.api_key
            )
        return self._client

    def is_available(self) -> bool:
        """Check if CLIProxyAPI is configured."""
        return bool(self.base_url and self.api_key)

    def get_model_for_task(self, task_type: TaskType) -> str:
        return self.model

    async def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        config: Optional[GenerationConfig] = None
    ) -> LLMResponse:
        """
        Generate text using CLIProxyAPI.

        Args:
            prompt: Text prompt
            model: Model name
            config: Generation config

        Returns:
            LLMResponse with generated text or error
        """
        if config is None:
            config = GenerationConfig()

        model_name = model or self.model

        request = dict(
            model=model_name,
            messages=[{"role": "user", "content": prompt}],
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_tokens,
        )
        if config.json_response:
            request["response_format"] = {"type": "json_object"}

        try:
            logger.info(f"CLIProxy generate_text: model={model_name}")

            response = await self.client.chat.completions.create(**request)

            text = response.choices[0].message.content or ""
            tokens = response.usage.total_tokens if response.usage else None

            logger.info(f"CLIProxy success: {len(text)} chars, {tokens} tokens")

            return LLMResponse(
                text=text,
                model_used=model_name,
                provider=self.name,
                tokens_used=tokens
            )

        except RateLimitError as e:
            logger.warning(f"CLIProxy rate limit: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error=f"rate_limit: {str(e)}"
            )

        except APIConnectionError as e:
            logger.error(f"CLIProxy connection error: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error=f"connection_error: {str(e)}"
            )

        except APIError as e:
            logger.error(f"CLIProxy API error: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error=f"api_error: {str(e)}"
            )
