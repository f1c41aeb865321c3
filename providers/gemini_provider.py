"""
Gemini Provider - direct Gemini SDK oracle.

Used when no CLIProxyAPI gateway is configured. Single key, single
attempt per request: failures are reported, not retried.
"""

import asyncio
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from config import get_settings
from .base import LLMProvider, TaskType, GenerationConfig, LLMResponse

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Oracle provider using the google-generativeai SDK."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key (default from settings)
            model: Model name (default from settings)
        """
        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model

        logger.info(f"GeminiProvider initialized, configured={self.is_available()}")

    @property
    def name(self) -> str:
        return "gemini"

    def is_available(self) -> bool:
        return bool(self.api_key)

    def get_model_for_task(self, task_type: TaskType) -> str:
        return self.model

    async def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        config: Optional[GenerationConfig] = None
    ) -> LLMResponse:
        """
        Generate text using direct Gemini SDK.

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

        if not self.api_key:
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error="no_api_key"
            )

        generation_config = {
            "temperature": config.temperature,
            "top_p": config.top_p,
            "top_k": config.top_k,
            "max_output_tokens": config.max_tokens,
        }
        if config.json_response:
            generation_config["response_mime_type"] = "application/json"

        try:
            logger.info(f"Gemini generate_text: model={model_name}")

            genai.configure(api_key=self.api_key)
            gmodel = genai.GenerativeModel(model_name)

            response = await asyncio.to_thread(
                gmodel.generate_content,
                prompt,
                generation_config=generation_config,
            )

            if not response.text:
                return LLMResponse(
                    text="",
                    model_used=model_name,
                    provider=self.name,
                    error="empty_response"
                )

            text = response.text.strip()
            logger.info(f"Gemini success: {len(text)} chars")

            return LLMResponse(
                text=text,
                model_used=model_name,
                provider=self.name
            )

        except google_exceptions.ResourceExhausted as e:
            logger.warning(f"Gemini rate limited: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error=f"rate_limit: {str(e)}"
            )

        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini error: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error=f"gemini_error: {str(e)}"
            )

        except ValueError as e:
            # response.text raises ValueError when the candidate was blocked
            logger.warning(f"Gemini returned no usable text: {e}")
            return LLMResponse(
                text="",
                model_used=model_name,
                provider=self.name,
                error=f"blocked_response: {str(e)}"
            )
