"""
Base Oracle Provider Interface

Abstract base class for the external suggestion services (CLIProxyAPI, Gemini).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from enum import Enum


class TaskType(Enum):
    """Types of oracle requests for model selection."""
    LAYOUT = "layout"                  # Template recommendation
    DECORATION = "decoration"          # Decoration suggestions
    STORY = "story"                    # Caption rewriting


@dataclass
class GenerationConfig:
    """Configuration for text generation."""
    temperature: float = 0.3
    top_p: float = 0.95
    top_k: int = 40
    max_tokens: int = 1000
    json_response: bool = True


# Per-task defaults taken from how each prompt is meant to behave
TASK_CONFIGS = {
    TaskType.LAYOUT: GenerationConfig(temperature=0.3, max_tokens=300),
    TaskType.DECORATION: GenerationConfig(temperature=0.9, max_tokens=1000),
    TaskType.STORY: GenerationConfig(temperature=0.7, max_tokens=400),
}


@dataclass
class LLMResponse:
    """Unified response from oracle providers."""
    text: str
    model_used: str
    provider: str
    tokens_used: Optional[int] = None
    error: Optional[str] = None


class LLMProvider(ABC):
    """
    Abstract base class for oracle providers.

    Providers never raise for service failures; they report them in
    LLMResponse.error so callers can fall back.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is configured."""
        pass

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        config: Optional[GenerationConfig] = None
    ) -> LLMResponse:
        """
        Generate text response from prompt.

        Args:
            prompt: Text prompt
            model: Optional model override
            config: Generation configuration

        Returns:
            LLMResponse with generated text
        """
        pass

    def get_model_for_task(self, task_type: TaskType) -> str:
        """
        Get the model for a given task type.
        Override in subclasses for provider-specific model selection.
        """
        return "default"
