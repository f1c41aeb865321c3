import asyncio

import pytest

from providers.base import LLMProvider, LLMResponse, TaskType
from providers.router import ProviderRouter


class StubProvider(LLMProvider):
    """Canned oracle: returns a fixed reply, optionally slow or failing."""

    def __init__(self, reply="", error=None, delay=0.0, raises=None, available=True):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.raises = raises
        self.available = available
        self.prompts = []

    @property
    def name(self) -> str:
        return "stub"

    def is_available(self) -> bool:
        return self.available

    def get_model_for_task(self, task_type: TaskType) -> str:
        return "stub-model"

    async def generate_text(self, prompt, model=None, config=None) -> LLMResponse:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.raises:
            raise self.raises
        return LLMResponse(text=self.reply, model_used="stub-model", provider="stub", error=self.error)


@pytest.fixture
def make_provider():
    return StubProvider


@pytest.fixture
def offline_router():
    """Router with the oracle switched off, so every caller falls back."""
    return ProviderRouter(providers=[], enabled=False)


@pytest.fixture
def stub_router():
    def _make(reply="", **kwargs):
        return ProviderRouter(providers=[StubProvider(reply, **kwargs)], timeout=1.0, enabled=True)
    return _make
