import pytest

from providers.base import TaskType
from providers.router import ProviderRouter, UNAVAILABLE


@pytest.mark.asyncio
async def test_disabled_router_reports_unavailable(make_provider):
    router = ProviderRouter(providers=[make_provider("{}")], enabled=False)

    response = await router.generate_text("prompt", task_type=TaskType.LAYOUT)

    assert not router.is_available()
    assert response.error == UNAVAILABLE


@pytest.mark.asyncio
async def test_no_configured_provider_reports_unavailable(make_provider):
    router = ProviderRouter(providers=[make_provider(available=False)], enabled=True)

    response = await router.generate_text("prompt")

    assert response.error == UNAVAILABLE


@pytest.mark.asyncio
async def test_first_available_provider_is_used(make_provider):
    skipped = make_provider("skipped", available=False)
    used = make_provider('{"ok": true}')
    router = ProviderRouter(providers=[skipped, used], enabled=True)

    response = await router.generate_text("prompt")

    assert response.text == '{"ok": true}'
    assert used.prompts == ["prompt"]
    assert skipped.prompts == []


@pytest.mark.asyncio
async def test_timeout_is_an_error_response(make_provider):
    router = ProviderRouter(providers=[make_provider("late", delay=1.0)], timeout=0.05, enabled=True)

    response = await router.generate_text("prompt")

    assert response.error == "timeout"


@pytest.mark.asyncio
async def test_provider_exception_is_an_error_response(make_provider):
    router = ProviderRouter(providers=[make_provider(raises=RuntimeError("boom"))], enabled=True)

    response = await router.generate_text("prompt")

    assert response.error.startswith("unexpected")


@pytest.mark.asyncio
async def test_single_attempt_only(make_provider):
    provider = make_provider("", error="rate_limit")
    router = ProviderRouter(providers=[provider], enabled=True)

    response = await router.generate_text("prompt")

    assert response.error == "rate_limit"
    assert len(provider.prompts) == 1
