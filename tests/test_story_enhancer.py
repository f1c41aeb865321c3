import pytest

from models import RecordContext
from story_enhancer import StoryEnhancer

CAPTION = "He texted me late that night and we talked until sunrise"


@pytest.mark.asyncio
async def test_offline_returns_caption_unchanged(offline_router):
    story = await StoryEnhancer(router=offline_router).enhance(CAPTION)

    assert story.enhanced_caption == CAPTION
    assert story.tone == "heartwarming"
    assert story.word_count == 11


@pytest.mark.asyncio
async def test_oracle_rewrite(stub_router):
    router = stub_router('{"enhancedCaption": "You texted me late that night", "tone": "romantic"}')

    story = await StoryEnhancer(router=router).enhance(CAPTION, RecordContext(title="Late night"))

    assert story.enhanced_caption == "You texted me late that night"
    assert story.tone == "romantic"
    assert "Late night" in router.providers[0].prompts[0]


@pytest.mark.asyncio
async def test_oracle_failure_returns_caption(stub_router):
    router = stub_router('{"tone": "romantic"}')

    story = await StoryEnhancer(router=router).enhance(CAPTION)

    assert story.enhanced_caption == CAPTION
