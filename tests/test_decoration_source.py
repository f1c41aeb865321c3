import json
import random

import pytest

from decoration_source import DecorationSource, FALLBACK_LIBRARY, POSITIONING_STRATEGIES
from decoration_vocabulary import MOOD_PALETTES, is_known_content
from models import ElementKind, MemoryCategory, Mood, Tone, MAX_ELEMENTS
from templates import TemplateName

ORACLE_REPLY = json.dumps({
    "elements": [
        {"kind": "emoji", "content": "🌸", "position": {"x": 8, "y": 6}, "size": "small",
         "rotationDegrees": 10, "opacity": 0.4, "layer": 3},
        {"kind": "frameCorner", "content": "floral_corner", "position": {"x": 95, "y": 95},
         "size": "large", "rotationDegrees": 180, "opacity": 0.3, "color": "#FFB6C1"},
        {"kind": "doodle", "content": "unicorn", "position": {"x": 50, "y": 50}},
    ],
    "theme": "spring picnic",
    "mood": "peaceful",
})


def test_library_covers_every_category():
    for category in MemoryCategory:
        variants = FALLBACK_LIBRARY[category]
        assert 2 <= len(variants) <= 3
        for variant in variants:
            assert 1 <= len(variant) <= MAX_ELEMENTS
            for element in variant:
                assert is_known_content(element.kind, element.content)


@pytest.mark.parametrize("category", list(MemoryCategory))
def test_fallback_never_empty(offline_router, category):
    source = DecorationSource(router=offline_router, rng=random.Random(7))

    decorations = source.fallback(category, Tone.CASUAL)

    assert 1 <= len(decorations.elements) <= MAX_ELEMENTS
    assert decorations.theme == category.value
    assert decorations.mood == Mood.HEARTWARMING


def test_fallback_recolors_from_mood_palette(offline_router):
    source = DecorationSource(router=offline_router, rng=random.Random(3))

    decorations = source.fallback(MemoryCategory.TRAVEL, Tone.NOSTALGIC)

    palette = MOOD_PALETTES[Mood.NOSTALGIC]
    for element in decorations.elements:
        if element.kind != ElementKind.EMOJI:
            assert element.color in palette
    assert decorations.mood == Mood.NOSTALGIC


def test_fallback_rotation_jitter_is_bounded(offline_router):
    source = DecorationSource(router=offline_router, rng=random.Random(11))

    for _ in range(20):
        decorations = source.fallback(MemoryCategory.DATE, Tone.CASUAL)
        variant = next(
            v for v in FALLBACK_LIBRARY[MemoryCategory.DATE]
            if [e.content for e in v] == [e.content for e in decorations.elements]
        )
        for base, jittered in zip(variant, decorations.elements):
            assert abs(jittered.rotation_degrees - base.rotation_degrees) <= 10.05


def test_fallback_is_reproducible_with_same_seed(offline_router):
    first = DecorationSource(router=offline_router, rng=random.Random(99)).fallback(MemoryCategory.MILESTONE, Tone.PLAYFUL)
    second = DecorationSource(router=offline_router, rng=random.Random(99)).fallback(MemoryCategory.MILESTONE, Tone.PLAYFUL)

    assert first == second


def test_fallback_does_not_mutate_library(offline_router):
    before = [e.model_copy() for v in FALLBACK_LIBRARY[MemoryCategory.DAILY] for e in v]

    DecorationSource(router=offline_router, rng=random.Random(5)).fallback(MemoryCategory.DAILY, Tone.PLAYFUL)

    after = [e for v in FALLBACK_LIBRARY[MemoryCategory.DAILY] for e in v]
    assert before == after


def test_strategy_is_one_of_four(offline_router):
    source = DecorationSource(router=offline_router, rng=random.Random(1))
    assert source.choose_strategy() in POSITIONING_STRATEGIES


@pytest.mark.asyncio
async def test_oracle_decorations_are_validated(stub_router):
    router = stub_router(ORACLE_REPLY)
    source = DecorationSource(router=router, rng=random.Random(1))

    decorations = await source.generate("Picnic under the cherry trees", MemoryCategory.DAILY, Tone.CASUAL, TemplateName.COLLAGE)

    assert [e.kind for e in decorations.elements] == [ElementKind.EMOJI, ElementKind.FRAME_CORNER]
    assert decorations.elements[1].layer == 2
    assert decorations.theme == "spring picnic"
    assert decorations.mood == Mood.PEACEFUL


@pytest.mark.asyncio
async def test_oracle_prompt_names_template_and_strategy(stub_router):
    router = stub_router(ORACLE_REPLY)
    source = DecorationSource(router=router, rng=random.Random(1))

    await source.generate("Picnic under the cherry trees", MemoryCategory.DAILY, Tone.CASUAL, TemplateName.MAGAZINE)

    prompt = router.providers[0].prompts[0]
    assert "magazine" in prompt
    assert any(name in prompt for name in POSITIONING_STRATEGIES)


@pytest.mark.asyncio
async def test_oracle_failure_uses_fallback(stub_router):
    router = stub_router("", error="timeout")
    source = DecorationSource(router=router, rng=random.Random(1))

    decorations = await source.generate("Picnic under the cherry trees", MemoryCategory.TRAVEL, Tone.CASUAL, TemplateName.COLLAGE)

    assert decorations.theme == "travel"
    assert decorations.elements


@pytest.mark.asyncio
async def test_oracle_with_no_usable_elements_uses_fallback(stub_router):
    router = stub_router('{"elements": [{"kind": "hologram", "content": "x", "position": {"x": 1, "y": 1}}]}')
    source = DecorationSource(router=router, rng=random.Random(1))

    decorations = await source.generate("Picnic under the cherry trees", MemoryCategory.DATE, Tone.ROMANTIC, TemplateName.COLLAGE)

    assert decorations.theme == "date"
    assert decorations.mood == Mood.ROMANTIC
