import pytest

from content_analyzer import ContentAnalyzer, analyze_content, text_density
from models import Tone, MemoryCategory


@pytest.fixture
def analyzer():
    return ContentAnalyzer()


def test_romantic_dinner_is_date(analyzer):
    result = analyzer.analyze("You surprised me with a candlelit dinner, I love you so much", image_count=1)

    assert result.tone == Tone.ROMANTIC
    assert result.memory_category == MemoryCategory.DATE
    assert result.image_count == 1


def test_empty_input_is_casual_daily(analyzer):
    result = analyzer.analyze("")

    assert result.tone == Tone.CASUAL
    assert result.memory_category == MemoryCategory.DAILY
    assert result.caption_length == 0


def test_tone_priority_romantic_before_playful(analyzer):
    result = analyzer.analyze("Such a fun night, love it")
    assert result.tone == Tone.ROMANTIC


def test_playful_tone_makes_celebration(analyzer):
    result = analyzer.analyze("Haha what a crazy afternoon")

    assert result.tone == Tone.PLAYFUL
    assert result.memory_category == MemoryCategory.CELEBRATION


def test_nostalgic_tone(analyzer):
    result = analyzer.analyze("I remember the old cafe on the corner")
    assert result.tone == Tone.NOSTALGIC


def test_formal_needs_long_caption(analyzer):
    short = analyzer.analyze("The event went well")
    long = analyzer.analyze("The event went well. " + "We met many new people. " * 10)

    assert short.tone == Tone.CASUAL
    assert long.caption_length > 200
    assert long.tone == Tone.FORMAL


def test_title_is_searched(analyzer):
    result = analyzer.analyze("We had pancakes", title="Anniversary morning")
    assert result.memory_category == MemoryCategory.MILESTONE


def test_milestone_tag(analyzer):
    result = analyzer.analyze("We got the keys", tags=["Milestone"])
    assert result.memory_category == MemoryCategory.MILESTONE


def test_milestone_beats_date(analyzer):
    result = analyzer.analyze("Birthday dinner at the harbor")
    assert result.memory_category == MemoryCategory.MILESTONE


def test_location_makes_travel(analyzer):
    result = analyzer.analyze("Quiet morning walk by the lake", location="Hallstatt")
    assert result.memory_category == MemoryCategory.TRAVEL


def test_blank_location_is_ignored(analyzer):
    result = analyzer.analyze("Quiet morning walk by the lake", location="   ")
    assert result.memory_category == MemoryCategory.DAILY


def test_caption_length_excludes_title(analyzer):
    result = analyzer.analyze("twelve chars", title="a long title")
    assert result.caption_length == 12


def test_emotional_indicators(analyzer):
    assert analyzer.emotional_indicators("A perfect day, I love it") == "love, significance"
    assert analyzer.emotional_indicators("We ate lunch") == "casual contentment"


def test_text_density():
    assert text_density(300).startswith("High")
    assert text_density(150) == "Medium"
    assert text_density(20) == "Low"


def test_module_shortcut():
    result = analyze_content("Road trip to the mountains", image_count=3)

    assert result.memory_category == MemoryCategory.TRAVEL
    assert result.image_count == 3
