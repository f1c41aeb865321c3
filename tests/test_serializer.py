import json
import math
import random

import pytest
from pydantic import ValidationError

from decoration_source import DecorationSource
from models import DecorationElement, ElementKind, MemoryCategory, Mood, PageDecorations, Position, Tone
from placement import PlacementResolver
from serializer import serialize_decorations, deserialize_decorations, to_flat, empty_decorations
from templates import TemplateName

EMPTY = {"elements": [], "theme": "", "mood": "heartwarming"}


@pytest.fixture
def placed(offline_router):
    rng = random.Random(8)
    candidates = DecorationSource(router=offline_router, rng=rng).fallback(MemoryCategory.DATE, Tone.ROMANTIC)
    return PlacementResolver(rng=rng).resolve(candidates, TemplateName.POLAROID_STACK)


def test_round_trip(placed):
    assert deserialize_decorations(serialize_decorations(placed)) == placed


def test_round_trip_unplaced_candidates(offline_router):
    candidates = DecorationSource(router=offline_router, rng=random.Random(2)).fallback(MemoryCategory.TRAVEL, Tone.CASUAL)
    assert deserialize_decorations(serialize_decorations(candidates)) == candidates


def test_wire_names_are_camel_case(placed):
    flat = json.loads(serialize_decorations(placed))
    element = flat["elements"][0]

    assert {"kind", "content", "position", "size", "rotationDegrees", "opacity", "layer", "scale", "zIndex"} <= set(element)
    assert "rotation_degrees" not in element
    assert flat["mood"] == "romantic"


def test_unset_optionals_are_omitted(offline_router):
    candidates = DecorationSource(router=offline_router, rng=random.Random(2)).fallback(MemoryCategory.DAILY, Tone.CASUAL)
    flat = to_flat(candidates)

    for element in flat["elements"]:
        assert "scale" not in element
        assert "zIndex" not in element


def test_kind_values_are_snake_case():
    blob = json.dumps({
        "elements": [{"kind": "frame_corner", "content": "vine_corner", "position": {"x": 1, "y": 1}}],
        "theme": "daily",
        "mood": "peaceful",
    })
    decorations = deserialize_decorations(blob)

    assert to_flat(decorations)["elements"][0]["kind"] == "frame_corner"


@pytest.mark.parametrize("blob", [
    None,
    "",
    "{not json",
    '{"elements": "nope"}',
    '{"elements": [{"kind": "laser"}]}',
    '{"mood": "furious"}',
])
def test_malformed_blob_is_empty(blob):
    decorations = deserialize_decorations(blob, record_id="rec-1")

    assert to_flat(decorations) == EMPTY


def test_empty_decorations():
    assert empty_decorations().mood == Mood.HEARTWARMING
    assert to_flat(empty_decorations()) == EMPTY


def element(**kwargs):
    return DecorationElement(kind=ElementKind.EMOJI, content="✨", position=Position(x=10, y=10), **kwargs)


@pytest.mark.parametrize("field,value", [
    ("rotation_degrees", math.inf),
    ("rotation_degrees", -math.inf),
    ("rotation_degrees", float("nan")),
    ("scale", math.inf),
    ("scale", float("nan")),
])
def test_non_finite_transforms_are_rejected(field, value):
    with pytest.raises(ValidationError):
        element(**{field: value})


def test_non_finite_transforms_rejected_from_blob():
    blob = '{"elements": [{"kind": "emoji", "content": "x", "position": {"x": 5, "y": 5}, "rotationDegrees": NaN}]}'

    assert to_flat(deserialize_decorations(blob)) == EMPTY


def test_extreme_finite_transforms_survive_round_trip():
    decorations = PageDecorations(
        elements=[element(rotation_degrees=1e308, scale=-1e-300)],
        theme="daily",
        mood=Mood.PEACEFUL,
    )

    assert deserialize_decorations(serialize_decorations(decorations)) == decorations
