"""
Oracle adapter - validation of untrusted oracle replies.

Oracle text is never loaded straight into the internal models. Each
validator returns a tagged result:

    Ok(value)        -> safe to use
    Invalid(reason)  -> caller switches to its fallback

Invalid decoration elements are dropped one by one; the whole reply is
only Invalid when nothing usable is left.
"""

import json
import logging
import math
import re
from typing import Optional, Union, Generic, TypeVar, Any, List
from dataclasses import dataclass

from pydantic import ValidationError

from decoration_vocabulary import normalize_kind, is_known_content, map_tone_to_mood
from models import (
    DecorationElement, PageDecorations, LayoutChoice, StoryEnhancement,
    ElementSize, Mood, Tone, MAX_ELEMENTS,
)
from templates import normalize_template_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

STORY_TONES = ("romantic", "playful", "nostalgic", "heartwarming")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    reason: str


OracleResult = Union[Ok, Invalid]


def parse_json_response(response_text: str) -> Optional[dict]:
    """Extract and parse a JSON object from oracle text."""
    if not response_text:
        return None

    response_text = response_text.strip()

    # Try direct JSON parse first
    try:
        data = json.loads(response_text)
        return data if isinstance(data, dict) else None
    except json.JSONDecodeError:
        pass

    # Try to find JSON between code blocks
    code_block_match = re.search(r'```(?:json)?\s*(\{.*\})\s*```', response_text, re.DOTALL)
    if code_block_match:
        try:
            data = json.loads(code_block_match.group(1))
            return data if isinstance(data, dict) else None
        except json.JSONDecodeError:
            pass

    # Outermost braces, for replies with chatter around the object
    start = response_text.find('{')
    end = response_text.rfind('}')
    if start != -1 and end > start:
        try:
            data = json.loads(response_text[start:end + 1])
            return data if isinstance(data, dict) else None
        except json.JSONDecodeError:
            pass

    return None


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


# ============== Layout ==============

def validate_layout_choice(data: Optional[dict]) -> OracleResult:
    """
    Validate an oracle layout recommendation.

    Args:
        data: Parsed oracle JSON, expected {"layout"|"template", "reasoning", "confidence"}

    Returns:
        Ok(LayoutChoice) or Invalid(reason)
    """
    if not isinstance(data, dict):
        return Invalid("response is not a JSON object")

    raw_template = data.get('template', data.get('layout'))
    template = normalize_template_name(raw_template)
    if template is None:
        return Invalid(f"unknown template: {raw_template!r}")

    confidence = _as_number(data.get('confidence'))
    if confidence is None:
        confidence = 0.5
    confidence = max(0.5, min(1.0, confidence))

    reasoning = data.get('reasoning')
    if not isinstance(reasoning, str) or not reasoning.strip():
        reasoning = f"Oracle recommended {template.value}"

    return Ok(LayoutChoice(
        template=template.value,
        reasoning=reasoning.strip(),
        confidence=confidence,
        source="oracle",
    ))


# ============== Decorations ==============

def _validate_element(raw: Any, index: int) -> OracleResult:
    """Validate one element; index is its position in the kept list."""
    if not isinstance(raw, dict):
        return Invalid("element is not an object")

    kind = normalize_kind(raw.get('kind', raw.get('type')))
    if kind is None:
        return Invalid(f"unknown kind: {raw.get('kind', raw.get('type'))!r}")

    content = raw.get('content')
    if not is_known_content(kind, content):
        return Invalid(f"unknown {kind.value} content: {content!r}")

    position = raw.get('position')
    if not isinstance(position, dict):
        return Invalid("missing position")
    x = _as_number(position.get('x'))
    y = _as_number(position.get('y'))
    if x is None or y is None:
        return Invalid("missing position coordinates")
    if not (0 <= x <= 100 and 0 <= y <= 100):
        return Invalid(f"position out of bounds: ({x}, {y})")

    try:
        size = ElementSize(str(raw.get('size', 'medium')).lower())
    except ValueError:
        size = ElementSize.MEDIUM

    rotation = _as_number(raw.get('rotationDegrees', raw.get('rotation')))
    if rotation is None:
        rotation = 0.0

    opacity = _as_number(raw.get('opacity'))
    if opacity is None or opacity <= 0:
        opacity = 0.3
    opacity = min(opacity, 0.95)

    layer = _as_number(raw.get('layer'))
    layer = int(layer) if layer else index + 1
    layer = max(1, min(10, layer))

    color = raw.get('color')
    if not isinstance(color, str) or not color.strip():
        color = None

    try:
        element = DecorationElement(
            kind=kind,
            content=content.strip(),
            position={"x": x, "y": y},
            size=size,
            rotation_degrees=rotation,
            opacity=opacity,
            color=color,
            layer=layer,
        )
    except ValidationError as e:
        return Invalid(f"element rejected: {e.error_count()} validation error(s)")

    return Ok(element)


def validate_page_decorations(
    data: Optional[dict],
    default_theme: str = "",
    tone: Optional[Tone] = None,
) -> OracleResult:
    """
    Validate an oracle decoration suggestion.

    Drops elements that are malformed, out of bounds or unknown, keeps
    at most MAX_ELEMENTS, and fills in layer, theme and mood defaults.

    Args:
        data: Parsed oracle JSON
        default_theme: Theme to use when the oracle gave none
        tone: Record tone, used to derive a mood when the oracle's is invalid

    Returns:
        Ok(PageDecorations) or Invalid(reason)
    """
    if not isinstance(data, dict):
        return Invalid("response is not a JSON object")

    raw_elements = data.get('elements')
    if not isinstance(raw_elements, list) or not raw_elements:
        return Invalid("no elements")

    elements: List[DecorationElement] = []
    for raw in raw_elements:
        if len(elements) >= MAX_ELEMENTS:
            break
        result = _validate_element(raw, len(elements))
        if isinstance(result, Ok):
            elements.append(result.value)
        else:
            logger.debug(f"Dropping oracle element: {result.reason}")

    if not elements:
        return Invalid("no valid elements")

    dropped = min(len(raw_elements), MAX_ELEMENTS) - len(elements)
    if dropped > 0:
        logger.info(f"Dropped {dropped} invalid oracle element(s)")

    theme = data.get('theme')
    if not isinstance(theme, str) or not theme.strip():
        theme = default_theme

    try:
        mood = Mood(str(data.get('mood', '')).lower())
    except ValueError:
        mood = map_tone_to_mood(tone) if tone else Mood.HEARTWARMING

    return Ok(PageDecorations(elements=elements, theme=theme.strip(), mood=mood))


# ============== Story ==============

def validate_story(data: Optional[dict]) -> OracleResult:
    """Validate an oracle caption rewrite."""
    if not isinstance(data, dict):
        return Invalid("response is not a JSON object")

    caption = data.get('enhancedCaption', data.get('enhanced_caption'))
    if not isinstance(caption, str) or not caption.strip():
        return Invalid("missing enhancedCaption")

    tone = data.get('tone')
    if tone not in STORY_TONES:
        tone = "heartwarming"

    caption = caption.strip()
    return Ok(StoryEnhancement(
        enhanced_caption=caption,
        tone=tone,
        word_count=len(caption.split()),
    ))
