"""
Decoration vocabulary shared by the oracle prompt, the oracle validator
and the fallback library.

Every non-emoji kind draws its content from a fixed set of named
primitives so the rendering side can register one renderer per kind.
"""

import re
import unicodedata
from typing import Optional

from models import ElementKind, Mood, Tone

EMOJI_GROUPS = {
    "Romantic": ["💕", "💖", "💗", "💘", "💝", "💞", "💟", "❤️", "🧡", "💛", "💚", "💙", "💜", "🤍"],
    "Nature": ["🌸", "🌺", "🌻", "🌹", "🌷", "🌼", "💐", "🌿", "🍃", "🌱", "🌳", "🦋", "🐝"],
    "Celestial": ["⭐", "🌟", "✨", "💫", "🌙", "☀️", "🌈", "☁️"],
    "Fun": ["🎈", "🎉", "🎊", "🎀", "🎁", "🧸", "🍰", "🥳"],
    "Travel": ["✈️", "🗺️", "🧳", "📸", "🎒", "🏖️", "🏔️", "🏰"],
}

NAMED_CONTENT = {
    ElementKind.DOODLE: frozenset({
        "heart", "star", "flower", "butterfly", "arrow", "swirl", "cloud", "sun", "moon",
        "vine", "branch", "leaf", "petal", "spiral", "wave", "zigzag", "dots_line",
    }),
    ElementKind.SHAPE: frozenset({
        "circle", "triangle", "diamond", "rectangle", "oval", "hexagon",
    }),
    ElementKind.LINE_ART: frozenset({
        "vine_border", "dot_trail", "swirl_corner", "heart_chain", "star_scatter",
        "wave_line", "zigzag_border", "petal_trail", "bubble_trail",
    }),
    ElementKind.PATTERN: frozenset({
        "confetti", "sparkles", "petals_falling", "hearts_scatter", "dots_pattern",
        "stars_cluster", "bubbles", "musical_notes",
    }),
    ElementKind.STICKER: frozenset({
        "LOVE", "CUTE", "BEST DAY", "FOREVER", "heart_stamp", "star_stamp",
        "polaroid_frame", "washi_tape", "paper_clip", "pin", "stamp",
    }),
    ElementKind.FRAME_CORNER: frozenset({
        "floral_corner", "geometric_corner", "heart_corner", "vine_corner",
    }),
}

# Text stickers are matched case-insensitively, named primitives are not
_STICKER_WORDS = {s.upper() for s in NAMED_CONTENT[ElementKind.STICKER] if s.isupper()}

MOOD_PALETTES = {
    Mood.ROMANTIC: ["#FFB6C1", "#FFC0CB", "#FFCCCB", "#E6E6FA"],
    Mood.PLAYFUL: ["#FF7F7F", "#FFD700", "#87CEEB"],
    Mood.NOSTALGIC: ["#DEB887", "#D2B48C", "#DDA0DD"],
    Mood.PEACEFUL: ["#9CAF88", "#B0E0E6", "#F5F5DC"],
    Mood.ENERGETIC: ["#FF6347", "#00BFFF", "#32CD32"],
    Mood.HEARTWARMING: ["#F4A460", "#FFDAB9", "#FFB6C1", "#98FB98"],
}

TONE_TO_MOOD = {
    Tone.ROMANTIC: Mood.ROMANTIC,
    Tone.PLAYFUL: Mood.PLAYFUL,
    Tone.NOSTALGIC: Mood.NOSTALGIC,
    Tone.CASUAL: Mood.HEARTWARMING,
    Tone.FORMAL: Mood.PEACEFUL,
}

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')


def map_tone_to_mood(tone: Tone) -> Mood:
    return TONE_TO_MOOD.get(tone, Mood.HEARTWARMING)


def normalize_kind(raw: object) -> Optional[ElementKind]:
    """
    Map an element kind as written by the oracle onto ElementKind.

    Accepts snake_case, camelCase, kebab-case and spaced spellings.

    Examples:
        >>> normalize_kind("lineArt")
        <ElementKind.LINE_ART: 'line_art'>
        >>> normalize_kind("Frame-Corner")
        <ElementKind.FRAME_CORNER: 'frame_corner'>
    """
    if not isinstance(raw, str) or not raw.strip():
        return None

    value = _CAMEL_BOUNDARY.sub('_', raw.strip())
    value = value.lower().replace('-', '_').replace(' ', '_')

    try:
        return ElementKind(value)
    except ValueError:
        return None


def is_emoji(content: str) -> bool:
    """True for a short string made of pictographic characters."""
    if not content or len(content) > 8:
        return False
    has_symbol = False
    for ch in content:
        category = unicodedata.category(ch)
        if category == "So":
            has_symbol = True
        elif ch in ("\u200d", "\ufe0f") or category in ("Mn", "Sk"):
            continue    # joiners, variation selectors, skin tone modifiers
        else:
            return False
    return has_symbol


def is_known_content(kind: ElementKind, content: object) -> bool:
    """Check that content is something the renderer knows how to draw for kind."""
    if not isinstance(content, str) or not content.strip():
        return False
    if kind == ElementKind.EMOJI:
        return is_emoji(content.strip())
    if kind == ElementKind.STICKER and content.strip().upper() in _STICKER_WORDS:
        return True
    return content.strip() in NAMED_CONTENT[kind]
