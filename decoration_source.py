"""
DecorationSource - raw decoration candidates for a page.

Primary: oracle suggestion of 5-7 themed elements (validated)
Fallback: curated library keyed by memory category, one variant drawn at
random per call, with color and rotation jitter

The output is unplaced: the PlacementResolver still has to move and
restyle elements around the template's content zones.
"""

import logging
import random
from typing import Optional, List

from decoration_vocabulary import EMOJI_GROUPS, NAMED_CONTENT, MOOD_PALETTES, map_tone_to_mood
from models import (
    DecorationElement, PageDecorations, ElementKind, ElementSize,
    MemoryCategory, RecordContext, Tone,
)
from oracle_adapter import Ok, parse_json_response, validate_page_decorations
from providers.base import TaskType
from providers.router import ProviderRouter, get_router
from templates import TemplateName

logger = logging.getLogger(__name__)

POSITIONING_STRATEGIES = {
    "corner-focused": "Cluster most elements in the four corners (x and y below 20 or above 80)",
    "scattered": "Scatter elements loosely along the margins with uneven spacing",
    "border-style": "Line elements up along one or two page borders like a frame",
    "asymmetric": "Weight elements toward one side of the page and leave the other airy",
}

DECORATION_PROMPT = """You are a creative digital scrapbook decorator specializing in romantic couple memories. Suggest 5-7 decorative elements that add charm to the page without overwhelming the photos and text.

MEMORY ANALYSIS:
- Caption: "{caption}"
- Title: "{title}"
- Memory Type: {memory_category}
- Tone: {tone}
- Layout Style: {template}
- Location: {location}
- Date: {date}

AVAILABLE DECORATION TYPES:
1. EMOJI: {emoji}
2. DOODLE: {doodle}
3. SHAPE: {shape}
4. LINE_ART: {line_art}
5. PATTERN: {pattern}
6. STICKER: {sticker}
7. FRAME_CORNER: {frame_corner}

POSITIONING STRATEGY: {strategy_name}
- {strategy_hint}
- Avoid center areas (25-75% x and y) where photos and text usually appear
- Place decorations in corners, edges and negative space

COLOR PALETTE ({mood}): {palette}

RULES:
1. Choose 5-7 elements that tell a visual story
2. Mix different types for variety
3. Vary sizes: 2-3 small, 2-3 medium, 1-2 large
4. Keep opacity between 0.15 and 0.4
5. Rotate elements slightly (-30 to 30 degrees)
6. Use layers 1-5

Respond ONLY with valid JSON:
{{
  "elements": [
    {{
      "kind": "emoji|doodle|shape|line_art|pattern|sticker|frame_corner",
      "content": "a value from the lists above",
      "position": {{"x": 15, "y": 20}},
      "size": "small|medium|large",
      "rotationDegrees": 15,
      "opacity": 0.3,
      "color": "#FFB6C1",
      "layer": 1
    }}
  ],
  "theme": "romantic_date|fun_celebration|peaceful_moment|travel_adventure|daily_joy",
  "mood": "romantic|playful|nostalgic|peaceful|energetic|heartwarming"
}}"""


def _el(kind, content, x, y, size, rotation, opacity, layer, color=None) -> DecorationElement:
    return DecorationElement(
        kind=kind,
        content=content,
        position={"x": x, "y": y},
        size=size,
        rotation_degrees=rotation,
        opacity=opacity,
        color=color,
        layer=layer,
    )


E, D, S, L, P, ST, F = (
    ElementKind.EMOJI, ElementKind.DOODLE, ElementKind.SHAPE, ElementKind.LINE_ART,
    ElementKind.PATTERN, ElementKind.STICKER, ElementKind.FRAME_CORNER,
)
SM, MD, LG = ElementSize.SMALL, ElementSize.MEDIUM, ElementSize.LARGE

# Hand-authored variants; elements are immutable and copied on use
FALLBACK_LIBRARY = {
    MemoryCategory.DATE: (
        (
            _el(E, "💕", 85, 15, MD, 15, 0.3, 2),
            _el(D, "heart", 10, 80, SM, -20, 0.25, 1, "#FFB6C1"),
            _el(E, "🌸", 90, 70, SM, 0, 0.2, 3),
            _el(S, "circle", 5, 20, SM, 0, 0.15, 1, "#FFC0CB"),
            _el(L, "heart_chain", 75, 85, MD, -10, 0.2, 2),
        ),
        (
            _el(F, "heart_corner", 4, 4, MD, 0, 0.3, 2, "#FFB6C1"),
            _el(E, "🌹", 92, 12, SM, 20, 0.3, 3),
            _el(P, "hearts_scatter", 88, 88, MD, 0, 0.2, 1),
            _el(D, "swirl", 8, 60, SM, -15, 0.2, 1, "#E6E6FA"),
            _el(ST, "LOVE", 82, 40, SM, 12, 0.35, 4, "#FF69B4"),
        ),
        (
            _el(E, "💖", 12, 10, MD, -12, 0.3, 3),
            _el(L, "petal_trail", 90, 30, MD, 25, 0.2, 1),
            _el(D, "flower", 6, 88, SM, 10, 0.25, 2, "#FFCCCB"),
            _el(E, "✨", 94, 92, SM, 0, 0.25, 2),
            _el(S, "oval", 50, 4, SM, 0, 0.15, 1, "#FFC0CB"),
        ),
    ),
    MemoryCategory.CELEBRATION: (
        (
            _el(E, "🎈", 15, 10, MD, 10, 0.35, 3),
            _el(E, "⭐", 85, 20, SM, 45, 0.3, 2),
            _el(P, "confetti", 5, 85, LG, 0, 0.25, 1),
            _el(E, "🎉", 90, 75, SM, -15, 0.3, 2),
            _el(D, "star", 12, 65, SM, 30, 0.2, 1, "#FFD700"),
        ),
        (
            _el(E, "🥳", 88, 8, MD, -10, 0.35, 3),
            _el(P, "stars_cluster", 6, 12, MD, 0, 0.25, 1),
            _el(ST, "BEST DAY", 10, 92, SM, -8, 0.35, 4, "#FF7F7F"),
            _el(E, "🎊", 94, 60, SM, 20, 0.3, 2),
            _el(D, "zigzag", 50, 96, SM, 0, 0.2, 1, "#87CEEB"),
        ),
    ),
    MemoryCategory.TRAVEL: (
        (
            _el(E, "✈️", 80, 10, MD, 25, 0.3, 3),
            _el(D, "cloud", 10, 15, SM, 0, 0.2, 1, "#87CEEB"),
            _el(L, "wave_line", 85, 80, MD, -15, 0.25, 2),
            _el(E, "🗺️", 8, 75, SM, -10, 0.25, 2),
            _el(P, "dots_pattern", 92, 45, SM, 0, 0.15, 1),
        ),
        (
            _el(ST, "washi_tape", 6, 6, MD, -20, 0.35, 3, "#B0E0E6"),
            _el(E, "📸", 92, 18, SM, 15, 0.3, 2),
            _el(D, "sun", 88, 90, SM, 0, 0.25, 1, "#FFD700"),
            _el(E, "🧳", 5, 55, SM, 0, 0.25, 2),
            _el(L, "dot_trail", 50, 97, MD, 0, 0.2, 1),
        ),
        (
            _el(E, "🏖️", 90, 8, MD, 10, 0.3, 3),
            _el(F, "geometric_corner", 3, 94, MD, 0, 0.25, 2, "#9CAF88"),
            _el(D, "arrow", 8, 30, SM, -30, 0.2, 1, "#87CEEB"),
            _el(ST, "stamp", 93, 55, SM, 8, 0.3, 2),
            _el(P, "bubbles", 20, 3, SM, 0, 0.15, 1),
        ),
    ),
    MemoryCategory.MILESTONE: (
        (
            _el(E, "🌟", 85, 15, LG, 0, 0.35, 3),
            _el(F, "floral_corner", 5, 5, MD, 0, 0.3, 2, "#DDA0DD"),
            _el(E, "💫", 15, 80, MD, 20, 0.25, 2),
            _el(D, "spiral", 90, 70, SM, 0, 0.2, 1, "#9370DB"),
            _el(P, "sparkles", 75, 85, MD, 0, 0.2, 1),
        ),
        (
            _el(ST, "FOREVER", 88, 6, SM, 10, 0.35, 4, "#DDA0DD"),
            _el(E, "🎁", 6, 12, MD, -10, 0.3, 3),
            _el(L, "star_scatter", 92, 88, MD, 0, 0.2, 1),
            _el(D, "moon", 4, 90, SM, 15, 0.25, 2, "#E6E6FA"),
            _el(S, "diamond", 95, 45, SM, 0, 0.15, 1, "#DEB887"),
        ),
    ),
    MemoryCategory.DAILY: (
        (
            _el(E, "🦋", 20, 15, SM, 30, 0.25, 2),
            _el(D, "flower", 85, 75, MD, -10, 0.2, 1, "#98FB98"),
            _el(S, "circle", 5, 90, SM, 0, 0.15, 1, "#F0E68C"),
            _el(E, "🌿", 92, 25, SM, -20, 0.2, 2),
            _el(L, "vine_border", 10, 70, SM, 45, 0.15, 1),
        ),
        (
            _el(F, "vine_corner", 95, 4, MD, 90, 0.25, 2, "#9CAF88"),
            _el(E, "☀️", 8, 8, SM, 0, 0.25, 3),
            _el(D, "leaf", 90, 92, SM, -25, 0.2, 1, "#98FB98"),
            _el(P, "dots_pattern", 3, 50, SM, 0, 0.15, 1),
            _el(E, "🍃", 50, 97, SM, 10, 0.2, 2),
        ),
    ),
}

ROTATION_JITTER = 10.0


class DecorationSource:
    """Produces candidate decorations from the oracle or the curated library."""

    def __init__(
        self,
        router: Optional[ProviderRouter] = None,
        rng: Optional[random.Random] = None,
    ):
        self.router = router or get_router()
        self.rng = rng or random.Random()

    def choose_strategy(self) -> str:
        return self.rng.choice(sorted(POSITIONING_STRATEGIES))

    def build_prompt(
        self,
        caption: str,
        memory_category: MemoryCategory,
        tone: Tone,
        template: TemplateName,
        context: RecordContext,
        strategy: str,
    ) -> str:
        mood = map_tone_to_mood(tone)
        emoji = "; ".join(f"{group}: {' '.join(glyphs)}" for group, glyphs in EMOJI_GROUPS.items())
        vocab = {kind: ", ".join(sorted(names)) for kind, names in NAMED_CONTENT.items()}

        return DECORATION_PROMPT.format(
            caption=caption,
            title=context.title or "Untitled",
            memory_category=memory_category.value,
            tone=tone.value,
            template=template.value,
            location=context.location or "Not specified",
            date=context.date or "Not specified",
            emoji=emoji,
            doodle=vocab[ElementKind.DOODLE],
            shape=vocab[ElementKind.SHAPE],
            line_art=vocab[ElementKind.LINE_ART],
            pattern=vocab[ElementKind.PATTERN],
            sticker=vocab[ElementKind.STICKER],
            frame_corner=vocab[ElementKind.FRAME_CORNER],
            strategy_name=strategy,
            strategy_hint=POSITIONING_STRATEGIES[strategy],
            mood=mood.value,
            palette=", ".join(MOOD_PALETTES[mood]),
        )

    async def generate(
        self,
        caption: str,
        memory_category: MemoryCategory,
        tone: Tone,
        template: TemplateName,
        context: Optional[RecordContext] = None,
    ) -> PageDecorations:
        """
        Generate candidate decorations.

        Args:
            caption: Record caption
            memory_category: Category from content analysis
            tone: Tone from content analysis
            template: Chosen page template
            context: Optional title/date/location/tags

        Returns:
            PageDecorations with 1-8 unplaced elements, never empty
        """
        context = context or RecordContext()

        if not self.router.is_available():
            logger.info("Oracle not available, using fallback decorations")
            return self.fallback(memory_category, tone)

        strategy = self.choose_strategy()
        prompt = self.build_prompt(caption, memory_category, tone, template, context, strategy)
        response = await self.router.generate_text(prompt, task_type=TaskType.DECORATION)

        if response.error:
            logger.warning(f"Oracle decoration request failed: {response.error}, using fallback")
            return self.fallback(memory_category, tone)

        result = validate_page_decorations(
            parse_json_response(response.text),
            default_theme=memory_category.value,
            tone=tone,
        )
        if isinstance(result, Ok):
            logger.info(f"Oracle decorations accepted: {len(result.value.elements)} elements ({strategy})")
            return result.value

        logger.warning(f"Oracle decorations rejected: {result.reason}, using fallback")
        return self.fallback(memory_category, tone)

    def fallback(self, memory_category: MemoryCategory, tone: Tone) -> PageDecorations:
        """
        Draw one curated variant for the category and jitter it.

        Colors rotate through the mood palette from a random start;
        rotation gets a uniform offset in [-10, 10] degrees.
        """
        variants = FALLBACK_LIBRARY.get(memory_category, FALLBACK_LIBRARY[MemoryCategory.DAILY])
        variant = self.rng.choice(variants)
        mood = map_tone_to_mood(tone)
        palette = MOOD_PALETTES[mood]
        start = self.rng.randrange(len(palette))

        elements: List[DecorationElement] = []
        for i, base in enumerate(variant):
            rotation = base.rotation_degrees + self.rng.uniform(-ROTATION_JITTER, ROTATION_JITTER)
            opacity = base.opacity
            color = base.color

            # Emoji carry their own colors
            if base.kind != ElementKind.EMOJI:
                color = palette[(start + i) % len(palette)]

            if tone == Tone.ROMANTIC and color and "FF" in color.upper():
                opacity = min(opacity * 1.2, 0.95)
            elif tone == Tone.PLAYFUL:
                rotation += self.rng.uniform(-ROTATION_JITTER, ROTATION_JITTER)

            elements.append(base.model_copy(update={
                "rotation_degrees": round(rotation, 1),
                "opacity": round(opacity, 3),
                "color": color,
            }))

        logger.info(f"Fallback decorations: {memory_category.value} variant with {len(elements)} elements")

        return PageDecorations(
            elements=elements,
            theme=memory_category.value,
            mood=mood,
        )
