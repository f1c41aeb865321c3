"""
PlacementResolver - zone-avoidance for decoration elements.

For each element, using its raw position against the template's zones:
1. Size: small over text, large in corners, mostly large on edges, else medium
2. Opacity: suppressed over text, boosted everywhere else
3. Position: pushed out of text zones, then out of photo zones
4. Render hints: random scale in [0.9, 1.5], z-index 15 when faded else 8

This is a fixed-direction heuristic, not a collision solver. Several
elements landing in the same zone can still end up crowded together.
"""

import logging
import random
from typing import Optional, Tuple

from models import DecorationElement, ElementSize, PageDecorations
from templates import TemplateName, normalize_template_name
from zones import in_text_zone, in_photo_zone

logger = logging.getLogger(__name__)

CORNER_LOW, CORNER_HIGH = 25, 75
EDGE_LOW, EDGE_HIGH = 20, 80
EDGE_LARGE_PROBABILITY = 0.7

TEXT_OPACITY_FACTOR, TEXT_OPACITY_CAP = 0.4, 0.3
OPEN_OPACITY_FACTOR, OPEN_OPACITY_CAP = 2.0, 0.9

SCALE_RANGE = (0.9, 1.5)
Z_INDEX_FADED, Z_INDEX_DEFAULT = 15, 8
FADED_OPACITY = 0.5

# Relocation offsets in percent. Hand-tuned, reproduce as-is.
# (horizontal shift, vertical rule) for lower half / upper half of the page
TEXT_SHIFT_LOWER, TEXT_LIFT, TEXT_MIN_Y = 20, 30, 10
TEXT_SHIFT_UPPER = 15
PHOTO_SHIFT_LOWER, PHOTO_LIFT, PHOTO_MIN_Y = 25, 40, 5
PHOTO_SHIFT_UPPER, PHOTO_DROP, PHOTO_MAX_Y = 20, 30, 95
TEXT_X_BOUNDS = (5, 95)
PHOTO_X_BOUNDS = (5, 95)


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def _shift_toward_edge(x: float, amount: float, bounds: Tuple[float, float]) -> float:
    """Move x toward the nearer horizontal page edge."""
    low, high = bounds
    if x < 50:
        return max(low, x - amount)
    return min(high, x + amount)


class PlacementResolver:
    """
    Resolves raw decoration candidates into render-ready elements.

    The resolver never fails and never drops elements: output has the
    same count and order as the input.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def smart_size(self, template: TemplateName, x: float, y: float) -> ElementSize:
        if in_text_zone(template, x, y):
            return ElementSize.SMALL

        in_corner = (x < CORNER_LOW or x > CORNER_HIGH) and (y < CORNER_LOW or y > CORNER_HIGH)
        if in_corner:
            return ElementSize.LARGE

        on_edge = x < EDGE_LOW or x > EDGE_HIGH or y < EDGE_LOW or y > EDGE_HIGH
        if on_edge:
            return ElementSize.LARGE if self.rng.random() < EDGE_LARGE_PROBABILITY else ElementSize.MEDIUM

        return ElementSize.MEDIUM

    def smart_opacity(self, template: TemplateName, x: float, y: float, opacity: float) -> float:
        # Photos are handled by relocation, so only text suppresses opacity
        if in_text_zone(template, x, y):
            return min(opacity * TEXT_OPACITY_FACTOR, TEXT_OPACITY_CAP)
        return min(opacity * OPEN_OPACITY_FACTOR, OPEN_OPACITY_CAP)

    def adjusted_position(self, template: TemplateName, x: float, y: float) -> Tuple[float, float]:
        """
        Relocate a point out of the template's content zones.

        Args:
            template: Page template
            x: Raw horizontal position (percent)
            y: Raw vertical position (percent)

        Returns:
            (x, y) clamped to [0, 100]; unchanged when outside every zone
        """
        if in_text_zone(template, x, y):
            if y > 50:
                new_x = _shift_toward_edge(x, TEXT_SHIFT_LOWER, TEXT_X_BOUNDS)
                new_y = max(TEXT_MIN_Y, y - TEXT_LIFT)
            else:
                new_x = _shift_toward_edge(x, TEXT_SHIFT_UPPER, TEXT_X_BOUNDS)
                new_y = y
        elif in_photo_zone(template, x, y):
            if y > 50:
                new_x = _shift_toward_edge(x, PHOTO_SHIFT_LOWER, PHOTO_X_BOUNDS)
                new_y = max(PHOTO_MIN_Y, y - PHOTO_LIFT)
            else:
                new_x = _shift_toward_edge(x, PHOTO_SHIFT_UPPER, PHOTO_X_BOUNDS)
                new_y = min(PHOTO_MAX_Y, y + PHOTO_DROP)
        else:
            new_x, new_y = x, y

        return _clamp(new_x), _clamp(new_y)

    def resolve_element(self, element: DecorationElement, template: TemplateName) -> DecorationElement:
        x, y = element.position.x, element.position.y

        size = self.smart_size(template, x, y)
        opacity = self.smart_opacity(template, x, y, element.opacity)
        new_x, new_y = self.adjusted_position(template, x, y)
        scale = round(self.rng.uniform(*SCALE_RANGE), 3)
        z_index = Z_INDEX_FADED if opacity < FADED_OPACITY else Z_INDEX_DEFAULT

        logger.debug(
            f"Decoration {element.kind.value} ({x}, {y}) -> ({new_x}, {new_y}): "
            f"size={size.value}, opacity={opacity:.2f}, scale={scale}"
        )

        return element.model_copy(update={
            "position": element.position.model_copy(update={"x": new_x, "y": new_y}),
            "size": size,
            "opacity": opacity,
            "scale": scale,
            "z_index": z_index,
        })

    def resolve(self, decorations: PageDecorations, template) -> PageDecorations:
        """
        Place every element of a decoration set on a template.

        Args:
            decorations: Raw candidates
            template: TemplateName or template name string; unknown names
                fall back to the default text zone only

        Returns:
            New PageDecorations with placed elements, same theme and mood
        """
        if not isinstance(template, TemplateName):
            template = normalize_template_name(template) or template

        placed = [self.resolve_element(element, template) for element in decorations.elements]

        moved = sum(
            1 for before, after in zip(decorations.elements, placed)
            if before.position != after.position
        )
        logger.info(f"Placed {len(placed)} decorations on {getattr(template, 'value', template)}, {moved} relocated")

        return decorations.model_copy(update={"elements": placed})
