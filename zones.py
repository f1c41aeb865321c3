"""
Zone Registry - content regions reserved by each page template.

Zones are rectangles in percentage coordinates (0-100, origin top-left).
Text zones hold the caption, photo zones hold the record's photos.
Decorations only use these to steer away from content; they never
lay the content out themselves.
"""

from enum import Enum
from typing import Optional, Tuple
from dataclasses import dataclass

from templates import TemplateName


class ZoneKind(str, Enum):
    TEXT = "text"
    PHOTO = "photo"


@dataclass(frozen=True)
class Zone:
    """A rectangular content region of a template."""
    x1: float
    y1: float
    x2: float
    y2: float
    kind: ZoneKind

    def contains(self, x: float, y: float) -> bool:
        """Inclusive containment test."""
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2


def _text(x1, y1, x2, y2) -> Zone:
    return Zone(x1, y1, x2, y2, ZoneKind.TEXT)


def _photo(x1, y1, x2, y2) -> Zone:
    return Zone(x1, y1, x2, y2, ZoneKind.PHOTO)


# Caption area shared by templates without a dedicated one
DEFAULT_TEXT_ZONE = _text(15, 70, 85, 90)

ZONE_REGISTRY: dict = {
    TemplateName.COLLAGE: (
        _text(15, 75, 85, 95),
        _photo(8, 15, 48, 55),      # top left
        _photo(52, 15, 92, 55),     # top right
        _photo(8, 58, 48, 98),      # bottom left
        _photo(52, 58, 92, 98),     # bottom right
    ),
    TemplateName.POLAROID_STACK: (
        _text(10, 70, 90, 90),
        _photo(15, 20, 70, 70),
        _photo(25, 25, 80, 75),     # second polaroid, offset
        _photo(10, 30, 65, 80),     # third polaroid, offset
    ),
    TemplateName.MAGAZINE: (
        _text(15, 65, 85, 85),
        _photo(15, 25, 85, 65),     # hero image
        _photo(15, 70, 35, 85),
        _photo(40, 70, 60, 85),
    ),
    TemplateName.PHOTO_ALBUM: (
        DEFAULT_TEXT_ZONE,
        _photo(20, 15, 100, 80),
    ),
    TemplateName.SCRAPBOOK_MIXED: (
        DEFAULT_TEXT_ZONE,
        _photo(20, 15, 100, 80),
    ),
}


def get_zones(template: TemplateName) -> Tuple[Zone, ...]:
    """All zones declared for a template (text zones first)."""
    return ZONE_REGISTRY.get(template, (DEFAULT_TEXT_ZONE,))


def find_zone(template: TemplateName, x: float, y: float, kind: ZoneKind) -> Optional[Zone]:
    """
    Find the first zone of the given kind containing a point.

    Args:
        template: Template whose zones to check
        x: Horizontal position (percent)
        y: Vertical position (percent)
        kind: Zone kind to look for

    Returns:
        The containing Zone or None
    """
    for zone in get_zones(template):
        if zone.kind == kind and zone.contains(x, y):
            return zone
    return None


def in_text_zone(template: TemplateName, x: float, y: float) -> bool:
    return find_zone(template, x, y, ZoneKind.TEXT) is not None


def in_photo_zone(template: TemplateName, x: float, y: float) -> bool:
    return find_zone(template, x, y, ZoneKind.PHOTO) is not None
