"""
Page template catalog.

Five fixed scrapbook layouts:
- Collage
- Polaroid Stack
- Magazine
- Photo Album
- Mixed Scrapbook
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass


class TemplateName(str, Enum):
    """Named page templates."""

    COLLAGE = "collage"
    POLAROID_STACK = "polaroid-stack"
    MAGAZINE = "magazine"
    PHOTO_ALBUM = "photo-album"
    SCRAPBOOK_MIXED = "scrapbook-mixed"


@dataclass(frozen=True)
class TemplateInfo:
    """Descriptive information about a template."""
    name: str
    description: str
    best_for: str
    max_images: int
    style: str


TEMPLATE_CATALOG = {
    TemplateName.COLLAGE: TemplateInfo(
        name="Collage",
        description="Grid-based layout with decorative tape and corner elements",
        best_for="Multiple photos, casual memories, celebrations",
        max_images=4,
        style="Playful and decorative",
    ),
    TemplateName.POLAROID_STACK: TemplateInfo(
        name="Polaroid Stack",
        description="Overlapping polaroid-style photos with handwritten notes",
        best_for="Intimate moments, romantic memories, 1-3 photos",
        max_images=3,
        style="Nostalgic and intimate",
    ),
    TemplateName.MAGAZINE: TemplateInfo(
        name="Magazine",
        description="Hero image with thumbnail gallery and clean text layout",
        best_for="Story-focused memories, long captions, milestones",
        max_images=5,
        style="Clean and structured",
    ),
    TemplateName.PHOTO_ALBUM: TemplateInfo(
        name="Photo Album",
        description="Traditional album presentation with organized layout",
        best_for="Formal memories, organized display, classic presentation",
        max_images=6,
        style="Traditional and elegant",
    ),
    TemplateName.SCRAPBOOK_MIXED: TemplateInfo(
        name="Mixed Scrapbook",
        description="Creative, varied positioning with artistic elements",
        best_for="Artistic presentation, many photos, travel memories",
        max_images=8,
        style="Artistic and flexible",
    ),
}


def normalize_template_name(name: Optional[str]) -> Optional[TemplateName]:
    """
    Map a loosely formatted template name onto the catalog.

    Args:
        name: Template name in any casing, with '-', '_' or spaces

    Returns:
        Matching TemplateName, or None if it is not one of the five

    Examples:
        >>> normalize_template_name("Polaroid_Stack")
        <TemplateName.POLAROID_STACK: 'polaroid-stack'>
        >>> normalize_template_name("grid") is None
        True
    """
    if not name or not isinstance(name, str):
        return None

    normalized = name.strip().lower().replace("_", "-").replace(" ", "-")

    for template in TemplateName:
        if template.value == normalized:
            return template

    return None


def get_template_options() -> list:
    """Get list of available templates for user selection."""
    return [
        {
            "id": template.value,
            "name": info.name,
            "description": info.description,
            "best_for": info.best_for,
            "max_images": info.max_images,
            "style": info.style,
        }
        for template, info in TEMPLATE_CATALOG.items()
    ]
