"""
Decoration descriptor serializer.

PageDecorations are stored next to the record as an opaque JSON string:

    {"elements": [{"kind", "content", "position": {"x", "y"}, "size",
                   "rotationDegrees", "opacity", "color"?, "layer",
                   "scale"?, "zIndex"?}], "theme", "mood"}

Reading never raises: a missing or corrupt blob means "no decorations".
"""

import logging
from typing import Optional

from pydantic import ValidationError

from models import PageDecorations, Mood

logger = logging.getLogger(__name__)


def empty_decorations() -> PageDecorations:
    return PageDecorations(elements=[], theme="", mood=Mood.HEARTWARMING)


def to_flat(decorations: PageDecorations) -> dict:
    """Flat, JSON-compatible form consumed by the renderer."""
    return decorations.model_dump(mode="json", by_alias=True, exclude_none=True)


def serialize_decorations(decorations: PageDecorations) -> str:
    return decorations.model_dump_json(by_alias=True, exclude_none=True)


def deserialize_decorations(blob: Optional[str], record_id: Optional[str] = None) -> PageDecorations:
    """
    Parse a stored decoration blob.

    Args:
        blob: Stored JSON string (may be None or empty)
        record_id: Only used for logging

    Returns:
        Parsed PageDecorations, or empty decorations if the blob is unusable
    """
    if not blob:
        return empty_decorations()

    try:
        return PageDecorations.model_validate_json(blob)
    except ValidationError as e:
        logger.warning(f"Unreadable decorations for record {record_id or '?'}: {e.error_count()} error(s)")
        return empty_decorations()
