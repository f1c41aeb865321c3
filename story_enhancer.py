"""
StoryEnhancer - optional rewrite of a caption in a warmer, second-person voice.

Primary: oracle rewrite (validated)
Fallback: the original caption, unchanged, tone "heartwarming"
"""

import logging
from typing import Optional

from models import RecordContext, StoryEnhancement
from oracle_adapter import Ok, parse_json_response, validate_story
from providers.base import TaskType
from providers.router import ProviderRouter, get_router

logger = logging.getLogger(__name__)

STORY_PROMPT = """You are helping someone improve their personal caption for their couple's scrapbook. Take their original words and make them sound more personal and warm, like they're talking directly to their partner.

IMPORTANT RULES:
- Change "he/she" to "you"
- Don't add details that weren't in the original caption
- Don't make up new facts or events
- Keep the same basic story and facts
- Use simple, natural language

ORIGINAL CONTEXT:
- Caption: "{caption}"
- Title: "{title}"
- Date: {date}
- Location: {location}

Example:
Original: "He texted me late that night"
Enhanced: "You texted me late that night and it was so sweet"

Respond ONLY with valid JSON in this exact format:
{{
  "enhancedCaption": "Your enhanced story here...",
  "tone": "romantic|playful|nostalgic|heartwarming"
}}"""


def unchanged_story(caption: str) -> StoryEnhancement:
    return StoryEnhancement(
        enhanced_caption=caption,
        tone="heartwarming",
        word_count=len(caption.split()),
    )


class StoryEnhancer:
    def __init__(self, router: Optional[ProviderRouter] = None):
        self.router = router or get_router()

    async def enhance(self, caption: str, context: Optional[RecordContext] = None) -> StoryEnhancement:
        """Rewrite a caption; returns it unchanged when the oracle can't help."""
        context = context or RecordContext()

        if not self.router.is_available():
            logger.info("Oracle not available, returning original caption")
            return unchanged_story(caption)

        prompt = STORY_PROMPT.format(
            caption=caption,
            title=context.title or "Untitled Memory",
            date=context.date or "Not specified",
            location=context.location or "Not specified",
        )
        response = await self.router.generate_text(prompt, task_type=TaskType.STORY)

        if response.error:
            logger.warning(f"Story enhancement failed: {response.error}")
            return unchanged_story(caption)

        result = validate_story(parse_json_response(response.text))
        if isinstance(result, Ok):
            return result.value

        logger.warning(f"Story enhancement rejected: {result.reason}")
        return unchanged_story(caption)
