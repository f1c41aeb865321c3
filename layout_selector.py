"""
LayoutSelector - picks a page template for a record.

Primary: external oracle via the provider router (validated reply)
Fallback: deterministic rule table on image count + content analysis

The rule table is the reference behavior; the oracle only refines it.
"""

import logging
from typing import Optional

from content_analyzer import ContentAnalysis, ContentAnalyzer, get_content_analyzer, text_density
from models import LayoutChoice, MemoryCategory, RecordContext, Tone
from oracle_adapter import Ok, parse_json_response, validate_layout_choice
from providers.base import TaskType
from providers.router import ProviderRouter, get_router
from templates import TemplateName

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.75

LAYOUT_PROMPT = """You are an expert digital scrapbook layout designer specializing in romantic couple memories. Your job is to recommend the optimal layout for a memory based on its content.

Available layouts and their characteristics:

1. COLLAGE
   - Grid-based layout with 2-4 photos
   - Decorative tape and washi tape elements
   - Best for: Multiple casual moments, celebrations, fun activities
   - Max capacity: 4 images

2. POLAROID-STACK
   - 1-3 overlapping polaroid-style photos
   - Intimate, nostalgic presentation
   - Best for: Romantic moments, dates, intimate memories
   - Max capacity: 3 images

3. MAGAZINE
   - Hero image with thumbnail gallery
   - Clean, story-focused design
   - Best for: Detailed stories, milestones, important events
   - Max capacity: 5 images

4. PHOTO-ALBUM
   - Traditional organized presentation
   - Best for: Formal events, organized memories
   - Max capacity: 6 images

5. SCRAPBOOK-MIXED
   - Creative, varied positioning
   - Best for: Travel memories, many photos, artistic presentation
   - Max capacity: 8 images

CONTENT DETAILS:
- Number of images: {image_count}
- Caption: "{caption}"
- Caption length: {caption_length} characters
- Title: "{title}"
- Date: {date}
- Location: {location}
- Tags: {tags}

ANALYSIS:
- Detected tone: {tone}
- Memory type: {memory_category}
- Text density: {density}
- Emotional indicators: {indicators}

Consider the number of images, the caption length, the tone and the memory type.

Respond ONLY with valid JSON in this exact format:
{{
  "layout": "layout-name",
  "reasoning": "why this layout presents the memory best",
  "confidence": 0.85
}}"""


def fallback_layout(analysis: ContentAnalysis) -> LayoutChoice:
    """
    Rule-based template choice, used whenever the oracle is not.

    Pure function of the analysis; confidence is always 0.75. A record
    with no images is laid out like one with three or four.

    Args:
        analysis: Content analysis of the record

    Returns:
        LayoutChoice with source="fallback"
    """
    count = analysis.image_count
    length = analysis.caption_length
    romantic = analysis.memory_category == MemoryCategory.DATE or analysis.tone == Tone.ROMANTIC

    if count == 1:
        if length > 200:
            template = TemplateName.MAGAZINE
            reasoning = "Single image with a detailed story benefits from a magazine layout for text presentation"
        elif romantic:
            template = TemplateName.POLAROID_STACK
            reasoning = "Single romantic image creates an intimate moment in polaroid style"
        else:
            template = TemplateName.PHOTO_ALBUM
            reasoning = "Single image with a moderate caption suits a traditional album layout"
    elif count == 2:
        if romantic:
            template = TemplateName.POLAROID_STACK
            reasoning = "Two intimate moments make a romantic narrative in overlapping style"
        elif length > 250:
            template = TemplateName.MAGAZINE
            reasoning = "Two images with a substantial story need a structured layout for text hierarchy"
        else:
            template = TemplateName.COLLAGE
            reasoning = "Two images create a balanced composition in a decorative collage"
    elif count <= 4:
        if length > 300 or analysis.memory_category == MemoryCategory.MILESTONE:
            template = TemplateName.MAGAZINE
            reasoning = "Multiple images with an important story require structured presentation"
        elif analysis.tone == Tone.PLAYFUL or analysis.memory_category == MemoryCategory.CELEBRATION:
            template = TemplateName.COLLAGE
            reasoning = "Multiple celebratory moments shine in a vibrant collage"
        else:
            template = TemplateName.PHOTO_ALBUM
            reasoning = "Multiple images suit an organized traditional presentation"
    else:
        if analysis.memory_category == MemoryCategory.TRAVEL or analysis.tone == Tone.NOSTALGIC:
            template = TemplateName.SCRAPBOOK_MIXED
            reasoning = "Many travel or nostalgic photos need a flexible layout for storytelling"
        else:
            template = TemplateName.MAGAZINE
            reasoning = "Many images require a structured layout to stay visually clear"

    return LayoutChoice(
        template=template.value,
        reasoning=f"{reasoning} (fallback mode)",
        confidence=FALLBACK_CONFIDENCE,
        source="fallback",
    )


class LayoutSelector:
    """Chooses one of the five templates for a record."""

    def __init__(
        self,
        router: Optional[ProviderRouter] = None,
        analyzer: Optional[ContentAnalyzer] = None,
    ):
        self.router = router or get_router()
        self.analyzer = analyzer or get_content_analyzer()

    def build_prompt(
        self,
        image_count: int,
        caption: str,
        analysis: ContentAnalysis,
        context: RecordContext,
    ) -> str:
        return LAYOUT_PROMPT.format(
            image_count=image_count,
            caption=caption,
            caption_length=len(caption),
            title=context.title or "Untitled",
            date=context.date or "Not specified",
            location=context.location or "Not specified",
            tags=", ".join(context.tags) if context.tags else "None",
            tone=analysis.tone.value,
            memory_category=analysis.memory_category.value,
            density=text_density(analysis.caption_length),
            indicators=self.analyzer.emotional_indicators(caption),
        )

    async def select(
        self,
        image_count: int,
        caption: str,
        analysis: Optional[ContentAnalysis] = None,
        context: Optional[RecordContext] = None,
    ) -> LayoutChoice:
        """
        Recommend a template.

        Args:
            image_count: Number of photos in the record
            caption: Record caption
            analysis: Precomputed analysis (computed here if omitted)
            context: Optional title/date/location/tags

        Returns:
            LayoutChoice from the oracle, or from the rule table on any failure
        """
        context = context or RecordContext()
        if analysis is None:
            analysis = self.analyzer.analyze(
                caption,
                title=context.title or "",
                image_count=image_count,
                tags=context.tags,
                location=context.location,
                date=context.date,
            )

        if not self.router.is_available():
            logger.info("Oracle not available, using fallback layout selection")
            return fallback_layout(analysis)

        prompt = self.build_prompt(image_count, caption, analysis, context)
        response = await self.router.generate_text(prompt, task_type=TaskType.LAYOUT)

        if response.error:
            logger.warning(f"Oracle layout request failed: {response.error}, using fallback")
            return fallback_layout(analysis)

        result = validate_layout_choice(parse_json_response(response.text))
        if isinstance(result, Ok):
            logger.info(f"Oracle recommended {result.value.template.value} ({result.value.confidence:.2f})")
            return result.value

        logger.warning(f"Oracle layout rejected: {result.reason}, using fallback")
        return fallback_layout(analysis)
