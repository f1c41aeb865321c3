"""
Scrapbook Composer - Main orchestrator for page composition.

Combines:
- ContentAnalyzer: tone and memory category from caption/title
- LayoutSelector: one of five page templates
- DecorationSource: candidate ornaments (oracle or curated library)
- PlacementResolver: keeps ornaments off text and photo zones
- StoryEnhancer: optional caption rewrite

Workflow:
1. Classify the record content
2. Pick a template
3. Produce decoration candidates for that template
4. Place them around the template's zones
5. Serialize the result for storage next to the record
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from config import get_settings
from content_analyzer import ContentAnalysis, ContentAnalyzer, get_content_analyzer
from decoration_source import DecorationSource
from layout_selector import LayoutSelector
from models import (
    CompositionResponse,
    LayoutChoice,
    MemoryCategory,
    PageDecorations,
    RecordContext,
    RecordInput,
    StoryEnhancement,
    Tone,
)
from placement import PlacementResolver
from providers.router import ProviderRouter, get_router
from serializer import empty_decorations, serialize_decorations
from story_enhancer import StoryEnhancer
from templates import TemplateName, normalize_template_name

logger = logging.getLogger(__name__)


@dataclass
class Composition:
    """Everything produced for one record in one run."""
    analysis: ContentAnalysis
    layout: LayoutChoice
    decorations: PageDecorations
    decorations_blob: str
    story: Optional[StoryEnhancement] = None

    def to_response(self) -> CompositionResponse:
        return CompositionResponse(
            tone=self.analysis.tone,
            memory_category=self.analysis.memory_category,
            layout=self.layout,
            decorations=self.decorations,
            decorations_blob=self.decorations_blob,
            story=self.story,
        )


class ScrapbookComposer:
    """
    Composes a decorated page for a record.

    Each call builds its own random source, so concurrent records never
    share state. Set `random_seed` in settings for reproducible output.
    """

    def __init__(
        self,
        router: Optional[ProviderRouter] = None,
        analyzer: Optional[ContentAnalyzer] = None,
        seed: Optional[int] = None,
    ):
        self.router = router or get_router()
        self.analyzer = analyzer or get_content_analyzer()
        self.seed = seed if seed is not None else get_settings().random_seed

    def _new_rng(self) -> random.Random:
        return random.Random(self.seed)

    def analyze(self, record: RecordInput) -> ContentAnalysis:
        return self.analyzer.analyze(
            record.caption,
            title=record.title,
            image_count=record.image_count,
            tags=record.tags,
            location=record.location,
            date=record.date,
        )

    async def compose(self, record: RecordInput, include_story: bool = False) -> Composition:
        """
        Run the full pipeline for a record.

        Args:
            record: Record fields (caption, title, image count, context)
            include_story: Also rewrite the caption via the oracle

        Returns:
            Composition with layout, placed decorations and their stored blob
        """
        rng = self._new_rng()
        context = record.context()
        analysis = self.analyze(record)

        logger.info(
            f"Composing page: {record.image_count} image(s), "
            f"tone={analysis.tone.value}, category={analysis.memory_category.value}"
        )

        selector = LayoutSelector(router=self.router, analyzer=self.analyzer)
        layout = await selector.select(record.image_count, record.caption, analysis=analysis, context=context)

        decorations = await self._decorate(
            record.caption,
            analysis.memory_category,
            analysis.tone,
            layout.template.value,
            context,
            rng,
        )

        story = None
        if include_story:
            story = await StoryEnhancer(router=self.router).enhance(record.caption, context)

        return Composition(
            analysis=analysis,
            layout=layout,
            decorations=decorations,
            decorations_blob=serialize_decorations(decorations),
            story=story,
        )

    async def regenerate_decorations(self, record: RecordInput, template: str) -> Composition:
        """
        Rerun only the decoration half against a given template.

        Used when the owner overrides the recommended layout. Unknown
        template names fall back to collage.
        """
        rng = self._new_rng()
        analysis = self.analyze(record)
        chosen = normalize_template_name(template) or TemplateName.COLLAGE

        decorations = await self._decorate(
            record.caption,
            analysis.memory_category,
            analysis.tone,
            chosen.value,
            record.context(),
            rng,
        )

        layout = LayoutChoice(
            template=chosen.value,
            reasoning="Chosen by the page owner",
            confidence=1.0,
            source="owner",
        )
        return Composition(
            analysis=analysis,
            layout=layout,
            decorations=decorations,
            decorations_blob=serialize_decorations(decorations),
        )

    async def decorate(
        self,
        caption: str,
        memory_category: MemoryCategory,
        tone: Tone,
        template: str,
        context: Optional[RecordContext] = None,
    ) -> PageDecorations:
        """Decoration half only, for callers that already know category and tone."""
        return await self._decorate(caption, memory_category, tone, template, context or RecordContext(), self._new_rng())

    async def _decorate(
        self,
        caption: str,
        memory_category: MemoryCategory,
        tone: Tone,
        template: str,
        context: RecordContext,
        rng: random.Random,
    ) -> PageDecorations:
        chosen = normalize_template_name(template) or TemplateName.COLLAGE
        try:
            source = DecorationSource(router=self.router, rng=rng)
            candidates = await source.generate(caption, memory_category, tone, chosen, context)
            return PlacementResolver(rng=rng).resolve(candidates, chosen)
        except Exception as e:
            logger.error(f"Decoration generation failed, storing none: {e}", exc_info=True)
            return empty_decorations()


# Singleton instance
_composer_instance: Optional[ScrapbookComposer] = None


def get_composer() -> ScrapbookComposer:
    """Get or create singleton ScrapbookComposer instance."""
    global _composer_instance
    if _composer_instance is None:
        _composer_instance = ScrapbookComposer()
    return _composer_instance
