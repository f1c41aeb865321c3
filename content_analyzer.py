"""
ContentAnalyzer - keyword-based classification of a record's text.

Determines:
1. Tone (romantic, playful, nostalgic, formal, casual)
2. Memory category (milestone, date, travel, celebration, daily)

Rules are loaded from rules/content-rules.yaml and evaluated in file
order; the first matching rule wins. There is no scoring.
"""

import logging
from pathlib import Path
from typing import Optional, List, Dict, Any
from dataclasses import dataclass

import yaml

from models import Tone, MemoryCategory

logger = logging.getLogger(__name__)

RULES_PATH = Path(__file__).parent / "rules" / "content-rules.yaml"


@dataclass(frozen=True)
class ContentAnalysis:
    """Classification of one record, recomputed on every request."""
    image_count: int
    caption_length: int
    tone: Tone
    memory_category: MemoryCategory


class ContentAnalyzer:
    def __init__(self, rules_path: Path = RULES_PATH):
        with open(rules_path, 'r', encoding='utf-8') as f:
            self.rules: Dict[str, Any] = yaml.safe_load(f)

        self.tone_rules = self.rules.get('tone', [])
        self.category_rules = self.rules.get('memory_category', [])
        self.default_tone = Tone(self.rules.get('default_tone', 'casual'))
        self.default_category = MemoryCategory(self.rules.get('default_memory_category', 'daily'))
        self.indicator_rules = self.rules.get('emotional_indicators', {})

    @staticmethod
    def _mentions(text: str, keywords: List[str]) -> bool:
        return any(keyword in text for keyword in keywords)

    def classify_tone(self, text: str, caption_length: int) -> Tone:
        """Return the first tone whose rule matches"""
        for rule in self.tone_rules:
            if caption_length < rule.get('min_caption_length', 0):
                continue
            if self._mentions(text, rule.get('keywords', [])):
                return Tone(rule['name'])
        return self.default_tone

    def classify_category(
        self,
        text: str,
        tone: Tone,
        tags: List[str],
        location: Optional[str],
    ) -> MemoryCategory:
        """Return the first memory category whose rule matches"""
        tag_set = {t.strip().lower() for t in tags if isinstance(t, str)}

        for rule in self.category_rules:
            if self._mentions(text, rule.get('keywords', [])):
                return MemoryCategory(rule['name'])
            if tag_set.intersection(rule.get('tags', [])):
                return MemoryCategory(rule['name'])
            if tone.value in rule.get('tones', []):
                return MemoryCategory(rule['name'])
            if rule.get('match_location') and location and location.strip():
                return MemoryCategory(rule['name'])
        return self.default_category

    def analyze(
        self,
        caption: str,
        title: str = "",
        image_count: int = 0,
        tags: Optional[List[str]] = None,
        location: Optional[str] = None,
        date: Optional[str] = None,
    ) -> ContentAnalysis:
        """
        Classify a caption/title pair.

        Args:
            caption: Record caption
            title: Record title
            image_count: Number of photos attached to the record
            tags: Optional record tags
            location: Optional location text
            date: Optional ISO date (not used by the current rules)

        Returns:
            ContentAnalysis; {casual, daily} when nothing matches
        """
        caption = caption or ""
        text = f"{caption} {title or ''}".lower()
        caption_length = len(caption)

        tone = self.classify_tone(text, caption_length)
        category = self.classify_category(text, tone, tags or [], location)

        logger.debug(f"Content analysis: tone={tone.value}, category={category.value}, length={caption_length}")

        return ContentAnalysis(
            image_count=max(0, image_count),
            caption_length=caption_length,
            tone=tone,
            memory_category=category,
        )

    def emotional_indicators(self, caption: str) -> str:
        """Comma-separated emotional cues found in the caption"""
        lower = (caption or "").lower()
        found = [name for name, keywords in self.indicator_rules.items() if self._mentions(lower, keywords)]
        return ", ".join(found) if found else "casual contentment"


def text_density(caption_length: int) -> str:
    if caption_length > 250:
        return "High (needs text-focused layout)"
    if caption_length > 120:
        return "Medium"
    return "Low"


# Singleton instance
_analyzer_instance: Optional[ContentAnalyzer] = None


def get_content_analyzer() -> ContentAnalyzer:
    """Get or create singleton ContentAnalyzer instance."""
    global _analyzer_instance
    if _analyzer_instance is None:
        _analyzer_instance = ContentAnalyzer()
    return _analyzer_instance


def analyze_content(
    caption: str,
    title: str = "",
    image_count: int = 0,
    tags: Optional[List[str]] = None,
    location: Optional[str] = None,
    date: Optional[str] = None,
) -> ContentAnalysis:
    """Module-level shortcut for ContentAnalyzer.analyze"""
    return get_content_analyzer().analyze(caption, title, image_count, tags, location, date)
