from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field

from templates import TemplateName


class Tone(str, Enum):
    ROMANTIC = "romantic"
    CASUAL = "casual"
    FORMAL = "formal"
    PLAYFUL = "playful"
    NOSTALGIC = "nostalgic"


class MemoryCategory(str, Enum):
    DATE = "date"
    MILESTONE = "milestone"
    DAILY = "daily"
    CELEBRATION = "celebration"
    TRAVEL = "travel"


class ElementKind(str, Enum):
    EMOJI = "emoji"
    DOODLE = "doodle"
    SHAPE = "shape"
    LINE_ART = "line_art"
    PATTERN = "pattern"
    STICKER = "sticker"
    FRAME_CORNER = "frame_corner"


class ElementSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Mood(str, Enum):
    ROMANTIC = "romantic"
    PLAYFUL = "playful"
    NOSTALGIC = "nostalgic"
    PEACEFUL = "peaceful"
    ENERGETIC = "energetic"
    HEARTWARMING = "heartwarming"


MAX_ELEMENTS = 8


# ============== Decoration Models ==============

class Position(BaseModel):
    """Percentage coordinates on the page, origin top-left."""
    x: float = Field(ge=0, le=100)
    y: float = Field(ge=0, le=100)


class DecorationElement(BaseModel):
    """A single decorative ornament placed on a page"""
    model_config = ConfigDict(populate_by_name=True)

    kind: ElementKind
    content: str                        # Emoji glyph or named primitive
    position: Position
    size: ElementSize = ElementSize.MEDIUM
    rotation_degrees: float = Field(default=0.0, alias="rotationDegrees", allow_inf_nan=False)
    opacity: float = Field(default=0.3, gt=0, lt=1)
    color: Optional[str] = None
    layer: int = Field(default=1, ge=1, le=10)
    # Render hints, only set once placement has run
    scale: Optional[float] = Field(default=None, allow_inf_nan=False)
    z_index: Optional[int] = Field(default=None, alias="zIndex")


class PageDecorations(BaseModel):
    """Decoration set owned by one record"""
    elements: List[DecorationElement] = Field(default_factory=list, max_length=MAX_ELEMENTS)
    theme: str = ""
    mood: Mood = Mood.HEARTWARMING


# ============== Layout Models ==============

class LayoutChoice(BaseModel):
    """Template recommendation for a record"""
    template: TemplateName
    reasoning: str = ""
    confidence: float = Field(ge=0.5, le=1.0)
    source: str = "fallback"            # "oracle", "fallback" or "owner"


class StoryEnhancement(BaseModel):
    """Caption rewritten to address the partner directly"""
    model_config = ConfigDict(populate_by_name=True)

    enhanced_caption: str = Field(alias="enhancedCaption")
    tone: str = "heartwarming"          # romantic, playful, nostalgic, heartwarming
    word_count: int = Field(default=0, alias="wordCount")


# ============== Request / Response Models ==============

class RecordContext(BaseModel):
    """Optional context captured alongside a record"""
    title: Optional[str] = None
    date: Optional[str] = None          # ISO date
    location: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class RecordInput(BaseModel):
    """Record fields the composer reads"""
    model_config = ConfigDict(populate_by_name=True)

    caption: str = Field(min_length=10, max_length=2000)
    title: str = ""
    image_count: int = Field(ge=1, le=20, alias="imageCount")
    date: Optional[str] = None
    location: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    def context(self) -> RecordContext:
        return RecordContext(
            title=self.title or None,
            date=self.date,
            location=self.location,
            tags=self.tags,
        )


class LayoutRequest(BaseModel):
    """Request for a layout recommendation"""
    model_config = ConfigDict(populate_by_name=True)

    image_count: int = Field(ge=1, le=20, alias="imageCount")
    caption: str = Field(min_length=10, max_length=2000)
    additional_context: Optional[RecordContext] = Field(default=None, alias="additionalContext")
    include_story: bool = Field(default=False, alias="includeStory")


class LayoutResponse(BaseModel):
    """Layout recommendation, optionally with an enhanced story"""
    layout: LayoutChoice
    story: Optional[StoryEnhancement] = None


class DecorationRequest(BaseModel):
    """Request to generate decorations for a record"""
    model_config = ConfigDict(populate_by_name=True)

    caption: str = Field(min_length=10, max_length=2000)
    memory_type: Optional[str] = Field(default=None, alias="memoryType")
    tone: Optional[str] = None
    layout: Optional[str] = None
    additional_context: Optional[RecordContext] = Field(default=None, alias="additionalContext")


class CompositionResponse(BaseModel):
    """Full pipeline output for one record"""
    model_config = ConfigDict(populate_by_name=True)

    tone: Tone
    memory_category: MemoryCategory = Field(alias="memoryCategory")
    layout: LayoutChoice
    decorations: PageDecorations
    decorations_blob: str = Field(alias="decorationsBlob")
    story: Optional[StoryEnhancement] = None


class LayoutOverrideRequest(BaseModel):
    """Owner's explicit template choice"""
    model_config = ConfigDict(populate_by_name=True)

    template: str
    regenerate_decorations: bool = Field(default=True, alias="regenerateDecorations")


class StoredRecord(BaseModel):
    """Record as held by the record store"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    record: RecordInput
    recommended_layout: Optional[str] = Field(default=None, alias="recommendedLayout")
    decorations: Optional[str] = None   # Opaque serialized PageDecorations
