from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
import traceback

from composer import get_composer
from models import (
    RecordInput, StoredRecord, PageDecorations, MemoryCategory, Tone,
    LayoutRequest, LayoutResponse, DecorationRequest, CompositionResponse,
    LayoutOverrideRequest,
)
from record_store import InMemoryRecordStore, RecordNotFound
from serializer import deserialize_decorations
from story_enhancer import StoryEnhancer
from layout_selector import LayoutSelector
from templates import TemplateName, normalize_template_name, get_template_options

# Logging setup
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(title="Scrapbook Composer", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
composer = get_composer()
store = InMemoryRecordStore()


def _get_record(record_id: str) -> StoredRecord:
    try:
        return store.get(record_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail=f"Record {record_id} not found")


def _enum_or_default(enum_cls, value, default):
    try:
        return enum_cls((value or "").strip().lower())
    except ValueError:
        return default


def _server_error(label: str, e: Exception) -> HTTPException:
    tb = traceback.format_exc()
    logger.error(f"{label} error: {e}")
    logger.error(f"Traceback:\n{tb}")
    return HTTPException(status_code=500, detail=f"{label} failed: {e}")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "scrapbook-composer"}


@app.get("/")
async def root():
    return {
        "service": "Scrapbook Composer",
        "version": "1.0.0",
        "description": "Template selection and zone-aware page decorations for scrapbook records",
        "endpoints": [
            "/templates", "/recommend-layout", "/generate-decorations", "/compose",
            "/records", "/health",
        ],
        "oracle": {
            "available": composer.router.is_available(),
        }
    }


@app.get("/templates")
async def list_templates():
    """List the page templates a record can use."""
    return {"templates": get_template_options()}


# ==================== COMPOSITION ENDPOINTS ====================

@app.post("/recommend-layout", response_model=LayoutResponse)
async def recommend_layout(request: LayoutRequest):
    """
    Recommend a page template for a record.

    Uses the oracle when configured, otherwise the built-in rule table.
    Optionally rewrites the caption as well.
    """
    try:
        context = request.additional_context
        logger.info(f"Recommending layout: {request.image_count} image(s), caption length {len(request.caption)}")

        selector = LayoutSelector(router=composer.router, analyzer=composer.analyzer)
        layout = await selector.select(request.image_count, request.caption, context=context)

        story = None
        if request.include_story:
            story = await StoryEnhancer(router=composer.router).enhance(request.caption, context)

        return LayoutResponse(layout=layout, story=story)

    except Exception as e:
        raise _server_error("Layout recommendation", e)


@app.post("/generate-decorations", response_model=PageDecorations, response_model_exclude_none=True)
async def generate_decorations(request: DecorationRequest):
    """
    Generate placed decorations for explicit category, tone and template.

    Unknown values default to daily / casual / collage.
    """
    try:
        category = _enum_or_default(MemoryCategory, request.memory_type, MemoryCategory.DAILY)
        tone = _enum_or_default(Tone, request.tone, Tone.CASUAL)
        template = normalize_template_name(request.layout) or TemplateName.COLLAGE

        logger.info(f"Generating decorations: category={category.value}, tone={tone.value}, template={template.value}")

        return await composer.decorate(
            request.caption,
            category,
            tone,
            template.value,
            request.additional_context,
        )

    except Exception as e:
        raise _server_error("Decoration generation", e)


@app.post("/compose", response_model=CompositionResponse, response_model_exclude_none=True)
async def compose_page(record: RecordInput, include_story: bool = False):
    """Run the full pipeline for a record without storing it."""
    try:
        composition = await composer.compose(record, include_story=include_story)
        return composition.to_response()
    except Exception as e:
        raise _server_error("Composition", e)


# ==================== RECORD ENDPOINTS ====================

@app.post("/records", response_model=StoredRecord)
async def create_record(record: RecordInput):
    """
    Store a record and compose its page.

    The recommended layout and decoration blob are saved with the record.
    """
    try:
        stored = store.create(record)
        composition = await composer.compose(record)
        stored = store.update_decorations(
            stored.id,
            decorations=composition.decorations_blob,
            recommended_layout=composition.layout.template.value,
        )
        logger.info(f"Record {stored.id} composed: {stored.recommended_layout}, {len(composition.decorations.elements)} decorations")
        return stored
    except Exception as e:
        raise _server_error("Record creation", e)


@app.get("/records/{record_id}", response_model=StoredRecord)
async def get_record(record_id: str):
    return _get_record(record_id)


@app.get("/records/{record_id}/decorations", response_model=PageDecorations, response_model_exclude_none=True)
async def get_record_decorations(record_id: str):
    """Decorations stored for a record; empty if none or unreadable."""
    stored = _get_record(record_id)
    return deserialize_decorations(stored.decorations, record_id=record_id)


@app.post("/records/{record_id}/decorations/regenerate", response_model=PageDecorations, response_model_exclude_none=True)
async def regenerate_record_decorations(record_id: str):
    """Draw a fresh decoration set for the record's current layout."""
    stored = _get_record(record_id)
    try:
        template = stored.recommended_layout or TemplateName.COLLAGE.value
        composition = await composer.regenerate_decorations(stored.record, template)
        store.update_decorations(record_id, decorations=composition.decorations_blob)
        return composition.decorations
    except Exception as e:
        raise _server_error("Decoration regeneration", e)


@app.put("/records/{record_id}/layout", response_model=StoredRecord)
async def override_layout(record_id: str, request: LayoutOverrideRequest):
    """
    Replace the recommended layout with the owner's choice.

    Decorations are regenerated for the new template unless disabled.
    """
    stored = _get_record(record_id)
    template = normalize_template_name(request.template)
    if template is None:
        raise HTTPException(status_code=422, detail=f"Unknown template: {request.template}")

    try:
        blob = None
        if request.regenerate_decorations:
            composition = await composer.regenerate_decorations(stored.record, template.value)
            blob = composition.decorations_blob

        logger.info(f"Record {record_id} layout set to {template.value}")
        return store.update_decorations(record_id, decorations=blob, recommended_layout=template.value)
    except Exception as e:
        raise _server_error("Layout override", e)


@app.delete("/records/{record_id}")
async def delete_record(record_id: str):
    _get_record(record_id)
    store.delete(record_id)
    return {"status": "deleted", "id": record_id}

