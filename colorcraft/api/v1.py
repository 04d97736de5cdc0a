"""
ColorCraft v1 API Routes
Extraction, harmony and saved palette endpoints.
"""
import time
from typing import Any, Dict

from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, UploadFile
from fastapi.responses import PlainTextResponse

from colorcraft.config import config
from colorcraft.schemas import (
    AllHarmoniesResponse, ColorExtractResponse, HarmonyRequest, HarmonyResponse,
    MetricsResponse, PaletteListResponse, PaletteSaveRequest, PaletteSchema
)
from colorcraft.services.colors.extract_api import handle_all_harmonies, handle_extract, handle_harmony
from colorcraft.services.export import export_filename, export_media_type, export_palette
from colorcraft.services.palettes import ColorPalette, create_palette
from colorcraft.services.storage import PaletteStore, get_palette_store
from colorcraft.utils.logging import get_logger
from colorcraft.utils.metrics import get_metrics_instance

router = APIRouter(prefix="/v1", tags=["ColorCraft v1"])


@router.post("/colors/extract",
             response_model=ColorExtractResponse,
             response_model_exclude_none=True,
             summary="Extract Colors",
             description="Extract ranked colors or categorized palettes from an uploaded image")
async def extract_colors(
    file: UploadFile = File(..., description="Image file"),
    mode: str = Query("simple", pattern="^(simple|categories)$", description="Extraction mode"),
    include_swatch: bool = Query(False, description="Render a PNG swatch artifact")
) -> ColorExtractResponse:
    """
    Extract colors from an image.

    **simple**: up to 20 distinct colors, most frequent first.

    **categories**: dominant, vibrant, muted, light and dark palettes.

    A fully transparent image returns empty lists, not an error.
    """
    try:
        return await handle_extract(file, mode=mode, include_swatch=include_swatch)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        get_logger().error(f"Color extraction failed: {e}")
        raise HTTPException(status_code=500, detail="Color extraction failed")


@router.post("/colors/harmony",
             response_model=HarmonyResponse,
             response_model_exclude_none=True,
             summary="Color Harmony",
             description="Derive a harmony from a base color")
async def color_harmony(body: HarmonyRequest) -> HarmonyResponse:
    """Generate a harmony. Unknown schemes return the base color alone."""
    try:
        return handle_harmony(body.base_hex, body.scheme, include_swatch=body.include_swatch)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/colors/harmony/{base_hex}",
            response_model=AllHarmoniesResponse,
            summary="All Harmonies",
            description="Every supported harmony for a base color (hex without '#')")
async def all_harmonies(
    base_hex: str = Path(..., pattern="^#?[0-9A-Fa-f]{6}$", description="Base color")
) -> AllHarmoniesResponse:
    return handle_all_harmonies(base_hex)


# Store I/O blocks, so palette routes are plain def and run in the threadpool

def _palette_from_request(body: PaletteSaveRequest, empty_detail: str) -> ColorPalette:
    """Build a palette from a request body, 400 on empty or inconsistent colors."""
    if not body.colors:
        raise HTTPException(status_code=400, detail=empty_detail)

    try:
        colors = [entry.to_color() for entry in body.colors]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return create_palette(colors, harmony=body.harmony, name=body.name, palette_id=body.id)


def _export_response(palette: ColorPalette, fmt: str) -> PlainTextResponse:
    # Header values must stay latin-1 safe
    filename = export_filename(palette, fmt).encode("ascii", "ignore").decode().replace('"', "")

    get_metrics_instance().increment("palettes_exported_total")
    return PlainTextResponse(
        content=export_palette(palette, fmt),
        media_type=export_media_type(fmt),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/palettes", response_model=PaletteListResponse, summary="List Saved Palettes")
def list_palettes(store: PaletteStore = Depends(get_palette_store)) -> PaletteListResponse:
    """Saved palettes, most recently saved first."""
    palettes = [PaletteSchema.from_palette(p) for p in store.list_palettes()]
    return PaletteListResponse(palettes=palettes, count=len(palettes))


@router.post("/palettes", response_model=PaletteSchema, status_code=201, summary="Save Palette")
def save_palette(
    body: PaletteSaveRequest,
    store: PaletteStore = Depends(get_palette_store)
) -> PaletteSchema:
    """
    Save a palette. Saving with an existing ID replaces that palette and
    moves it to the front of the collection.
    """
    palette = _palette_from_request(body, "No colors to save")

    try:
        store.upsert(palette)
    except RuntimeError as e:
        get_logger().error(f"Palette save failed: {e}", extra={"palette_id": palette.id})
        raise HTTPException(status_code=500, detail="There was an error saving your palette")

    get_metrics_instance().increment("palettes_saved_total")
    return PaletteSchema.from_palette(palette)


@router.post("/palettes/export",
             response_class=PlainTextResponse,
             summary="Export Unsaved Palette",
             description="Export the given colors without saving them")
def export_unsaved_palette(
    body: PaletteSaveRequest,
    format: str = Query("css", pattern="^[A-Za-z0-9]{1,10}$", description="Export format")
) -> PlainTextResponse:
    return _export_response(_palette_from_request(body, "No colors to export"), format)


@router.get("/palettes/{palette_id}", response_model=PaletteSchema, summary="Get Palette")
def get_palette(palette_id: str, store: PaletteStore = Depends(get_palette_store)) -> PaletteSchema:
    palette = store.get_palette(palette_id)
    if palette is None:
        raise HTTPException(status_code=404, detail=f"Palette {palette_id} not found")
    return PaletteSchema.from_palette(palette)


@router.delete("/palettes/{palette_id}", summary="Delete Palette")
def delete_palette(palette_id: str, store: PaletteStore = Depends(get_palette_store)) -> Dict[str, Any]:
    try:
        deleted = store.delete(palette_id)
    except RuntimeError as e:
        get_logger().error(f"Palette delete failed: {e}", extra={"palette_id": palette_id})
        raise HTTPException(status_code=500, detail="There was an error deleting your palette")

    if not deleted:
        raise HTTPException(status_code=404, detail=f"Palette {palette_id} not found")

    get_metrics_instance().increment("palettes_deleted_total")
    return {"status": "deleted", "id": palette_id, "timestamp": int(time.time())}


@router.get("/palettes/{palette_id}/export",
            response_class=PlainTextResponse,
            summary="Export Palette",
            description="Export as css, scss, json or txt; other formats export as txt")
def export_saved_palette(
    palette_id: str,
    format: str = Query("css", pattern="^[A-Za-z0-9]{1,10}$", description="Export format"),
    store: PaletteStore = Depends(get_palette_store)
) -> PlainTextResponse:
    palette = store.get_palette(palette_id)
    if palette is None:
        raise HTTPException(status_code=404, detail=f"Palette {palette_id} not found")
    return _export_response(palette, format)


@router.get("/metrics", response_model=MetricsResponse, summary="Service Metrics")
async def get_metrics() -> MetricsResponse:
    """In-process counters and timing statistics."""
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics disabled")
    return MetricsResponse(**get_metrics_instance().get_summary())
