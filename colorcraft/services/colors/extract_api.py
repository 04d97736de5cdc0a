"""
Color Extraction and Harmony API Orchestrators

Coordinates the request-level pipeline: image decoding, sampling,
categorization or harmony generation, optional swatch artifacts, timing,
logging and metrics.
"""

import time
from typing import Optional

from fastapi import UploadFile

from colorcraft.config import config
from colorcraft.schemas import (
    AllHarmoniesResponse, ColorEntry, ColorExtractResponse, ExtractArtifacts,
    ExtractDebug, HarmonyResponse
)
from colorcraft.services.colors.categories import categorize_colors
from colorcraft.services.colors.conversions import color_from_hex
from colorcraft.services.colors.extraction import PixelBuffer, rank_by_frequency, sample_colors
from colorcraft.services.colors.harmony import generate_all_harmonies, generate_color_harmony
from colorcraft.services.colors.swatches import render_category_grid, render_swatch_strip
from colorcraft.services.imaging import read_image
from colorcraft.utils.ids import generate_request_id
from colorcraft.utils.logging import get_logger
from colorcraft.utils.metrics import get_metrics_instance

EXTRACT_MODES = ("simple", "categories")


def _ms_since(start: float) -> float:
    return (time.time() - start) * 1000


def extract_from_buffer(buffer: PixelBuffer, mode: str = "simple",
                        include_swatch: bool = False,
                        request_id: Optional[str] = None) -> ColorExtractResponse:
    """
    Run extraction on an already decoded buffer.

    Args:
        buffer: RGBA pixel buffer
        mode: "simple" for the top-20 ranked colors, "categories" for the
            five category palettes
        include_swatch: Render a PNG swatch of the result when colors exist
        request_id: Request ID for log correlation (generated if omitted)

    Returns:
        ColorExtractResponse

    Raises:
        ValueError: For an unknown mode
    """
    if mode not in EXTRACT_MODES:
        raise ValueError(f"mode must be one of: {', '.join(EXTRACT_MODES)}")

    metrics = get_metrics_instance()
    request_id = request_id or generate_request_id("extract")
    log = get_logger().bind(request_id=request_id, mode=mode)
    timing = {}

    stride = config.SAMPLE_STRIDE_COARSE if mode == "simple" else config.SAMPLE_STRIDE_FINE

    sample_start = time.time()
    samples = sample_colors(buffer, stride)
    timing["sampling"] = _ms_since(sample_start)
    metrics.record_sample_count(len(samples))

    rank_start = time.time()
    colors = None
    categories = None
    if mode == "simple":
        ranked = rank_by_frequency(samples, config.MAX_SAMPLED_COLOR_HEX)
        colors = [ColorEntry.from_color(c) for c in ranked]
        swatch_source = [c.hex for c in ranked]
    else:
        grouped = categorize_colors(samples)
        categories = {name: [ColorEntry.from_color(c) for c in found] for name, found in grouped.items()}
        swatch_source = {name: [c.hex for c in found] for name, found in grouped.items()}
    timing["ranking"] = _ms_since(rank_start)

    artifacts = ExtractArtifacts()
    if include_swatch and samples:
        swatch_start = time.time()
        if mode == "simple":
            artifacts.swatch_png_b64 = render_swatch_strip(swatch_source)
        else:
            artifacts.swatch_png_b64 = render_category_grid(swatch_source)
        timing["swatch"] = _ms_since(swatch_start)

    if not samples:
        log.warning("No opaque pixels sampled, returning empty palette")

    log.info("Color extraction completed",
             extra={
                 "dims": f"{buffer.width}x{buffer.height}",
                 "samples": len(samples),
                 "ms_sampling": timing["sampling"],
                 "ms_ranking": timing["ranking"],
             })

    return ColorExtractResponse(
        request_id=request_id,
        mode=mode,
        width=buffer.width,
        height=buffer.height,
        colors=colors,
        categories=categories,
        artifacts=artifacts,
        debug=ExtractDebug(stride=stride, alpha_cutoff=config.ALPHA_CUTOFF, timing_ms=timing),
    )


async def handle_extract(file: UploadFile, mode: str = "simple",
                         include_swatch: bool = False) -> ColorExtractResponse:
    """
    Main orchestrator for image color extraction.

    Args:
        file: Uploaded image file
        mode: "simple" or "categories"
        include_swatch: Whether to render a swatch artifact

    Returns:
        ColorExtractResponse

    Raises:
        ValueError: For invalid parameters
        HTTPException: For unreadable or non-image uploads
    """
    request_id = generate_request_id("extract")
    metrics = get_metrics_instance()
    metrics.increment_request_count("extract")
    start_time = time.time()

    try:
        decode_start = time.time()
        buffer = await read_image(file)
        decode_ms = _ms_since(decode_start)

        response = extract_from_buffer(buffer, mode, include_swatch, request_id)
        response.debug.timing_ms["decode"] = decode_ms
    except Exception as e:
        metrics.increment_failure_count("extract", type(e).__name__)
        raise

    total_ms = _ms_since(start_time)
    response.debug.timing_ms["total"] = total_ms
    metrics.increment(f"extract_mode_total_{mode}")
    metrics.record_timing("extract", total_ms)
    return response


def handle_harmony(base_hex: str, scheme: str, include_swatch: bool = False) -> HarmonyResponse:
    """
    Generate a harmony for a base color.

    Unknown schemes return the base color alone.

    Args:
        base_hex: Base color, #RRGGBB (validated by the request schema)
        scheme: Harmony scheme identifier
        include_swatch: Whether to render a swatch strip with the base outlined

    Returns:
        HarmonyResponse
    """
    request_id = generate_request_id("harmony")
    metrics = get_metrics_instance()
    metrics.increment_request_count("harmony")
    start_time = time.time()

    base = color_from_hex(base_hex)
    colors = generate_color_harmony(base, scheme)

    swatch = None
    if include_swatch:
        swatch = render_swatch_strip([c.hex for c in colors], highlight_index=0)

    total_ms = _ms_since(start_time)
    metrics.increment(f"harmony_scheme_total_{scheme if len(colors) > 1 else 'unknown'}")
    metrics.record_timing("harmony", total_ms)

    get_logger().info("Harmony generated",
                      extra={
                          "request_id": request_id,
                          "base_hex": base.hex,
                          "scheme": scheme,
                          "count": len(colors),
                          "ms_total": total_ms,
                      })

    return HarmonyResponse(
        request_id=request_id,
        scheme=scheme,
        base=ColorEntry.from_color(base),
        colors=[ColorEntry.from_color(c) for c in colors],
        swatch_png_b64=swatch,
    )


def handle_all_harmonies(base_hex: str) -> AllHarmoniesResponse:
    """Generate every supported scheme for a base color."""
    get_metrics_instance().increment_request_count("harmony_all")
    base = color_from_hex(base_hex)
    harmonies = generate_all_harmonies(base)
    return AllHarmoniesResponse(
        base=ColorEntry.from_color(base),
        harmonies={name: [ColorEntry.from_color(c) for c in colors] for name, colors in harmonies.items()},
    )
