"""
ColorCraft API Schemas
Pydantic models for extraction, harmony and palette request/response validation.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from colorcraft.services.colors.conversions import HSL, RGB, ColorInfo, check_color_consistency
from colorcraft.services.palettes import ColorPalette


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("colorcraft-palettes", description="Service name")


# ============================================================================
# COLOR SCHEMAS
# ============================================================================

class ColorRGB(BaseModel):
    """8-bit RGB channels."""
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)


class ColorHSL(BaseModel):
    """Integer HSL: hue in degrees, saturation and lightness in percent."""
    h: int = Field(..., ge=0, lt=360, description="Hue [0, 360)")
    s: int = Field(..., ge=0, le=100, description="Saturation [0, 100]")
    l: int = Field(..., ge=0, le=100, description="Lightness [0, 100]")


class ColorEntry(BaseModel):
    """One color in HEX, RGB and HSL."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #rrggbb (returned lowercase)"
    )
    rgb: ColorRGB
    hsl: ColorHSL
    name: Optional[str] = Field(None, max_length=80, description="Optional display label")

    @classmethod
    def from_color(cls, color: ColorInfo) -> "ColorEntry":
        return cls(**color.to_dict())

    def to_color(self) -> ColorInfo:
        """
        Convert to a ColorInfo.

        Raises:
            ValueError: If hex, rgb and hsl describe different colors
        """
        color = ColorInfo(
            hex=self.hex.lower(),
            rgb=RGB(self.rgb.r, self.rgb.g, self.rgb.b),
            hsl=HSL(self.hsl.h, self.hsl.s, self.hsl.l),
            name=self.name,
        )
        check_color_consistency(color)
        return color


# ============================================================================
# EXTRACTION SCHEMAS
# ============================================================================

class ExtractArtifacts(BaseModel):
    """Extraction output artifacts."""
    swatch_png_b64: Optional[str] = Field(
        None,
        description="Base64-encoded PNG swatch strip (simple mode) or category grid"
    )


class ExtractDebug(BaseModel):
    """Debug information for extraction."""
    stride: int = Field(..., description="Byte stride used for sampling")
    alpha_cutoff: int = Field(..., description="Minimum alpha for a sample to count")
    timing_ms: Dict[str, float] = Field(..., description="Timing breakdown in milliseconds")


class ColorExtractResponse(BaseModel):
    """Color extraction response."""
    request_id: str
    mode: str = Field(..., description="'simple' (ranked colors) or 'categories'")
    width: int = Field(..., description="Sampled image width after downscaling")
    height: int = Field(..., description="Sampled image height after downscaling")
    colors: Optional[List[ColorEntry]] = Field(
        None,
        description="Most frequent colors, simple mode only"
    )
    categories: Optional[Dict[str, List[ColorEntry]]] = Field(
        None,
        description="dominant/vibrant/muted/light/dark palettes, categories mode only"
    )
    artifacts: ExtractArtifacts = Field(default_factory=ExtractArtifacts)
    debug: ExtractDebug


# ============================================================================
# HARMONY SCHEMAS
# ============================================================================

class HarmonyRequest(BaseModel):
    """Harmony request for a base color."""
    base_hex: str = Field(
        ...,
        pattern=r"^#?[0-9A-Fa-f]{6}$",
        description="Base color in format #RRGGBB"
    )
    scheme: str = Field(
        ...,
        min_length=1,
        max_length=40,
        description="complementary, triadic, analogous, monochromatic or tetradic; "
                    "other values return the base color only"
    )
    include_swatch: bool = Field(False, description="Render a swatch strip")


class HarmonyResponse(BaseModel):
    """Harmony result: base color first, then derived colors."""
    request_id: str
    scheme: str
    base: ColorEntry
    colors: List[ColorEntry]
    swatch_png_b64: Optional[str] = None


class AllHarmoniesResponse(BaseModel):
    """Every supported scheme for one base color."""
    base: ColorEntry
    harmonies: Dict[str, List[ColorEntry]]


# ============================================================================
# PALETTE SCHEMAS
# ============================================================================

class PaletteSaveRequest(BaseModel):
    """Save (upsert) a palette."""
    id: Optional[str] = Field(None, max_length=120, description="Existing palette ID to overwrite")
    name: Optional[str] = Field(None, max_length=120, description="Display name")
    harmony: str = Field(..., min_length=1, max_length=40, description="Scheme or category tag")
    colors: List[ColorEntry] = Field(..., description="Colors in display order")


class PaletteSchema(BaseModel):
    """Saved palette record."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    colors: List[ColorEntry]
    harmony: str
    created_at: str = Field(..., alias="createdAt", description="ISO-8601 creation time")

    @classmethod
    def from_palette(cls, palette: ColorPalette) -> "PaletteSchema":
        return cls(**palette.to_dict())


class PaletteListResponse(BaseModel):
    """Saved palettes, most recently saved first."""
    palettes: List[PaletteSchema]
    count: int


class MetricsResponse(BaseModel):
    """In-process metrics summary."""
    uptime_seconds: float
    counters: Dict[str, int]
    timing_stats: Dict[str, Dict[str, float]]
    sample_count_stats: Dict[str, Any]
