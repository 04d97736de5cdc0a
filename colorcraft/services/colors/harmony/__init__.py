"""
ColorCraft Color Harmony Engine

Derives related colors from one base color by rotating its hue or stepping
its lightness. Saturation and lightness of derived colors follow the base
unless the scheme varies them explicitly.
"""

from enum import Enum
from typing import Dict, List, Tuple

from loguru import logger

from ..conversions import ColorInfo, color_from_hsl


class HarmonyScheme(str, Enum):
    """Supported harmony schemes."""
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    ANALOGOUS = "analogous"
    MONOCHROMATIC = "monochromatic"
    TETRADIC = "tetradic"


# Hue offsets in degrees for the rotation based schemes
HUE_OFFSETS: Dict[HarmonyScheme, Tuple[int, ...]] = {
    HarmonyScheme.COMPLEMENTARY: (180,),
    HarmonyScheme.TRIADIC: (120, 240),
    HarmonyScheme.ANALOGOUS: (30, 60, 90, 120),
    HarmonyScheme.TETRADIC: (90, 180, 270),
}

MONOCHROMATIC_STEP = 15
MONOCHROMATIC_STEPS = 4
MONOCHROMATIC_MIN_L = 10
MONOCHROMATIC_MAX_L = 90


def rotate_hue(h: int, degrees: int) -> int:
    """
    Rotate hue by specified degrees.

    Args:
        h: Original hue in degrees
        degrees: Rotation in degrees (can be negative)

    Returns:
        Rotated hue in [0, 360)
    """
    return (h + degrees) % 360


def clamp_lightness(l: int) -> int:
    """Clamp a lightness value into the monochromatic band [10, 90]."""
    return max(MONOCHROMATIC_MIN_L, min(MONOCHROMATIC_MAX_L, l))


def parse_scheme(scheme: str):
    """Return the HarmonyScheme for an identifier, or None if unknown."""
    try:
        return HarmonyScheme(scheme)
    except ValueError:
        return None


def derive_harmony_offsets(scheme: str) -> Tuple[int, ...]:
    """Hue offsets used by a scheme; empty for monochromatic and unknown schemes."""
    parsed = parse_scheme(scheme)
    return HUE_OFFSETS.get(parsed, ()) if parsed else ()


def generate_monochromatic(base: ColorInfo) -> List[ColorInfo]:
    """Same hue and saturation, lightness stepped up and clamped to [10, 90]."""
    h, s, l = base.hsl
    return [
        color_from_hsl(h, s, clamp_lightness(l + step * MONOCHROMATIC_STEP))
        for step in range(1, MONOCHROMATIC_STEPS + 1)
    ]


def generate_color_harmony(base: ColorInfo, scheme: str) -> List[ColorInfo]:
    """
    Generate a harmony for a base color.

    Args:
        base: Base color, always returned first
        scheme: Harmony scheme identifier; unknown identifiers return the
            base color alone

    Returns:
        Base color followed by the derived colors, in derivation order
    """
    parsed = parse_scheme(scheme)
    if parsed is None:
        logger.debug(f"Unknown harmony scheme {scheme!r}, returning base color only")
        return [base]

    if parsed is HarmonyScheme.MONOCHROMATIC:
        derived = generate_monochromatic(base)
    else:
        h, s, l = base.hsl
        derived = [color_from_hsl(rotate_hue(h, offset), s, l) for offset in derive_harmony_offsets(parsed)]

    return [base] + derived


def generate_all_harmonies(base: ColorInfo) -> Dict[str, List[ColorInfo]]:
    """Generate every supported scheme for a base color, keyed by scheme name."""
    return {scheme.value: generate_color_harmony(base, scheme.value) for scheme in HarmonyScheme}
