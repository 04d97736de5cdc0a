"""
Color space conversions between RGB, HEX and HSL.

All public values are integers: RGB channels in [0, 255], hue in degrees
[0, 360), saturation and lightness in percent [0, 100]. Rounding is
half-up throughout so that values produced here match the ones stored in
previously saved palettes.
"""

import math
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, NamedTuple, Optional

from loguru import logger


HEX_PATTERN = re.compile(r"#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})", re.IGNORECASE)


class RGB(NamedTuple):
    """8-bit RGB triple."""
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    """Integer HSL triple (degrees, percent, percent)."""
    h: int
    s: int
    l: int


@dataclass(frozen=True)
class ColorInfo:
    """One color in its three equivalent encodings."""
    hex: str
    rgb: RGB
    hsl: HSL
    name: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        data = {
            "hex": self.hex,
            "rgb": {"r": self.rgb.r, "g": self.rgb.g, "b": self.rgb.b},
            "hsl": {"h": self.hsl.h, "s": self.hsl.s, "l": self.hsl.l},
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorInfo":
        """
        Rebuild a color from its persisted JSON shape.

        Raises:
            ValueError: If a required field is missing or not numeric
        """
        try:
            rgb = data["rgb"]
            hsl = data["hsl"]
            return cls(
                hex=str(data["hex"]).lower(),
                rgb=RGB(int(rgb["r"]), int(rgb["g"]), int(rgb["b"])),
                hsl=HSL(int(hsl["h"]), int(hsl["s"]), int(hsl["l"])),
                name=data.get("name"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid color record: {e}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _clamp_channel(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert RGB channels to a lowercase hex string.

    Args:
        r, g, b: Channels in [0, 255]; fractional values are rounded and
            out-of-range values clamped

    Returns:
        Hex color string in format #rrggbb
    """
    return "#" + "".join(f"{_clamp_channel(c):02x}" for c in (r, g, b))


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse a 6-digit hex color, with or without the leading '#'.

    Malformed input (wrong length, non-hex digits, non-string) yields
    black instead of raising. This keeps display paths total; it is not
    a validator.

    Args:
        hex_color: Color in format #RRGGBB or RRGGBB, any case

    Returns:
        RGB triple
    """
    match = HEX_PATTERN.fullmatch(hex_color) if isinstance(hex_color, str) else None
    if match is None:
        logger.debug(f"Unparseable hex color {hex_color!r}, using black")
        return RGB(0, 0, 0)
    return RGB(*(int(part, 16) for part in match.groups()))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert RGB channels to integer HSL.

    Args:
        r, g, b: Channels in [0, 255]

    Returns:
        HSL triple with hue in [0, 360), saturation and lightness in [0, 100]
    """
    r, g, b = r / 255.0, g / 255.0, b / 255.0

    mx = max(r, g, b)
    mn = min(r, g, b)
    l = (mx + mn) / 2

    if mx == mn:
        # Achromatic
        h = s = 0.0
    else:
        d = mx - mn
        s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)

        if mx == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif mx == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return HSL(round_half_up(h * 360) % 360, round_half_up(s * 100), round_half_up(l * 100))


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """
    Convert HSL to RGB channels.

    Args:
        h: Hue in degrees (taken modulo 360)
        s: Saturation in percent [0, 100]
        l: Lightness in percent [0, 100]

    Returns:
        RGB triple with channels in [0, 255]
    """
    h = (h % 360) / 360.0
    s = s / 100.0
    l = l / 100.0

    if s == 0:
        gray = _clamp_channel(l * 255)
        return RGB(gray, gray, gray)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    return RGB(
        _clamp_channel(_hue_to_rgb(p, q, h + 1 / 3) * 255),
        _clamp_channel(_hue_to_rgb(p, q, h) * 255),
        _clamp_channel(_hue_to_rgb(p, q, h - 1 / 3) * 255),
    )


@lru_cache(maxsize=8192)
def color_from_rgb(r: int, g: int, b: int) -> ColorInfo:
    """Build a ColorInfo from 8-bit RGB channels."""
    return ColorInfo(hex=rgb_to_hex(r, g, b), rgb=RGB(r, g, b), hsl=rgb_to_hsl(r, g, b))


def color_from_hex(hex_color: str) -> ColorInfo:
    """Build a ColorInfo from a hex string (malformed input gives black)."""
    rgb = hex_to_rgb(hex_color)
    return color_from_rgb(*rgb)


def color_from_hsl(h: int, s: int, l: int) -> ColorInfo:
    """
    Build a ColorInfo from HSL, keeping the HSL triple as given.

    RGB and HEX are derived from the requested HSL so a derived harmony
    color reports exactly the hue/lightness it was generated with.
    """
    rgb = hsl_to_rgb(h, s, l)
    return ColorInfo(hex=rgb_to_hex(*rgb), rgb=rgb, hsl=HSL(h, s, l))


def _hue_distance(h1: int, h2: int) -> int:
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff)


def check_color_consistency(color: ColorInfo, tolerance: int = 1) -> None:
    """
    Verify that the hex, rgb and hsl of a color describe the same color.

    ``hex`` must decode to ``rgb`` exactly. ``hsl`` is accepted when it is
    within ``tolerance`` of the HSL of ``rgb`` (sampled colors), or when it
    converts back to ``rgb`` within ``tolerance`` per channel (harmony colors,
    which keep their requested HSL).

    Raises:
        ValueError: If the encodings disagree
    """
    if HEX_PATTERN.fullmatch(color.hex) is None or hex_to_rgb(color.hex) != color.rgb:
        raise ValueError(f"Color {color.hex} does not match rgb{tuple(color.rgb)}")

    h, s, l = rgb_to_hsl(*color.rgb)
    hsl_matches = (_hue_distance(h, color.hsl.h) <= tolerance
                   and abs(s - color.hsl.s) <= tolerance
                   and abs(l - color.hsl.l) <= tolerance)
    if hsl_matches:
        return

    back = hsl_to_rgb(*color.hsl)
    if all(abs(a - b) <= tolerance for a, b in zip(back, color.rgb)):
        return

    raise ValueError(f"Color {color.hex} does not match hsl{tuple(color.hsl)}")
