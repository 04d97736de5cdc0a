"""
Palette categorization.

Splits sampled colors into the five named palettes shown to users. Only
``dominant`` is frequency ranked; the other categories are HSL threshold
filters that keep sampling order.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from loguru import logger

from colorcraft.config import config
from .conversions import ColorInfo
from .extraction import BufferLike, rank_by_frequency, sample_colors


CATEGORY_NAMES = ("dominant", "vibrant", "muted", "light", "dark")


@dataclass
class CategoryCaps:
    """Per-category result limits."""
    dominant: int = 12
    vibrant: int = 10
    muted: int = 8
    light: int = 8
    dark: int = 8

    @classmethod
    def from_config(cls) -> "CategoryCaps":
        return cls(
            dominant=config.DOMINANT_CAP,
            vibrant=config.VIBRANT_CAP,
            muted=config.MUTED_CAP,
            light=config.LIGHT_CAP,
            dark=config.DARK_CAP,
        )


def is_vibrant(color: ColorInfo) -> bool:
    return color.hsl.s > 60 and 20 < color.hsl.l < 80


def is_muted(color: ColorInfo) -> bool:
    return color.hsl.s < 50 and 30 < color.hsl.l < 70


def is_light(color: ColorInfo) -> bool:
    return color.hsl.l > 70


def is_dark(color: ColorInfo) -> bool:
    return color.hsl.l < 30


CATEGORY_FILTERS: Dict[str, Callable[[ColorInfo], bool]] = {
    "vibrant": is_vibrant,
    "muted": is_muted,
    "light": is_light,
    "dark": is_dark,
}


def _take_matching(colors: List[ColorInfo], predicate: Callable[[ColorInfo], bool],
                   cap: int) -> List[ColorInfo]:
    matched = []
    for color in colors:
        if len(matched) >= cap:
            break
        if predicate(color):
            matched.append(color)
    return matched


def categorize_colors(colors: List[ColorInfo],
                      caps: Optional[CategoryCaps] = None) -> Dict[str, List[ColorInfo]]:
    """
    Partition sampled colors into dominant, vibrant, muted, light and dark.

    Categories overlap and any of them may be empty.

    Args:
        colors: Unranked samples from the sampler, in sampling order
        caps: Result limits per category (default from config)

    Returns:
        Mapping of category name to colors, keys in CATEGORY_NAMES order
    """
    caps = caps or CategoryCaps.from_config()

    categories = {"dominant": rank_by_frequency(colors, caps.dominant)}
    for name, predicate in CATEGORY_FILTERS.items():
        categories[name] = _take_matching(colors, predicate, getattr(caps, name))

    counts = {name: len(found) for name, found in categories.items()}
    logger.debug(f"Categorized {len(colors)} samples: {counts}")
    return categories


def extract_all_color_palettes(buffer: BufferLike, stride: Optional[int] = None,
                               caps: Optional[CategoryCaps] = None) -> Dict[str, List[ColorInfo]]:
    """
    Sample a buffer at the fine stride and categorize the result.

    A fully transparent or empty buffer yields five empty categories.
    """
    stride = stride or config.SAMPLE_STRIDE_FINE
    colors = sample_colors(buffer, stride)
    return categorize_colors(colors, caps)
