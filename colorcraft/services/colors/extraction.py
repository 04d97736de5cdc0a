"""
Pixel sampling for palette extraction.

This module implements the frequency based sampler: walk an RGBA buffer at a
fixed byte stride, drop near-transparent pixels, and either rank the distinct
colors by how often they were hit or hand the raw samples on for
categorization.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union

import numpy as np
from loguru import logger

from colorcraft.config import config
from .conversions import ColorInfo, color_from_rgb


@dataclass
class PixelBuffer:
    """Decoded image: row-major interleaved RGBA, 8 bits per channel."""
    width: int
    height: int
    data: Any  # bytes, bytearray, memoryview, list of ints or numpy array

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


BufferLike = Union[PixelBuffer, bytes, bytearray, memoryview, np.ndarray, List[int]]


def as_pixel_array(buffer: BufferLike) -> np.ndarray:
    """
    View any supported buffer as an (N, 4) uint8 array of RGBA pixels.

    A trailing partial pixel (length not divisible by 4) is ignored.
    """
    data = buffer.data if isinstance(buffer, PixelBuffer) else buffer

    if isinstance(data, np.ndarray):
        flat = data.astype(np.uint8, copy=False).reshape(-1)
    elif isinstance(data, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(data, dtype=np.uint8)
    else:
        flat = np.asarray(list(data), dtype=np.uint8)

    usable = flat.size - flat.size % 4
    return flat[:usable].reshape(-1, 4)


def sample_pixels(buffer: BufferLike, stride: int,
                  alpha_cutoff: Optional[int] = None) -> np.ndarray:
    """
    Sample opaque pixels at a fixed byte stride.

    Args:
        buffer: RGBA pixel buffer
        stride: Byte interval between samples; must be a positive multiple of 4
        alpha_cutoff: Samples with alpha below this are dropped (default from config)

    Returns:
        RGB samples (N, 3) uint8, in buffer order

    Raises:
        ValueError: If stride is not a positive multiple of 4
    """
    if not config.validate_stride(stride):
        raise ValueError(f"Sample stride must be a positive multiple of 4, got {stride}")
    if alpha_cutoff is None:
        alpha_cutoff = config.ALPHA_CUTOFF

    pixels = as_pixel_array(buffer)
    sampled = pixels[::stride // 4]
    opaque = sampled[sampled[:, 3] >= alpha_cutoff]

    logger.debug(
        f"Sampled {len(sampled)} of {len(pixels)} pixels at stride {stride}, "
        f"{len(opaque)} opaque"
    )
    return opaque[:, :3]


def sample_colors(buffer: BufferLike, stride: int,
                  alpha_cutoff: Optional[int] = None) -> List[ColorInfo]:
    """
    Sample a buffer into an unranked list of ColorInfo, one per opaque sample.

    Returns:
        ColorInfo list in sampling order (duplicates kept)
    """
    rgb = sample_pixels(buffer, stride, alpha_cutoff)
    return [color_from_rgb(r, g, b) for r, g, b in rgb.tolist()]


def rank_by_frequency(colors: Iterable[ColorInfo], limit: int) -> List[ColorInfo]:
    """
    Rank distinct colors by occurrence count.

    Ties keep the order in which each hex was first encountered.

    Args:
        colors: Sampled colors, duplicates expected
        limit: Maximum number of distinct colors to return

    Returns:
        Up to ``limit`` distinct colors, most frequent first
    """
    counts: Counter = Counter()
    first_seen = {}
    for color in colors:
        counts[color.hex] += 1
        first_seen.setdefault(color.hex, color)

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [first_seen[hex_color] for hex_color, _ in ranked[:limit]]


def extract_colors_from_image(buffer: BufferLike, stride: Optional[int] = None,
                              limit: Optional[int] = None) -> List[ColorInfo]:
    """
    Extract the most frequent colors of an image.

    Uses the coarse stride and returns up to 20 distinct colors by default.
    An empty or fully transparent buffer yields an empty list.
    """
    stride = stride or config.SAMPLE_STRIDE_COARSE
    limit = limit if limit is not None else config.MAX_SAMPLED_COLOR_HEX

    colors = sample_colors(buffer, stride)
    ranked = rank_by_frequency(colors, limit)

    logger.info(f"Extracted {len(ranked)} distinct colors from {len(colors)} samples")
    return ranked
