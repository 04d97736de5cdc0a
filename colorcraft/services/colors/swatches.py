"""
Swatch Rendering Module

Renders extracted palettes as small PNG images for quick visual QA.
"""

import base64
from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from .conversions import hex_to_rgb


def hex_to_bgr(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to BGR tuple for OpenCV."""
    r, g, b = hex_to_rgb(hex_color)
    return (b, g, r)


def _encode_png_b64(img: np.ndarray) -> str:
    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode image as PNG")
    return base64.b64encode(buffer.tobytes()).decode('ascii')


def validate_swatch_params(hex_colors: List[str], chip_size: int, highlight_index: Optional[int]) -> None:
    """Validate swatch rendering parameters."""
    if not hex_colors:
        raise ValueError("hex_colors cannot be empty")

    if chip_size <= 0:
        raise ValueError("chip_size must be positive")

    if highlight_index is not None and (highlight_index < 0 or highlight_index >= len(hex_colors)):
        raise ValueError(f"highlight_index {highlight_index} out of range [0, {len(hex_colors)})")


def render_swatch_strip(hex_colors: List[str],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None,
                        border_color: Tuple[int, int, int] = (0, 0, 0),
                        border_width: int = 2) -> str:
    """
    Render a horizontal strip of color swatches.

    Args:
        hex_colors: List of hex color strings, in display order
        chip_size: Size of each color chip in pixels
        highlight_index: Index of color to outline (e.g. the harmony base)
        border_color: BGR color for highlight border
        border_width: Width of highlight border in pixels

    Returns:
        Base64-encoded PNG image string

    Raises:
        ValueError: If hex_colors is empty or parameters are out of range
    """
    validate_swatch_params(hex_colors, chip_size, highlight_index)

    k = len(hex_colors)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)
    for i, hex_color in enumerate(hex_colors):
        img[:, i * chip_size:(i + 1) * chip_size, :] = hex_to_bgr(hex_color)

    if highlight_index is not None:
        x_start = highlight_index * chip_size
        cv2.rectangle(
            img,
            (x_start, 0),
            (x_start + chip_size - 1, chip_size - 1),
            border_color,
            border_width
        )

    return _encode_png_b64(img)


def render_category_grid(categories: Dict[str, List[str]], chip_size: int = 32,
                         label_width: int = 96) -> str:
    """
    Render one labelled row per category.

    Rows are as wide as the largest category; empty categories render as an
    empty light-gray row so every category stays visible.

    Args:
        categories: Mapping of category name to hex colors
        chip_size: Size of each color chip in pixels
        label_width: Width of the label column in pixels

    Returns:
        Base64-encoded PNG image string
    """
    if not categories:
        raise ValueError("categories cannot be empty")

    cols = max([len(colors) for colors in categories.values()] + [1])
    img = np.full((chip_size * len(categories), label_width + cols * chip_size, 3), 240, dtype=np.uint8)

    for row, (name, hex_colors) in enumerate(categories.items()):
        y_start = row * chip_size
        cv2.putText(
            img, name, (4, y_start + chip_size // 2 + 4),
            cv2.FONT_HERSHEY_SIMPLEX, 0.4, (40, 40, 40), 1
        )
        for col, hex_color in enumerate(hex_colors):
            x_start = label_width + col * chip_size
            img[y_start:y_start + chip_size, x_start:x_start + chip_size, :] = hex_to_bgr(hex_color)

    logger.debug(f"Rendered category grid: {len(categories)} rows x {cols} cols")
    return _encode_png_b64(img)
