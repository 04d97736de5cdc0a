"""
ColorCraft Imaging Utilities
Handles image upload validation and decoding into RGBA pixel buffers.
"""
import io
from typing import Tuple

import cv2
import numpy as np
from fastapi import HTTPException, UploadFile
from PIL import Image

from colorcraft.config import config
from colorcraft.services.colors.extraction import PixelBuffer


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for size and format.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for oversized files, 415 for non-image uploads
    """
    # Check file size (file.size might be None for some clients)
    if getattr(file, 'size', None) and file.size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if not file.content_type or not file.content_type.startswith(config.SUPPORTED_MIME_PREFIX):
        raise HTTPException(
            status_code=415,
            detail="Please upload an image file"
        )


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    elif file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    elif file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    elif file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    elif file_bytes.startswith(b'BM'):
        return "image/bmp"
    else:
        raise HTTPException(
            status_code=400,
            detail="Invalid image file. Magic bytes don't match supported formats."
        )


def fit_long_edge(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """
    Dimensions scaled so neither edge exceeds max_edge, keeping aspect ratio.

    Images already within bounds keep their size.
    """
    if width <= max_edge and height <= max_edge:
        return width, height

    ratio = min(max_edge / width, max_edge / height)
    return max(1, int(width * ratio)), max(1, int(height * ratio))


def resize_rgba(rgba: np.ndarray, max_edge: int = None) -> np.ndarray:
    """
    Downscale an RGBA array so the longest edge is at most max_edge pixels.

    Args:
        rgba: Input image (H, W, 4) uint8
        max_edge: Maximum edge size (default from config)

    Returns:
        Resized image, or the input unchanged when already small enough
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    height, width = rgba.shape[:2]
    new_width, new_height = fit_long_edge(width, height, max_edge)
    if (new_width, new_height) == (width, height):
        return rgba

    # Use INTER_AREA for downscaling (better quality)
    return cv2.resize(rgba, (new_width, new_height), interpolation=cv2.INTER_AREA)


def decode_image_bytes(file_bytes: bytes, max_edge: int = None) -> PixelBuffer:
    """
    Decode image bytes into an RGBA pixel buffer.

    Args:
        file_bytes: Encoded image (PNG, JPEG, GIF, WEBP or BMP)
        max_edge: Longest edge after downscaling (default from config)

    Returns:
        PixelBuffer with row-major RGBA data

    Raises:
        HTTPException: 400 for undecodable data
    """
    validate_magic_bytes(file_bytes)

    try:
        pil_image = Image.open(io.BytesIO(file_bytes))
        if pil_image.mode != 'RGBA':
            pil_image = pil_image.convert('RGBA')
        rgba = np.array(pil_image, dtype=np.uint8)
    except Exception as e:
        raise HTTPException(
            status_code=400,
            detail=f"Failed to decode image: {str(e)}"
        )

    rgba = np.ascontiguousarray(resize_rgba(rgba, max_edge))
    height, width = rgba.shape[:2]
    return PixelBuffer(width=width, height=height, data=rgba.reshape(-1))


async def read_image(file: UploadFile, max_edge: int = None) -> PixelBuffer:
    """
    Safely read and decode an uploaded image.

    Args:
        file: FastAPI UploadFile object
        max_edge: Longest edge after downscaling (default from config)

    Returns:
        PixelBuffer ready for sampling

    Raises:
        HTTPException: 400 for read/decode errors, 415 for non-image uploads
    """
    validate_file_upload(file)

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    return decode_image_bytes(file_bytes, max_edge)
