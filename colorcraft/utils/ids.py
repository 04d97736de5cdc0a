"""
ColorCraft ID Utilities
Generate unique request and palette IDs.
"""
import time
import uuid
from datetime import datetime


def generate_request_id(prefix: str = "req") -> str:
    """
    Generate a unique request ID for tracking.

    Args:
        prefix: Short tag naming the operation ("extract", "harmony", ...)

    Returns:
        Unique request ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"{prefix}-{timestamp}-{short_uuid}"


def generate_palette_id() -> str:
    """
    Generate a palette ID.

    Millisecond timestamp keeps IDs roughly sortable by creation time,
    the uuid suffix keeps two palettes created in the same millisecond apart.
    """
    millis = int(time.time() * 1000)
    return f"palette_{millis}_{uuid.uuid4().hex[:8]}"
