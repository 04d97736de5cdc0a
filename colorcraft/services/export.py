"""
ColorCraft Palette Export
String exports of a palette for stylesheets and tooling.
"""
import json
import re
from enum import Enum

from colorcraft.services.palettes import ColorPalette


class ExportFormat(str, Enum):
    """Known export formats. Anything else exports as TXT."""
    CSS = "css"
    SCSS = "scss"
    JSON = "json"
    TXT = "txt"


MEDIA_TYPES = {
    ExportFormat.CSS: "text/css",
    ExportFormat.SCSS: "text/x-scss",
    ExportFormat.JSON: "application/json",
    ExportFormat.TXT: "text/plain",
}


def _hex_lines(palette: ColorPalette) -> str:
    return "\n".join(color.hex for color in palette.colors)


def export_palette(palette: ColorPalette, fmt: str) -> str:
    """
    Export a palette as text.

    Args:
        palette: Palette to export
        fmt: "css", "scss", "json" or "txt"; unrecognized formats export as txt

    Returns:
        Exported text, lines joined with "\\n" and no trailing newline
    """
    if fmt == ExportFormat.CSS:
        return "\n".join(f"--color-{i}: {color.hex};" for i, color in enumerate(palette.colors, 1))
    if fmt == ExportFormat.SCSS:
        return "\n".join(f"$color-{i}: {color.hex};" for i, color in enumerate(palette.colors, 1))
    if fmt == ExportFormat.JSON:
        return json.dumps(palette.to_dict(), indent=2)
    return _hex_lines(palette)


def export_filename(palette: ColorPalette, fmt: str) -> str:
    """Download filename: lowercased name with whitespace runs as dashes."""
    slug = re.sub(r"\s+", "-", palette.name).lower()
    return f"{slug}.{fmt}"


def export_media_type(fmt: str) -> str:
    """Content type for an export format (text/plain for unknown formats)."""
    try:
        return MEDIA_TYPES[ExportFormat(fmt)]
    except ValueError:
        return MEDIA_TYPES[ExportFormat.TXT]
