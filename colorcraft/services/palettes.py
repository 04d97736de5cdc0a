"""
ColorCraft Palette Model
Named, timestamped palettes built from extraction or harmony output.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from colorcraft.services.colors.conversions import ColorInfo
from colorcraft.utils.ids import generate_palette_id


def default_palette_name(harmony: str) -> str:
    """Default display name for a palette, e.g. "triadic Palette"."""
    return f"{harmony} Palette"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ColorPalette:
    """A saved collection of colors. Replaced wholesale on save, never patched."""
    id: str
    name: str
    colors: Tuple[ColorInfo, ...]
    harmony: str
    created_at: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON record."""
        return {
            "id": self.id,
            "name": self.name,
            "colors": [color.to_dict() for color in self.colors],
            "harmony": self.harmony,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorPalette":
        """
        Rebuild a palette from its persisted JSON record.

        Raises:
            ValueError: If the record is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Palette record must be an object, got {type(data).__name__}")
        try:
            colors = tuple(ColorInfo.from_dict(color) for color in data["colors"])
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                colors=colors,
                harmony=str(data["harmony"]),
                created_at=str(data["createdAt"]),
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid palette record: {e}")


def create_palette(colors: Iterable[ColorInfo], harmony: str,
                   name: Optional[str] = None,
                   palette_id: Optional[str] = None) -> ColorPalette:
    """
    Create a palette from extraction or harmony output.

    Args:
        colors: Colors in display order (copied)
        harmony: Scheme or category tag the colors came from
        name: Display name; blank names fall back to "<harmony> Palette"
        palette_id: Existing ID to overwrite on save; a new one is generated if omitted

    Returns:
        New ColorPalette stamped with the current time
    """
    name = (name or "").strip() or default_palette_name(harmony)
    return ColorPalette(
        id=palette_id or generate_palette_id(),
        name=name,
        colors=tuple(colors),
        harmony=harmony,
    )
