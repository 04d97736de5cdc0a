"""
Tests for palette text exports.
"""
import json

import pytest

from colorcraft.services.colors.conversions import color_from_hex
from colorcraft.services.export import ExportFormat, export_filename, export_media_type, export_palette
from colorcraft.services.palettes import create_palette


@pytest.fixture
def palette():
    return create_palette(
        [color_from_hex("#ff0000"), color_from_hex("#00ff00")],
        "complementary",
        name="My  Summer Palette",
        palette_id="palette_1_abc",
    )


class TestExportPalette:
    """Test each export format."""

    def test_css(self, palette):
        assert export_palette(palette, "css") == "--color-1: #ff0000;\n--color-2: #00ff00;"

    def test_scss(self, palette):
        assert export_palette(palette, "scss") == "$color-1: #ff0000;\n$color-2: #00ff00;"

    def test_txt(self, palette):
        assert export_palette(palette, "txt") == "#ff0000\n#00ff00"

    def test_json_is_full_record(self, palette):
        text = export_palette(palette, "json")
        assert text.startswith("{\n  \"id\"")
        data = json.loads(text)
        assert data == palette.to_dict()
        assert data["createdAt"] == palette.created_at

    @pytest.mark.parametrize("fmt", ["pdf", "CSS", ""])
    def test_unknown_format_falls_back_to_txt(self, palette, fmt):
        assert export_palette(palette, fmt) == "#ff0000\n#00ff00"

    def test_enum_accepted(self, palette):
        assert export_palette(palette, ExportFormat.CSS) == export_palette(palette, "css")

    def test_empty_palette(self):
        empty = create_palette([], "dominant")
        assert export_palette(empty, "css") == ""
        assert export_palette(empty, "txt") == ""


class TestExportMetadata:
    """Test download filename and content type."""

    def test_filename(self, palette):
        assert export_filename(palette, "css") == "my-summer-palette.css"
        assert export_filename(palette, "pdf") == "my-summer-palette.pdf"

    def test_media_types(self):
        assert export_media_type("css") == "text/css"
        assert export_media_type("json") == "application/json"
        assert export_media_type("txt") == "text/plain"
        assert export_media_type("pdf") == "text/plain"
