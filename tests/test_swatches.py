"""
Tests for PNG swatch rendering.
"""
import base64
import io

import numpy as np
import pytest
from PIL import Image

from colorcraft.services.colors.swatches import hex_to_bgr, render_category_grid, render_swatch_strip


def decode_b64_png(data: str) -> np.ndarray:
    return np.array(Image.open(io.BytesIO(base64.b64decode(data))).convert("RGB"))


class TestSwatchStrip:
    """Test horizontal strips."""

    def test_hex_to_bgr(self):
        assert hex_to_bgr("#ff8000") == (0, 128, 255)

    def test_strip_dimensions_and_colors(self):
        img = decode_b64_png(render_swatch_strip(["#ff0000", "#00ff00", "#0000ff"], chip_size=10))
        assert img.shape == (10, 30, 3)
        assert tuple(img[5, 5]) == (255, 0, 0)
        assert tuple(img[5, 15]) == (0, 255, 0)
        assert tuple(img[5, 25]) == (0, 0, 255)

    def test_highlight_draws_border(self):
        img = decode_b64_png(render_swatch_strip(["#ffffff", "#ffffff"], chip_size=20, highlight_index=0))
        assert tuple(img[0, 0]) == (0, 0, 0)
        assert tuple(img[10, 10]) == (255, 255, 255)
        assert tuple(img[0, 30]) == (255, 255, 255)

    def test_empty_colors_raise(self):
        with pytest.raises(ValueError):
            render_swatch_strip([])

    @pytest.mark.parametrize("kwargs", [{"chip_size": 0}, {"highlight_index": 2}, {"highlight_index": -1}])
    def test_invalid_params_raise(self, kwargs):
        with pytest.raises(ValueError):
            render_swatch_strip(["#000000", "#ffffff"], **kwargs)


class TestCategoryGrid:
    """Test labelled category grids."""

    def test_grid_dimensions(self):
        categories = {"dominant": ["#ff0000", "#00ff00"], "vibrant": ["#ff0000"], "dark": []}
        img = decode_b64_png(render_category_grid(categories, chip_size=16, label_width=50))
        assert img.shape == (48, 50 + 2 * 16, 3)
        assert tuple(img[8, 58]) == (255, 0, 0)
        assert tuple(img[8, 74]) == (0, 255, 0)
        assert tuple(img[40, 60]) == (240, 240, 240)

    def test_all_empty_categories_still_render(self):
        img = decode_b64_png(render_category_grid({"light": [], "dark": []}, chip_size=8, label_width=40))
        assert img.shape == (16, 48, 3)

    def test_no_categories_raise(self):
        with pytest.raises(ValueError):
            render_category_grid({})
