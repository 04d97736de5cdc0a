"""
Test configuration and fixtures for ColorCraft tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app
from colorcraft.services.storage import InMemoryBackend, PaletteStore, get_palette_store


@pytest.fixture
def palette_store():
    """Fresh in-memory palette store."""
    return PaletteStore(InMemoryBackend(), max_entries=50)


@pytest.fixture
def test_client(palette_store):
    """Create test client for the FastAPI app with an isolated palette store."""
    app.dependency_overrides[get_palette_store] = lambda: palette_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from colorcraft.utils.metrics import reset_metrics
    reset_metrics()


def make_rgba(width, height, color=(255, 0, 0, 255)):
    """Solid RGBA image as an (H, W, 4) uint8 array."""
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[:, :] = color
    return img


def encode_png(rgba: np.ndarray) -> bytes:
    """Encode an RGBA array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(rgba, mode="RGBA").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def two_block_png():
    """64x64 PNG, left half red, right half blue."""
    img = make_rgba(64, 64, (255, 0, 0, 255))
    img[:, 32:] = (0, 0, 255, 255)
    return encode_png(img)


@pytest.fixture
def transparent_png():
    """64x64 fully transparent PNG."""
    return encode_png(make_rgba(64, 64, (120, 200, 40, 0)))
