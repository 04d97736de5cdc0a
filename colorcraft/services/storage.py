"""
ColorCraft Palette Storage
Saved palette collection behind a pluggable backend (memory, JSON file, Redis).

The collection is stored as one JSON array, most recently saved first.
Every save or delete rewrites the whole array.
"""
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

import redis
from loguru import logger

from colorcraft.config import Config, config
from colorcraft.services.palettes import ColorPalette


class PaletteBackend(ABC):
    """Abstract base class for palette storage backends."""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the stored JSON payload, or None if nothing is stored."""
        pass

    @abstractmethod
    def write(self, payload: str) -> None:
        """Replace the stored JSON payload."""
        pass


class InMemoryBackend(PaletteBackend):
    """Process-local backend, used by default and in tests."""

    def __init__(self, payload: Optional[str] = None):
        self._payload = payload

    def read(self) -> Optional[str]:
        return self._payload

    def write(self, payload: str) -> None:
        self._payload = payload


class JsonFileBackend(PaletteBackend):
    """JSON file backend. Writes go through a temp file and os.replace."""

    def __init__(self, path: str):
        self.path = Path(path)

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def write(self, payload: str) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=str(directory), prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class RedisBackend(PaletteBackend):
    """Redis backend storing the collection under a single key."""

    def __init__(self, redis_url: str = "redis://localhost:6379", key: str = "colorcraft-palettes",
                 client: Optional[redis.Redis] = None):
        self.key = key
        self.redis_client = client or redis.from_url(redis_url, decode_responses=True)

    def read(self) -> Optional[str]:
        value = self.redis_client.get(self.key)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def write(self, payload: str) -> None:
        self.redis_client.set(self.key, payload)


class PaletteStore:
    """Saved palette collection with list/get/upsert/delete semantics."""

    def __init__(self, backend: PaletteBackend, max_entries: int = 50):
        self.backend = backend
        self.max_entries = max_entries

    def list_palettes(self) -> List[ColorPalette]:
        """
        Load saved palettes, most recently saved first.

        Unreadable or corrupt storage is reported as an empty collection;
        individual malformed records are skipped.
        """
        try:
            payload = self.backend.read()
        except Exception as e:
            logger.warning(f"Failed to read saved palettes, treating as empty: {e}")
            return []

        if not payload:
            return []

        try:
            records = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.warning(f"Saved palettes are not valid JSON, treating as empty: {e}")
            return []

        if not isinstance(records, list):
            logger.warning(f"Saved palettes payload is a {type(records).__name__}, expected a list")
            return []

        palettes = []
        for record in records:
            try:
                palettes.append(ColorPalette.from_dict(record))
            except ValueError as e:
                logger.warning(f"Skipping malformed saved palette: {e}")
        return palettes

    def get_palette(self, palette_id: str) -> Optional[ColorPalette]:
        """Return the saved palette with this ID, or None."""
        for palette in self.list_palettes():
            if palette.id == palette_id:
                return palette
        return None

    def upsert(self, palette: ColorPalette) -> ColorPalette:
        """
        Save a palette, replacing any entry with the same ID.

        The saved palette moves to the front and the collection is
        truncated to ``max_entries``.
        """
        palettes = [p for p in self.list_palettes() if p.id != palette.id]
        palettes.insert(0, palette)
        self._write(palettes[:self.max_entries])
        logger.info(f"Saved palette {palette.id} ({len(palette.colors)} colors)")
        return palette

    def delete(self, palette_id: str) -> bool:
        """Delete a palette by ID. Returns False if it was not stored."""
        palettes = self.list_palettes()
        remaining = [p for p in palettes if p.id != palette_id]
        if len(remaining) == len(palettes):
            return False

        self._write(remaining)
        logger.info(f"Deleted palette {palette_id}")
        return True

    def clear(self) -> None:
        """Remove every saved palette."""
        self._write([])

    def _write(self, palettes: List[ColorPalette]) -> None:
        payload = json.dumps([p.to_dict() for p in palettes])
        try:
            self.backend.write(payload)
        except Exception as e:
            logger.error(f"Failed to persist palettes: {e}")
            raise RuntimeError(f"Failed to persist palettes: {e}")


def build_palette_store(cfg: Config = config) -> PaletteStore:
    """Create a store using the backend selected in configuration."""
    backend_name = cfg.STORAGE_BACKEND
    if not cfg.validate_storage_backend(backend_name):
        raise ValueError(f"Unknown storage backend: {backend_name}")

    if backend_name == "file":
        backend = JsonFileBackend(cfg.STORAGE_PATH)
    elif backend_name == "redis":
        backend = RedisBackend(cfg.REDIS_URL or "redis://localhost:6379", key=cfg.STORAGE_KEY)
    else:
        backend = InMemoryBackend()

    logger.info(f"Using {backend_name} palette storage")
    return PaletteStore(backend, max_entries=cfg.MAX_SAVED_PALETTES)


# Global store instance
_store: Optional[PaletteStore] = None


def get_palette_store() -> PaletteStore:
    """Get or create the global palette store (FastAPI dependency)."""
    global _store
    if _store is None:
        _store = build_palette_store()
    return _store
