"""
ColorCraft Configuration
Manages environment variables and defaults for the palette engine and service.
"""
import os
from typing import Literal, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for ColorCraft services."""

    # Upload limits and decoding
    MAX_FILE_MB: int = int(os.environ.get("COLORCRAFT_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("COLORCRAFT_MAX_EDGE", "800"))

    # Pixel sampling (strides are in bytes of an RGBA buffer)
    ALPHA_CUTOFF: int = int(os.environ.get("COLORCRAFT_ALPHA_CUTOFF", "125"))
    SAMPLE_STRIDE_COARSE: int = int(os.environ.get("COLORCRAFT_SAMPLE_STRIDE_COARSE", "20"))  # every 5th pixel
    SAMPLE_STRIDE_FINE: int = int(os.environ.get("COLORCRAFT_SAMPLE_STRIDE_FINE", "16"))  # every 4th pixel
    MAX_SAMPLED_COLOR_HEX: int = int(os.environ.get("COLORCRAFT_MAX_SAMPLED_COLOR_HEX", "20"))

    # Category caps
    DOMINANT_CAP: int = int(os.environ.get("COLORCRAFT_DOMINANT_CAP", "12"))
    VIBRANT_CAP: int = int(os.environ.get("COLORCRAFT_VIBRANT_CAP", "10"))
    MUTED_CAP: int = int(os.environ.get("COLORCRAFT_MUTED_CAP", "8"))
    LIGHT_CAP: int = int(os.environ.get("COLORCRAFT_LIGHT_CAP", "8"))
    DARK_CAP: int = int(os.environ.get("COLORCRAFT_DARK_CAP", "8"))

    # Logging
    LOG_LEVEL: str = os.environ.get("COLORCRAFT_LOG_LEVEL", "INFO")
    LOG_JSON: bool = bool(int(os.environ.get("COLORCRAFT_LOG_JSON", "0")))

    # Palette storage
    STORAGE_BACKEND: Literal["memory", "file", "redis"] = os.environ.get("COLORCRAFT_STORAGE_BACKEND", "memory")
    STORAGE_PATH: str = os.environ.get("COLORCRAFT_STORAGE_PATH", "colorcraft-palettes.json")
    STORAGE_KEY: str = os.environ.get("COLORCRAFT_STORAGE_KEY", "colorcraft-palettes")
    REDIS_URL: Optional[str] = os.environ.get("COLORCRAFT_REDIS_URL")
    MAX_SAVED_PALETTES: int = int(os.environ.get("COLORCRAFT_MAX_SAVED_PALETTES", "50"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "COLORCRAFT_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("COLORCRAFT_METRICS_ENABLED", "1")))

    # Accepted uploads (any image/* type Pillow can decode)
    SUPPORTED_MIME_PREFIX = "image/"

    @classmethod
    def validate_stride(cls, stride: int) -> bool:
        """Validate a byte stride over an RGBA buffer."""
        return stride > 0 and stride % 4 == 0

    @classmethod
    def validate_storage_backend(cls, backend: str) -> bool:
        """Validate storage backend name."""
        return backend in ["memory", "file", "redis"]

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter."""
        return 16 <= max_edge <= 4096

    @classmethod
    def validate_settings(cls) -> None:
        """
        Check the loaded settings once at startup.

        Raises:
            ValueError: Naming every invalid setting
        """
        errors = []
        for name in ("SAMPLE_STRIDE_COARSE", "SAMPLE_STRIDE_FINE"):
            if not cls.validate_stride(getattr(cls, name)):
                errors.append(f"{name} must be a positive multiple of 4")
        if not cls.validate_max_edge(cls.MAX_EDGE):
            errors.append("MAX_EDGE must be between 16 and 4096")
        if not cls.validate_storage_backend(cls.STORAGE_BACKEND):
            errors.append("STORAGE_BACKEND must be memory, file or redis")
        if cls.MAX_SAVED_PALETTES < 1:
            errors.append("MAX_SAVED_PALETTES must be at least 1")
        if errors:
            raise ValueError("Invalid configuration: " + "; ".join(errors))

    @classmethod
    def allowed_origins(cls) -> list:
        """Split the comma separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
