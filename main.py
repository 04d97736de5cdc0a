from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from colorcraft.api.v1 import router as v1_router
from colorcraft.config import config
from colorcraft.schemas import HealthResponse
from colorcraft.services.colors import __version__
from colorcraft.utils.logging import get_logger

config.validate_settings()

app = FastAPI(
    title="ColorCraft Palette Service",
    description="Color extraction, palette categorization and color harmony API",
    version=__version__
)

# Add CORS middleware with basic configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"]
)

app.include_router(v1_router)

get_logger().info("ColorCraft service initialized",
                  extra={"storage_backend": config.STORAGE_BACKEND, "max_edge": config.MAX_EDGE})


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "ColorCraft Palette API",
        "version": __version__,
        "docs": "/docs"
    }
