"""
Draft Assistant API - Main Application

FastAPI application for live fantasy football draft tracking.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from draft_assistant import __version__
from draft_assistant.api.dependencies import ClientManager
from draft_assistant.api.routes import drafts, players, recommendations, viz
from draft_assistant.config import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting Draft Assistant API v%s", __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Default league: %s", settings.default_league)

    yield

    # Shutdown
    logger.info("Shutting down Draft Assistant API")
    await ClientManager.close()


def create_app() -> FastAPI:
    """Application factory to create the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.api_title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "drafts": "/api/drafts",
                "players": "/api/players",
                "recommendations": "/api/recommendations",
                "viz": "/api/viz",
            },
        }

    # Register API routes
    app.include_router(drafts.router, prefix="/api/drafts", tags=["Drafts"])
    app.include_router(players.router, prefix="/api/players", tags=["Players"])
    app.include_router(
        recommendations.router, prefix="/api/recommendations", tags=["Recommendations"]
    )
    app.include_router(viz.router, prefix="/api/viz", tags=["Visualization"])

    return app


# Create the application instance
app = create_app()


def run():
    """Run the application (used by the CLI entry point)."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "draft_assistant.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
