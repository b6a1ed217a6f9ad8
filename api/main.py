"""
FastAPI application for the Synthetic Candidate Generator.

Exposes the catalogues and candidate generation over HTTP. Cross-origin
access is off unless CANDIDATE_CORS_ORIGINS lists allowed origins.

Run with: uvicorn api.main:app --port 8000
"""
from pathlib import Path
import logging
import sys
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes.candidates import router as candidates_router
from candidates.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API app from settings (environment settings if omitted)"""
    settings = settings or get_settings()

    app = FastAPI(
        title="Synthetic Candidate API",
        description="Generate synthetic job candidates with controllable quality and flaws",
        version="1.0.0",
    )

    if settings.cors_origins:
        logger.info("CORS enabled for %s", ", ".join(settings.cors_origins))
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    app.include_router(candidates_router)

    @app.get("/")
    async def root():
        return {"status": "ok", "service": "Synthetic Candidate API"}

    @app.get("/health")
    async def health():
        """Liveness plus whether generated candidates go through the enhancer"""
        return {"status": "healthy", "enhancement_enabled": settings.enhancement_enabled}

    return app


app = create_app()
