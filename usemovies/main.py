"""Main FastAPI application"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import session as session_api
from .api import system
from .config import settings
from .services.log_service import log_service
from .services.omdb_service import OMDbService
from .services.session import MovieSession


def create_app(omdb: OMDbService = None) -> FastAPI:
    """Build the app; ``omdb`` replaces the client built from settings"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events"""
        client = omdb
        if client is None:
            if not settings.OMDB_API_KEY:
                log_service.error("OMDB_API_KEY is not configured, searches will fail")
            client = OMDbService(settings.OMDB_API_KEY or "")

        app.state.session = MovieSession(client)
        log_service.info("Movie session started")
        try:
            yield
        except asyncio.CancelledError:
            pass  # Suppress CancelledError during shutdown
        finally:
            await app.state.session.close()
            app.state.session = None
            log_service.info("Movie session closed")

    app = FastAPI(
        title="useMovies",
        description="Movie search and watched list tracking backed by OMDb",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    # If ALLOWED_ORIGINS is not set, default to ["*"] for maximum compatibility
    allowed_origins = ["*"]
    allow_credentials = False  # Credentials cannot be used with "*"

    if settings.ALLOWED_ORIGINS:
        allowed_origins = settings.ALLOWED_ORIGINS.split(",")
        allow_credentials = True  # Credentials allowed with specific origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(session_api.router)
    app.include_router(system.router)

    @app.get("/api")
    async def api_root():
        """API root"""
        return {
            "name": "useMovies API",
            "version": "1.0.0",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy", "service": "usemovies"}

    return app


app = create_app()
