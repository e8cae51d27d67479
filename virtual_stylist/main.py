from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from virtual_stylist import config
from virtual_stylist.config import logger
from virtual_stylist.core.gemini import GeminiImageClient
from virtual_stylist.services.stylist_service import ImageGenerator, StylistOrchestrator

from .routers import router


def build_gemini_client() -> GeminiImageClient:
    """Create the Gemini client from the environment; the key is required."""
    if not config.GEMINI_KEY:
        raise RuntimeError("GEMINI_KEY is not configured.")

    return GeminiImageClient(
        api_key=config.GEMINI_KEY,
        model=config.GEMINI_MODEL,
        base_url=config.GEMINI_BASE_URL,
        timeout=config.GEMINI_TIMEOUT_SECONDS,
    )


def create_app(client: Optional[ImageGenerator] = None) -> FastAPI:
    """Build the API. A client passed in is used as-is and not closed on shutdown."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned_client = None
        generator = client
        if generator is None:
            owned_client = build_gemini_client()
            generator = owned_client

        app.state.orchestrator = StylistOrchestrator(generator)
        logger.info("Stylist session ready")
        try:
            yield
        finally:
            if owned_client is not None:
                await owned_client.aclose()

    app = FastAPI(
        title="Virtual Stylist API",
        description="Upload one clothing item and get AI-styled looks in three vibes",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(router)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()

logger.info("Virtual Stylist API initialized successfully")
