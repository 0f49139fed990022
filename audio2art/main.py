from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.generate import router as generate_router
from .core.config import settings
from .core.logging import get_logger, setup_logging
from .schemas.common import HealthResponse

setup_logging(settings.log_level, settings.log_file or None)
logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="audio2art")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    app.include_router(generate_router)

    if not settings.genai_configured:
        logger.warning("GOOGLE_API_KEY is not set; /generate will return 503 until it is configured.")
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run("audio2art.main:app", host="0.0.0.0", port=settings.port, reload=False)


if __name__ == "__main__":
    run()
