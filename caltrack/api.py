# -*- coding: utf-8 -*-
"""
Cal Track backend API

Receives a food photo, identifies it via Imagga, and answers with USDA
nutrition facts.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from . import __version__
from .analysis.api import router as analysis_router
from .analysis.errors import AnalysisError, UpstreamError
from .analysis.models import AnalysisFailure
from .analysis.nutrition import NutritionClient, NutritionSource
from .analysis.pipeline import AnalysisPipeline
from .analysis.tagging import Tagger, TaggingClient
from .config import Settings

logger = logging.getLogger(__name__)

ROOT_HTML = (
    "<h1>Cal Track Backend is running!</h1>"
    "<p>This server is waiting for image analysis requests from the frontend.</p>"
)


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=AnalysisFailure(message=message).model_dump(),
    )


def create_app(
    settings: Settings | None = None,
    *,
    tagger: Tagger | None = None,
    nutrition: NutritionSource | None = None,
) -> FastAPI:
    """Build the application.

    ``tagger`` and ``nutrition`` replace the real Imagga / USDA clients, which
    is how the tests run without network access.
    """
    if settings is None:
        settings = Settings.from_env()

    if tagger is None:
        tagger = TaggingClient(
            api_key=settings.imagga_api_key or "",
            api_secret=settings.imagga_api_secret or "",
            url=settings.imagga_tags_url,
            timeout=settings.upstream_timeout,
        )
    if nutrition is None:
        nutrition = NutritionClient(
            api_key=settings.usda_api_key or "",
            url=settings.usda_search_url,
            timeout=settings.upstream_timeout,
        )

    app = FastAPI(
        title="Cal Track",
        description="Food photo recognition and nutrition lookup",
        version=__version__,
    )
    app.state.settings = settings
    app.state.pipeline = AnalysisPipeline(tagger=tagger, nutrition=nutrition)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(AnalysisError)
    async def _analysis_error(request: Request, exc: AnalysisError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("analysis failed: %s", exc, exc_info=exc.__cause__ or exc)
        else:
            logger.info("analysis rejected (%d): %s", exc.status_code, exc.message)
        return _failure(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled error on %s", request.url.path, exc_info=exc)
        return _failure(500, UpstreamError.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("invalid request to %s: %s", request.url.path, exc.errors())
        return _failure(400, "Invalid request: expected a multipart upload with a 'foodImage' file")

    app.include_router(analysis_router)

    @app.get("/", include_in_schema=False, response_class=HTMLResponse)
    def root() -> str:
        return ROOT_HTML

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    return app


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    logger.info("Cal Track backend listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, reload=False)


if __name__ == "__main__":
    run()
