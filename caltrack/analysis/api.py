# -*- coding: utf-8 -*-
"""Analysis: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Request, UploadFile

from ..config import Settings
from .errors import PayloadTooLarge
from .models import AnalysisFailure, AnalysisResult
from .pipeline import AnalysisPipeline

router = APIRouter(tags=["Analysis"])

_READ_CHUNK = 1024 * 256


def get_pipeline(request: Request) -> AnalysisPipeline:
    return request.app.state.pipeline


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def _read_upload(upload: UploadFile, settings: Settings) -> bytes:
    max_bytes = settings.max_upload_bytes
    chunks: list[bytes] = []
    size = 0
    try:
        while True:
            chunk = await upload.read(_READ_CHUNK)
            if not chunk:
                break
            size += len(chunk)
            if size > max_bytes:
                raise PayloadTooLarge(settings.max_upload_mb)
            chunks.append(chunk)
    finally:
        await upload.close()
    return b"".join(chunks)


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={
        400: {"model": AnalysisFailure, "description": "No file, or the image is not food"},
        404: {"model": AnalysisFailure, "description": "No nutrition data for the detected food"},
        413: {"model": AnalysisFailure, "description": "Image exceeds the upload limit"},
        500: {"model": AnalysisFailure, "description": "Upstream or unexpected failure"},
    },
    summary="Analyze a food photo and return its nutrition summary",
)
async def analyze(
    food_image: UploadFile | None = File(default=None, alias="foodImage"),
    pipeline: AnalysisPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
):
    image_bytes = None
    filename = ""
    content_type = "application/octet-stream"
    if food_image is not None:
        image_bytes = await _read_upload(food_image, settings)
        filename = food_image.filename or "upload"
        content_type = food_image.content_type or content_type
    return await pipeline.analyze(image_bytes, filename, content_type)
