# -*- coding: utf-8 -*-
"""Analysis: tag → classify → lookup → extract → assemble.

Each step either hands its output to the next one or raises an
:class:`~caltrack.analysis.errors.AnalysisError`; the first failure ends the
request.
"""

from __future__ import annotations

import base64
import logging

from .classifier import classify
from .errors import AnalysisError, MissingInput, NoNutritionData, NotFood, UpstreamError
from .models import AnalysisResult
from .nutrients import extract_summary
from .nutrition import NutritionSource
from .tagging import Tagger

logger = logging.getLogger(__name__)


def _data_url(mime: str, image_bytes: bytes) -> str:
    b64 = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime};base64,{b64}"


class AnalysisPipeline:
    def __init__(self, *, tagger: Tagger, nutrition: NutritionSource) -> None:
        self.tagger = tagger
        self.nutrition = nutrition

    async def analyze(
        self,
        image_bytes: bytes | None,
        filename: str,
        content_type: str,
    ) -> AnalysisResult:
        try:
            return await self._run(image_bytes, filename, content_type)
        except AnalysisError:
            raise
        except Exception as exc:
            # Logged once, with the traceback, by the app's error handler.
            raise UpstreamError(f"unexpected error: {exc!r}") from exc

    async def _run(self, image_bytes: bytes | None, filename: str, content_type: str) -> AnalysisResult:
        if not image_bytes:
            raise MissingInput()

        logger.info("analyzing %s (%s, %d bytes)", filename, content_type, len(image_bytes))
        tags = await self.tagger.tag(image_bytes, filename, content_type)

        label = classify(tags)
        if label is None:
            logger.info("rejected as non-food: %s", [t.label for t in tags])
            raise NotFood()
        logger.info("detected food label: %s", label)

        record = await self.nutrition.search(label)
        if record is None:
            raise NoNutritionData(label)

        summary = extract_summary(record.nutrients)
        return AnalysisResult(
            name=record.description,
            image_src=_data_url(content_type, image_bytes),
            **summary,
        )
