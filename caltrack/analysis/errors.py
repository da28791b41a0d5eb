# -*- coding: utf-8 -*-
"""Analysis: failure taxonomy.

Every terminal outcome other than success is one of these. The router turns
them into ``{"success": false, "message": ...}`` with ``status_code``.
"""

from __future__ import annotations


class AnalysisError(Exception):
    status_code = 500
    message = "An error occurred while analyzing the image. Please try again."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingInput(AnalysisError):
    status_code = 400
    message = "No image file found"


class PayloadTooLarge(AnalysisError):
    status_code = 413

    def __init__(self, max_upload_mb: int) -> None:
        super().__init__(f"Image too large (> {max_upload_mb} MB)")


class NotFood(AnalysisError):
    status_code = 400
    message = "No food detected in this image"


class NoNutritionData(AnalysisError):
    status_code = 404

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"No nutrition data found for '{label}'")


class UpstreamError(AnalysisError):
    """An external service (or anything unexpected) failed.

    ``detail`` is for logs only; clients always get the generic message.
    """

    status_code = 500

    def __init__(self, detail: str, *, service: str | None = None) -> None:
        self.detail = detail
        self.service = service
        super().__init__()

    def __str__(self) -> str:
        prefix = f"{self.service}: " if self.service else ""
        return f"{prefix}{self.detail}"
