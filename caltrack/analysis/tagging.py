# -*- coding: utf-8 -*-
"""Analysis: Imagga image tagging client."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

import httpx

from .errors import UpstreamError
from .models import Tag

logger = logging.getLogger(__name__)

SERVICE = "imagga"
TAG_LIMIT = 5


class Tagger(Protocol):
    async def tag(self, image_bytes: bytes, filename: str, content_type: str) -> List[Tag]:
        ...


def _parse_tags(data: object) -> List[Tag]:
    """Turn an Imagga ``/v2/tags`` body into tags, keeping upstream order."""
    result = data.get("result") if isinstance(data, dict) else None
    raw_tags = result.get("tags") if isinstance(result, dict) else None
    if not isinstance(raw_tags, list):
        raise UpstreamError("response is missing result.tags", service=SERVICE)

    tags: List[Tag] = []
    for raw in raw_tags:
        if not isinstance(raw, dict):
            raise UpstreamError(f"malformed tag entry: {raw!r}", service=SERVICE)
        names = raw.get("tag")
        label = names.get("en") if isinstance(names, dict) else None
        confidence = raw.get("confidence")
        if not isinstance(label, str) or isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise UpstreamError(f"malformed tag entry: {raw!r}", service=SERVICE)
        tags.append(Tag(label=label, confidence=max(0.0, min(100.0, float(confidence)))))
    return tags


class TaggingClient:
    def __init__(
        self,
        *,
        api_key: str,
        api_secret: str,
        url: str = "https://api.imagga.com/v2/tags",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._auth = httpx.BasicAuth(api_key, api_secret)
        self._transport = transport

    async def tag(self, image_bytes: bytes, filename: str, content_type: str) -> List[Tag]:
        files = {"image": (filename or "image", image_bytes, content_type or "application/octet-stream")}
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.post(
                    self.url,
                    files=files,
                    params={"limit": TAG_LIMIT},
                    auth=self._auth,
                )
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                snippet = (exc.response.text or "").replace("\n", " ").strip()[:200]
                raise UpstreamError(
                    f"HTTP {exc.response.status_code}: {snippet}", service=SERVICE
                ) from exc
            except httpx.RequestError as exc:
                raise UpstreamError(f"request failed: {exc!r}", service=SERVICE) from exc

        try:
            data: Any = resp.json()
        except ValueError as exc:
            raise UpstreamError("non-JSON response", service=SERVICE) from exc

        tags = _parse_tags(data)
        logger.info("Imagga tags: %s", [t.label for t in tags])
        return tags
