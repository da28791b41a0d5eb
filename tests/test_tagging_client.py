# -*- coding: utf-8 -*-

from __future__ import annotations

import base64
import unittest

import httpx

from caltrack.analysis.errors import UpstreamError
from caltrack.analysis.tagging import TaggingClient

TAGS_URL = "https://imagga.test/v2/tags"


def _imagga_body(*pairs: tuple[str, float]) -> dict:
    return {
        "result": {"tags": [{"confidence": conf, "tag": {"en": label}} for label, conf in pairs]},
        "status": {"text": "", "type": "success"},
    }


class TestTaggingClient(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler) -> TaggingClient:
        return TaggingClient(
            api_key="key",
            api_secret="secret",
            url=TAGS_URL,
            timeout=2,
            transport=httpx.MockTransport(handler),
        )

    async def test_sends_image_with_basic_auth_and_limit(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_imagga_body(("banana", 91.3), ("fruit", 40.0)))

        tags = await self._client(handler).tag(b"JPEGDATA", "banana.jpg", "image/jpeg")

        self.assertEqual([t.label for t in tags], ["banana", "fruit"])
        self.assertAlmostEqual(tags[0].confidence, 91.3)

        self.assertEqual(len(seen), 1)
        request = seen[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(request.url.params["limit"], "5")
        expected_auth = "Basic " + base64.b64encode(b"key:secret").decode("ascii")
        self.assertEqual(request.headers["authorization"], expected_auth)
        self.assertTrue(request.headers["content-type"].startswith("multipart/form-data"))
        self.assertIn(b'name="image"', request.content)
        self.assertIn(b'filename="banana.jpg"', request.content)
        self.assertIn(b"JPEGDATA", request.content)

    async def test_keeps_upstream_order(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_imagga_body(("plate", 12), ("pasta", 70)))

        tags = await self._client(handler).tag(b"x", "a.png", "image/png")
        self.assertEqual([t.label for t in tags], ["plate", "pasta"])

    async def test_http_error_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"status": {"text": "bad credentials"}})

        with self.assertRaises(UpstreamError) as ctx:
            await self._client(handler).tag(b"x", "a.png", "image/png")
        self.assertIn("401", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 500)

    async def test_timeout_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with self.assertRaises(UpstreamError):
            await self._client(handler).tag(b"x", "a.png", "image/png")

    async def test_missing_tag_list_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"status": {"type": "success"}})

        with self.assertRaises(UpstreamError):
            await self._client(handler).tag(b"x", "a.png", "image/png")

    async def test_non_json_body_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        with self.assertRaises(UpstreamError):
            await self._client(handler).tag(b"x", "a.png", "image/png")


if __name__ == "__main__":
    unittest.main()
