# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

import httpx

from caltrack.analysis.errors import UpstreamError
from caltrack.analysis.nutrition import NutritionClient

SEARCH_URL = "https://fdc.test/fdc/v1/foods/search"

BANANA = {
    "totalHits": 1,
    "foods": [
        {
            "fdcId": 1105314,
            "description": "Bananas, raw",
            "foodNutrients": [
                {"nutrientName": "Protein", "value": 1.09, "unitName": "G"},
                {"nutrientName": "Energy", "value": 89, "unitName": "KCAL"},
                {"nutrientName": "Vitamin K (phylloquinone)", "unitName": "UG"},
            ],
        }
    ],
}


class TestNutritionClient(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler) -> NutritionClient:
        return NutritionClient(
            api_key="usda-key",
            url=SEARCH_URL,
            timeout=2,
            transport=httpx.MockTransport(handler),
        )

    async def test_returns_first_food_record(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=BANANA)

        record = await self._client(handler).search("banana")

        assert record is not None
        self.assertEqual(record.description, "Bananas, raw")
        self.assertEqual(record.fdc_id, 1105314)
        # Entry without a value is dropped.
        self.assertEqual([n.name for n in record.nutrients], ["Protein", "Energy"])
        self.assertEqual(record.nutrients[1].value, 89.0)

        params = seen[0].url.params
        self.assertEqual(seen[0].method, "GET")
        self.assertEqual(params["query"], "banana")
        self.assertEqual(params["api_key"], "usda-key")
        self.assertEqual(params["pageSize"], "1")

    async def test_zero_hits_is_none_not_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"totalHits": 0, "foods": []})

        self.assertIsNone(await self._client(handler).search("car"))

    async def test_missing_foods_key_is_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"totalHits": 0})

        self.assertIsNone(await self._client(handler).search("car"))

    async def test_http_error_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"code": "API_KEY_INVALID"}})

        with self.assertRaises(UpstreamError):
            await self._client(handler).search("banana")

    async def test_non_json_body_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>Service Unavailable</html>")

        with self.assertRaises(UpstreamError):
            await self._client(handler).search("banana")

    async def test_non_object_body_is_upstream_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"description": "Bananas, raw"}])

        with self.assertRaises(UpstreamError):
            await self._client(handler).search("banana")

    async def test_connection_failure_does_not_leak_api_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(UpstreamError) as ctx:
            await self._client(handler).search("banana")
        self.assertNotIn("usda-key", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
