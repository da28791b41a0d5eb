# -*- coding: utf-8 -*-
"""Analysis: USDA FoodData Central search client."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

import httpx

from .errors import UpstreamError
from .models import FoodRecord, NutrientEntry

logger = logging.getLogger(__name__)

SERVICE = "usda"


class NutritionSource(Protocol):
    async def search(self, query: str) -> Optional[FoodRecord]:
        ...


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _parse_nutrients(raw_nutrients: object) -> List[NutrientEntry]:
    if not isinstance(raw_nutrients, list):
        return []
    out: List[NutrientEntry] = []
    for raw in raw_nutrients:
        if not isinstance(raw, dict):
            continue
        name = raw.get("nutrientName")
        value = _coerce_float(raw.get("value"))
        if not isinstance(name, str) or value is None:
            logger.debug("skipping nutrient without name/value: %r", raw)
            continue
        unit = raw.get("unitName")
        out.append(NutrientEntry(name=name, value=value, unit=unit if isinstance(unit, str) else ""))
    return out


def _parse_first_food(data: object) -> Optional[FoodRecord]:
    """First hit of a ``/foods/search`` body, or ``None`` for zero hits."""
    if not isinstance(data, dict):
        raise UpstreamError("response is not a JSON object", service=SERVICE)
    foods = data.get("foods")
    if not foods or not isinstance(foods, list):
        return None
    food = foods[0]
    if not isinstance(food, dict):
        raise UpstreamError(f"malformed food entry: {food!r}", service=SERVICE)

    description = food.get("description")
    fdc_id = food.get("fdcId")
    return FoodRecord(
        description=description if isinstance(description, str) else "",
        nutrients=_parse_nutrients(food.get("foodNutrients")),
        fdc_id=fdc_id if isinstance(fdc_id, int) and not isinstance(fdc_id, bool) else None,
    )


class NutritionClient:
    def __init__(
        self,
        *,
        api_key: str,
        url: str = "https://api.nal.usda.gov/fdc/v1/foods/search",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def search(self, query: str) -> Optional[FoodRecord]:
        params = {"query": query, "api_key": self.api_key, "pageSize": 1}
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.get(self.url, params=params)
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                snippet = (exc.response.text or "").replace("\n", " ").strip()[:200]
                raise UpstreamError(
                    f"HTTP {exc.response.status_code}: {snippet}", service=SERVICE
                ) from exc
            except httpx.RequestError as exc:
                # Avoid echoing the request URL, which carries the api_key.
                raise UpstreamError(f"request failed: {type(exc).__name__}", service=SERVICE) from exc

        try:
            data: Any = resp.json()
        except ValueError as exc:
            raise UpstreamError("non-JSON response", service=SERVICE) from exc

        record = _parse_first_food(data)
        if record is None:
            logger.info("USDA has no match for %r", query)
        return record
