# -*- coding: utf-8 -*-
"""Analysis: pull single nutrient values out of a FoodData Central record."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Sequence, Tuple

from .models import NutrientEntry

_ONE_DP = Decimal("0.1")

# response field -> (FDC nutrientName fragment, display unit)
NUTRIENT_TARGETS: Dict[str, Tuple[str, str]] = {
    "calories": ("Energy", "kcal"),
    "protein": ("Protein", "g"),
    "carbs": ("Carbohydrate, by difference", "g"),
    "fat": ("Total lipid (fat)", "g"),
    "sugar": ("Sugars, total including NLEA", "g"),
    "sodium": ("Sodium, Na", "mg"),
}


def extract_nutrient(nutrients: Sequence[NutrientEntry], name: str, unit: str) -> str:
    """Format the first entry whose name contains ``name`` (case-insensitive).

    Returns ``"<value, 1 dp> <unit>"`` or ``"0 <unit>"`` when nothing matches.
    """
    needle = name.lower()
    for entry in nutrients:
        if needle in entry.name.lower():
            return f"{_one_decimal(entry.value)} {unit}"
    return f"0 {unit}"


def _one_decimal(value: float) -> str:
    # Exact binary value, ties away from zero: 0.25 -> "0.3", 0.35 -> "0.3".
    return str(Decimal(value).quantize(_ONE_DP, rounding=ROUND_HALF_UP))


def extract_summary(nutrients: Sequence[NutrientEntry]) -> Dict[str, str]:
    return {
        field: extract_nutrient(nutrients, name, unit)
        for field, (name, unit) in NUTRIENT_TARGETS.items()
    }
