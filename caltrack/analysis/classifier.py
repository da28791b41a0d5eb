# -*- coding: utf-8 -*-
"""Analysis: decide whether a set of image tags describes food."""

from __future__ import annotations

from typing import Optional, Sequence

from .models import Tag

FOOD_KEYWORDS = frozenset(
    {
        "food",
        "fruit",
        "vegetable",
        "meal",
        "dish",
        "cuisine",
        "ingredient",
        "dessert",
        "produce",
    }
)

# Strictly greater than.
CONFIDENCE_THRESHOLD = 30.0


def _is_food_tag(tag: Tag) -> bool:
    return tag.label.lower() in FOOD_KEYWORDS or tag.confidence > CONFIDENCE_THRESHOLD


def classify(tags: Sequence[Tag]) -> Optional[str]:
    """Return the label to look up, or ``None`` when the image is not food.

    The check only gates accept/reject. The label is always that of the first
    (highest-ranked) tag, even when a different tag passed the check.
    """
    if not any(_is_food_tag(tag) for tag in tags):
        return None
    return tags[0].label
