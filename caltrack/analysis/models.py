# -*- coding: utf-8 -*-
"""Analysis: Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    label: str
    confidence: float = Field(..., ge=0, le=100)


class NutrientEntry(BaseModel):
    name: str
    value: float
    unit: str = ""


class FoodRecord(BaseModel):
    description: str
    nutrients: List[NutrientEntry] = Field(default_factory=list)
    fdc_id: Optional[int] = None


class AnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    name: str
    calories: str = Field(..., description="e.g. '89.0 kcal'")
    protein: str
    carbs: str
    fat: str
    sugar: str
    sodium: str
    image_src: str = Field(..., alias="imageSrc", description="data: URL of the uploaded image")


class AnalysisFailure(BaseModel):
    success: Literal[False] = False
    message: str
