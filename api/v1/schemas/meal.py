from __future__ import annotations
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from core.models import Meal, NutritionalData


class CustomMealIn(BaseModel):
    # raw text from the entry form; numbers are parsed leniently
    name: str = Field(..., examples=["Leftover lasagne"])
    calories: Any = ""
    protein: Any = ""
    carbs: Any = ""
    fat: Any = ""


class NutrientProgress(BaseModel):
    value: int
    target: int
    percentage: float
    over_target: bool


class MealPlanSummary(BaseModel):
    meals: List[Meal]
    total: NutritionalData
    target: NutritionalData
    progress: Dict[str, NutrientProgress]
