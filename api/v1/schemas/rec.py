# api/v1/schemas/rec.py
from __future__ import annotations

from pydantic import BaseModel

from core.models import MealSlot
from core.recommendation import Recommendations


class RecRequest(BaseModel):
    meal_type: MealSlot
    # False → a busy service answers 503 instead of the fixed list
    use_fallback: bool = True


class RecResponse(Recommendations):
    pass
