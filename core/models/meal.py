from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, model_validator

from .food import FoodItem

# only these four slots exist, in display order
MealSlot = Literal["breakfast", "lunch", "snacks", "dinner"]
MEAL_SLOTS: tuple[str, ...] = ("breakfast", "lunch", "snacks", "dinner")


class Meal(BaseModel):
    id: MealSlot
    title: str
    time: str
    food: FoodItem | None = None
    has_food: bool = False

    @model_validator(mode="after")
    def _sync_flag(self) -> "Meal":
        # stored blobs may disagree; the attached food is authoritative
        self.has_food = self.food is not None
        return self


def default_meals() -> list[Meal]:
    return [
        Meal(id="breakfast", title="Breakfast", time="7 AM"),
        Meal(id="lunch", title="Lunch", time="12 PM"),
        Meal(id="snacks", title="Snacks", time="3 PM"),
        Meal(id="dinner", title="Dinner", time="7 PM"),
    ]
