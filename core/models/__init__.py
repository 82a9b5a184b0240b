"""Re-export the record types for easy imports."""

from .food import FoodItem, NutritionalData
from .meal import MEAL_SLOTS, Meal, MealSlot, default_meals
from .user import ActivityLevel, Goal, PersonalInfo

__all__ = [
    "FoodItem",
    "NutritionalData",
    "Meal",
    "MealSlot",
    "MEAL_SLOTS",
    "default_meals",
    "PersonalInfo",
    "ActivityLevel",
    "Goal",
]
