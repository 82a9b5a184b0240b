"""Re-export individual schema modules for easy imports."""

from .meal import CustomMealIn, MealPlanSummary, NutrientProgress
from .rec import RecRequest, RecResponse
from .settings import ApiKeyIn, ExportOut, ImportIn, StorageStats

__all__ = [
    "CustomMealIn",
    "MealPlanSummary",
    "NutrientProgress",
    "RecRequest",
    "RecResponse",
    "ApiKeyIn",
    "ExportOut",
    "ImportIn",
    "StorageStats",
]
