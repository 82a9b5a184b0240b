"""
Static meal suggestions used whenever Gemini cannot be reached or its
reply cannot be used. Five per slot, values fixed.
"""
from __future__ import annotations

from typing import Any, Dict, List

from core.models import FoodItem

_FALLBACK_MEALS: Dict[str, List[Dict[str, Any]]] = {
    "breakfast": [
        {"name": "Oatmeal with Berries and Almonds", "calories": 280, "protein": 8, "carbs": 45, "fat": 6},
        {"name": "Greek Yogurt with Honey and Granola", "calories": 200, "protein": 15, "carbs": 20, "fat": 8},
        {"name": "Whole Grain Toast with Avocado and Eggs", "calories": 320, "protein": 10, "carbs": 35, "fat": 18},
        {"name": "Smoothie Bowl with Banana and Berries", "calories": 250, "protein": 12, "carbs": 30, "fat": 8},
        {"name": "Scrambled Eggs with Spinach and Toast", "calories": 220, "protein": 18, "carbs": 5, "fat": 12},
    ],
    "lunch": [
        {"name": "Grilled Chicken Salad with Mixed Greens", "calories": 350, "protein": 25, "carbs": 15, "fat": 18},
        {"name": "Quinoa Bowl with Roasted Vegetables", "calories": 380, "protein": 12, "carbs": 45, "fat": 14},
        {"name": "Turkey Sandwich on Whole Grain Bread", "calories": 320, "protein": 20, "carbs": 35, "fat": 12},
        {"name": "Vegetable Soup with Grilled Cheese", "calories": 200, "protein": 8, "carbs": 25, "fat": 8},
        {"name": "Tuna Salad with Crackers", "calories": 280, "protein": 22, "carbs": 10, "fat": 16},
    ],
    "dinner": [
        {"name": "Salmon with Roasted Vegetables", "calories": 420, "protein": 28, "carbs": 20, "fat": 22},
        {"name": "Lean Beef Stir Fry with Brown Rice", "calories": 380, "protein": 25, "carbs": 25, "fat": 18},
        {"name": "Vegetarian Pasta with Marinara Sauce", "calories": 350, "protein": 12, "carbs": 45, "fat": 12},
        {"name": "Chicken Breast with Quinoa and Broccoli", "calories": 400, "protein": 30, "carbs": 35, "fat": 14},
        {"name": "Tofu Curry with Basmati Rice", "calories": 320, "protein": 15, "carbs": 30, "fat": 16},
    ],
    "snacks": [
        {"name": "Apple Slices with Almond Butter", "calories": 180, "protein": 4, "carbs": 20, "fat": 10},
        {"name": "Hummus with Carrot and Celery Sticks", "calories": 150, "protein": 6, "carbs": 18, "fat": 8},
        {"name": "Greek Yogurt with Mixed Berries", "calories": 120, "protein": 12, "carbs": 8, "fat": 4},
        {"name": "Mixed Nuts and Dried Cranberries", "calories": 200, "protein": 6, "carbs": 8, "fat": 18},
        {"name": "Banana with Peanut Butter", "calories": 220, "protein": 6, "carbs": 25, "fat": 12},
    ],
}


class FallbackSuggestions:
    """Deterministic stand-in for the live model."""

    def suggest(self, meal_type: str) -> List[FoodItem]:
        rows = _FALLBACK_MEALS.get(meal_type, _FALLBACK_MEALS["breakfast"])
        return [
            FoodItem(id=f"fallback_{meal_type}_{i}", category=meal_type, **row)
            for i, row in enumerate(rows)
        ]
