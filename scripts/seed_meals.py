"""
Fill today's meal slots with demo food so the summary has something to show.

Usage
-----

    # default hard-coded day (breakfast, lunch, dinner)
    python -m scripts.seed_meals

    # custom day in a JSON file: {"<slot>": {FoodItem fields}, ...}
    python -m scripts.seed_meals --file path/to/day.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

from core.meal_plan import MealPlan
from core.models import FoodItem
from services.db import SqlKeyValueStore
from services.storage import KeyValueStore, StorageService

# ────────────────────────────────────────────────────────────────────
_DEFAULT_DAY: Dict[str, Dict[str, Any]] = {
    "breakfast": {
        "id": "seed_breakfast",
        "name": "Masala Oats with Veggies",
        "calories": 380, "protein": 14, "carbs": 58, "fat": 9,
        "category": "breakfast",
    },
    "lunch": {
        "id": "seed_lunch",
        "name": "Grilled Tandoori Chicken & Quinoa",
        "calories": 510, "protein": 42, "carbs": 48, "fat": 17,
        "category": "lunch",
    },
    "dinner": {
        "id": "seed_dinner",
        "name": "Palak Paneer with Brown-Rice Phulka",
        "calories": 560, "protein": 32, "carbs": 55, "fat": 22,
        "category": "dinner",
    },
}


async def _seed(store: KeyValueStore, day: Dict[str, Dict[str, Any]]) -> MealPlan:
    plan = MealPlan(StorageService(store))
    await plan.load()
    for slot, food in day.items():
        plan.update_meal(slot, FoodItem(**food))
    await plan.flush()
    return plan


def _load_json(path: Path) -> Dict[str, Dict[str, Any]]:
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError("JSON file must map meal slots to food dictionaries")
    return data


def main() -> None:
    load_dotenv()

    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with the day to seed (overrides defaults)",
    )
    args = parser.parse_args()

    day = _load_json(args.file) if args.file else _DEFAULT_DAY
    plan = asyncio.run(_seed(SqlKeyValueStore(), day))
    total = plan.total_nutrition()
    print(f"✓ seeded {len(day)} meals – {total.calories} kcal total")


if __name__ == "__main__":
    main()
