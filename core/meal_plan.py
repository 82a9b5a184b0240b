"""
core/meal_plan.py
────────────────────────────────────────────────────────────────────────
`MealPlan` – the single owner of today's four meal slots and the saved
profile.

Meal mutations are plain synchronous calls. Each one schedules a
background overwrite of the whole meals record; the write is never
retried and its errors are only logged (see `services.storage`).
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, List, Set

from core.models import FoodItem, Meal, NutritionalData, PersonalInfo, default_meals
from core.nutrition_calc import NutritionalCalculator
from scripts.helpers import parse_int
from services.storage import StorageService

_LOG = logging.getLogger(__name__)

_NUTRIENTS = ("calories", "protein", "carbs", "fat")


class UnknownMealSlot(KeyError):
    pass


def total_nutrition(meals: List[Meal]) -> NutritionalData:
    """Elementwise sum over the meals that carry food."""
    total = NutritionalData()
    for meal in meals:
        if meal.food is None:
            continue
        for k in _NUTRIENTS:
            setattr(total, k, getattr(total, k) + getattr(meal.food, k))
    return total


class MealPlan:
    def __init__(
        self,
        storage: StorageService,
        calculator: NutritionalCalculator | None = None,
    ) -> None:
        self._storage = storage
        self._calc = calculator or NutritionalCalculator()
        self._meals: List[Meal] = default_meals()
        self.personal_info: PersonalInfo | None = None
        self._pending: Set[asyncio.Task] = set()

    # ─────────────────────────────── read ───────────────────────── #
    @property
    def meals(self) -> List[Meal]:
        return [m.model_copy() for m in self._meals]

    def get_meal(self, meal_id: str) -> Meal:
        return self._meals[self._index(meal_id)].model_copy()

    def total_nutrition(self) -> NutritionalData:
        return total_nutrition(self._meals)

    def target_nutrition(self) -> NutritionalData:
        return self._calc.targets(self.personal_info)

    def progress(self) -> Dict[str, Dict[str, Any]]:
        """Consumed vs. target per nutrient, percentage capped at 100."""
        total, target = self.total_nutrition(), self.target_nutrition()
        out: Dict[str, Dict[str, Any]] = {}
        for k in _NUTRIENTS:
            value, goal = getattr(total, k), getattr(target, k)
            pct = min(value / goal * 100, 100.0) if goal > 0 else 0.0
            out[k] = {
                "value": value,
                "target": goal,
                "percentage": round(pct, 1),
                "over_target": value > goal,
            }
        return out

    # ─────────────────────────── mutations ──────────────────────── #
    def update_meal(self, meal_id: str, food: FoodItem) -> Meal:
        idx = self._index(meal_id)
        self._meals[idx] = self._meals[idx].model_copy(update={"food": food, "has_food": True})
        _LOG.debug("meal %s ← %s (%d kcal)", meal_id, food.name, food.calories)
        self._schedule_save()
        return self.get_meal(meal_id)

    def remove_meal(self, meal_id: str) -> Meal:
        idx = self._index(meal_id)
        self._meals[idx] = self._meals[idx].model_copy(update={"food": None, "has_food": False})
        self._schedule_save()
        return self.get_meal(meal_id)

    def add_custom_meal(
        self,
        meal_id: str,
        food_name: str,
        calories: Any = 0,
        protein: Any = 0,
        carbs: Any = 0,
        fat: Any = 0,
    ) -> Meal:
        """Attach a user-typed food; unparseable numbers count as zero."""
        name = (food_name or "").strip()
        if not name:
            raise ValueError("Please enter at least a meal name")
        self._index(meal_id)
        food = FoodItem(
            id=f"custom-{int(time.time() * 1000)}",
            name=name,
            calories=parse_int(calories),
            protein=parse_int(protein),
            carbs=parse_int(carbs),
            fat=parse_int(fat),
            category="custom",
        )
        return self.update_meal(meal_id, food)

    def clear_all_meals(self) -> None:
        self._meals = [m.model_copy(update={"food": None, "has_food": False}) for m in self._meals]
        self._schedule_save()

    # ─────────────────────────── profile ────────────────────────── #
    async def save_personal_info(self, info: PersonalInfo) -> PersonalInfo:
        completed = self._calc.complete_profile(info)
        await self._storage.save_personal_info(completed)
        self.personal_info = completed
        return completed

    async def load_personal_info(self) -> PersonalInfo | None:
        info = await self._storage.get_personal_info()
        if info is not None:
            self.personal_info = info
        return info

    async def clear_personal_info(self) -> None:
        await self._storage.clear_personal_info()
        self.personal_info = None

    async def has_completed_setup(self) -> bool:
        return await self._storage.has_completed_setup()

    # ─────────────────────────── storage ────────────────────────── #
    async def load(self) -> None:
        """Restore profile + meals at start-up; missing records keep defaults."""
        await self.load_personal_info()
        await self.load_meals()

    async def load_meals(self) -> None:
        saved = await self._storage.get_meals()
        if saved:
            self._meals = _merge_slots(saved)
            _LOG.debug("restored %d stored meal slots", len(saved))

    async def save_meals(self) -> None:
        await self._storage.save_meals(self.meals)

    async def flush(self) -> None:
        """Wait for every background write scheduled so far."""
        while True:
            pending = [t for t in self._pending if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    def reset(self) -> None:
        """Back to empty slots and no profile, without touching storage."""
        self._meals = default_meals()
        self.personal_info = None

    # ─────────────────────────── helpers ────────────────────────── #
    def _index(self, meal_id: str) -> int:
        for i, meal in enumerate(self._meals):
            if meal.id == meal_id:
                return i
        raise UnknownMealSlot(meal_id)

    def _schedule_save(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no event loop (scripts, sync callers): write inline
            asyncio.run(self.save_meals())
            return
        task = loop.create_task(self.save_meals())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


def _merge_slots(saved: List[Meal]) -> List[Meal]:
    """Keep the four fixed slots in order, taking stored state where present."""
    by_id = {m.id: m for m in saved}
    return [by_id.get(m.id, m) for m in default_meals()]
