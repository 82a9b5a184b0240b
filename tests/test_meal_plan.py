"""
MealPlan state container – slots, totals, custom entries and the
background writes to storage.
"""
import asyncio

import pytest

from core.meal_plan import MealPlan, UnknownMealSlot
from core.models import FoodItem, PersonalInfo
from services.storage import MEALS_KEY, MemoryKeyValueStore, StorageService

OATS = FoodItem(id="b1", name="Oats", calories=300, protein=10, carbs=50, fat=6, category="breakfast")
SALAD = FoodItem(id="l1", name="Salad", calories=350, protein=25, carbs=15, fat=18, category="lunch")
NUTS = FoodItem(id="s1", name="Nuts", calories=200, protein=6, carbs=8, fat=18, category="snacks")


class BrokenStore(MemoryKeyValueStore):
    async def set(self, key, value):
        raise OSError("disk full")


def _plan(store=None) -> MealPlan:
    return MealPlan(StorageService(store or MemoryKeyValueStore()))


# ── slots ────────────────────────────────────────────────────────────
def test_four_empty_slots_in_order():
    plan = _plan()
    assert [m.id for m in plan.meals] == ["breakfast", "lunch", "snacks", "dinner"]
    assert [m.time for m in plan.meals] == ["7 AM", "12 PM", "3 PM", "7 PM"]
    assert not any(m.has_food for m in plan.meals)


def test_attach_replaces_previous_food():
    plan = _plan()
    plan.update_meal("lunch", OATS)
    meal = plan.update_meal("lunch", SALAD)
    assert meal.food == SALAD and meal.has_food
    assert plan.total_nutrition().calories == 350


def test_attach_then_detach_restores_slot():
    plan = _plan()
    before = plan.get_meal("dinner")
    plan.update_meal("dinner", SALAD)
    after = plan.remove_meal("dinner")
    assert after == before
    assert after.food is None and after.has_food is False
    # detaching again changes nothing
    assert plan.remove_meal("dinner") == before


def test_unknown_slot():
    plan = _plan()
    with pytest.raises(UnknownMealSlot):
        plan.update_meal("brunch", OATS)
    with pytest.raises(KeyError):
        plan.remove_meal("supper")


# ── totals ───────────────────────────────────────────────────────────
def test_empty_plan_totals_are_zero():
    t = _plan().total_nutrition()
    assert (t.calories, t.protein, t.carbs, t.fat) == (0, 0, 0, 0)


def test_totals_sum_only_filled_meals():
    plan = _plan()
    plan.update_meal("breakfast", OATS)
    plan.update_meal("snacks", NUTS)
    t = plan.total_nutrition()
    assert (t.calories, t.protein, t.carbs, t.fat) == (500, 16, 58, 24)


def test_clear_all_meals():
    plan = _plan()
    plan.update_meal("breakfast", OATS)
    plan.update_meal("lunch", SALAD)
    plan.clear_all_meals()
    assert not any(m.has_food for m in plan.meals)
    assert plan.total_nutrition().calories == 0


# ── custom entries ──────────────────────────────────────────────────
def test_custom_meal_parses_text_leniently():
    plan = _plan()
    meal = plan.add_custom_meal("snacks", "  Trail mix ", "250", "8g", "abc", "")
    food = meal.food
    assert food.name == "Trail mix"
    assert (food.calories, food.protein, food.carbs, food.fat) == (250, 8, 0, 0)
    assert food.category == "custom"
    assert food.id.startswith("custom-")


def test_custom_meal_needs_a_name():
    plan = _plan()
    with pytest.raises(ValueError):
        plan.add_custom_meal("lunch", "   ", "100")
    assert not plan.get_meal("lunch").has_food


# ── targets / progress ──────────────────────────────────────────────
def test_progress_caps_percentage_and_flags_overshoot():
    plan = _plan()
    big = FoodItem(id="x", name="Feast", calories=2500, protein=20, carbs=100, fat=70, category="dinner")
    plan.update_meal("dinner", big)
    p = plan.progress()
    assert p["calories"] == {"value": 2500, "target": 2000, "percentage": 100.0, "over_target": True}
    assert p["protein"]["percentage"] == 40.0
    assert p["protein"]["over_target"] is False


# ── persistence ─────────────────────────────────────────────────────
def test_mutations_write_meals_in_background():
    store = MemoryKeyValueStore()

    async def run():
        plan = _plan(store)
        plan.update_meal("breakfast", OATS)
        plan.add_custom_meal("lunch", "Soup", "180")
        await plan.flush()

        reloaded = _plan(store)
        await reloaded.load()
        return reloaded

    reloaded = asyncio.run(run())
    assert MEALS_KEY in store.data
    assert reloaded.get_meal("breakfast").food == OATS
    assert reloaded.get_meal("lunch").food.calories == 180
    assert reloaded.total_nutrition().calories == 480


def test_mutation_without_event_loop_writes_inline():
    store = MemoryKeyValueStore()
    plan = _plan(store)
    plan.update_meal("dinner", SALAD)
    assert "Salad" in store.data[MEALS_KEY]


def test_storage_failure_is_only_logged(caplog):
    plan = _plan(BrokenStore())

    async def run():
        plan.update_meal("breakfast", OATS)
        await plan.flush()

    asyncio.run(run())
    assert plan.get_meal("breakfast").food == OATS
    assert "Error saving meals" in caplog.text


def test_save_personal_info_computes_target():
    store = MemoryKeyValueStore()
    info = PersonalInfo(
        age=30, gender="male", weight=80, height=180,
        activity_level="moderately_active", goal="lose_weight",
    )

    async def run():
        plan = _plan(store)
        saved = await plan.save_personal_info(info)
        other = _plan(store)
        loaded = await other.load_personal_info()
        return plan, saved, loaded, await other.has_completed_setup()

    plan, saved, loaded, done = asyncio.run(run())
    assert saved.target_calories == 2259
    assert loaded == saved
    assert done is True
    assert plan.target_nutrition().calories == 2259


def test_clear_personal_info_falls_back_to_default_targets(profile):
    async def run():
        plan = _plan()
        await plan.save_personal_info(profile)
        await plan.clear_personal_info()
        return plan, await plan.has_completed_setup()

    plan, done = asyncio.run(run())
    assert plan.personal_info is None
    assert done is False
    assert plan.target_nutrition().calories == 2000
