# tests/test_nutrition_calc.py
from __future__ import annotations

import math

from core.models import PersonalInfo
from core.nutrition_calc import DEFAULT_TARGETS, NutritionalCalculator, round_half_up

calc = NutritionalCalculator()

MALE_80KG = PersonalInfo(
    age=30,
    gender="male",
    weight=80,
    height=180,
    activity_level="moderately_active",
    goal="lose_weight",
)

FEMALE_60KG = PersonalInfo(
    age=25,
    gender="Female",
    weight=60,
    height=165,
    activity_level="sedentary",
    goal="maintain_weight",
)


# ── BMR / TDEE ───────────────────────────────────────────────────────
def test_bmr_mifflin_male():
    expected = 10 * 80 + 6.25 * 180 - 5 * 30 + 5   # 1780.0
    assert math.isclose(calc.bmr(MALE_80KG), expected, rel_tol=1e-9)


def test_bmr_mifflin_female():
    expected = 10 * 60 + 6.25 * 165 - 5 * 25 - 161   # 1345.25
    assert math.isclose(calc.bmr(FEMALE_60KG), expected, rel_tol=1e-9)


def test_tdee_activity_multiplier():
    assert math.isclose(calc.tdee(MALE_80KG), 1780 * 1.55, rel_tol=1e-9)


# ── target calories ─────────────────────────────────────────────────
def test_target_calories_weight_loss_example():
    # 2759.0 − 500 → 2259
    assert calc.target_calories(MALE_80KG) == 2259


def test_goal_offsets():
    tdee = calc.tdee(MALE_80KG)
    gain = MALE_80KG.model_copy(update={"goal": "gain_weight"})
    muscle = MALE_80KG.model_copy(update={"goal": "build_muscle"})
    health = MALE_80KG.model_copy(update={"goal": "improve_health"})
    assert calc.target_calories(gain) == round_half_up(tdee + 300)
    assert calc.target_calories(muscle) == round_half_up(tdee + 200)
    assert calc.target_calories(health) == round_half_up(tdee)


def test_deterministic():
    assert calc.targets(calc.complete_profile(MALE_80KG)) == calc.targets(
        calc.complete_profile(MALE_80KG.model_copy())
    )


# ── macro split ─────────────────────────────────────────────────────
def test_macro_split_lose_weight():
    t = calc.targets(calc.complete_profile(MALE_80KG))
    assert t.calories == 2259
    assert t.protein == 169     # 2259·0.30/4 = 169.425
    assert t.carbs == 254       # 2259·0.45/4 = 254.14
    assert t.fat == 63          # 2259·0.25/9 = 62.75


def test_macro_split_maintain_female():
    t = calc.targets(FEMALE_60KG)
    assert t.calories == 1614
    assert (t.protein, t.carbs, t.fat) == (101, 222, 36)


def test_targets_without_profile_are_defaults():
    t = calc.targets(None)
    assert t == DEFAULT_TARGETS
    assert (t.calories, t.protein, t.carbs, t.fat) == (2000, 50, 250, 65)


def test_complete_profile_overwrites_stale_target():
    stale = MALE_80KG.model_copy(update={"target_calories": 9999})
    assert calc.complete_profile(stale).target_calories == 2259


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(164.475) == 164
    assert round_half_up(0.5) == 1
