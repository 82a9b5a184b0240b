"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Daily calorie + macro targets for a saved profile:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier, five fixed levels)
3. Goal offset (deficit / surplus)
4. Macro split from a goal-keyed ratio table
"""

from __future__ import annotations

import logging
import math

from core.models import NutritionalData, PersonalInfo

Logger = logging.getLogger(__name__)

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

# used until a profile has been saved
DEFAULT_TARGETS = NutritionalData(calories=2000, protein=50, carbs=250, fat=65)


def round_half_up(x: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(x + 0.5))


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionalCalculator:
    """Source-of-truth for kcal + macros."""

    ACTIVITY_MULTIPLIERS: dict[str, float] = {
        "sedentary": 1.2,
        "lightly_active": 1.375,
        "moderately_active": 1.55,
        "very_active": 1.725,
        "extremely_active": 1.9,
    }

    GOAL_OFFSETS: dict[str, int] = {
        "lose_weight": -500,
        "gain_weight": 300,
        "build_muscle": 200,
    }

    # (protein, carbs, fat) share of calories
    _DEFAULT_RATIO = (0.25, 0.55, 0.20)
    MACRO_RATIOS: dict[str, tuple[float, float, float]] = {
        "lose_weight": (0.30, 0.45, 0.25),
        "gain_weight": (0.30, 0.50, 0.20),
        "build_muscle": (0.30, 0.50, 0.20),
        "maintain_weight": (0.25, 0.55, 0.20),
        "improve_health": (0.25, 0.50, 0.25),
    }

    # --------------- public entrypoints -------------------------------
    def target_calories(self, p: PersonalInfo) -> int:
        kcal = self.tdee(p) + self.GOAL_OFFSETS.get(p.goal, 0)
        return round_half_up(kcal)

    def targets(self, p: PersonalInfo | None) -> NutritionalData:
        """Calorie + macro budget for `p`, or the defaults when no profile."""
        if p is None:
            return DEFAULT_TARGETS.model_copy()
        kcal = p.target_calories
        if kcal is None:
            kcal = self.target_calories(p)
        return self.macro_split(kcal, p.goal)

    def complete_profile(self, p: PersonalInfo) -> PersonalInfo:
        """Return `p` with `target_calories` (re)computed."""
        kcal = self.target_calories(p)
        Logger.debug("target calories for goal=%s → %d", p.goal, kcal)
        return p.model_copy(update={"target_calories": kcal})

    # --------------- BMR / TDEE ---------------------------------------
    def bmr(self, p: PersonalInfo) -> float:
        base = 10 * p.weight + 6.25 * p.height - 5 * p.age
        return base + (5 if p.gender == "male" else -161)

    def tdee(self, p: PersonalInfo) -> float:
        return self.bmr(p) * self.ACTIVITY_MULTIPLIERS[p.activity_level]

    # --------------- Macros -------------------------------------------
    def macro_split(self, kcal: int, goal: str) -> NutritionalData:
        prot_pc, carbs_pc, fat_pc = self.MACRO_RATIOS.get(goal, self._DEFAULT_RATIO)
        return NutritionalData(
            calories=kcal,
            protein=round_half_up(kcal * prot_pc / KCAL_PER_G_PROTEIN),
            carbs=round_half_up(kcal * carbs_pc / KCAL_PER_G_CARBS),
            fat=round_half_up(kcal * fat_pc / KCAL_PER_G_FAT),
        )
