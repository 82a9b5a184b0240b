"""
core/recommendation.py
────────────────────────────────────────────────────────────────────────
Five meal suggestions for one slot:

  • profile + today's other meals → prompt
  • Gemini LLM                     → free text with a JSON array
  • FallbackSuggestions            → fixed list when the model can't be used

All public I/O happens through `RecommendationService.recommend(...)`,
which never returns an empty list.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Literal, Protocol

from pydantic import BaseModel

from core.fallback import FallbackSuggestions
from core.meal_plan import total_nutrition
from core.models import FoodItem, Meal, PersonalInfo
from core.nutrition_calc import NutritionalCalculator
from scripts.helpers import extract_json_array, parse_int
from services.gemini import ApiKeyRequiredError, GeminiError, ServiceBusyError

_LOG = logging.getLogger(__name__)

SUGGESTION_COUNT = 5

_MEAL_DESCRIPTIONS = {
    "breakfast": "breakfast (morning meal)",
    "lunch": "lunch (midday meal)",
    "dinner": "dinner (evening meal)",
    "snacks": "snack (light meal between main meals)",
}


class ProfileRequiredError(RuntimeError):
    """No saved profile; the user has to finish setup first."""


class SuggestionClient(Protocol):
    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: str) -> str: ...


class Recommendations(BaseModel):
    meal_type: str
    source: Literal["ai", "fallback"]
    items: List[FoodItem]
    notice: str | None = None


class RecommendationService:
    def __init__(
        self,
        client: SuggestionClient,
        fallback: FallbackSuggestions | None = None,
    ) -> None:
        self._client = client
        self._fallback = fallback or FallbackSuggestions()

    async def recommend(
        self,
        profile: PersonalInfo | None,
        meal_type: str,
        current_meals: List[Meal] | None = None,
        allow_fallback: bool = True,
    ) -> Recommendations:
        """
        Raises ProfileRequiredError / ApiKeyRequiredError before any network
        call. ServiceBusyError only escapes when `allow_fallback` is False;
        every other failure degrades to the fixed list.
        """
        if profile is None:
            raise ProfileRequiredError(
                "Please complete your profile setup to get personalized AI recommendations."
            )
        if not self._client.is_configured:
            raise ApiKeyRequiredError(
                "Please set your Gemini API key in Settings to use AI recommendations."
            )

        prompt = build_prompt(profile, meal_type, current_meals or [])
        try:
            raw = await self._client.generate(prompt)
            _LOG.debug("raw Gemini reply >>>\n%s", raw)
            items = parse_suggestions(raw, meal_type)
        except ServiceBusyError as e:
            if not allow_fallback:
                raise
            _LOG.warning("Gemini busy for %s, serving fallback: %s", meal_type, e)
            return self._fallback_result(
                meal_type,
                "The AI service is currently busy. Showing standard suggestions instead.",
            )
        except (GeminiError, ValueError) as e:
            _LOG.warning("Gemini suggestions failed for %s: %s", meal_type, e)
            return self._fallback_result(
                meal_type,
                "Failed to generate AI recommendations. Using fallback options instead.",
            )

        return Recommendations(meal_type=meal_type, source="ai", items=items)

    def fallback(self, meal_type: str) -> Recommendations:
        return self._fallback_result(meal_type, None)

    def _fallback_result(self, meal_type: str, notice: str | None) -> Recommendations:
        return Recommendations(
            meal_type=meal_type,
            source="fallback",
            items=self._fallback.suggest(meal_type),
            notice=notice,
        )


# ──────────────────────────────── Helpers ────────────────────────────────

def parse_suggestions(raw: str, meal_type: str) -> List[FoodItem]:
    """JSON array in the reply → at most five FoodItems. ValueError if none."""
    rows = extract_json_array(raw)
    stamp = int(time.time() * 1000)
    items: List[FoodItem] = []
    for i, row in enumerate(rows[:SUGGESTION_COUNT]):
        if not isinstance(row, dict):
            raise ValueError(f"suggestion #{i} is not an object")
        items.append(
            FoodItem(
                id=str(row.get("id") or f"ai_meal_{stamp}_{i}"),
                name=str(row.get("name") or "Unnamed meal"),
                calories=parse_int(row.get("calories")),
                protein=parse_int(row.get("protein")),
                carbs=parse_int(row.get("carbs")),
                fat=parse_int(row.get("fat")),
                category=str(row.get("category") or meal_type),
            )
        )
    if not items:
        raise ValueError("Gemini returned no suggestions")
    return items


def build_prompt(profile: PersonalInfo, meal_type: str, current_meals: List[Meal]) -> str:
    consumed = total_nutrition(current_meals)
    target = profile.target_calories or NutritionalCalculator().target_calories(profile)
    remaining = target - consumed.calories
    desc = _MEAL_DESCRIPTIONS.get(meal_type, meal_type)
    example = _example(meal_type)

    return (
        "You are a professional nutritionist and chef. "
        f"Generate exactly {SUGGESTION_COUNT} personalized meal recommendations for {desc} "
        "based on the following user profile.\n\n"
        f"IMPORTANT: Only generate recommendations for {desc}. Do NOT include "
        "recommendations for other meal types.\n\n"
        "USER PROFILE:\n"
        f"- Name: {profile.name or 'Not provided'}\n"
        f"- Age: {profile.age} years old\n"
        f"- Gender: {profile.gender}\n"
        f"- Weight: {_num(profile.weight)} kg\n"
        f"- Height: {_num(profile.height)} cm\n"
        f"- Activity Level: {profile.activity_level}\n"
        f"- Goal: {profile.goal}\n"
        f"- Target Calories: {target} calories/day\n"
        f"- Dietary Restrictions: {', '.join(profile.dietary_restrictions) or 'None'}\n"
        f"- Allergies: {', '.join(profile.allergies) or 'None'}\n\n"
        "CURRENT NUTRITION TODAY:\n"
        f"- Calories consumed: {consumed.calories}\n"
        f"- Protein consumed: {consumed.protein}g\n"
        f"- Carbs consumed: {consumed.carbs}g\n"
        f"- Fat consumed: {consumed.fat}g\n"
        f"- Remaining calories for today: {remaining}\n\n"
        f"MEAL TYPE: {desc}\n\n"
        "REQUIREMENTS:\n"
        f"1. Generate exactly {SUGGESTION_COUNT} meal options for {desc} ONLY\n"
        "2. Respect the user's dietary restrictions and allergies\n"
        "3. Align meals with their goal and the remaining calories for today\n"
        "4. Keep meals realistic and easy to prepare\n"
        "5. Include nutritional information for each meal\n\n"
        "RESPONSE FORMAT:\n"
        f"Return a JSON array with exactly {SUGGESTION_COUNT} objects, each containing:\n"
        "{\n"
        '  "id": "unique_id",\n'
        '  "name": "Meal Name",\n'
        '  "calories": number,\n'
        '  "protein": number,\n'
        '  "carbs": number,\n'
        '  "fat": number,\n'
        f'  "category": "{meal_type}"\n'
        "}\n\n"
        f"Example:\n{example}\n\n"
        "Only return the JSON array, no additional text."
    )


def _example(meal_type: str) -> str:
    row: Dict[str, Any] = {
        "id": f"{meal_type}_1",
        "name": "Greek Yogurt with Berries and Nuts",
        "calories": 320,
        "protein": 18,
        "carbs": 25,
        "fat": 12,
        "category": meal_type,
    }
    fields = ",\n".join(
        f'    "{k}": {v}' if isinstance(v, int) else f'    "{k}": "{v}"' for k, v in row.items()
    )
    return "[\n  {\n" + fields + "\n  }\n]"


def _num(x: float) -> str:
    return str(int(x)) if float(x).is_integer() else str(x)
