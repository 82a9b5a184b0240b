# api/v1/deps.py
from __future__ import annotations

from fastapi import HTTPException, Request

from core.meal_plan import MealPlan
from core.models import MEAL_SLOTS
from core.recommendation import RecommendationService
from services.gemini import GeminiClient
from services.storage import StorageService


# the lifespan in main.py puts one of each on app.state
def get_meal_plan(request: Request) -> MealPlan:
    return request.app.state.meal_plan


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage


def get_recommender(request: Request) -> RecommendationService:
    return request.app.state.recommender


def get_gemini(request: Request) -> GeminiClient:
    return request.app.state.gemini


def check_slot(slot: str) -> str:
    if slot not in MEAL_SLOTS:
        raise HTTPException(status_code=404, detail=f"Unknown meal slot: {slot}")
    return slot
