# api/v1/recs.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status

from api.v1.deps import get_meal_plan, get_recommender
from api.v1.schemas import RecRequest, RecResponse
from core.meal_plan import MealPlan
from core.recommendation import ProfileRequiredError, RecommendationService
from services.gemini import ApiKeyRequiredError, ServiceBusyError

router = APIRouter()


@router.post("", response_model=RecResponse, status_code=status.HTTP_200_OK)
async def recommend(
    body: RecRequest,
    plan: MealPlan = Depends(get_meal_plan),
    recommender: RecommendationService = Depends(get_recommender),
) -> RecResponse:
    try:
        result = await recommender.recommend(
            plan.personal_info,
            body.meal_type,
            plan.meals,
            allow_fallback=body.use_fallback,
        )
    except ProfileRequiredError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, f"Profile setup required: {e}")
    except ApiKeyRequiredError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, f"API key required: {e}")
    except ServiceBusyError as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))

    return RecResponse(**result.model_dump())
