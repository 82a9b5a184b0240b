from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.v1.deps import get_meal_plan
from core.meal_plan import MealPlan
from core.models import PersonalInfo

router = APIRouter()


# ───────────────────────── read ─────────────────────────────
@router.get("", response_model=PersonalInfo)
async def get_profile(plan: MealPlan = Depends(get_meal_plan)) -> PersonalInfo:
    if plan.personal_info is None:
        raise HTTPException(404, "profile not set")
    return plan.personal_info


# ───────────────────────── save ─────────────────────────────
@router.put("", response_model=PersonalInfo, status_code=status.HTTP_200_OK)
async def save_profile(
    body: PersonalInfo,
    plan: MealPlan = Depends(get_meal_plan),
) -> PersonalInfo:
    # target_calories is always recomputed; a client-sent value is ignored
    return await plan.save_personal_info(body)


# ───────────────────────── clear ────────────────────────────
@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_profile(plan: MealPlan = Depends(get_meal_plan)) -> Response:
    await plan.clear_personal_info()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
