# api/v1/meals.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.v1.deps import check_slot, get_meal_plan
from api.v1.schemas import CustomMealIn, MealPlanSummary
from core.meal_plan import MealPlan
from core.models import FoodItem, Meal

router = APIRouter()


@router.get("", response_model=list[Meal], summary="Today's four meal slots")
async def list_meals(plan: MealPlan = Depends(get_meal_plan)) -> list[Meal]:
    return plan.meals


@router.get(
    "/summary",
    response_model=MealPlanSummary,
    summary="Totals, targets and progress for today",
)
async def summary(plan: MealPlan = Depends(get_meal_plan)) -> MealPlanSummary:
    return MealPlanSummary(
        meals=plan.meals,
        total=plan.total_nutrition(),
        target=plan.target_nutrition(),
        progress=plan.progress(),
    )


@router.put(
    "/{slot}",
    response_model=Meal,
    summary="Attach a food (e.g. a chosen recommendation) to a slot",
)
async def attach_food(
    body: FoodItem,
    slot: str = Depends(check_slot),
    plan: MealPlan = Depends(get_meal_plan),
) -> Meal:
    return plan.update_meal(slot, body)


@router.post(
    "/{slot}/custom",
    response_model=Meal,
    status_code=status.HTTP_201_CREATED,
    summary="Attach a user-typed food",
)
async def add_custom(
    body: CustomMealIn,
    slot: str = Depends(check_slot),
    plan: MealPlan = Depends(get_meal_plan),
) -> Meal:
    try:
        return plan.add_custom_meal(
            slot, body.name, body.calories, body.protein, body.carbs, body.fat
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{slot}", response_model=Meal, summary="Remove the food from a slot")
async def detach_food(
    slot: str = Depends(check_slot),
    plan: MealPlan = Depends(get_meal_plan),
) -> Meal:
    return plan.remove_meal(slot)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="Clear every slot")
async def clear_meals(plan: MealPlan = Depends(get_meal_plan)) -> Response:
    plan.clear_all_meals()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
