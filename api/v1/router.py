# api/v1/router.py
from fastapi import APIRouter

from . import meals, profile, recs, settings

api_router = APIRouter()

api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(recs.router,  prefix="/recommendations", tags=["Recommendations"])
api_router.include_router(settings.router, prefix="/settings", tags=["Settings"])
