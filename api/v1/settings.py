from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.v1.deps import get_gemini, get_meal_plan, get_storage
from api.v1.schemas import ApiKeyIn, ExportOut, ImportIn, StorageStats
from core.meal_plan import MealPlan
from services.gemini import GeminiClient
from services.storage import StorageService

_LOG = logging.getLogger(__name__)

router = APIRouter()


@router.get("/storage", response_model=StorageStats)
async def storage_stats(storage: StorageService = Depends(get_storage)) -> StorageStats:
    return StorageStats(**await storage.get_storage_stats())


# ───────────────────────── API key ──────────────────────────
@router.put("/api-key", status_code=status.HTTP_204_NO_CONTENT)
async def save_api_key(
    body: ApiKeyIn,
    storage: StorageService = Depends(get_storage),
    gemini: GeminiClient = Depends(get_gemini),
) -> Response:
    try:
        gemini.set_api_key(body.api_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await storage.save_gemini_api_key(body.api_key.strip())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/api-key", status_code=status.HTTP_204_NO_CONTENT)
async def clear_api_key(
    storage: StorageService = Depends(get_storage),
    gemini: GeminiClient = Depends(get_gemini),
) -> Response:
    await storage.clear_gemini_api_key()
    gemini.clear_api_key()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ───────────────────────── whole store ──────────────────────
@router.delete("/data", status_code=status.HTTP_204_NO_CONTENT)
async def clear_all_data(
    storage: StorageService = Depends(get_storage),
    gemini: GeminiClient = Depends(get_gemini),
    plan: MealPlan = Depends(get_meal_plan),
) -> Response:
    await plan.flush()
    await storage.clear_all_data()
    gemini.clear_api_key()
    plan.reset()
    _LOG.info("all stored data cleared")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/export", response_model=ExportOut)
async def export_data(
    storage: StorageService = Depends(get_storage),
    plan: MealPlan = Depends(get_meal_plan),
) -> ExportOut:
    await plan.flush()
    return ExportOut(**await storage.export_data())


@router.post("/import", status_code=status.HTTP_204_NO_CONTENT)
async def import_data(
    body: ImportIn,
    storage: StorageService = Depends(get_storage),
    gemini: GeminiClient = Depends(get_gemini),
    plan: MealPlan = Depends(get_meal_plan),
) -> Response:
    if body.api_key is not None:
        try:
            gemini.set_api_key(body.api_key)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    await plan.flush()
    api_key = body.api_key.strip() if body.api_key else None
    await storage.import_data(None, body.meals, api_key)
    if body.personal_info is not None:
        # imported targets may be stale or missing
        await plan.save_personal_info(body.personal_info)
    await plan.load()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
