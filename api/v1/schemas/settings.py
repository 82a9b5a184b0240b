from __future__ import annotations
from typing import List

from pydantic import BaseModel, Field

from core.models import Meal, PersonalInfo


class ApiKeyIn(BaseModel):
    api_key: str = Field(..., min_length=1)


class StorageStats(BaseModel):
    has_personal_info: bool
    has_meals: bool
    has_api_key: bool
    is_first_time: bool


class ExportOut(BaseModel):
    personal_info: PersonalInfo | None = None
    meals: List[Meal] | None = None
    has_api_key: bool = False


class ImportIn(BaseModel):
    personal_info: PersonalInfo | None = None
    meals: List[Meal] | None = None
    api_key: str | None = None
