from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

ActivityLevel = Literal[
    "sedentary",
    "lightly_active",
    "moderately_active",
    "very_active",
    "extremely_active",
]
Goal = Literal[
    "lose_weight",
    "maintain_weight",
    "gain_weight",
    "build_muscle",
    "improve_health",
]


class PersonalInfo(BaseModel):
    name: str = ""
    age: int = Field(..., gt=0, lt=130)
    gender: str = Field(..., examples=["male", "female"])
    weight: float = Field(..., gt=0, description="kg")
    height: float = Field(..., gt=0, description="cm")
    activity_level: ActivityLevel
    goal: Goal
    dietary_restrictions: List[str] = []
    allergies: List[str] = []
    # filled in when the profile is saved
    target_calories: int | None = None

    @field_validator("gender")
    @classmethod
    def _lower_gender(cls, v: str) -> str:
        return v.strip().lower()
