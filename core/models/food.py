from pydantic import BaseModel, ConfigDict


class FoodItem(BaseModel):
    id: str
    name: str
    calories: int = 0
    protein: int = 0   # grams
    carbs: int = 0     # grams
    fat: int = 0       # grams
    category: str = "general"

    model_config = ConfigDict(frozen=True)


class NutritionalData(BaseModel):
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
