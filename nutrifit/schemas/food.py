from typing import List

from pydantic import BaseModel, Field

from nutrifit.schemas.nutrition import NutritionFacts


class CommonServing(BaseModel):
    name: str
    multiplier: float


class FoodInfo(BaseModel):
    key: str
    name: str
    category: str
    nutrition: NutritionFacts
    common_servings: List[CommonServing] = Field(default_factory=list)


class FoodCalculateRequest(BaseModel):
    key: str
    quantity: float = Field(..., gt=0)
    unit: str = "grams"


class CalculatedNutrition(BaseModel):
    food: str
    quantity: float
    unit: str
    nutrition: NutritionFacts
