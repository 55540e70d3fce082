import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class MealType(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class Quantity(BaseModel):
    value: float = Field(100, ge=0)
    unit: str = "grams"


class NutritionFacts(BaseModel):
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fats: float = Field(0, ge=0)
    fiber: float = Field(0, ge=0)
    sugar: float = Field(0, ge=0)
    sodium: float = Field(0, ge=0)


class FoodItem(BaseModel):
    name: str
    quantity: Quantity = Field(default_factory=Quantity)
    nutrition: NutritionFacts = Field(default_factory=NutritionFacts)


class Meal(BaseModel):
    type: MealType
    foods: List[FoodItem] = Field(default_factory=list)

    def total(self, nutrient: str) -> float:
        return sum(getattr(food.nutrition, nutrient) for food in self.foods)


class NutritionEntry(BaseModel):
    """One day of eating, always held as one record per meal."""

    id: Optional[str] = None
    date: dt.date
    meals: List[Meal] = Field(default_factory=list)
    water_intake: float = Field(0, ge=0)  # glasses

    def _sum(self, nutrient: str) -> float:
        return round(sum(meal.total(nutrient) for meal in self.meals), 1)

    @computed_field
    @property
    def total_calories(self) -> float:
        return self._sum("calories")

    @computed_field
    @property
    def total_protein(self) -> float:
        return self._sum("protein")

    @computed_field
    @property
    def total_carbs(self) -> float:
        return self._sum("carbs")

    @computed_field
    @property
    def total_fats(self) -> float:
        return self._sum("fats")

    def meals_of_type(self, meal_type: MealType) -> List[Meal]:
        return [meal for meal in self.meals if meal.type == meal_type]
