from typing import List, Optional

from nutrifit.core.food_catalog import FOOD_CATALOG, MEAL_SUGGESTIONS, UNIT_TO_GRAMS
from nutrifit.schemas.food import CalculatedNutrition, FoodInfo
from nutrifit.schemas.nutrition import NutritionFacts


def _food_info(key: str) -> FoodInfo:
    return FoodInfo(key=key, **FOOD_CATALOG[key])


def search_food(query: str) -> List[FoodInfo]:
    """Foods whose key or display name contains the query, case-insensitive."""
    query = (query or "").lower().strip()
    if not query:
        return []
    return [
        _food_info(key)
        for key, food in FOOD_CATALOG.items()
        if query in key or query in food["name"].lower()
    ]


def get_food_by_key(key: str) -> Optional[FoodInfo]:
    key = key.lower()
    if key not in FOOD_CATALOG:
        return None
    return _food_info(key)


def calculate_nutrition(key: str, quantity: float, unit: str = "grams") -> Optional[CalculatedNutrition]:
    food = get_food_by_key(key)
    if food is None:
        return None

    # unknown units are taken as grams
    grams = quantity * UNIT_TO_GRAMS.get(unit.lower(), 1)
    ratio = grams / 100
    nutrition = {
        nutrient: round(value * ratio, 1)
        for nutrient, value in food.nutrition.model_dump().items()
    }
    return CalculatedNutrition(
        food=food.name,
        quantity=quantity,
        unit=unit,
        nutrition=NutritionFacts(**nutrition),
    )


def get_food_suggestions_by_meal(meal_type: str) -> List[FoodInfo]:
    meal_type = getattr(meal_type, "value", meal_type)
    return [_food_info(key) for key in MEAL_SUGGESTIONS.get(meal_type, ())]
