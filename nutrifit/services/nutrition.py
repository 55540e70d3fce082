"""
Normalization of stored nutrition entries.

Nutrition data has been written in three shapes over time:

* DAILY_MEAL_LIST - one document per day, ``meals`` is a list of
  ``{type, foods}`` records (the canonical shape).
* DAILY_MEAL_MAP  - one document per day, ``meals`` maps
  ``breakfast/lunch/dinner/snacks`` to lists of food items and water is
  stored as ``{"intake": ...}``.
* SINGLE_MEAL     - one document per meal with a flat ``food_items`` list
  and a ``meal_type``.

Everything that reads or writes nutrition goes through
``normalize_nutrition_entry`` so that aggregation code only ever sees
``NutritionEntry``.
"""
import datetime as dt
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from nutrifit.schemas.nutrition import FoodItem, Meal, MealType, NutritionEntry

NUTRIENT_KEYS = ("calories", "protein", "carbs", "fats", "fiber", "sugar", "sodium")

MEAL_TYPE_ALIASES = {
    "breakfast": MealType.breakfast,
    "lunch": MealType.lunch,
    "dinner": MealType.dinner,
    "snack": MealType.snack,
    "snacks": MealType.snack,
}


class NutritionShape(str, Enum):
    DAILY_MEAL_LIST = "daily_meal_list"
    DAILY_MEAL_MAP = "daily_meal_map"
    SINGLE_MEAL = "single_meal"


def _first(raw: Mapping[str, Any], *keys: str, default=None):
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return default


def detect_nutrition_shape(raw: Mapping[str, Any]) -> NutritionShape:
    meals = raw.get("meals")
    if isinstance(meals, Mapping):
        return NutritionShape.DAILY_MEAL_MAP
    if isinstance(meals, list):
        return NutritionShape.DAILY_MEAL_LIST
    if meals is not None:
        raise ValueError(f"Unsupported meals value of type {type(meals).__name__}")
    if _first(raw, "food_items", "foodItems") is not None:
        return NutritionShape.SINGLE_MEAL
    return NutritionShape.DAILY_MEAL_LIST


def parse_meal_type(value: Any) -> MealType:
    key = getattr(value, "value", value)
    meal_type = MEAL_TYPE_ALIASES.get(str(key).lower()) if key is not None else None
    if meal_type is None:
        raise ValueError(f"Unknown meal type: {value!r}")
    return meal_type


def normalize_food_item(raw: Any) -> FoodItem:
    if isinstance(raw, FoodItem):
        return raw
    raw = dict(raw)

    nutrition = raw.get("nutrition")
    if not isinstance(nutrition, Mapping):
        nutrition = {key: raw[key] for key in NUTRIENT_KEYS + ("fat",) if raw.get(key) is not None}
    nutrition = dict(nutrition)
    if "fats" not in nutrition and nutrition.get("fat") is not None:
        nutrition["fats"] = nutrition.pop("fat")

    quantity = raw.get("quantity")
    if isinstance(quantity, (int, float)):
        quantity = {"value": quantity, "unit": raw.get("unit", "grams")}
    elif quantity is None:
        quantity = {"unit": raw["unit"]} if raw.get("unit") else {}

    return FoodItem.model_validate({
        "name": raw.get("name"),
        "quantity": quantity,
        "nutrition": nutrition,
    })


def _meal(meal_type: Any, foods: Optional[List[Any]]) -> Meal:
    return Meal(
        type=parse_meal_type(meal_type),
        foods=[normalize_food_item(food) for food in foods or []],
    )


def _entry_date(raw: Mapping[str, Any], default_date: Optional[dt.date]) -> dt.date:
    value = raw.get("date")
    if value is None:
        if default_date is None:
            raise ValueError("Nutrition entry has no date")
        return default_date
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value).split("T")[0])


def _water_intake(raw: Mapping[str, Any]) -> float:
    water = _first(raw, "water_intake", "waterIntake", "water", default=0)
    if isinstance(water, Mapping):
        return water.get("intake") or 0
    return water


def normalize_nutrition_entry(
        raw: Any,
        default_date: Optional[dt.date] = None,
) -> NutritionEntry:
    """Map any known nutrition shape onto the canonical NutritionEntry."""
    if isinstance(raw, NutritionEntry):
        return raw
    raw = dict(raw)

    shape = detect_nutrition_shape(raw)
    if shape == NutritionShape.DAILY_MEAL_MAP:
        meals = [
            _meal(meal_type, foods)
            for meal_type, foods in raw["meals"].items()
            if foods
        ]
    elif shape == NutritionShape.SINGLE_MEAL:
        meal_type = _first(raw, "meal_type", "mealType", "type", default="snack")
        meals = [_meal(meal_type, _first(raw, "food_items", "foodItems"))]
    else:
        meals = []
        for meal in raw.get("meals") or []:
            if isinstance(meal, Meal):
                meals.append(meal)
                continue
            meals.append(_meal(meal.get("type"), _first(meal, "foods", "food_items", "foodItems")))

    return NutritionEntry(
        id=raw.get("id"),
        date=_entry_date(raw, default_date),
        meals=meals,
        water_intake=_water_intake(raw),
    )


def entry_to_dict(entry: NutritionEntry) -> Dict[str, Any]:
    """Canonical, JSON-ready form without the derived totals."""
    return entry.model_dump(mode="json", exclude={
        "total_calories", "total_protein", "total_carbs", "total_fats",
    })
