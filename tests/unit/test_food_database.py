"""
Unit tests for the reference food database.

Covered functions:
- search_food: key and display-name matching, empty queries
- get_food_by_key: case-insensitive lookup
- calculate_nutrition: unit conversion, rounding, unknown units and foods
- get_food_suggestions_by_meal
"""

import pytest

from nutrifit.schemas.nutrition import MealType
from nutrifit.services.food_database import (
    calculate_nutrition,
    get_food_by_key,
    get_food_suggestions_by_meal,
    search_food,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# search / lookup
# ---------------------------------------------------------------------------

def test_search_food_matches_key_and_name():
    """"rice" finds both rice entries."""
    keys = {food.key for food in search_food("Rice")}
    assert keys == {"brown rice", "white rice"}


def test_search_food_matches_display_name_only():
    """"skinless" appears only in the chicken display name."""
    assert [food.key for food in search_food("skinless")] == ["chicken breast"]


def test_search_food_blank_query_is_empty():
    assert search_food("   ") == []
    assert search_food("") == []


def test_get_food_by_key_is_case_insensitive():
    food = get_food_by_key("Salmon")
    assert food.nutrition.protein == 25
    assert food.common_servings


def test_get_food_by_unknown_key():
    assert get_food_by_key("dragonfruit") is None


# ---------------------------------------------------------------------------
# calculate_nutrition
# ---------------------------------------------------------------------------

def test_calculate_nutrition_grams():
    """150 g of chicken: 247.5 kcal, 46.5 g protein."""
    result = calculate_nutrition("chicken breast", 150)

    assert result.food == "Chicken Breast (skinless)"
    assert result.nutrition.calories == 247.5
    assert result.nutrition.protein == 46.5
    assert result.nutrition.fats == 5.4


def test_calculate_nutrition_converts_units():
    """0.2 kg equals 200 g."""
    by_kg = calculate_nutrition("banana", 0.2, "kg")
    by_grams = calculate_nutrition("banana", 200, "grams")
    assert by_kg.nutrition == by_grams.nutrition
    assert by_kg.unit == "kg"


def test_calculate_nutrition_unknown_unit_counts_as_grams():
    assert calculate_nutrition("apple", 100, "handfuls").nutrition.calories == 52


def test_calculate_nutrition_unknown_food():
    assert calculate_nutrition("unobtainium", 100) is None


# ---------------------------------------------------------------------------
# suggestions
# ---------------------------------------------------------------------------

def test_suggestions_for_breakfast():
    keys = [food.key for food in get_food_suggestions_by_meal(MealType.breakfast)]
    assert keys[0] == "oats"
    assert len(keys) == 6


def test_suggestions_for_unknown_meal():
    assert get_food_suggestions_by_meal("brunch") == []
