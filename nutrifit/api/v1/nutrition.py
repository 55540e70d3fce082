import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import ValidationError

from nutrifit.core.dependencies import get_current_user, get_fitness_store
from nutrifit.schemas.auth import ApiResponse
from nutrifit.schemas.food import CalculatedNutrition, FoodCalculateRequest, FoodInfo
from nutrifit.schemas.nutrition import MealType, NutritionEntry
from nutrifit.services import food_database
from nutrifit.services.fitness_store import FitnessStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


def _bad_entry(exc: Exception) -> HTTPException:
    logger.info(f"Rejected nutrition entry: {exc}")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid nutrition entry")


# ==========================
# FOOD DATABASE
# ==========================

@router.get("/foods/search", response_model=ApiResponse[List[FoodInfo]], dependencies=[Depends(get_current_user)])
def search_foods(q: str = Query("", max_length=100)):
    return ApiResponse(message="Foods retrieved", data=food_database.search_food(q))


@router.post("/foods/calculate", response_model=ApiResponse[CalculatedNutrition],
             dependencies=[Depends(get_current_user)])
def calculate_food(request: FoodCalculateRequest):
    """Nutrition for a quantity of a catalogued food"""
    result = food_database.calculate_nutrition(request.key, request.quantity, request.unit)
    if result is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food not found")
    return ApiResponse(message="Nutrition calculated", data=result)


@router.get("/foods/suggestions/{meal_type}", response_model=ApiResponse[List[FoodInfo]],
            dependencies=[Depends(get_current_user)])
def food_suggestions(meal_type: MealType):
    return ApiResponse(message="Suggestions retrieved", data=food_database.get_food_suggestions_by_meal(meal_type))


# ==========================
# ENTRIES
# ==========================

@router.get("/today", response_model=ApiResponse[NutritionEntry])
def todays_nutrition(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Today's nutrition retrieved", data=store.get_todays_nutrition())


@router.get("", response_model=ApiResponse[List[NutritionEntry]])
def list_entries(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Nutrition entries retrieved", data=store.get_nutrition())


@router.post("", response_model=ApiResponse[NutritionEntry], status_code=status.HTTP_201_CREATED)
def add_entry(
        payload: Dict[str, Any] = Body(...),
        store: FitnessStore = Depends(get_fitness_store),
):
    """Accepts the canonical day shape as well as single-meal and food item shapes"""
    try:
        entry = store.add_nutrition_entry(payload)
    except (ValidationError, ValueError, TypeError) as exc:
        raise _bad_entry(exc)
    return ApiResponse(message="Nutrition entry added successfully", data=entry)


@router.put("/{entry_id}", response_model=ApiResponse[NutritionEntry])
def update_entry(
        entry_id: str,
        payload: Dict[str, Any] = Body(...),
        store: FitnessStore = Depends(get_fitness_store),
):
    try:
        entry = store.update_nutrition_entry(entry_id, payload)
    except (ValidationError, ValueError, TypeError) as exc:
        raise _bad_entry(exc)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Nutrition entry not found")
    return ApiResponse(message="Nutrition entry updated successfully", data=entry)
