import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from nutrifit.core.dependencies import get_fitness_store
from nutrifit.schemas.auth import ApiResponse
from nutrifit.schemas.workout import (
    Workout,
    WorkoutCreate,
    WorkoutLogged,
    WorkoutStats,
    WorkoutStreak,
    WorkoutUpdate,
)
from nutrifit.services.fitness_store import FitnessStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")


# ==========================
# SUMMARIES
# ==========================

@router.get("/stats", response_model=ApiResponse[WorkoutStats])
def workout_stats(
        days: int = Query(7, ge=1, le=365),
        store: FitnessStore = Depends(get_fitness_store),
):
    """Totals and averages over the trailing window of days"""
    return ApiResponse(message="Workout stats retrieved", data=store.get_workout_stats(days))


@router.get("/streak", response_model=ApiResponse[WorkoutStreak])
def workout_streak(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Workout streak retrieved", data=store.get_workout_streak())


# ==========================
# CRUD
# ==========================

@router.get("", response_model=ApiResponse[List[Workout]])
def list_workouts(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Workouts retrieved", data=store.get_workouts())


@router.post("", response_model=ApiResponse[WorkoutLogged], status_code=status.HTTP_201_CREATED)
def log_workout(workout_in: WorkoutCreate, store: FitnessStore = Depends(get_fitness_store)):
    """Log a workout and unlock any achievements it completes"""
    workout = store.add_workout(workout_in)
    unlocked = store.check_and_unlock_achievements()
    return ApiResponse(
        message="Workout logged successfully",
        data=WorkoutLogged(workout=workout, unlocked_achievements=unlocked),
    )


@router.get("/{workout_id}", response_model=ApiResponse[Workout])
def get_workout(workout_id: str, store: FitnessStore = Depends(get_fitness_store)):
    for workout in store.get_workouts():
        if workout.id == workout_id:
            return ApiResponse(message="Workout retrieved", data=workout)
    raise _not_found()


@router.put("/{workout_id}", response_model=ApiResponse[Workout])
def update_workout(
        workout_id: str,
        workout_in: WorkoutUpdate,
        store: FitnessStore = Depends(get_fitness_store),
):
    try:
        workout = store.update_workout(workout_id, workout_in)
    except ValidationError as exc:
        logger.info(f"Rejected workout update: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid workout")
    if workout is None:
        raise _not_found()
    return ApiResponse(message="Workout updated successfully", data=workout)


@router.delete("/{workout_id}", response_model=ApiResponse[None])
def delete_workout(workout_id: str, store: FitnessStore = Depends(get_fitness_store)):
    if not store.delete_workout(workout_id):
        raise _not_found()
    return ApiResponse(message="Workout deleted successfully")
