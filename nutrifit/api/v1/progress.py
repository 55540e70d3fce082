from typing import List

from fastapi import APIRouter, Depends, Query

from nutrifit.core.dependencies import get_fitness_store
from nutrifit.schemas.achievement import Achievement, Streaks
from nutrifit.schemas.auth import ApiResponse
from nutrifit.schemas.progress import ComprehensiveProgress, ProgressPoint, TimeRange
from nutrifit.services.fitness_store import FitnessStore

router = APIRouter(prefix="/progress", tags=["progress"])


# ==========================
# CHARTS
# ==========================

@router.get("", response_model=ApiResponse[List[ProgressPoint]])
def progress_series(
        metric: str = Query("weight"),
        days: int = Query(30, ge=1, le=365),
        store: FitnessStore = Depends(get_fitness_store),
):
    """Ascending series for weight, steps or workouts; any other metric is empty"""
    return ApiResponse(message="Progress data retrieved", data=store.get_progress_data(metric, days))


@router.get("/comprehensive", response_model=ApiResponse[ComprehensiveProgress])
def comprehensive_progress(
        time_range: TimeRange = Query(TimeRange.WEEKLY),
        store: FitnessStore = Depends(get_fitness_store),
):
    return ApiResponse(
        message="Progress data retrieved",
        data=store.get_comprehensive_progress_data(time_range),
    )


@router.get("/streaks", response_model=ApiResponse[Streaks])
def streaks(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Streaks retrieved", data=store.get_streaks())


# ==========================
# ACHIEVEMENTS
# ==========================

@router.get("/achievements", response_model=ApiResponse[List[Achievement]])
def list_achievements(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Achievements retrieved", data=store.get_achievements())


@router.post("/achievements/check", response_model=ApiResponse[List[Achievement]])
def check_achievements(store: FitnessStore = Depends(get_fitness_store)):
    unlocked = store.check_and_unlock_achievements()
    message = f"{len(unlocked)} achievement(s) unlocked" if unlocked else "No new achievements"
    return ApiResponse(message=message, data=unlocked)
