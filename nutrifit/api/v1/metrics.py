from typing import List

from fastapi import APIRouter, Depends, status

from nutrifit.core.dependencies import get_fitness_store
from nutrifit.schemas.auth import ApiResponse
from nutrifit.schemas.metrics import CurrentHealthMetrics, HealthMetric, HealthMetricCreate
from nutrifit.services.fitness_store import FitnessStore

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("", response_model=ApiResponse[List[HealthMetric]])
def list_metrics(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Health metrics retrieved", data=store.get_health_metrics())


@router.post("", response_model=ApiResponse[HealthMetric], status_code=status.HTTP_201_CREATED)
def add_metric(metric_in: HealthMetricCreate, store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Health metric recorded", data=store.add_health_metric(metric_in))


@router.get("/today", response_model=ApiResponse[HealthMetric])
def todays_metrics(store: FitnessStore = Depends(get_fitness_store)):
    """Today's snapshot, or an empty one for today"""
    return ApiResponse(message="Today's metrics retrieved", data=store.get_todays_metrics())


@router.get("/current", response_model=ApiResponse[CurrentHealthMetrics])
def current_metrics(store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Current metrics retrieved", data=store.get_current_health_metrics())
