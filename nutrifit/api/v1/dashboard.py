from fastapi import APIRouter, Depends

from nutrifit.core.dependencies import get_fitness_store
from nutrifit.schemas.auth import ApiResponse
from nutrifit.schemas.dashboard import DashboardData
from nutrifit.services.fitness_store import FitnessStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=ApiResponse[DashboardData])
def get_dashboard(store: FitnessStore = Depends(get_fitness_store)):
    """Everything the home screen shows, computed in one pass over the document"""
    return ApiResponse(message="Dashboard data retrieved", data=store.get_dashboard_data())
