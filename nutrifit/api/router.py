from fastapi import APIRouter

from nutrifit.api.v1.ai import router as ai_router
from nutrifit.api.v1.auth import router as auth_router
from nutrifit.api.v1.dashboard import router as dashboard_router
from nutrifit.api.v1.goals import router as goals_router
from nutrifit.api.v1.metrics import router as metrics_router
from nutrifit.api.v1.nutrition import router as nutrition_router
from nutrifit.api.v1.progress import router as progress_router
from nutrifit.api.v1.workouts import router as workouts_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(dashboard_router)
api_router.include_router(workouts_router)
api_router.include_router(nutrition_router)
api_router.include_router(metrics_router)
api_router.include_router(goals_router)
api_router.include_router(progress_router)
api_router.include_router(ai_router)
