from typing import List, Optional

from fastapi import APIRouter, Depends

from nutrifit.core.dependencies import get_current_user
from nutrifit.models.user import User
from nutrifit.schemas.ai import (
    AskRequest,
    ChatMessage,
    CoachAnswer,
    GeneratedNutritionPlan,
    GeneratedWorkoutPlan,
    PlanRequest,
)
from nutrifit.schemas.auth import ApiResponse
from nutrifit.services.ai_coach import ai_coach

router = APIRouter(prefix="/ai", tags=["ai"])


def _goals(request: Optional[PlanRequest], user: User):
    if request is not None and request.fitness_goal:
        return request.fitness_goal
    return user.fitness_goals


@router.post("/ask", response_model=ApiResponse[CoachAnswer])
def ask_coach(request: AskRequest, current_user: User = Depends(get_current_user)):
    return ApiResponse(message="Answer generated", data=ai_coach.ask(request.question, current_user.id))


@router.get("/history", response_model=ApiResponse[List[ChatMessage]])
def chat_history(current_user: User = Depends(get_current_user)):
    return ApiResponse(message="Chat history retrieved", data=ai_coach.history(current_user.id))


@router.delete("/history", response_model=ApiResponse[None])
def clear_chat_history(current_user: User = Depends(get_current_user)):
    ai_coach.clear_history(current_user.id)
    return ApiResponse(message="Chat history cleared")


@router.post("/workout-plan", response_model=ApiResponse[GeneratedWorkoutPlan])
def workout_plan(request: Optional[PlanRequest] = None, current_user: User = Depends(get_current_user)):
    """Plan for the requested goal, falling back to the profile's goals"""
    plan = ai_coach.generate_workout_plan(_goals(request, current_user))
    return ApiResponse(message="Workout plan generated", data=plan)


@router.post("/nutrition-plan", response_model=ApiResponse[GeneratedNutritionPlan])
def nutrition_plan(request: Optional[PlanRequest] = None, current_user: User = Depends(get_current_user)):
    plan = ai_coach.generate_nutrition_plan(_goals(request, current_user))
    return ApiResponse(message="Nutrition plan generated", data=plan)
