import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from nutrifit.core.dependencies import get_fitness_store
from nutrifit.core.errors import GoalStatusError
from nutrifit.schemas.auth import ApiResponse
from nutrifit.schemas.goal import Goal, GoalCreate, GoalStatusUpdate, GoalUpdate
from nutrifit.services.fitness_store import FitnessStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")


@router.get("", response_model=ApiResponse[List[Goal]])
def list_goals(
        active_only: bool = Query(False),
        store: FitnessStore = Depends(get_fitness_store),
):
    goals = store.get_goals()
    if active_only:
        goals = [goal for goal in goals if goal.active]
    return ApiResponse(message="Goals retrieved", data=goals)


@router.post("", response_model=ApiResponse[Goal], status_code=status.HTTP_201_CREATED)
def create_goal(goal_in: GoalCreate, store: FitnessStore = Depends(get_fitness_store)):
    return ApiResponse(message="Goal created successfully", data=store.add_goal(goal_in))


@router.put("/{goal_id}", response_model=ApiResponse[Goal])
def update_goal(goal_id: str, goal_in: GoalUpdate, store: FitnessStore = Depends(get_fitness_store)):
    """Field changes only; progress is derived and status has its own endpoint"""
    try:
        goal = store.update_goal(goal_id, goal_in)
    except ValidationError as exc:
        logger.info(f"Rejected goal update: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid goal")
    if goal is None:
        raise _not_found()
    return ApiResponse(message="Goal updated successfully", data=goal)


@router.put("/{goal_id}/status", response_model=ApiResponse[Goal])
def set_goal_status(
        goal_id: str,
        status_in: GoalStatusUpdate,
        store: FitnessStore = Depends(get_fitness_store),
):
    try:
        goal = store.set_goal_status(goal_id, status_in.status)
    except GoalStatusError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if goal is None:
        raise _not_found()
    return ApiResponse(message="Goal status updated", data=goal)


@router.delete("/{goal_id}", response_model=ApiResponse[None])
def delete_goal(goal_id: str, store: FitnessStore = Depends(get_fitness_store)):
    if not store.delete_goal(goal_id):
        raise _not_found()
    return ApiResponse(message="Goal deleted successfully")
