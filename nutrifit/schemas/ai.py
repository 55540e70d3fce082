from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class QuestionCategory(str, Enum):
    workout = "workout"
    nutrition = "nutrition"
    weight = "weight"
    default = "default"


class CoachAnswer(BaseModel):
    category: QuestionCategory
    answer: str
    tips: List[str]


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)


class ChatMessage(BaseModel):
    id: int
    question: str
    response: CoachAnswer
    timestamp: datetime


class PlanRequest(BaseModel):
    fitness_goal: Optional[str] = None


class PlanExercise(BaseModel):
    name: str
    sets: int
    reps: Optional[int] = None
    duration: Optional[str] = None
    rest_time: str


class GeneratedWorkoutPlan(BaseModel):
    name: str
    duration: int  # minutes
    exercises: List[PlanExercise]
    calories_burn: int
    difficulty: str


class MacroTargets(BaseModel):
    protein: int
    carbs: int
    fats: int


class PlannedMeal(BaseModel):
    name: str
    calories: int
    items: List[str]


class GeneratedNutritionPlan(BaseModel):
    daily_calories: int
    macros: MacroTargets
    meals: List[PlannedMeal]
