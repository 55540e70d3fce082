from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class ScheduledWorkoutType(str, Enum):
    strength = "strength"
    cardio = "cardio"
    flexibility = "flexibility"
    rest = "rest"
    mixed = "mixed"


class PlanCreator(str, Enum):
    user = "user"
    trainer = "trainer"
    system = "system"


class PlannedExercise(BaseModel):
    exercise_id: Optional[str] = None
    exercise_name: str
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[str] = None  # a count or a range such as "8-12"
    weight: Optional[str] = None  # absolute or a percentage of max
    duration: Optional[float] = Field(None, ge=0)
    rest_time: Optional[int] = Field(None, ge=0)  # seconds
    notes: Optional[str] = None


class ScheduleDay(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6)  # 0 = Sunday
    workout_type: Optional[ScheduledWorkoutType] = None
    exercises: List[PlannedExercise] = Field(default_factory=list)


class PlanRating(BaseModel):
    user_id: Union[int, str]
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = None


class WorkoutPlan(BaseModel):
    user_id: Union[int, str]
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    difficulty: Difficulty
    duration_weeks: int = Field(..., ge=1)
    days_per_week: int = Field(..., ge=1, le=7)
    schedule: List[ScheduleDay] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    is_public: bool = False
    created_by: PlanCreator = PlanCreator.user
    ratings: List[PlanRating] = Field(default_factory=list)

    def calculate_average_rating(self) -> float:
        if not self.ratings:
            return 0
        return sum(rating.rating for rating in self.ratings) / len(self.ratings)
