from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from enum import Enum

from nutrifit.schemas.achievement import Achievement
from nutrifit.schemas.types import UTCDateTime


class WorkoutType(str, Enum):
    strength = "strength"
    cardio = "cardio"
    flexibility = "flexibility"
    sports = "sports"
    mixed = "mixed"


class Exercise(BaseModel):
    name: str
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    duration: Optional[float] = Field(None, ge=0)  # minutes
    distance: Optional[float] = Field(None, ge=0)  # km
    pace: Optional[str] = None


class WorkoutBase(BaseModel):
    title: str
    description: str = ""
    type: WorkoutType = WorkoutType.mixed
    duration: int = Field(0, ge=0)  # minutes
    exercises: List[Exercise] = Field(default_factory=list)
    calories_burned: int = Field(0, ge=0)
    notes: str = ""


class WorkoutCreate(WorkoutBase):
    date: Optional[UTCDateTime] = None


class WorkoutUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[WorkoutType] = None
    date: Optional[UTCDateTime] = None
    duration: Optional[int] = Field(None, ge=0)
    exercises: Optional[List[Exercise]] = None
    calories_burned: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None


class Workout(WorkoutBase):
    id: str
    date: UTCDateTime


class WorkoutStats(BaseModel):
    count: int = 0
    total_duration_minutes: int = 0
    total_calories: int = 0
    average_duration_minutes: int = 0
    average_calories: int = 0
    count_by_type: Dict[str, int] = Field(default_factory=dict)


class WorkoutStreak(BaseModel):
    current: int
    longest: int


class WorkoutLogged(BaseModel):
    workout: Workout
    unlocked_achievements: List[Achievement] = Field(default_factory=list)
