import datetime as dt
from pydantic import BaseModel
from typing import Optional, List
from enum import Enum


class ProgressMetric(str, Enum):
    WEIGHT = "weight"
    STEPS = "steps"
    WORKOUTS = "workouts"


class TimeRange(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


TIME_RANGE_DAYS = {
    TimeRange.WEEKLY: 7,
    TimeRange.MONTHLY: 30,
    TimeRange.YEARLY: 365,
}


class ProgressPoint(BaseModel):
    date: dt.date
    value: float


class DailyProgress(BaseModel):
    date: dt.date
    workouts: int
    calories: int
    weight: Optional[float] = None
    steps: int
    sleep: float


class WeightProgress(BaseModel):
    current: Optional[float] = None
    start: Optional[float] = None
    goal: Optional[float] = None
    change: Optional[float] = None
    data: List[Optional[float]]


class StepsProgress(BaseModel):
    current: int
    goal: int = 10000
    average: int
    data: List[int]


class WorkoutProgress(BaseModel):
    this_week: int
    streak: int
    best_streak: int
    total: int
    data: List[int]


class CaloriesProgress(BaseModel):
    burned: int
    goal: int = 500
    data: List[int]


class SleepProgress(BaseModel):
    average: float
    goal: float = 8.0
    data: List[float]


class ComprehensiveProgress(BaseModel):
    time_range: TimeRange
    days: List[DailyProgress]
    weight: WeightProgress
    steps: StepsProgress
    workouts: WorkoutProgress
    calories: CaloriesProgress
    sleep: SleepProgress
