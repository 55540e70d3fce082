from pydantic import BaseModel
from typing import List, Optional

from nutrifit.schemas.achievement import Streaks
from nutrifit.schemas.goal import Goal
from nutrifit.schemas.metrics import HealthMetric
from nutrifit.schemas.nutrition import NutritionEntry
from nutrifit.schemas.profile import UserProfile
from nutrifit.schemas.workout import Workout, WorkoutStats


class DashboardSummary(BaseModel):
    total_workouts: int
    total_calories_burned: int
    current_weight: Optional[float] = None
    target_weight: Optional[float] = None
    daily_calorie_target: int
    daily_water_target: int


class DashboardData(BaseModel):
    user: UserProfile
    workout_stats: WorkoutStats
    todays_nutrition: NutritionEntry
    todays_metrics: HealthMetric
    goals: List[Goal]
    streaks: Streaks
    recent_workouts: List[Workout]
    summary: DashboardSummary
