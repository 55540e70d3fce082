from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from nutrifit.schemas.achievement import Achievement, Streaks
from nutrifit.schemas.goal import Goal
from nutrifit.schemas.metrics import HealthMetric
from nutrifit.schemas.nutrition import NutritionEntry
from nutrifit.schemas.profile import UserProfile
from nutrifit.schemas.workout import Workout
from nutrifit.services.nutrition import normalize_nutrition_entry

SCHEMA_VERSION = 1


class FitnessDocument(BaseModel):
    """The single JSON document persisted per store."""

    schema_version: int = SCHEMA_VERSION
    user: UserProfile
    workouts: List[Workout] = Field(default_factory=list)
    nutrition: List[NutritionEntry] = Field(default_factory=list)
    health_metrics: List[HealthMetric] = Field(default_factory=list)
    goals: List[Goal] = Field(default_factory=list)
    achievements: List[Achievement] = Field(default_factory=list)
    streaks: Streaks = Field(default_factory=Streaks)

    @field_validator("schema_version")
    @classmethod
    def known_version(cls, value: int) -> int:
        if value > SCHEMA_VERSION:
            raise ValueError(f"Unsupported document version {value}")
        return value

    @field_validator("nutrition", mode="before")
    @classmethod
    def normalize_nutrition(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [normalize_nutrition_entry(entry) for entry in value]
