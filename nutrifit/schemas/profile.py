from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from nutrifit.models.user import ActivityLevelEnum, GenderEnum
from nutrifit.schemas.types import UTCDateTime


class UnitsEnum(str, Enum):
    metric = "metric"
    imperial = "imperial"


class ThemeEnum(str, Enum):
    light = "light"
    dark = "dark"


class Preferences(BaseModel):
    units: UnitsEnum = UnitsEnum.metric
    theme: ThemeEnum = ThemeEnum.light
    notifications: bool = True


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    age: Optional[int] = None
    gender: Optional[GenderEnum] = None
    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    target_weight: Optional[float] = None
    activity_level: ActivityLevelEnum = ActivityLevelEnum.moderately_active
    fitness_goals: List[str] = Field(default_factory=list)
    daily_calorie_target: int = 2000
    daily_water_target: int = 8  # glasses
    join_date: UTCDateTime
    preferences: Preferences = Field(default_factory=Preferences)
