import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class HeartRate(BaseModel):
    resting: Optional[int] = None
    max: Optional[int] = None


class Sleep(BaseModel):
    hours: Optional[float] = Field(None, ge=0, le=24)
    quality: Optional[str] = None


class HealthMetricBase(BaseModel):
    weight: Optional[float] = Field(None, gt=0)
    steps: int = Field(0, ge=0)
    heart_rate: HeartRate = Field(default_factory=HeartRate)
    sleep: Sleep = Field(default_factory=Sleep)
    mood: Optional[str] = None
    energy: Optional[int] = Field(None, ge=1, le=10)


class HealthMetricCreate(HealthMetricBase):
    date: Optional[dt.date] = None


class HealthMetric(HealthMetricBase):
    id: Optional[str] = None
    date: dt.date


class CurrentHealthMetrics(HealthMetric):
    steps_goal: int = 10000
    active_minutes: int = 0
    active_minutes_goal: int = 60
    calories_burned: int = 0
    calories_burned_goal: int = 500
    weight_goal: Optional[float] = None
