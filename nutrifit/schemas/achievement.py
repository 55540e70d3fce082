from typing import Optional

from pydantic import BaseModel, Field

from nutrifit.schemas.types import UTCDateTime


class Achievement(BaseModel):
    id: str
    title: str
    description: str = ""
    icon: str = ""
    earned: bool = False
    earned_date: Optional[UTCDateTime] = None
    target: Optional[float] = None
    progress: Optional[float] = None


class Streak(BaseModel):
    current: int = Field(0, ge=0)
    longest: int = Field(0, ge=0)


class Streaks(BaseModel):
    workout: Streak = Field(default_factory=Streak)
    nutrition: Streak = Field(default_factory=Streak)
    water: Streak = Field(default_factory=Streak)
