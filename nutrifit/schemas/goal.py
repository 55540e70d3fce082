from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, computed_field, model_validator

from nutrifit.schemas.types import UTCDateTime
from nutrifit.services.goal_progress import calculate_goal_progress


class GoalType(str, Enum):
    weight_loss = "weight_loss"
    weight_gain = "weight_gain"
    muscle_gain = "muscle_gain"
    endurance = "endurance"
    strength = "strength"
    performance = "performance"
    consistency = "consistency"
    custom = "custom"


class GoalStatus(str, Enum):
    active = "active"
    paused = "paused"
    completed = "completed"
    cancelled = "cancelled"


class GoalBase(BaseModel):
    title: str
    type: GoalType = GoalType.custom
    target_value: float
    current_value: float = 0
    start_value: Optional[float] = None
    unit: Optional[str] = None
    deadline: Optional[UTCDateTime] = None


class GoalCreate(GoalBase):
    pass


class GoalUpdate(BaseModel):
    title: Optional[str] = None
    type: Optional[GoalType] = None
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    start_value: Optional[float] = None
    unit: Optional[str] = None
    deadline: Optional[UTCDateTime] = None


class GoalStatusUpdate(BaseModel):
    status: GoalStatus


class Goal(GoalBase):
    id: str
    status: GoalStatus = GoalStatus.active

    @model_validator(mode="before")
    @classmethod
    def accept_short_keys(cls, data: Any) -> Any:
        """Older documents store target/current and an `active` flag."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "target_value" not in data and "target" in data:
            data["target_value"] = data.pop("target")
        if "current_value" not in data and "current" in data:
            data["current_value"] = data.pop("current")
        if "status" not in data and "active" in data:
            data["status"] = GoalStatus.active if data["active"] else GoalStatus.paused
        # progress is always derived
        data.pop("progress", None)
        data.pop("active", None)
        return data

    @computed_field
    @property
    def active(self) -> bool:
        return self.status == GoalStatus.active

    @computed_field
    @property
    def progress(self) -> float:
        return calculate_goal_progress(
            current=self.current_value,
            target=self.target_value,
            goal_type=self.type,
            start=self.start_value,
        )
