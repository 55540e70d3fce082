import re
from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ValidationInfo, field_validator

from nutrifit.models.user import ActivityLevelEnum, GenderEnum

T = TypeVar("T")

PASSWORD_COMPLEXITY = (re.compile(r"[a-z]"), re.compile(r"[A-Z]"), re.compile(r"\d"))


def _check_email(value: str) -> str:
    try:
        return validate_email(value, check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        raise ValueError("Please provide a valid email") from None


def _check_password(value: str, prefix: str = "Password") -> str:
    if len(value) < 6:
        raise ValueError(f"{prefix} must be at least 6 characters long")
    if not all(pattern.search(value) for pattern in PASSWORD_COMPLEXITY):
        raise ValueError(
            f"{prefix} must contain at least one lowercase letter, one uppercase letter, and one number"
        )
    return value


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not 2 <= len(value) <= 50:
        raise ValueError("Name must be between 2 and 50 characters")
    return value


MEASUREMENT_RANGES = {
    "age": (13, 120, "Age must be between 13 and 120"),
    "height": (100, 250, "Height must be between 100 and 250 cm"),
    "weight": (20, 500, "Weight must be between 20 and 500 kg"),
    "target_weight": (20, 500, "Target weight must be between 20 and 500 kg"),
}


def _check_measurement(value, field_name: str):
    low, high, message = MEASUREMENT_RANGES[field_name]
    if value is not None and not low <= value <= high:
        raise ValueError(message)
    return value


class UserLogin(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class UserRegister(BaseModel):
    name: str
    email: str
    password: str
    age: Optional[int] = None
    gender: Optional[GenderEnum] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    target_weight: Optional[float] = None
    activity_level: Optional[ActivityLevelEnum] = None
    fitness_goals: Optional[List[str]] = None

    @field_validator("age", "height", "weight", "target_weight")
    @classmethod
    def check_measurements(cls, value, info: ValidationInfo):
        return _check_measurement(value, info.field_name)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check_password(value)


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[GenderEnum] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    target_weight: Optional[float] = None
    activity_level: Optional[ActivityLevelEnum] = None
    fitness_goals: Optional[List[str]] = None
    daily_water_target: Optional[int] = None
    preferences: Optional[Dict[str, Any]] = None

    @field_validator("age", "height", "weight", "target_weight")
    @classmethod
    def check_measurements(cls, value, info: ValidationInfo):
        return _check_measurement(value, info.field_name)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: Optional[str]) -> Optional[str]:
        return _check_name(value)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str
    confirm_password: str

    @field_validator("current_password")
    @classmethod
    def check_current_password(cls, value: str) -> str:
        if not value:
            raise ValueError("Current password is required")
        return value

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, value: str) -> str:
        return _check_password(value, prefix="New password")

    @field_validator("confirm_password")
    @classmethod
    def check_confirmation(cls, value: str, info: ValidationInfo) -> str:
        if "new_password" in info.data and value != info.data["new_password"]:
            raise ValueError("Password confirmation does not match new password")
        return value


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    age: Optional[int] = None
    gender: Optional[GenderEnum] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    target_weight: Optional[float] = None
    activity_level: Optional[ActivityLevelEnum] = None
    fitness_goals: Optional[List[str]] = None
    bmi: Optional[float] = None
    bmr: Optional[int] = None
    daily_calorie_target: Optional[int] = None
    daily_water_target: Optional[int] = None
    preferences: Optional[Dict[str, Any]] = None
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserPayload(BaseModel):
    user: UserRead


class AuthPayload(BaseModel):
    token: str
    user: UserRead


class TokenPayload(BaseModel):
    token: str


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None
