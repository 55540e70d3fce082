import enum
from sqlalchemy import Column, Integer, String, Float, Enum, Boolean, JSON, DateTime
from nutrifit.core.base import Base
from datetime import datetime, timezone


class GenderEnum(str, enum.Enum):
    male = "male"
    female = "female"
    other = "other"


class ActivityLevelEnum(str, enum.Enum):
    sedentary = "sedentary"
    lightly_active = "lightly_active"
    moderately_active = "moderately_active"
    very_active = "very_active"
    extremely_active = "extremely_active"


def _utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    age = Column(Integer, nullable=True)
    gender = Column(Enum(GenderEnum), nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    target_weight = Column(Float, nullable=True)
    activity_level = Column(Enum(ActivityLevelEnum), nullable=True)
    fitness_goals = Column(JSON, nullable=True)
    bmi = Column(Float, default=0)
    bmr = Column(Integer, default=0)
    daily_calorie_target = Column(Integer, default=2000)
    daily_water_target = Column(Integer, default=8)
    preferences = Column(JSON, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
