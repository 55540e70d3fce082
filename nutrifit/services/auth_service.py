import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import HTTPException, status
from jose import jwt

from nutrifit.core.config import settings
from nutrifit.models.user import ActivityLevelEnum, User
from nutrifit.repositories.user_repository import UserRepository
from nutrifit.schemas.auth import ChangePasswordRequest, ProfileUpdate, UserLogin, UserRegister
from nutrifit.services.nutrition_calculator import NutritionCalculator

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.SECRET_KEY = settings.SECRET_KEY
        self.ALGORITHM = settings.ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def create_access_token(self, data: dict, expires_delta: Optional[timedelta] = None) -> str:
        to_encode = data.copy()
        if expires_delta:
            expire = datetime.now(timezone.utc) + expires_delta
        else:
            expire = datetime.now(timezone.utc) + timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.SECRET_KEY, algorithm=self.ALGORITHM)

    def create_user_token(self, user: User) -> str:
        return self.create_access_token(data={"sub": str(user.id)})

    def decode_access_token(self, token: str) -> dict:
        """Raises jose.JWTError (ExpiredSignatureError included) on a bad token."""
        return jwt.decode(token, self.SECRET_KEY, algorithms=[self.ALGORITHM])

    async def authenticate_user(self, repo: UserRepository, login_data: UserLogin) -> Optional[User]:
        user = await repo.get_by_email(login_data.email)
        if not user or not self.verify_password(login_data.password, user.password):
            logger.info(f"Failed login attempt for {login_data.email}")
            return None

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Account is deactivated",
            )

        user.last_login = datetime.now(timezone.utc)
        return await repo.save(user)

    async def register_user(self, repo: UserRepository, user_data: UserRegister) -> User:
        if await repo.get_by_email(user_data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists with this email",
            )

        new_user = User(
            name=user_data.name,
            email=user_data.email,
            password=self.hash_password(user_data.password),
            age=user_data.age,
            gender=user_data.gender,
            height=user_data.height,
            weight=user_data.weight,
            target_weight=user_data.target_weight,
            activity_level=user_data.activity_level or ActivityLevelEnum.moderately_active,
            fitness_goals=user_data.fitness_goals or [],
            daily_calorie_target=NutritionCalculator.DEFAULT_CALORIE_TARGET,
            daily_water_target=8,
            preferences={},
            is_active=True,
            created_at=datetime.now(timezone.utc),
        )
        NutritionCalculator.apply_body_metrics(new_user)

        return await repo.create_user(new_user)

    async def update_profile(self, repo: UserRepository, user: User, profile_data: ProfileUpdate) -> User:
        changes = profile_data.model_dump(exclude_unset=True)
        if "preferences" in changes:
            changes["preferences"] = {**(user.preferences or {}), **(changes["preferences"] or {})}
        for field, value in changes.items():
            setattr(user, field, value)

        NutritionCalculator.apply_body_metrics(user)
        return await repo.save(user)

    async def change_password(self, repo: UserRepository, user: User, data: ChangePasswordRequest) -> None:
        if not self.verify_password(data.current_password, user.password):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Current password is incorrect",
            )

        user.password = self.hash_password(data.new_password)
        await repo.save(user)

    async def deactivate(self, repo: UserRepository, user: User) -> User:
        user.is_active = False
        return await repo.save(user)


auth_service = AuthService()
