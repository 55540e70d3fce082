import logging

from fastapi import APIRouter, Depends, HTTPException, status

from nutrifit.core.dependencies import get_current_user, get_user_repository
from nutrifit.models.user import User
from nutrifit.repositories.user_repository import UserRepository
from nutrifit.schemas.auth import (
    ApiResponse,
    AuthPayload,
    ChangePasswordRequest,
    ProfileUpdate,
    TokenPayload,
    UserLogin,
    UserPayload,
    UserRead,
    UserRegister,
)
from nutrifit.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(user: User) -> AuthPayload:
    return AuthPayload(
        token=auth_service.create_user_token(user),
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=ApiResponse[AuthPayload], status_code=status.HTTP_201_CREATED)
async def register(user_in: UserRegister, repo: UserRepository = Depends(get_user_repository)):
    """Create an account and sign it in"""
    new_user = await auth_service.register_user(repo, user_in)
    logger.info(f"Registered user {new_user.id}")
    return ApiResponse(message="User registered successfully", data=_auth_payload(new_user))


@router.post("/login", response_model=ApiResponse[AuthPayload])
async def login(credentials: UserLogin, repo: UserRepository = Depends(get_user_repository)):
    user = await auth_service.authenticate_user(repo, credentials)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ApiResponse(message="Login successful", data=_auth_payload(user))


@router.get("/profile", response_model=ApiResponse[UserPayload])
async def get_profile(current_user: User = Depends(get_current_user)):
    return ApiResponse(
        message="Profile retrieved successfully",
        data=UserPayload(user=UserRead.model_validate(current_user)),
    )


@router.put("/profile", response_model=ApiResponse[UserPayload])
async def update_profile(
        profile_in: ProfileUpdate,
        current_user: User = Depends(get_current_user),
        repo: UserRepository = Depends(get_user_repository),
):
    """Partial update; BMI, BMR and the calorie target are recalculated"""
    user = await auth_service.update_profile(repo, current_user, profile_in)
    return ApiResponse(
        message="Profile updated successfully",
        data=UserPayload(user=UserRead.model_validate(user)),
    )


@router.put("/change-password", response_model=ApiResponse[None])
async def change_password(
        password_in: ChangePasswordRequest,
        current_user: User = Depends(get_current_user),
        repo: UserRepository = Depends(get_user_repository),
):
    await auth_service.change_password(repo, current_user, password_in)
    return ApiResponse(message="Password changed successfully")


@router.post("/refresh-token", response_model=ApiResponse[TokenPayload])
async def refresh_token(current_user: User = Depends(get_current_user)):
    return ApiResponse(
        message="Token refreshed successfully",
        data=TokenPayload(token=auth_service.create_user_token(current_user)),
    )


@router.put("/deactivate", response_model=ApiResponse[None])
async def deactivate_account(
        current_user: User = Depends(get_current_user),
        repo: UserRepository = Depends(get_user_repository),
):
    await auth_service.deactivate(repo, current_user)
    logger.info(f"Deactivated user {current_user.id}")
    return ApiResponse(message="Account deactivated successfully")
