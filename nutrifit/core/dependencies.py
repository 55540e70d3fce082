import logging
from functools import lru_cache, partial
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from nutrifit.core.db import get_db
from nutrifit.core.config import settings
from nutrifit.core.seed import build_user_document
from nutrifit.models.user import User
from nutrifit.repositories.user_repository import UserRepository
from nutrifit.services.auth_service import auth_service
from nutrifit.services.fitness_store import FitnessStore
from nutrifit.services.storage import SqlStorage, Storage

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        repo: UserRepository = Depends(get_user_repository),
) -> User:
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Access token is required")

    try:
        payload = auth_service.decode_access_token(credentials.credentials)
        user_id = payload.get("sub")
        if user_id is None:
            raise _unauthorized("Token is invalid")
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError:
        raise _unauthorized("Token is invalid")

    user = await repo.get_by_id(int(user_id))
    if user is None:
        raise _unauthorized("Token is invalid - user not found")
    if not user.is_active:
        logger.info(f"Rejected request from deactivated account {user.id}")
        raise _unauthorized("Account is deactivated")

    return user


@lru_cache
def get_storage() -> Storage:
    """Process-wide durable storage for fitness documents."""
    return SqlStorage(settings.STORAGE_URL)


def get_fitness_store(
        current_user: User = Depends(get_current_user),
        storage: Storage = Depends(get_storage),
) -> FitnessStore:
    return FitnessStore(
        storage,
        key=f"{settings.FITNESS_DATA_KEY}:{current_user.id}",
        seed=partial(build_user_document, current_user),
    )
