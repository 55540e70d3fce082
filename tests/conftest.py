"""
Shared fixtures for the NutriFit test suite.

Strategy:
- The test FastAPI app is built without startup events (no database connection).
- UserRepository is replaced by an AsyncMock (mock_repo) in every auth test.
- Fitness endpoints read and write an InMemoryStorage via an override of
  get_storage; get_current_user is replaced by a lambda returning the test user.
- Store-level tests use a FitnessStore with a fixed clock so that dates,
  streaks and generated ids are deterministic.
- JWTs are minted with auth_service.create_user_token() to exercise the real
  token check in get_current_user.
"""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("STORAGE_URL", "sqlite://")

import pytest
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI
from datetime import datetime, timezone
from typing import AsyncGenerator

from nutrifit.api.router import api_router
from nutrifit.core.dependencies import get_current_user, get_storage, get_user_repository
from nutrifit.core.errors import register_exception_handlers
from nutrifit.models.user import ActivityLevelEnum, GenderEnum, User
from nutrifit.repositories.user_repository import UserRepository
from nutrifit.services.auth_service import auth_service
from nutrifit.services.fitness_store import FitnessStore
from nutrifit.services.storage import InMemoryStorage

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def create_test_app() -> FastAPI:
    """Test FastAPI app without startup events."""
    test_app = FastAPI(title="NutriFit Test App")
    register_exception_handlers(test_app)
    test_app.include_router(api_router, prefix="/api/v1")
    return test_app


def make_auth_headers(user: User) -> dict:
    """Authorization header carrying a valid JWT for the given user."""
    return {"Authorization": f"Bearer {auth_service.create_user_token(user)}"}


def make_user(**overrides) -> User:
    fields = dict(
        id=1,
        name="Test User",
        email="test@example.com",
        password=auth_service.hash_password("Password123"),
        age=30,
        gender=GenderEnum.male,
        height=180,
        weight=80,
        target_weight=75,
        activity_level=ActivityLevelEnum.moderately_active,
        fitness_goals=["weight_loss"],
        bmi=24.7,
        bmr=1854,
        daily_calorie_target=2374,
        daily_water_target=8,
        preferences={},
        is_active=True,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return User(**fields)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

@pytest.fixture
def user_fixture() -> User:
    """Active account with a complete body profile."""
    return make_user()


@pytest.fixture
def inactive_user_fixture() -> User:
    """Deactivated account."""
    return make_user(id=2, email="inactive@example.com", is_active=False)


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_repo() -> AsyncMock:
    """Mocked UserRepository; save/create_user hand back the user they were given."""
    repo = AsyncMock(spec=UserRepository)
    repo.save.side_effect = lambda user: user

    def create_user(user):
        user.id = 10
        return user

    repo.create_user.side_effect = create_user
    return repo


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage) -> FitnessStore:
    """FitnessStore over empty storage with the clock frozen at FIXED_NOW."""
    return FitnessStore(storage, clock=lambda: FIXED_NOW)


# ---------------------------------------------------------------------------
# HTTP clients
# ---------------------------------------------------------------------------

@pytest.fixture
async def client(mock_repo) -> AsyncGenerator[AsyncClient, None]:
    """
    Anonymous client: get_user_repository -> mock_repo.
    Used for register/login and for token checks.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def user_client(user_fixture, mock_repo, storage) -> AsyncGenerator[AsyncClient, None]:
    """
    Client authenticated as user_fixture.
    get_current_user -> user_fixture, get_storage -> in-memory storage.
    """
    app = create_test_app()
    app.dependency_overrides[get_user_repository] = lambda: mock_repo
    app.dependency_overrides[get_current_user] = lambda: user_fixture
    app.dependency_overrides[get_storage] = lambda: storage
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
