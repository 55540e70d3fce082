"""
Unit tests for the session state machine.

Covered scenarios:
- reduce: every action from the relevant states
- SessionManager.initialize: no cache, orphaned token, accepted cache, rejected cache
- login / register: success notifications, failure messages, AuthError,
  a reply without a token
- update_profile / change_password: require a session, keep it on failure
- refresh_token: new token on success, forced logout with an error on failure
- error message helpers

AuthClient is an AsyncMock; notifications go to a MagicMock.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from nutrifit.core.config import settings
from nutrifit.core.errors import AuthError
from nutrifit.schemas.session import (
    ActionType,
    Anonymous,
    Authenticated,
    Errored,
    Loading,
    SessionAction,
    SessionUser,
)
from nutrifit.services.api_client import ApiClient, ApiError
from nutrifit.services.auth_client import AuthClient
from nutrifit.services.session import (
    SessionManager,
    error_message,
    reduce,
    registration_error_message,
)
from nutrifit.services.storage import InMemoryStorage

pytestmark = pytest.mark.unit

USER = SessionUser(id=1, name="Test User", email="test@example.com")


def signed_in(**overrides) -> Authenticated:
    return Authenticated(user=USER, token="tok", **overrides)


@pytest.fixture
def auth_client() -> AsyncMock:
    client = AsyncMock(spec=AuthClient)
    client.get_token = MagicMock(return_value=None)
    client.get_current_user = MagicMock(return_value=None)
    client.store_user = MagicMock()
    client.logout = MagicMock()
    return client


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture
def manager(auth_client, notifier) -> SessionManager:
    return SessionManager(auth_client, notifier=notifier)


# ---------------------------------------------------------------------------
# reduce
# ---------------------------------------------------------------------------

def test_reduce_login_success_from_loading():
    """LOGIN_SUCCESS carries user and token."""
    state = reduce(Loading(), SessionAction(type=ActionType.LOGIN_SUCCESS, user=USER, token="tok"))
    assert isinstance(state, Authenticated)
    assert state.token == "tok"
    assert state.is_authenticated


def test_reduce_login_failure_default_message():
    """LOGIN_FAILURE without a message reads "Login failed"."""
    state = reduce(Loading(), SessionAction(type=ActionType.LOGIN_FAILURE))
    assert state == Errored(message="Login failed")
    assert not state.is_authenticated


def test_reduce_logout_from_any_state():
    for state in (Loading(), signed_in(), Errored(message="x")):
        assert isinstance(reduce(state, SessionAction(type=ActionType.LOGOUT)), Anonymous)


def test_reduce_update_user_only_when_signed_in():
    """UPDATE_USER replaces the user and clears a pending error."""
    renamed = SessionUser(id=1, name="Renamed", email="test@example.com")
    state = reduce(signed_in(error="old"), SessionAction(type=ActionType.UPDATE_USER, user=renamed))
    assert state.user.name == "Renamed"
    assert state.error is None

    assert isinstance(reduce(Anonymous(), SessionAction(type=ActionType.UPDATE_USER, user=renamed)), Anonymous)


def test_reduce_set_error_keeps_session():
    """An error while signed in decorates the session instead of ending it."""
    state = reduce(signed_in(), SessionAction(type=ActionType.SET_ERROR, message="Profile update failed"))
    assert state.is_authenticated
    assert state.error == "Profile update failed"


def test_reduce_set_error_when_signed_out():
    state = reduce(Anonymous(), SessionAction(type=ActionType.SET_ERROR, message="boom"))
    assert state == Errored(message="boom")


def test_reduce_clear_error():
    """CLEAR_ERROR keeps a session and turns an errored state anonymous."""
    assert reduce(signed_in(error="x"), SessionAction(type=ActionType.CLEAR_ERROR)).error is None
    assert isinstance(reduce(Errored(message="x"), SessionAction(type=ActionType.CLEAR_ERROR)), Anonymous)
    assert isinstance(reduce(Loading(), SessionAction(type=ActionType.CLEAR_ERROR)), Loading)


def test_reduce_token_refreshed():
    state = reduce(signed_in(), SessionAction(type=ActionType.TOKEN_REFRESHED, token="new"))
    assert state.token == "new"
    assert state.user == USER


# ---------------------------------------------------------------------------
# initialize
# ---------------------------------------------------------------------------

def test_manager_starts_loading(manager):
    assert isinstance(manager.state, Loading)
    assert manager.user is None


@pytest.mark.asyncio
async def test_initialize_without_cache_is_anonymous(manager, auth_client):
    """No cached token means no network call."""
    state = await manager.initialize()

    assert isinstance(state, Anonymous)
    auth_client.get_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_initialize_token_without_user_is_cleared(manager, auth_client):
    """A token whose cached user is gone is dropped."""
    auth_client.get_token.return_value = "orphan"

    state = await manager.initialize()

    assert isinstance(state, Anonymous)
    auth_client.logout.assert_called_once()
    auth_client.get_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_initialize_restores_cached_session(manager, auth_client):
    """A cached token accepted by the server restores the session."""
    auth_client.get_token.return_value = "cached"
    auth_client.get_current_user.return_value = USER
    auth_client.get_profile.return_value = USER

    state = await manager.initialize()

    assert isinstance(state, Authenticated)
    assert manager.token == "cached"
    auth_client.store_user.assert_called_once_with(USER)


@pytest.mark.asyncio
async def test_initialize_rejected_token_clears_cache(manager, auth_client):
    """A rejected token is dropped and the session ends anonymous."""
    auth_client.get_token.return_value = "stale"
    auth_client.get_current_user.return_value = USER
    auth_client.get_profile.side_effect = ApiError("Token has expired", status_code=401)

    state = await manager.initialize()

    assert isinstance(state, Anonymous)
    auth_client.logout.assert_called_once()


@pytest.mark.asyncio
async def test_initialize_never_raises_on_storage_failure(manager, auth_client):
    """Even unreadable storage ends in an anonymous state."""
    auth_client.get_token.side_effect = RuntimeError("disk gone")
    auth_client.logout.side_effect = RuntimeError("still gone")

    state = await manager.initialize()
    assert isinstance(state, Anonymous)


# ---------------------------------------------------------------------------
# login / register / logout
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login_success(manager, auth_client, notifier):
    auth_client.login.return_value = {"token": "tok", "user": USER}

    await manager.login({"email": "test@example.com", "password": "Password123"})

    assert manager.is_authenticated
    assert manager.user == USER
    notifier.success.assert_called_once_with("Login successful!")


@pytest.mark.asyncio
async def test_login_failure_uses_server_message(manager, auth_client, notifier):
    """The server's message is shown and raised."""
    auth_client.login.side_effect = ApiError(
        "Invalid email or password", status_code=401,
        payload={"success": False, "message": "Invalid email or password"},
    )

    with pytest.raises(AuthError) as exc_info:
        await manager.login({"email": "test@example.com", "password": "nope"})

    assert exc_info.value.message == "Invalid email or password"
    assert manager.state == Errored(message="Invalid email or password")
    notifier.error.assert_called_once_with("Invalid email or password")


@pytest.mark.asyncio
async def test_login_network_failure_falls_back(manager, auth_client):
    """Without a server payload the generic message is used."""
    auth_client.login.side_effect = ApiError("Network error: refused")

    with pytest.raises(AuthError):
        await manager.login({})
    assert manager.state.message == "Login failed"


@pytest.mark.asyncio
async def test_login_reply_without_token_ends_errored(notifier):
    """A success reply missing the token becomes a login failure, not a crash."""
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": {"user": USER.model_dump()}})

    storage = InMemoryStorage()
    api = ApiClient(base_url="http://api.test/api/v1", storage=storage, transport=httpx.MockTransport(handler))
    manager = SessionManager(AuthClient(api, storage), notifier=notifier)

    with pytest.raises(AuthError):
        await manager.login({"email": "test@example.com", "password": "Password123"})

    assert manager.state == Errored(message="Login failed")
    assert storage.get_item(settings.TOKEN_STORAGE_KEY) is None
    notifier.error.assert_called_once_with("Login failed")


@pytest.mark.asyncio
async def test_register_failure_joins_field_errors(manager, auth_client, notifier):
    """Field errors are joined with ", " in server order."""
    auth_client.register.side_effect = ApiError("Validation failed", status_code=400, payload={
        "message": "Validation failed",
        "errors": [
            {"msg": "Please provide a valid email", "param": "email"},
            {"msg": "Password must be at least 6 characters long", "param": "password"},
        ],
    })

    with pytest.raises(AuthError) as exc_info:
        await manager.register({"name": "x"})

    expected = "Please provide a valid email, Password must be at least 6 characters long"
    assert exc_info.value.message == expected
    notifier.error.assert_called_once_with(expected)


@pytest.mark.asyncio
async def test_register_success(manager, auth_client, notifier):
    auth_client.register.return_value = {"token": "tok", "user": USER}

    await manager.register({"name": "Test User"})

    assert manager.is_authenticated
    notifier.success.assert_called_once_with("Registration successful!")


def test_logout_clears_cache(manager, auth_client, notifier):
    manager.state = signed_in()

    manager.logout()

    assert isinstance(manager.state, Anonymous)
    auth_client.logout.assert_called_once()
    notifier.success.assert_called_once_with("Logged out successfully")


# ---------------------------------------------------------------------------
# update_profile / change_password / refresh_token
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_profile_requires_session(manager, auth_client):
    manager.state = Anonymous()
    with pytest.raises(AuthError):
        await manager.update_profile({"name": "x"})
    auth_client.update_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_profile_success(manager, auth_client, notifier):
    renamed = SessionUser(id=1, name="Renamed", email="test@example.com")
    manager.state = signed_in()
    auth_client.update_profile.return_value = renamed

    await manager.update_profile({"name": "Renamed"})

    assert manager.user.name == "Renamed"
    notifier.success.assert_called_once_with("Profile updated successfully!")


@pytest.mark.asyncio
async def test_update_profile_failure_keeps_session(manager, auth_client):
    """A failed update leaves the user signed in with an error."""
    manager.state = signed_in()
    auth_client.update_profile.side_effect = ApiError("boom", status_code=500)

    with pytest.raises(AuthError):
        await manager.update_profile({"name": "x"})

    assert manager.is_authenticated
    assert manager.state.error == "Profile update failed"


@pytest.mark.asyncio
async def test_change_password_failure_message(manager, auth_client, notifier):
    manager.state = signed_in()
    auth_client.change_password.side_effect = ApiError(
        "Current password is incorrect", status_code=400,
        payload={"message": "Current password is incorrect"},
    )

    with pytest.raises(AuthError) as exc_info:
        await manager.change_password({"current_password": "x"})

    assert exc_info.value.message == "Current password is incorrect"
    assert manager.is_authenticated


@pytest.mark.asyncio
async def test_change_password_success(manager, notifier):
    manager.state = signed_in()
    await manager.change_password({"current_password": "x"})
    notifier.success.assert_called_once_with("Password changed successfully!")


@pytest.mark.asyncio
async def test_refresh_token_success(manager, auth_client):
    manager.state = signed_in()
    auth_client.refresh_token.return_value = "fresh"

    assert await manager.refresh_token() == "fresh"
    assert manager.token == "fresh"


@pytest.mark.asyncio
async def test_refresh_token_failure_logs_out(manager, auth_client, notifier):
    """A failed refresh ends the session."""
    manager.state = signed_in()
    auth_client.refresh_token.side_effect = ApiError("Token has expired", status_code=401)

    with pytest.raises(AuthError):
        await manager.refresh_token()

    assert isinstance(manager.state, Anonymous)
    auth_client.logout.assert_called_once()
    notifier.error.assert_called_once_with("Session expired")
    notifier.success.assert_not_called()


def test_clear_error(manager):
    manager.state = Errored(message="x")
    assert isinstance(manager.clear_error(), Anonymous)


# ---------------------------------------------------------------------------
# message helpers
# ---------------------------------------------------------------------------

def test_error_message_non_api_error_uses_default():
    assert error_message(RuntimeError("x"), "Login failed") == "Login failed"


def test_registration_error_message_without_errors_uses_message():
    error = ApiError("User exists", status_code=400, payload={"message": "User already exists with this email"})
    assert registration_error_message(error) == "User already exists with this email"


def test_registration_error_message_default():
    assert registration_error_message(ApiError("x")) == "Registration failed"
