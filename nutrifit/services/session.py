"""
Session state machine.

`reduce` is the pure transition function; `SessionManager` runs the async
flows (login, register, silent restore, ...) against the auth client and
dispatches actions into it. Callers read `manager.state`.
"""
import logging
from typing import Any, Dict, Optional

from nutrifit.core.errors import AuthError
from nutrifit.schemas.session import (
    ActionType,
    Anonymous,
    Authenticated,
    Errored,
    Loading,
    SessionAction,
    SessionState,
    SessionUser,
)
from nutrifit.services.api_client import ApiError
from nutrifit.services.auth_client import AuthClient
from nutrifit.services.notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


def reduce(state: SessionState, action: SessionAction) -> SessionState:
    if action.type == ActionType.LOADING:
        return Loading()

    if action.type == ActionType.LOGIN_SUCCESS:
        return Authenticated(user=action.user, token=action.token)

    if action.type == ActionType.LOGIN_FAILURE:
        return Errored(message=action.message or "Login failed")

    if action.type == ActionType.LOGOUT:
        return Anonymous()

    if action.type == ActionType.UPDATE_USER:
        if isinstance(state, Authenticated):
            return state.model_copy(update={"user": action.user, "error": None})
        return state

    if action.type == ActionType.SET_ERROR:
        if isinstance(state, Authenticated):
            return state.model_copy(update={"error": action.message})
        return Errored(message=action.message or "")

    if action.type == ActionType.CLEAR_ERROR:
        if isinstance(state, Authenticated):
            return state.model_copy(update={"error": None})
        if isinstance(state, Errored):
            return Anonymous()
        return state

    if action.type == ActionType.TOKEN_REFRESHED:
        if isinstance(state, Authenticated):
            return state.model_copy(update={"token": action.token})
        return state

    return state


def error_message(error: Exception, default: str) -> str:
    if isinstance(error, ApiError):
        return error.payload.get("message") or default
    return default


def registration_error_message(error: Exception) -> str:
    """Field errors joined in the order the server reports them."""
    if isinstance(error, ApiError):
        messages = [item.get("msg") for item in error.errors if isinstance(item, dict) and item.get("msg")]
        if messages:
            return ", ".join(messages)
    return error_message(error, "Registration failed")


class SessionManager:
    def __init__(self, auth_client: AuthClient, notifier: Optional[Notifier] = None):
        self.auth_client = auth_client
        self.notifier = notifier or LoggingNotifier()
        self.state: SessionState = Loading()

    def dispatch(self, action_type: ActionType, **payload: Any) -> SessionState:
        previous = self.state.status
        self.state = reduce(self.state, SessionAction(type=action_type, **payload))
        logger.debug(f"Session {action_type.value}: {previous} -> {self.state.status}")
        return self.state

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    @property
    def user(self) -> Optional[SessionUser]:
        return getattr(self.state, "user", None)

    @property
    def token(self) -> Optional[str]:
        return getattr(self.state, "token", None)

    def _require_authenticated(self) -> Authenticated:
        if not isinstance(self.state, Authenticated):
            raise AuthError("Not authenticated")
        return self.state

    async def initialize(self) -> SessionState:
        """Silent re-authentication from the cached credential; never raises."""
        self.dispatch(ActionType.LOADING)

        try:
            token = self.auth_client.get_token()
            cached_user = self.auth_client.get_current_user()
            if not token or cached_user is None:
                # a token without its user is stale
                self.auth_client.logout()
                return self.dispatch(ActionType.LOGOUT)

            user = await self.auth_client.get_profile()
            self.auth_client.store_user(user)
        except Exception as e:
            logger.warning(f"Cached session rejected, clearing it: {e}")
            try:
                self.auth_client.logout()
            except Exception as cleanup_error:
                logger.error(f"Failed to clear cached session: {cleanup_error}")
            return self.dispatch(ActionType.LOGOUT)

        return self.dispatch(ActionType.LOGIN_SUCCESS, user=user, token=token)

    async def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        self.dispatch(ActionType.LOADING)
        try:
            data = await self.auth_client.login(credentials)
        except Exception as e:
            message = error_message(e, "Login failed")
            self.dispatch(ActionType.LOGIN_FAILURE, message=message)
            self.notifier.error(message)
            raise AuthError(message) from e

        self.dispatch(ActionType.LOGIN_SUCCESS, user=data["user"], token=data["token"])
        self.notifier.success("Login successful!")
        return data

    async def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        self.dispatch(ActionType.LOADING)
        try:
            data = await self.auth_client.register(user_data)
        except Exception as e:
            message = registration_error_message(e)
            self.dispatch(ActionType.LOGIN_FAILURE, message=message)
            self.notifier.error(message)
            raise AuthError(message) from e

        self.dispatch(ActionType.LOGIN_SUCCESS, user=data["user"], token=data["token"])
        self.notifier.success("Registration successful!")
        return data

    def logout(self) -> SessionState:
        self.auth_client.logout()
        self.dispatch(ActionType.LOGOUT)
        self.notifier.success("Logged out successfully")
        return self.state

    async def update_profile(self, profile_data: Dict[str, Any]) -> SessionUser:
        self._require_authenticated()
        try:
            user = await self.auth_client.update_profile(profile_data)
        except Exception as e:
            message = error_message(e, "Profile update failed")
            self.dispatch(ActionType.SET_ERROR, message=message)
            self.notifier.error(message)
            raise AuthError(message) from e

        self.dispatch(ActionType.UPDATE_USER, user=user)
        self.notifier.success("Profile updated successfully!")
        return user

    async def change_password(self, password_data: Dict[str, Any]) -> None:
        self._require_authenticated()
        try:
            await self.auth_client.change_password(password_data)
        except Exception as e:
            message = error_message(e, "Password change failed")
            self.notifier.error(message)
            raise AuthError(message) from e

        self.notifier.success("Password changed successfully!")

    async def refresh_token(self) -> str:
        try:
            token = await self.auth_client.refresh_token()
        except Exception as e:
            message = error_message(e, "Session expired")
            self.auth_client.logout()
            self.dispatch(ActionType.LOGOUT)
            self.notifier.error(message)
            raise AuthError(message) from e

        self.dispatch(ActionType.TOKEN_REFRESHED, token=token)
        return token

    def clear_error(self) -> SessionState:
        return self.dispatch(ActionType.CLEAR_ERROR)
