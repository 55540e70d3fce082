import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from nutrifit.core.config import settings
from nutrifit.schemas.session import SessionUser
from nutrifit.services.api_client import ApiClient, ApiError, extract_payload
from nutrifit.services.storage import Storage

logger = logging.getLogger(__name__)


class AuthClient:
    """Client side of the /auth endpoints; keeps {token, user} in durable storage."""

    def __init__(self, api: ApiClient, storage: Storage):
        self.api = api
        self.storage = storage

    def _store_session(self, token: Optional[str], user: Any) -> None:
        if token:
            self.storage.set_item(settings.TOKEN_STORAGE_KEY, token)
        if user is not None:
            self.store_user(user)

    def store_user(self, user: Any) -> None:
        if isinstance(user, SessionUser):
            user = user.model_dump(mode="json")
        self.storage.set_item(settings.USER_STORAGE_KEY, json.dumps(user))

    @staticmethod
    def _user_from(payload: Any) -> SessionUser:
        if not isinstance(payload, dict) or not isinstance(payload.get("user"), dict):
            raise ApiError("Malformed response: user missing")
        return SessionUser.model_validate(payload["user"])

    def _signed_in(self, data: Any) -> Dict[str, Any]:
        """Validates a {token, user} reply and persists it."""
        user = self._user_from(data)
        token = data.get("token")
        if not token:
            raise ApiError("Malformed response: token missing")
        self._store_session(token, user)
        return {"token": token, "user": user}

    async def register(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._signed_in(extract_payload(await self.api.post("/auth/register", user_data)))

    async def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        return self._signed_in(extract_payload(await self.api.post("/auth/login", credentials)))

    def logout(self) -> None:
        self.storage.remove_item(settings.TOKEN_STORAGE_KEY)
        self.storage.remove_item(settings.USER_STORAGE_KEY)

    async def get_profile(self) -> SessionUser:
        data = extract_payload(await self.api.get("/auth/profile"))
        return self._user_from(data)

    async def update_profile(self, profile_data: Dict[str, Any]) -> SessionUser:
        data = extract_payload(await self.api.put("/auth/profile", profile_data))
        user = self._user_from(data)
        self.store_user(user)
        return user

    async def change_password(self, password_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.api.put("/auth/change-password", password_data)

    async def refresh_token(self) -> str:
        data = extract_payload(await self.api.post("/auth/refresh-token"))
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise ApiError("Malformed response: token missing")
        self.storage.set_item(settings.TOKEN_STORAGE_KEY, token)
        return token

    async def deactivate_account(self) -> Dict[str, Any]:
        body = await self.api.put("/auth/deactivate")
        self.logout()
        return body

    def get_current_user(self) -> Optional[SessionUser]:
        raw = self.storage.get_item(settings.USER_STORAGE_KEY)
        if not raw:
            return None
        try:
            return SessionUser.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Cached user is unreadable: {e}")
            return None

    def get_token(self) -> Optional[str]:
        return self.storage.get_item(settings.TOKEN_STORAGE_KEY)

    def is_authenticated(self) -> bool:
        return bool(self.get_token() and self.get_current_user())
