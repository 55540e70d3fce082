"""
HTTP client for the NutriFit REST API.

Every call returns the decoded JSON body; every failure, whether the server
answered with an error status or the request never completed, is raised as
ApiError carrying the server's error payload when there is one.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from nutrifit.core.config import settings
from nutrifit.services.storage import Storage

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(
            self,
            message: str,
            status_code: Optional[int] = None,
            payload: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def errors(self) -> List[Dict[str, Any]]:
        errors = self.payload.get("errors")
        return errors if isinstance(errors, list) else []


def extract_payload(body: Any) -> Any:
    """Responses carry the payload under `data`, but not all of them."""
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    return body


class ApiClient:
    def __init__(
            self,
            base_url: Optional[str] = None,
            storage: Optional[Storage] = None,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.API_BASE_URL
        self.storage = storage
        self.timeout = timeout or settings.API_TIMEOUT_SECONDS
        self.transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
                headers={"Content-Type": "application/json"},
            )
        return self._http

    async def close(self):
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _auth_headers(self) -> Dict[str, str]:
        token = self.storage.get_item(settings.TOKEN_STORAGE_KEY) if self.storage else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(
            self,
            method: str,
            path: str,
            body: Any = None,
            params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        http = await self._get_http()
        try:
            response = await http.request(
                method,
                path,
                json=body,
                params=params,
                headers=self._auth_headers(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise ApiError(f"Network error: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            error_payload = payload if isinstance(payload, dict) else {}
            message = error_payload.get("message") or f"Request failed with status {response.status_code}"
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code, payload=error_payload)

        return payload

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, body=body, params=params)

    async def put(self, path: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PUT", path, body=body, params=params)

    async def delete(self, path: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("DELETE", path, body=body, params=params)
