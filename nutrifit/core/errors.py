import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Durable storage could not be read or written."""


class AuthError(Exception):
    """A session operation failed; the message is ready to show to the user."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class GoalStatusError(ValueError):
    """Illegal goal status transition."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change goal status from '{current}' to '{requested}'")


def _validation_message(error: Dict[str, Any]) -> str:
    ctx = error.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])
    return error.get("msg", "Invalid value")


def validation_errors(exc: RequestValidationError) -> List[Dict[str, str]]:
    """One {msg, param} item per invalid field, in the order pydantic reports them."""
    items = []
    seen = set()
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        param = ".".join(loc)
        if param in seen:
            continue
        seen.add(param)
        items.append({"msg": _validation_message(error), "param": param})
    return items


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "message": "Validation failed",
            "errors": validation_errors(exc),
        },
    )


async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"Storage failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"success": False, "message": "Storage is unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)
