from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class SessionUser(BaseModel):
    """User snapshot cached by the client; keeps whatever else the server sends."""
    id: Union[int, str]
    name: str
    email: str

    class Config:
        extra = "allow"


class Anonymous(BaseModel):
    status: Literal["anonymous"] = "anonymous"

    @property
    def is_authenticated(self) -> bool:
        return False


class Loading(BaseModel):
    status: Literal["loading"] = "loading"

    @property
    def is_authenticated(self) -> bool:
        return False


class Authenticated(BaseModel):
    status: Literal["authenticated"] = "authenticated"
    user: SessionUser
    token: str
    # failed profile update, password change etc. while still signed in
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return True


class Errored(BaseModel):
    status: Literal["errored"] = "errored"
    message: str

    @property
    def is_authenticated(self) -> bool:
        return False


SessionState = Annotated[
    Union[Anonymous, Loading, Authenticated, Errored],
    Field(discriminator="status"),
]


class ActionType(str, Enum):
    LOADING = "LOADING"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILURE = "LOGIN_FAILURE"
    LOGOUT = "LOGOUT"
    UPDATE_USER = "UPDATE_USER"
    SET_ERROR = "SET_ERROR"
    CLEAR_ERROR = "CLEAR_ERROR"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class SessionAction(BaseModel):
    type: ActionType
    user: Optional[SessionUser] = None
    token: Optional[str] = None
    message: Optional[str] = None
