"""Pydantic models for API request/response."""

import datetime
from pydantic import BaseModel, Field, field_validator

from domain.model.activity import Activity

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class CredentialsRequest(BaseModel):
    """Username/password pair submitted to signup and login."""
    username: str = Field(..., max_length=100, description="Unique username")
    password: str = Field(..., description="Plaintext password")

    @field_validator('username')
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator('password')
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        if len(v.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class SignupRequest(CredentialsRequest):
    pass


class LoginRequest(CredentialsRequest):
    pass


class ActivityCreate(BaseModel):
    """Request model for adding an activity."""
    name: str = Field(..., max_length=200, description="Name of the activity")
    date: datetime.date = Field(..., description="Calendar date, ISO format (YYYY-MM-DD)")

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class ActivityRename(BaseModel):
    """Request model for renaming an activity. Only the name can change."""
    name: str = Field(..., max_length=200, description="New name of the activity")

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class ActivityResponse(BaseModel):
    id: str = Field(..., description="Activity ID")
    name: str
    date: datetime.date

    @classmethod
    def from_domain(cls, activity: Activity) -> 'ActivityResponse':
        return cls(id=activity.id, name=activity.name, date=activity.date)


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    redirect: str = Field("/profile", description="Page to open after login")
