"""User-related Pydantic schemas."""

from typing import Any

from pydantic import Field, field_validator

from .common import CamelModel


class UserCreate(CamelModel):
    """Registration payload."""

    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    profile_name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=18, le=120)
    gender: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    bio: str | None = None
    occupation: str | None = None
    education: str | None = None
    looking_for: str = Field(..., min_length=1, description="Desired relationship type")
    interests: list[str] = Field(default_factory=list)
    profile_video_url: str | None = None


class UserLogin(CamelModel):
    """Credentials submitted to the login endpoint."""

    username: str
    password: str


class UserUpdate(CamelModel):
    """Partial profile update; credentials are not editable here."""

    profile_name: str | None = Field(None, min_length=1, max_length=100)
    age: int | None = Field(None, ge=18, le=120)
    gender: str | None = Field(None, min_length=1)
    location: str | None = Field(None, min_length=1)
    bio: str | None = None
    occupation: str | None = None
    education: str | None = None
    looking_for: str | None = Field(None, min_length=1)
    interests: list[str] | None = None
    profile_video_url: str | None = None

    @field_validator("profile_name", "age", "gender", "location", "looking_for", "interests")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        # Omit a required profile field to keep it; null cannot clear it.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class UserPublic(CamelModel):
    """Profile as visible to other users (no credential fields)."""

    id: int
    username: str
    profile_name: str
    age: int
    gender: str
    location: str
    bio: str | None = None
    occupation: str | None = None
    education: str | None = None
    looking_for: str
    interests: list[str]
    profile_video_url: str | None = None


class AuthenticatedUser(UserPublic):
    """Public profile plus the bearer token for subsequent requests."""

    access_token: str
    token_type: str = "bearer"
