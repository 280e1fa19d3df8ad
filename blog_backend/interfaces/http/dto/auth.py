from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from blog_backend.domain.users.entities import AuthenticatedIdentity, User

MIN_PASSWORD_LENGTH = 6


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters long",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value


class LoginRequestDTO(BaseModel):
    email: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1, max_length=128)  # No policy check on login


class UserPublicDTO(BaseModel):
    """User as exposed over HTTP; never carries the password hash."""

    id: int
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> UserPublicDTO:
        return cls(id=user.id, username=user.username, email=user.email)

    @classmethod
    def from_identity(cls, identity: AuthenticatedIdentity) -> UserPublicDTO:
        return cls(id=identity.user_id, username=identity.username, email=identity.email)


class RegisterResponseDTO(BaseModel):
    message: str = "Registration completed"
    user_id: int = Field(serialization_alias="userId")
    user: UserPublicDTO


class LoginResponseDTO(BaseModel):
    message: str = "Login succeeded"
    user: UserPublicDTO


class CurrentUserResponseDTO(BaseModel):
    user: UserPublicDTO


class MessageDTO(BaseModel):
    message: str
