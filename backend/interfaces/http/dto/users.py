from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from backend.application.services.password_hashing import MAX_PASSWORD_BYTES

# Login only guards request size; longer passwords simply never match.
_MAX_LOGIN_PASSWORD_BYTES = 1024


def _check_password_bytes(value: str, limit: int) -> str:
    if len(value.encode("utf-8")) > limit:
        raise PydanticCustomError(
            "password_too_long",
            "Password must be at most {max_bytes} bytes",
            {"max_bytes": limit},
        )
    return value


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)
    nickname: str = Field(min_length=1, max_length=64)

    @field_validator("username", "nickname", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        return _check_password_bytes(value, MAX_PASSWORD_BYTES)


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str) -> str:
        return _check_password_bytes(value, _MAX_LOGIN_PASSWORD_BYTES)


class NicknameRequestDTO(BaseModel):
    nickname: str = Field(min_length=1, max_length=64)

    @field_validator("nickname", mode="before")
    @classmethod
    def strip_nickname(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class MessageDTO(BaseModel):
    success: bool = True
    message: str


class RegisteredUserDTO(BaseModel):
    username: str
    nickname: str
    tag: str


class RegisterResponseDTO(MessageDTO):
    data: RegisteredUserDTO


class LoginResponseDTO(MessageDTO):
    token: str


class ProfileDTO(BaseModel):
    nickname: str
    icon: str | None
    tag: str


class ProfileResponseDTO(BaseModel):
    success: bool = True
    data: ProfileDTO


class IconResponseDTO(MessageDTO):
    profile_icon: str = Field(serialization_alias="profileIcon")
