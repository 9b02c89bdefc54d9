"""Data contracts for token endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_UID = 2**32 - 1
MAX_CHANNEL_NAME_BYTES = 64


class TokenRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    channel_name: str = Field(
        ...,
        alias="channelName",
        min_length=1,
        description="Channel to join",
    )
    uid: int = Field(..., ge=0, le=MAX_UID, description="Participant identifier within the channel")

    @field_validator("channel_name")
    @classmethod
    def _limit_channel_bytes(cls, value: str) -> str:
        """Agora caps channel names at 64 bytes of UTF-8."""

        if len(value.encode("utf-8")) > MAX_CHANNEL_NAME_BYTES:
            raise ValueError(f"channelName must be at most {MAX_CHANNEL_NAME_BYTES} bytes")
        return value

    @field_validator("uid", mode="before")
    @classmethod
    def _reject_bool_uid(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("uid must be an integer, not a boolean")
        return value


class TokenResponse(BaseModel):
    token: str = Field(..., min_length=1, description="Agora RTC access token")


class ErrorResponse(BaseModel):
    detail: str
    errors: list[dict[str, Any]] | None = None
