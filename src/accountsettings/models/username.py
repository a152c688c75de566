"""Typed responses for the ``me/username`` endpoints.

Both endpoints return a small acknowledgement object. Models keep the raw
decoded payload for forward compatibility.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UsernameValidation(BaseModel):
    """Response from ``GET me/username/validate/{username}``."""

    model_config = ConfigDict(frozen=True)

    username: str
    success: bool = False
    raw: dict[str, Any] = Field(default_factory=dict)


class UsernameChange(BaseModel):
    """Response from ``POST me/username``."""

    model_config = ConfigDict(frozen=True)

    username: str
    action: str
    success: bool = False
    raw: dict[str, Any] = Field(default_factory=dict)
