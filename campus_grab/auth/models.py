from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CanteenAdmin(BaseModel):
    """The signed-in admin and the canteen they run."""

    admin_id: str
    name: str
    canteen_name: str
