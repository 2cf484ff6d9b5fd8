from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class MenuItem(BaseModel):
    id: str
    name: str
    category: str
    price: float
    eta_minutes: int
    image_url: str | None = None
    available: bool = True
    admin_id: str
    created_at: datetime


class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    eta_minutes: int = Field(default=10, ge=0)
    image_url: str | None = None
    available: bool = True


class MenuItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    eta_minutes: int | None = Field(default=None, ge=0)
    image_url: str | None = None
    available: bool | None = None


class SeedResponse(BaseModel):
    admin_id: str
    inserted: int
    already_seeded: bool
    categories: list[str] = Field(default_factory=list)
