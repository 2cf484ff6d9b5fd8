from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CANTEEN = "A"


def _to_number(value: Any) -> float:
    """Coerce a loosely typed quantity to a float; anything unusable is 0."""
    if not value:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def _read(item: Any, *names: str) -> Any:
    """Return the first present field from a mapping or attribute-style record."""
    for name in names:
        if isinstance(item, Mapping):
            value = item.get(name)
        else:
            value = getattr(item, name, None)
        if value is not None:
            return value
    return None


class MenuItemRecord(BaseModel):
    """Input record for wait estimation.

    Defaulting rules:
    - ``prep_time``: minutes; missing, falsy or non-numeric -> 0
    - ``pending_orders``: count; missing, falsy or non-numeric -> 0
    - ``canteen``: missing or empty -> ``"A"``

    The camelCase names (``prepTime``, ``pendingOrders``) are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    name: str | None = None
    prep_time: float = Field(default=0.0, alias="prepTime")
    pending_orders: float = Field(default=0.0, alias="pendingOrders")
    canteen: str = DEFAULT_CANTEEN

    @field_validator("prep_time", "pending_orders", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return _to_number(value)

    @field_validator("canteen", mode="before")
    @classmethod
    def _default_canteen(cls, value: Any) -> str:
        return str(value) if value else DEFAULT_CANTEEN

    @classmethod
    def from_record(cls, item: Any) -> MenuItemRecord:
        if isinstance(item, cls):
            return item
        raw_id = _read(item, "id")
        raw_name = _read(item, "name")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            name=str(raw_name) if raw_name is not None else None,
            prep_time=_read(item, "prep_time", "prepTime"),
            pending_orders=_read(item, "pending_orders", "pendingOrders"),
            canteen=_read(item, "canteen"),
        )


@dataclass(frozen=True)
class ScoredItem:
    item: Any
    score: float


@dataclass(frozen=True)
class CanteenAggregate:
    canteen: str
    avg_score: float


# ── API models ───────────────────────────────────────────────────────────


class ScoreRequest(BaseModel):
    items: list[dict[str, Any]] = Field(default_factory=list)
    penalty: float = 1.0


class ScoredItemOut(BaseModel):
    item: dict[str, Any]
    score: float


class CanteenAggregateOut(BaseModel):
    canteen: str
    avg_score: float


class ScoreResponse(BaseModel):
    scores: list[float]
    recommended_item: ScoredItemOut | None = None
    recommended_canteen: CanteenAggregateOut | None = None
