"""Seed a canteen's menu from the bundled CSV."""
from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from ..config import DEFAULT_SETTINGS
from .models import MenuItemCreate, SeedResponse
from .store import add_item, list_items

logger = logging.getLogger(__name__)

SEED_COLUMNS = ["name", "category", "price", "eta_minutes", "image_url"]


def load_seed_items(path: Path = DEFAULT_SETTINGS.menu_seed_path) -> list[MenuItemCreate]:
    """Read and validate the seed CSV. Rows that don't validate are skipped."""
    if not path.is_file():
        logger.warning("Menu seed file not found: %s", path)
        return []

    df = pd.read_csv(path)
    missing = [c for c in SEED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"seed file {path} is missing columns: {', '.join(missing)}")

    df = df[SEED_COLUMNS].copy()
    df["image_url"] = df["image_url"].astype(object).where(df["image_url"].notna(), None)
    df["eta_minutes"] = pd.to_numeric(df["eta_minutes"], errors="coerce").fillna(10).astype(int)

    items: list[MenuItemCreate] = []
    for row in df.to_dict(orient="records"):
        try:
            items.append(MenuItemCreate(**row, available=True))
        except ValidationError:
            logger.warning("Skipping invalid seed row: %s", row.get("name"))
    return items


def seed_menu(admin_id: str, path: Path = DEFAULT_SETTINGS.menu_seed_path) -> SeedResponse:
    """Insert the seed menu for *admin_id* unless it already has items."""
    if list_items(admin_id=admin_id):
        return SeedResponse(admin_id=admin_id, inserted=0, already_seeded=True)

    items = load_seed_items(path)
    for item in items:
        add_item(admin_id, item)

    categories = list(dict.fromkeys(i.category for i in items))
    logger.info("Seeded %d menu items for admin %s", len(items), admin_id)
    return SeedResponse(
        admin_id=admin_id,
        inserted=len(items),
        already_seeded=False,
        categories=categories,
    )
