from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Any

from .models import MenuItem, MenuItemCreate

logger = logging.getLogger(__name__)

_items: list[MenuItem] = []  # newest first
_lock = threading.Lock()


def _index_of(item_id: str) -> int:
    for i, item in enumerate(_items):
        if item.id == item_id:
            return i
    raise KeyError(item_id)


def add_item(admin_id: str, data: MenuItemCreate) -> MenuItem:
    item = MenuItem(
        id=uuid.uuid4().hex[:12],
        admin_id=admin_id,
        created_at=datetime.now(),
        **data.model_dump(),
    )
    with _lock:
        _items.insert(0, item)
    logger.info("Added menu item %s (%s) for admin %s", item.id, item.name, admin_id)
    return item


def get_item(item_id: str) -> MenuItem:
    with _lock:
        return _items[_index_of(item_id)]


def list_items(admin_id: str | None = None, available_only: bool = False) -> list[MenuItem]:
    with _lock:
        items = list(_items)
    if admin_id is not None:
        items = [i for i in items if i.admin_id == admin_id]
    if available_only:
        items = [i for i in items if i.available]
    return items


def update_item(item_id: str, updates: dict[str, Any]) -> MenuItem:
    with _lock:
        idx = _index_of(item_id)
        updated = _items[idx].model_copy(update=updates)
        _items[idx] = updated
    logger.debug("Updated menu item %s: %s", item_id, sorted(updates))
    return updated


def toggle_availability(item_id: str) -> MenuItem:
    with _lock:
        idx = _index_of(item_id)
        current = _items[idx]
        updated = current.model_copy(update={"available": not current.available})
        _items[idx] = updated
    return updated


def delete_item(item_id: str) -> None:
    with _lock:
        del _items[_index_of(item_id)]
    logger.info("Deleted menu item %s", item_id)


def clear_menu() -> None:
    with _lock:
        _items.clear()
