from __future__ import annotations

from fastapi import HTTPException, Request

from .models import CanteenAdmin
from .users import canteen_name


def get_current_user(request: Request) -> dict | None:
    """Return the signed-in user from the session, or ``None``.

    Sessions without a user id (stale or hand-built cookies) count as signed out,
    since carts, orders and menus are all keyed by that id.
    """
    user = request.session.get("user")
    if not user or not user.get("id"):
        return None
    return user


def require_user(request: Request) -> dict:
    """Raise 401 unless a student or admin is signed in."""
    user = get_current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(request: Request) -> CanteenAdmin:
    """Resolve the canteen admin behind the session.

    Raises 401 if nobody is signed in and 403 for students. Admin routes take
    this as a dependency, so menu and order state scoped to a canteen is
    never read before the admin is resolved.
    """
    user = require_user(request)
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return CanteenAdmin(
        admin_id=user["id"],
        name=user.get("name") or user["id"],
        canteen_name=canteen_name(user["id"]),
    )
