from __future__ import annotations

from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _seed_users() -> None:
    """Pre-seed demo students and canteen admins on import."""
    _users["student"] = {
        "id": "stu1",
        "name": "Demo Student",
        "password_hash": _hash_password("student123"),
        "role": "student",
    }
    _users["student2"] = {
        "id": "stu2",
        "name": "Second Student",
        "password_hash": _hash_password("student123"),
        "role": "student",
    }
    _users["admin"] = {
        "id": "admin1",
        "name": "Canteen Admin",
        "password_hash": _hash_password("admin123"),
        "role": "admin",
        "canteen_name": "Bunk Spot",
    }
    _users["admin2"] = {
        "id": "admin2",
        "name": "Main Canteen Admin",
        "password_hash": _hash_password("admin123"),
        "role": "admin",
        "canteen_name": "Main Canteen",
    }


def _public(username: str, record: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in record.items() if k != "password_hash"} | {"username": username}


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the user without its password hash, or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return _public(username, record)
    return None


def list_canteens() -> list[dict[str, str]]:
    """Every canteen admin is one canteen."""
    return [
        {"admin_id": u["id"], "canteen_name": u["canteen_name"]}
        for u in _users.values()
        if u["role"] == "admin"
    ]


def canteen_name(admin_id: str | None) -> str:
    """Display name of the canteen run by *admin_id*; unknown ids fall back to the id."""
    for canteen in list_canteens():
        if canteen["admin_id"] == admin_id:
            return canteen["canteen_name"]
    return admin_id or "A"


_seed_users()
