"""
Runtime settings for the Campus Grab service.

Values come from the process environment; a ``.env`` file in the project
root is loaded first so local runs don't need exported variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent / "data"


@dataclass(frozen=True)
class Settings:
    session_secret: str = os.getenv("SESSION_SECRET", "campus-grab-secret-change-in-production")
    wait_penalty: float = float(os.getenv("WAIT_PENALTY", "1.0"))
    menu_seed_path: Path = Path(os.getenv("MENU_SEED_PATH", str(_DATA_DIR / "menu_seed.csv")))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


DEFAULT_SETTINGS = Settings()
