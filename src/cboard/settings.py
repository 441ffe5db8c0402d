# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

# Anchor the default seed path to the project root, not the working directory.
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_SEED_PATH = BASE_DIR / "data" / "board.yml"


def _flag(value: str) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    secret_key: str = ""
    cookie_name: str = "cboard_session"
    cookie_secure: bool = False
    session_max_age: int = 28800  # seconds, 8 hours; 0 disables expiry
    seed_path: Path = DEFAULT_SEED_PATH
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"

    @property
    def session_ttl(self) -> Optional[timedelta]:
        if self.session_max_age <= 0:
            return None
        return timedelta(seconds=self.session_max_age)

    def cookie_settings(self) -> dict:
        return {"httponly": True, "samesite": "lax", "secure": self.cookie_secure}

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            secret_key=os.getenv("CBOARD_SECRET_KEY") or os.getenv("SECRET_KEY") or "",
            cookie_name=os.getenv("CBOARD_COOKIE_NAME", "cboard_session"),
            cookie_secure=_flag(os.getenv("CBOARD_COOKIE_SECURE", "false")),
            session_max_age=int(os.getenv("CBOARD_SESSION_MAX_AGE", "28800")),
            seed_path=Path(os.getenv("CBOARD_SEED_PATH", str(DEFAULT_SEED_PATH))).resolve(),
            host=os.getenv("CBOARD_HOST", "0.0.0.0"),
            port=int(os.getenv("CBOARD_PORT", "8000")),
            reload=_flag(os.getenv("CBOARD_RELOAD", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
