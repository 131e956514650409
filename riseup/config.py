"""Environment-driven settings.

Variables are read once at import time. If a `.env` file exists (path
overridable via `RISEUP_DOTENV`) it is loaded first, so the CLI and the API
stay pointed at the same database without extra flags.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

_ = load_dotenv(dotenv_path=os.getenv("RISEUP_DOTENV", ".env"))


@dataclass(frozen=True)
class Settings:
    database_url: str
    db_echo: bool
    db_pool_size: int
    db_max_overflow: int
    admin_token: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=(
                os.getenv("RISEUP_DATABASE_URL")
                or os.getenv("DATABASE_URL")
                or "sqlite:///./riseup.db"
            ),
            db_echo=os.getenv("RISEUP_DB_ECHO", "0") == "1",
            db_pool_size=int(os.getenv("RISEUP_DB_POOL_SIZE", "5")),
            db_max_overflow=int(os.getenv("RISEUP_DB_MAX_OVERFLOW", "10")),
            admin_token=os.getenv("RISEUP_ADMIN_TOKEN", ""),
            log_level=os.getenv("RISEUP_LOG_LEVEL", "INFO").upper(),
        )


SETTINGS = Settings.from_env()
