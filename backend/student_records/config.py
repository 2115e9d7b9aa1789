"""Application settings and validation."""

import os
from pathlib import Path
from typing import List

BASE = Path(__file__).resolve().parent.parent


def _get_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    ENV: str
    DATABASE_URL: str
    CORS_ORIGINS: List[str]
    SEED_DEFAULT_USERS: bool
    LOG_LEVEL: str
    SQL_ECHO: bool
    HOST: str
    PORT: int

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'students.db'}")
        # the React frontend runs on the Vite dev server by default
        origins = os.getenv("CORS_ORIGINS", "http://localhost:5173")
        self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        self.SEED_DEFAULT_USERS = _get_bool("SEED_DEFAULT_USERS", "true")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SQL_ECHO = _get_bool("SQL_ECHO", "false")
        self.HOST = os.getenv("HOST", "127.0.0.1")
        self.PORT = int(os.getenv("PORT", "8080"))
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and "*" in self.CORS_ORIGINS:
            raise RuntimeError("CORS_ORIGINS must list explicit origins in non-dev environments")


settings = Settings()
