# backend/threadstore/config.py

import os
import re

"""
Centralised application configuration.
Every environment variable is read here so there is a single source of truth.
"""

# --- Helpers ---
def mask_database_url(url: str) -> str:
    """Hide the password part of a database URL (user:password@host)."""
    if not isinstance(url, str):
        return "Not configured"
    return re.sub(r"(://[^:/@]+:)([^@]+)(@)", lambda m: f"{m.group(1)}***{m.group(3)}", url)


# --- Storage ---
# "memory" keeps everything in-process, "relational" uses DATABASE_URL.
STORAGE_TYPE: str = os.getenv("STORAGE_TYPE", "memory").strip().lower()

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///data/threads.db")

# Connection pool (size and overflow apply to PostgreSQL only)
DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "20"))
DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "30"))
DB_POOL_TIMEOUT: int = int(os.getenv("DB_POOL_TIMEOUT", "60"))

# Seconds a SQLite connection waits for another writer before giving up
SQLITE_BUSY_TIMEOUT: float = float(os.getenv("SQLITE_BUSY_TIMEOUT", "30"))

# --- API server ---
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))
PRODUCTION_ORIGIN: str = os.getenv("PRODUCTION_ORIGIN", "")

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


def describe() -> dict:
    """Snapshot of the loaded configuration, safe to log."""
    return {
        "storage_type": STORAGE_TYPE,
        "database_url": mask_database_url(DATABASE_URL),
        "log_level": LOG_LEVEL,
        "environment": ENVIRONMENT,
        "api": f"{API_HOST}:{API_PORT}",
    }
