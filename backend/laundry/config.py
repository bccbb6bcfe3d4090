"""
Runtime configuration for the laundry service.

Every setting is read from the environment once, at import time, so
variables must be exported before the application is imported.
"""

import os


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# ──────────────────────────────────────────────────────────────
# Database
# ──────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./laundry.db")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "0"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))

# ──────────────────────────────────────────────────────────────
# Logging
# ──────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ──────────────────────────────────────────────────────────────
# Behaviour switches
# ──────────────────────────────────────────────────────────────
# Record + detail rows written in one transaction instead of two commits
ATOMIC_SUBMISSIONS = _flag("ATOMIC_SUBMISSIONS")
# Accept floor_no / page_no of 0 on registration (rejected as missing otherwise)
REGISTRATION_ALLOW_ZERO = _flag("REGISTRATION_ALLOW_ZERO")

# ──────────────────────────────────────────────────────────────
# HTTP
# ──────────────────────────────────────────────────────────────
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
PORT = int(os.getenv("PORT", "5000"))
