from __future__ import annotations

import os

_POOL_DEFAULTS = {
    "DB_POOL_SIZE": 10,
    "DB_MAX_OVERFLOW": 20,
    "DB_POOL_RECYCLE": 3600,
}


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def pool_settings() -> dict[str, int]:
    """Connection pool keyword arguments for create_engine()."""
    values: dict[str, int] = {}
    for name, default in _POOL_DEFAULTS.items():
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            values[name] = default
            continue
        try:
            values[name] = int(raw)
        except ValueError:
            raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
        if values[name] < 0:
            raise RuntimeError(f"{name} cannot be negative")

    return {
        "pool_size": values["DB_POOL_SIZE"],
        "max_overflow": values["DB_MAX_OVERFLOW"],
        "pool_recycle": values["DB_POOL_RECYCLE"],
    }
