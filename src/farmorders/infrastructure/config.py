"""Runtime configuration.

Read once from the environment by the composition root and passed down
explicitly; nothing else in the codebase looks at ``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta

from farmorders.domain.model.reservation import DEFAULT_RESERVATION_TTL

ENV_PREFIX = "FARMORDERS_"
DEFAULT_DATABASE_URL = "sqlite:///farmorders.db"
LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    reservation_ttl: timedelta = DEFAULT_RESERVATION_TTL
    sweep_interval_seconds: float = 60.0
    sweep_batch_size: int = 100
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value.strip() if value and value.strip() else None

        database_url = get("DATABASE_URL") or env.get("DATABASE_URL") or DEFAULT_DATABASE_URL

        ttl_minutes = _parse_positive(get("RESERVATION_TTL_MINUTES"), "RESERVATION_TTL_MINUTES", float)
        interval = _parse_positive(get("SWEEP_INTERVAL_SECONDS"), "SWEEP_INTERVAL_SECONDS", float)
        batch_size = _parse_positive(get("SWEEP_BATCH_SIZE"), "SWEEP_BATCH_SIZE", int)

        log_level = (get("LOG_LEVEL") or cls.log_level).upper()
        log_format = (get("LOG_FORMAT") or cls.log_format).lower()
        if log_format not in LOG_FORMATS:
            raise ValueError(
                f"{ENV_PREFIX}LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
            )

        return cls(
            database_url=database_url,
            reservation_ttl=(
                timedelta(minutes=ttl_minutes) if ttl_minutes is not None else DEFAULT_RESERVATION_TTL
            ),
            sweep_interval_seconds=interval if interval is not None else cls.sweep_interval_seconds,
            sweep_batch_size=batch_size if batch_size is not None else cls.sweep_batch_size,
            log_level=log_level,
            log_format=log_format,
        )


def _parse_positive(raw: str | None, name: str, kind):
    if raw is None:
        return None
    try:
        value = kind(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value
