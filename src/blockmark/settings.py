from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_int(name: str, default: int, min_val: int | None = None) -> int:
    """Get integer from environment with optional minimum enforcement."""
    val = int(os.environ.get(name, str(default)))
    if min_val is not None and val < min_val:
        return min_val
    return val


def _env_path(name: str) -> Path | None:
    raw = os.environ.get(name)
    return Path(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    """Static settings, read from the environment once at import."""

    log_level: str = os.environ.get("BLOCKMARK_LOG_LEVEL", "INFO")
    # Optional rotating log file; logs go to stderr only when unset.
    log_path: Path | None = _env_path("BLOCKMARK_LOG_PATH")
    log_max_bytes: int = _env_int("BLOCKMARK_LOG_MAX_BYTES", 1_000_000)
    log_backup_count: int = _env_int("BLOCKMARK_LOG_BACKUP_COUNT", 3)

    # Upper bound on Markdown / serialized block input accepted by the service.
    max_input_chars: int = _env_int("BLOCKMARK_MAX_INPUT_CHARS", 1_000_000, min_val=1024)


settings = Settings()
