# settings.py
# Runtime configuration read from GAME2048_* environment variables.

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional
import os

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent / "static"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def _env_log_level() -> str:
    level = os.getenv("GAME2048_LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"GAME2048_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 8080
    rate_limit: str = "100/minute"
    rate_limit_enabled: bool = True
    static_dir: Path = DEFAULT_STATIC_DIR
    log_level: str = "INFO"
    seed: Optional[int] = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Builds the settings once per process from the environment."""
    return Settings(
        host=os.getenv("GAME2048_HOST", "127.0.0.1"),
        port=int(os.getenv("GAME2048_PORT", "8080")),
        rate_limit=os.getenv("GAME2048_RATE_LIMIT", "100/minute"),
        rate_limit_enabled=_env_flag("GAME2048_RATE_LIMIT_ENABLED", True),
        static_dir=Path(os.getenv("GAME2048_STATIC_DIR", str(DEFAULT_STATIC_DIR))),
        log_level=_env_log_level(),
        seed=_env_int("GAME2048_SEED"),
    )
