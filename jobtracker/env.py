import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_DB_PATH = "jobSearchTracker.db"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_MAX_PROMPT_CHARS = 12000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env() -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read from the environment."""

    openai_api_key: Optional[str] = None
    db_path: Path = Path(DEFAULT_DB_PATH)
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    model: str = DEFAULT_MODEL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    max_prompt_chars: int = DEFAULT_MAX_PROMPT_CHARS

    @classmethod
    def from_env(cls) -> "Settings":
        api_key = os.getenv("OPENAI_API_KEY", "").strip() or None
        log_level = os.getenv("JOBTRACKER_LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"JOBTRACKER_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
        return cls(
            openai_api_key=api_key,
            db_path=Path(os.getenv("JOBTRACKER_DB", DEFAULT_DB_PATH)),
            log_level=log_level,
            log_dir=Path(os.getenv("JOBTRACKER_LOG_DIR", "logs")),
            model=os.getenv("JOBTRACKER_MODEL", DEFAULT_MODEL),
            http_timeout=_float_env("JOBTRACKER_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            max_prompt_chars=_int_env("JOBTRACKER_MAX_PROMPT_CHARS", DEFAULT_MAX_PROMPT_CHARS),
        )


def require_api_key(settings: Settings) -> str:
    """Return the extraction-service credential or raise ConfigError."""
    if not settings.openai_api_key:
        raise ConfigError("OPENAI_API_KEY not set. Add it to your environment or .env file.")
    return settings.openai_api_key
