import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    env: str
    database_url: str
    log_level: str

    db_max_retries: int
    db_retry_delay: float
    db_max_retry_delay: float
    db_create_schema: bool

    @property
    def is_production(self) -> bool:
        return self.env in ("prod", "production")


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getint(name: str, default: int) -> int:
    raw = _getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name, str(default))
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def load_settings() -> Settings:
    s = Settings(
        env=_getenv("ENV", "development").lower(),
        database_url=_getenv("DATABASE_URL", "sqlite:///projekt.db"),
        log_level=_getenv("LOG_LEVEL", "WARNING").upper(),
        db_max_retries=_getint("DB_MAX_RETRIES", 6),
        db_retry_delay=_getfloat("DB_RETRY_DELAY", 0.5),
        db_max_retry_delay=_getfloat("DB_MAX_RETRY_DELAY", 30.0),
        db_create_schema=_getenv("DB_CREATE_SCHEMA", "1") not in ("0", "false", "no"),
    )
    # Production guardrail: never fall back silently to a local file.
    if s.is_production and not os.environ.get("DATABASE_URL", "").strip():
        raise RuntimeError("DATABASE_URL is required in production.")
    return s
