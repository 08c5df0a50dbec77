from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_STATIONS_SOURCE_URL = (
    "https://data.go.th/dataset/9bccd66e-8b14-414d-93d5-da044569350c/resource/"
    "70e1ac97-edfe-4751-8965-6bbe16fb21b4/download/data_station.json"
)


def _get_env(name: str, default: str | None = None) -> str:
    value = os.getenv(name, default)
    if value is None:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def postgres_dsn() -> str:
    host = _get_env("POSTGRES_HOST", "localhost")
    port = _get_env("POSTGRES_PORT", "5432")
    database = _get_env("POSTGRES_DB", "stations")
    user = _get_env("POSTGRES_USER", "stations")
    password = _get_env("POSTGRES_PASSWORD", "stations")

    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


def database_url() -> str:
    return async_driver_url(os.getenv("DATABASE_URL") or postgres_dsn())


def async_driver_url(url: str) -> str:
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix) :]
    return url


def api_key() -> str:
    return _get_env("API_KEY")


def stations_source_url() -> str:
    return _get_env("STATIONS_SOURCE_URL", DEFAULT_STATIONS_SOURCE_URL)


def source_timeout_seconds() -> float:
    return float(_get_env("SOURCE_TIMEOUT_SECONDS", "30"))


def db_pool_size() -> int:
    return int(_get_env("DB_POOL_SIZE", "5"))


def db_max_overflow() -> int:
    return int(_get_env("DB_MAX_OVERFLOW", "5"))


def cors_origins() -> list[str]:
    raw = _get_env("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return _get_env("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class Settings:
    database_url: str
    api_key: str
    stations_source_url: str = DEFAULT_STATIONS_SOURCE_URL
    source_timeout_seconds: float = 30.0
    db_pool_size: int = 5
    db_max_overflow: int = 5
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            database_url=database_url(),
            api_key=api_key(),
            stations_source_url=stations_source_url(),
            source_timeout_seconds=source_timeout_seconds(),
            db_pool_size=db_pool_size(),
            db_max_overflow=db_max_overflow(),
            cors_origins=tuple(cors_origins()),
            log_level=log_level(),
        )


def server_host() -> str:
    return _get_env("HOST", "0.0.0.0")


def server_port() -> int:
    return int(_get_env("PORT", "3000"))
