import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())

ENV_PREFIX = "TASKLIST"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None or value.strip() == "" else value.strip()


def _env_int(name: str, default: int) -> int:
    try:
        return int(_env(name, str(default)))
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [part for part in raw.replace(",", " ").split() if part]


@dataclass(frozen=True)
class Settings:
    database_url: str
    pool_size: int
    max_overflow: int
    host: str
    port: int
    cors_origins: list[str]
    api_url: str
    log_level: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            database_url=_env(_k("DATABASE_URL"), "sqlite:///tasks.db"),
            pool_size=_env_int(_k("POOL_SIZE"), 5),
            max_overflow=_env_int(_k("MAX_OVERFLOW"), 10),
            host=_env(_k("HOST"), "127.0.0.1"),
            port=_env_int(_k("PORT"), 3000),
            cors_origins=_env_list(_k("CORS_ORIGINS"), ["*"]),
            api_url=_env(_k("API_URL"), "http://localhost:3000/api/tasks"),
            log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
