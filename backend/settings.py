import os
from pathlib import Path

# Basic settings helper to read environment configuration.

def _data_dir() -> Path:
    # Relative to the working directory, not the install location
    return Path(os.getenv("CATALOG_DATA_DIR", "data")).resolve()


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    url = os.getenv("CATALOG_DATABASE_URL")
    if url:
        return url
    # Discrete PostgreSQL settings, used only when no URL is given.
    host = os.getenv("DATABASE_HOST")
    name = os.getenv("DATABASE_NAME")
    if host and name:
        user = os.getenv("DATABASE_USERNAME", "")
        password = os.getenv("DATABASE_PASSWORD", "")
        port = os.getenv("DATABASE_PORT", "5432")
        auth = f"{user}:{password}@" if user else ""
        return f"postgresql://{auth}{host}:{port}/{name}"
    return f"sqlite:///{_data_dir() / 'catalog.db'}"


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL: str = _database_url()
        self.SQL_ECHO: bool = _as_bool(os.getenv("CATALOG_SQL_ECHO"), False)
        self.FLUSH_ON_SHUTDOWN: bool = _as_bool(os.getenv("CATALOG_FLUSH_ON_SHUTDOWN"), True)
        self.LOG_LEVEL: str = os.getenv("CATALOG_LOG_LEVEL", "INFO").upper()


settings = Settings()
