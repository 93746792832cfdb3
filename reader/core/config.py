"""Application configuration from environment."""
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Scripture Reader"
    debug: bool = False

    # Server (python -m reader)
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    # Database: DATABASE_URL wins; else DB_* parts build a Postgres URL; else local SQLite
    database_url: str | None = None
    db_host: str | None = None
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = ""
    db_name: str = "reader"

    create_tables_on_startup: bool = True
    seed_on_startup: bool = True

    # JWT bearer tokens
    secret_key: str = "change-me-in-production-use-env"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days

    # Password hashing
    bcrypt_rounds: int = 10

    # Logging
    log_level: str = "INFO"
    log_format: str = "simple"  # simple | detailed

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        if self.db_host:
            url = URL.create(
                "postgresql+asyncpg",
                username=self.db_user,
                password=self.db_password or None,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
            )
            return url.render_as_string(hide_password=False)
        return "sqlite+aiosqlite:///./reader.db"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Package directory (bundled book documents live under data/)
BASE_DIR = Path(__file__).resolve().parent.parent
