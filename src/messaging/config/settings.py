from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase


class Settings(BaseSettings):
    """
    Messaging read-layer settings loaded from the environment (or a `.env` file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration
    POSTGRES_DRIVER: str = "asyncpg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "messaging"

    # Full URL override (e.g. sqlite+aiosqlite:///./messaging.db for local runs)
    DATABASE_URL: str | None = None

    # SQLAlchemy engine / store client
    SQLALCHEMY_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: float = 30.0
    # Seconds; forwarded to the DB driver. None leaves the driver default in place.
    DB_COMMAND_TIMEOUT: float | None = None

    # Messaging driver
    MESSAGING_DRIVER: str = "sqlalchemy"
    # role -> dotted path, e.g. {"conversation": "myapp.models.Thread"}
    ENTITY_MAPPING: dict[str, str] = {}
    DEFAULT_PAGE_SIZE: int = 20

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/messaging")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def database_url(self) -> str:
        """
        Return the connection URL: the explicit DATABASE_URL when set, otherwise
        a Postgres URL assembled from the POSTGRES_* fields.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before Literal validation runs, so
        `LOG_LEVEL=debug` in the environment is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    @field_validator("MESSAGING_DRIVER", mode="before")
    def normalize_driver_name(cls, v: str | None) -> str | None:
        return to_lowercase(v)

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so it is cached.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
