"""Application settings loaded from the environment."""

from typing import Optional

from pydantic import Field, PostgresDsn, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from finshare.core.config.enums import Environment


class Settings(BaseSettings):
    """Finshare settings.

    Values are read from environment variables (and an optional ``.env`` file).
    Unknown variables are ignored so the backend can share an env file with
    other services.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENVIRONMENT: Environment = Environment.LOCAL
    LOG_LEVEL: str = "INFO"

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "finshare"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "finshare"
    POSTGRES_SSLMODE: Optional[str] = None

    db_pool_size: int = Field(default=20, ge=1)
    db_pool_max_overflow: int = Field(default=40, ge=0)

    # Legacy grants may carry a scope value that is not a JSON array. True keeps
    # the historical behavior of treating it as "no restriction"; False treats
    # it as a scope that matches nothing.
    SHARING_SCOPE_FAIL_OPEN: bool = True
    SHARING_MAX_SCOPE_TOKENS: int = Field(default=500, ge=1)

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case the log level so ``debug`` and ``DEBUG`` both work."""
        return value.strip().upper()

    @computed_field  # type: ignore[misc]
    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:
        """Async database URI built from the POSTGRES_* parts."""
        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD or None,
                host=self.POSTGRES_HOST,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    @property
    def is_local(self) -> bool:
        """Whether the backend runs on a developer machine."""
        return self.ENVIRONMENT == Environment.LOCAL
