import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET_KEY = "fitfeed-dev-secret-change-in-production"


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues.

    SQLite is for local development only. Set DATABASE_URL to a PostgreSQL
    connection string for deployments.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "fitfeed.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.warning(f"Using SQLite database (LOCAL DEV ONLY): {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    auth_secret_key: str = Field(default=DEV_SECRET_KEY, validation_alias="JWT_SECRET")
    auth_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    auth_token_expire_days: int = Field(default=7, validation_alias="JWT_EXPIRE_DAYS")
    cors_origin: str = Field(default="http://localhost:3000", validation_alias="CORS_ORIGIN")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    seed_exercises: bool = Field(
        default=True,
        validation_alias="SEED_EXERCISES",
        description="Insert the default exercise catalog on startup",
    )
    host: str = Field(default="0.0.0.0", validation_alias="HOST")  # noqa: S104
    port: int = Field(default=3001, validation_alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("auth_secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Warn when tokens are signed with the built-in development secret."""
        if not value or value == DEV_SECRET_KEY:
            logger.warning("JWT_SECRET is not set. Tokens are signed with the development secret.")
            return value or DEV_SECRET_KEY
        return value

    @field_validator("auth_token_expire_days")
    @classmethod
    def validate_expire_days(cls, value: int) -> int:
        if value < 1:
            raise ValueError("JWT_EXPIRE_DAYS must be at least 1")
        return value


settings = Settings()
