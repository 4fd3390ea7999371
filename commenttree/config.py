"""Application configuration."""

import os
from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)
from sqlalchemy.engine import URL

DEFAULT_CONFIG_PATH = "config/local.yaml"


class ServerSettings(BaseModel):
    """HTTP listener configuration."""

    host: str = "localhost"
    port: int = 8080


class RuntimeSettings(BaseModel):
    """Runtime mode.

    debug: SQL echo and FastAPI debug pages
    release: production defaults
    test: used by the test suite
    """

    mode: Literal["debug", "release", "test"] = "debug"


class PostgresSettings(BaseModel):
    """Connection parameters for a single PostgreSQL node."""

    host: str = "localhost"
    port: int = 5432
    user: str = "comments"
    password: str = "comments"
    db_name: str = "comments"
    ssl_mode: str = "disable"

    @property
    def url(self) -> URL:
        """SQLAlchemy URL for the asyncpg driver."""
        return URL.create(
            "postgresql+asyncpg",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.db_name,
            query={"ssl": self.ssl_mode},
        )


class DatabaseSettings(BaseModel):
    """Database configuration.

    Writes always go to ``postgres``; reads are spread over ``replicas``
    when any are configured.
    """

    postgres: PostgresSettings = PostgresSettings()
    replicas: list[PostgresSettings] = []
    max_open_conns: int = 10
    max_idle_conns: int = 5
    conn_max_lifetime: timedelta = timedelta(minutes=5)


class RetrySettings(BaseModel):
    """Retry strategy for store operations.

    The first retry waits ``delay`` seconds, each following one waits
    ``backoff`` times longer than the previous.
    """

    attempts: int = 3
    delay: float = 1.0
    backoff: float = 2.0


class LoggerSettings(BaseModel):
    """Logging configuration."""

    level: Literal["debug", "info", "warning", "error"] = "info"


class RedisSettings(BaseModel):
    """Redis connection parameters (accepted for config compatibility)."""

    host: str = "localhost"
    port: int = 6379
    password: str = ""
    db: int = 0


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Values are read from, in order of precedence:

        1. keyword arguments
        2. environment variables (nested with ``__``, e.g. DB__POSTGRES__HOST)
        3. the ``.env`` file
        4. the YAML document at $CONFIG_PATH (default: config/local.yaml)

    The secrets POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_DB and
    REDIS_PASSWORD always win over file values when present in the
    environment.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerSettings = ServerSettings()
    runtime: RuntimeSettings = RuntimeSettings()
    db: DatabaseSettings = DatabaseSettings()
    retry_strategy: RetrySettings = RetrySettings()
    logger: LoggerSettings = LoggerSettings()
    redis: RedisSettings = RedisSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML config document below env and dotenv."""
        yaml_settings = YamlConfigSettingsSource(
            settings_cls,
            yaml_file=os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH),
        )
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    @model_validator(mode="after")
    def apply_secret_overrides(self) -> "Settings":
        """Apply secrets that are provided as plain environment variables."""
        postgres = self.db.postgres
        if user := os.environ.get("POSTGRES_USER"):
            postgres.user = user
        if password := os.environ.get("POSTGRES_PASSWORD"):
            postgres.password = password
        if db_name := os.environ.get("POSTGRES_DB"):
            postgres.db_name = db_name
        if redis_password := os.environ.get("REDIS_PASSWORD"):
            self.redis.password = redis_password
        return self

    @property
    def debug(self) -> bool:
        """Whether the service runs in debug mode."""
        return self.runtime.mode == "debug"
