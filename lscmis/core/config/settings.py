# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Environment-driven configuration for the lscmis service.

Each concern reads its own prefix: DB_* for the relational store,
IDENTITY_* for the credential backend, APPLICATION_CODE_* for the
registration code draw and CORS_* for browser clients. Top-level
ENVIRONMENT, DEBUG and LOG_LEVEL come from the process or a .env file.

Example:
    >>> from lscmis.core.config.settings import get_settings
    >>> get_settings().application_code.max_attempts
    15
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVICE_ROLE_KEY = "change-this-service-role-key"


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection and pool sizing.

    Attributes:
        user: Role the service connects as.
        password: Password for that role.
        host: Server host name.
        port: Server port.
        database: Database holding the centers schema.
        pool_size: Persistent connections kept by the engine.
        max_overflow: Extra connections allowed under load.
    """

    model_config = SettingsConfigDict(env_prefix="DB_", extra="ignore")

    user: str = "lscmis"
    password: SecretStr = SecretStr("lscmis_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "lscmis"
    pool_size: int = 10
    max_overflow: int = 20

    @property
    def url(self) -> str:
        """asyncpg URL used by the engine and by alembic."""
        secret = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{secret}@{self.host}:{self.port}/{self.database}"


class IdentitySettings(BaseSettings):
    """Identity provider configuration.

    The "database" backend keeps bcrypt-hashed credentials in the
    relational store. The "gotrue" backend talks to a GoTrue-compatible
    admin API using a service role key.

    Attributes:
        backend: Which identity backend to use.
        url: Base URL of the GoTrue server.
        service_role_key: Service role key sent as bearer token.
        timeout: Request timeout in seconds.
        password_min_length: Minimum accepted password length.
        bcrypt_rounds: Cost factor for the database backend.
    """

    model_config = SettingsConfigDict(env_prefix="IDENTITY_", extra="ignore")

    backend: Literal["database", "gotrue"] = "database"
    url: str = "http://localhost:9999"
    service_role_key: SecretStr = SecretStr(DEFAULT_SERVICE_ROLE_KEY)
    timeout: float = 10.0
    password_min_length: int = 6
    bcrypt_rounds: int = 12


class ApplicationCodeSettings(BaseSettings):
    """Application code generation configuration.

    Candidates are drawn from [range_start, range_end) and offset by the
    current number of centers.

    Attributes:
        range_start: Inclusive lower bound of the random draw.
        range_end: Exclusive upper bound of the random draw.
        max_attempts: Collision retries before giving up.
    """

    model_config = SettingsConfigDict(env_prefix="APPLICATION_CODE_", extra="ignore")

    range_start: int = 10000
    range_end: int = 90000
    max_attempts: int = 15

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        """Reject empty ranges and non-positive attempt counts."""
        if self.range_end <= self.range_start:
            raise ValueError("APPLICATION_CODE_RANGE_END must exceed APPLICATION_CODE_RANGE_START")
        if self.max_attempts < 1:
            raise ValueError("APPLICATION_CODE_MAX_ATTEMPTS must be at least 1")
        return self


class CORSSettings(BaseSettings):
    """Browser origins allowed to call the admin and public routes."""

    model_config = SettingsConfigDict(env_prefix="CORS_", extra="ignore")

    origins: str = "http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """CORS_ORIGINS split on commas, blanks dropped."""
        return [entry.strip() for entry in self.origins.split(",") if entry.strip()]


class Settings(BaseSettings):
    """Root settings object handed to the app factory.

    Attributes:
        environment: development, staging or production.
        debug: Exposes the OpenAPI docs and console log rendering.
        log_level: Level for the lscmis loggers.
        db: Relational store settings.
        identity: Identity provider settings.
        application_code: Registration code settings.
        cors: CORS settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    identity: IdentitySettings = Field(default_factory=IdentitySettings)
    application_code: ApplicationCodeSettings = Field(default_factory=ApplicationCodeSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Refuse to start production against GoTrue with the placeholder key."""
        if (
            self.is_production
            and self.identity.backend == "gotrue"
            and self.identity.service_role_key.get_secret_value() == DEFAULT_SERVICE_ROLE_KEY
        ):
            raise ValueError(
                "Identity service role key must be changed from default in production. "
                "Set IDENTITY_SERVICE_ROLE_KEY environment variable."
            )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
