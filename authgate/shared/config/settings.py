# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///authgate.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG


class SecurityConfig(BaseSettings):
    cookie_name: str = Field("token", min_length=1, alias="COOKIE_NAME")
    cookie_secure: bool = Field(True, alias="COOKIE_SECURE")

    token_issuer: str = Field("authgate", min_length=1, alias="TOKEN_ISSUER")
    token_ttl_hours: int = Field(72, ge=1, alias="TOKEN_TTL_HOURS")

    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


class PasswordHashingConfig(BaseSettings):
    # memory_cost is in KiB
    memory_cost: int = Field(12288, ge=8, alias="ARGON2_MEMORY_COST")
    time_cost: int = Field(3, ge=1, alias="ARGON2_TIME_COST")
    parallelism: int = Field(1, ge=1, alias="ARGON2_PARALLELISM")
    salt_length: int = Field(16, ge=8, alias="ARGON2_SALT_LENGTH")
    key_length: int = Field(32, ge=4, alias="ARGON2_KEY_LENGTH")

    model_config = _SECTION_CONFIG

    @model_validator(mode="after")
    def _check_memory_per_lane(self) -> "PasswordHashingConfig":
        if self.memory_cost < 8 * self.parallelism:
            raise ValueError("ARGON2_MEMORY_COST must be at least 8 KiB per lane")
        return self


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _password_hashing_config_factory() -> PasswordHashingConfig:
    return PasswordHashingConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    jwt_secret: str | None = Field(None, alias="JWT_SECRET")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    # empty: stderr only
    log_file: str = Field("", alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    password_hashing: PasswordHashingConfig = Field(
        default_factory=_password_hashing_config_factory
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        warnings = []
        if not self.security.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")
        if self.jwt_secret and len(self.jwt_secret) < 32:
            warnings.append("⚠️  JWT_SECRET is shorter than 32 characters")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "PasswordHashingConfig",
    "SecurityConfig",
    "load_config",
]
