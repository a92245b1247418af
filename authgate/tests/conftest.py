from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from authgate.application.services.password_hashing import Argon2PasswordHasher
from authgate.application.services.tokens import TokenService
from authgate.shared.config import (
    AppConfig,
    DatabaseConfig,
    PasswordHashingConfig,
    SecurityConfig,
)

from .helpers import FAST_PARAMS, TEST_SECRET, CountingDerive


@pytest.fixture()
def hasher() -> Argon2PasswordHasher:
    return Argon2PasswordHasher(FAST_PARAMS)


@pytest.fixture()
def counting_derive() -> CountingDerive:
    return CountingDerive()


@pytest.fixture()
def token_service() -> TokenService:
    return TokenService(TEST_SECRET, issuer="authgate", ttl=timedelta(hours=72))


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        JWT_SECRET=TEST_SECRET,
        LOG_LEVEL="WARNING",
        LOG_FILE="",
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'authgate.db'}"),
        security=SecurityConfig(COOKIE_NAME="token", COOKIE_SECURE=True),
        password_hashing=PasswordHashingConfig(
            ARGON2_MEMORY_COST=FAST_PARAMS.memory_cost,
            ARGON2_TIME_COST=FAST_PARAMS.time_cost,
            ARGON2_PARALLELISM=FAST_PARAMS.parallelism,
            ARGON2_SALT_LENGTH=FAST_PARAMS.salt_length,
            ARGON2_KEY_LENGTH=FAST_PARAMS.key_length,
        ),
    )
