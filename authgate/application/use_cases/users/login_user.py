# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authgate.domain.users.entities import HashValidationResult, User
from authgate.domain.users.exceptions import InvalidCredentialsError
from authgate.domain.users.repositories import PasswordHasher, UserRepository
from authgate.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> User:
        user = self._users.find_by_username(username)
        if user is not None and not user.is_active:
            user = None

        # Unknown and deleted users still pay for one full verification.
        stored_hash = user.password_hash if user is not None else None
        result = self._password_hasher.verify(password, stored_hash)

        if user is None or result is HashValidationResult.INVALID:
            raise InvalidCredentialsError()

        if result is HashValidationResult.VALID_REHASH_NEEDED:
            self._users.update_password_hash(user.id, self._password_hasher.hash(password))
            logger.info(f"users.login: upgraded password hash for user_id={user.id}")

        return user
