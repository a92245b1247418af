# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authgate.domain.users.entities import User
from authgate.domain.users.repositories import UserRepository
from authgate.shared.errors import UnauthenticatedError


class GetCurrentUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None or not user.is_active:
            raise UnauthenticatedError()
        return user
