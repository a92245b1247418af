# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authgate.shared.errors.base import DomainError, UnauthenticatedError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"


class InvalidCredentialsError(UnauthenticatedError):
    pass
