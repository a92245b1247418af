# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import HashValidationResult, IdentityClaims, User, UserStatus
from .exceptions import InvalidCredentialsError, UserAlreadyExistsError

__all__ = [
    "HashValidationResult",
    "IdentityClaims",
    "InvalidCredentialsError",
    "User",
    "UserAlreadyExistsError",
    "UserStatus",
]
