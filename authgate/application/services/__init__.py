# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import Argon2PasswordHasher, parameters_from_config
from .tokens import TokenService

__all__ = ["Argon2PasswordHasher", "TokenService", "parameters_from_config"]
