# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Argon2id password hashing with parameter-upgrade detection.

``verify`` always performs exactly one key derivation, whether or not a
stored hash was supplied and whether or not it decodes. Unknown usernames and
corrupt hashes are checked against a placeholder hash generated from the
current target parameters, so they cost the same as a wrong password.
"""

from __future__ import annotations

import hmac
import secrets
from collections.abc import Callable

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from authgate.domain.users.entities import HashValidationResult
from authgate.domain.users.repositories import PasswordHasher
from authgate.shared.config import PasswordHashingConfig
from authgate.shared.errors import EntropyUnavailableError
from authgate.shared.logging import logger

from . import hash_codec
from .hash_codec import DecodedHash, HashDecodeError, HashParameters

KeyDerivation = Callable[[bytes, bytes, HashParameters], bytes]


def argon2id_derive(secret: bytes, salt: bytes, params: HashParameters) -> bytes:
    return hash_secret_raw(
        secret=secret,
        salt=salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost,
        parallelism=params.parallelism,
        hash_len=params.key_length,
        type=Type.ID,
        version=hash_codec.ALGORITHM_VERSION,
    )


def _to_secret(password: str) -> bytes:
    return password.encode("utf-8", "surrogatepass")


def parameters_from_config(config: PasswordHashingConfig) -> HashParameters:
    return HashParameters(
        memory_cost=config.memory_cost,
        time_cost=config.time_cost,
        parallelism=config.parallelism,
        salt_length=config.salt_length,
        key_length=config.key_length,
    )


class Argon2PasswordHasher(PasswordHasher):
    """Hashes new passwords with ``params`` and verifies stored hashes."""

    def __init__(
        self,
        params: HashParameters,
        *,
        derive: KeyDerivation = argon2id_derive,
        random_bytes: Callable[[int], bytes] = secrets.token_bytes,
    ) -> None:
        self._params = params
        self._derive = derive
        self._random_bytes = random_bytes
        self._placeholder = hash_codec.decode(self.hash(secrets.token_urlsafe(32)))

    @property
    def parameters(self) -> HashParameters:
        return self._params

    def _generate_salt(self) -> bytes:
        try:
            salt = self._random_bytes(self._params.salt_length)
        except (OSError, NotImplementedError) as exc:
            logger.critical(f"password_hashing: entropy source failed: {exc!r}")
            raise EntropyUnavailableError() from exc
        if len(salt) != self._params.salt_length:
            logger.critical("password_hashing: entropy source returned a short read")
            raise EntropyUnavailableError()
        return salt

    def hash(self, password: str) -> str:
        salt = self._generate_salt()
        digest = self._derive(_to_secret(password), salt, self._params)
        return hash_codec.encode(digest, salt, self._params)

    def verify(self, password: str, encoded: str | None) -> HashValidationResult:
        stored: DecodedHash | None = None
        if encoded is not None:
            try:
                stored = hash_codec.decode(encoded)
            except HashDecodeError as exc:
                logger.warning(f"password_hashing: stored hash rejected ({type(exc).__name__})")

        reference = stored if stored is not None else self._placeholder
        try:
            candidate = self._derive(_to_secret(password), reference.salt, reference.params)
        except (HashingError, OverflowError, ValueError) as exc:
            logger.warning(f"password_hashing: stored parameters unusable: {exc}")
            return HashValidationResult.INVALID

        matches = hmac.compare_digest(candidate, reference.digest)
        if stored is None or not matches:
            return HashValidationResult.INVALID

        if stored.params != self._params:
            return HashValidationResult.VALID_REHASH_NEEDED

        return HashValidationResult.VALID


__all__ = [
    "Argon2PasswordHasher",
    "KeyDerivation",
    "argon2id_derive",
    "parameters_from_config",
]
