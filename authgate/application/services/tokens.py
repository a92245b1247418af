# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session tokens (JWT, HS256).

A token is either verified into a user id or rejected. Every rejection cause
(missing, bad signature, wrong issuer, expired, not yet valid, bad subject)
collapses into ``None`` so callers cannot tell them apart.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from authgate.domain.users.entities import IdentityClaims, User
from authgate.shared.config import SecurityConfig
from authgate.shared.errors import SigningKeyMissingError
from authgate.shared.logging import logger

ALGORITHM = "HS256"

_SUBJECT_RE = re.compile(r"[0-9]{1,19}")

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_iss": True,
    # exp and nbf are checked against the injected clock in verify()
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": True,
    "verify_sub": True,
    "verify_aud": False,
    "require_iss": True,
    "require_sub": True,
    "require_iat": True,
    "require_nbf": True,
    "require_exp": True,
    "leeway": 0,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _is_numeric_date(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class TokenService:
    def __init__(
        self,
        secret: str | None,
        *,
        issuer: str,
        ttl: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret or not secret.strip():
            raise SigningKeyMissingError()
        self._secret = secret
        self._issuer = issuer
        self._ttl = ttl
        self._clock = clock

    @classmethod
    def from_config(cls, secret: str | None, config: SecurityConfig) -> TokenService:
        return cls(
            secret,
            issuer=config.token_issuer,
            ttl=timedelta(hours=config.token_ttl_hours),
        )

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def build_claims(self, user_id: int, display_name: str) -> IdentityClaims:
        # NumericDate has one-second resolution
        now = self._clock().astimezone(UTC).replace(microsecond=0)
        return IdentityClaims(
            subject=str(user_id),
            issuer=self._issuer,
            issued_at=now,
            not_before=now,
            expires_at=now + self._ttl,
            display_name=display_name,
        )

    def claims_for(self, user: User) -> IdentityClaims:
        return self.build_claims(user.id, user.username)

    def sign(self, claims: IdentityClaims) -> str:
        return jwt.encode(claims.to_payload(), self._secret, algorithm=ALGORITHM)

    def issue(self, user_id: int, display_name: str) -> str:
        return self.sign(self.build_claims(user_id, display_name))

    def verify(self, token: str | None) -> int | None:
        """Return the user id carried by ``token``, or ``None`` if it is rejected."""
        if not token:
            logger.debug("tokens: rejected (missing)")
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                options=_DECODE_OPTIONS,
            )
        except JWTError as exc:
            logger.debug(f"tokens: rejected ({type(exc).__name__})")
            return None

        now = int(self._clock().timestamp())
        not_before, expires_at = payload.get("nbf"), payload.get("exp")
        if not (_is_numeric_date(not_before) and _is_numeric_date(expires_at)):
            logger.debug("tokens: rejected (malformed validity window)")
            return None
        if not not_before <= now < expires_at:
            logger.debug("tokens: rejected (outside validity window)")
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str) or not _SUBJECT_RE.fullmatch(subject):
            logger.debug("tokens: rejected (malformed subject)")
            return None

        user_id = int(subject)
        if user_id <= 0 or user_id > 2**63 - 1:
            logger.debug("tokens: rejected (subject out of range)")
            return None

        return user_id


__all__ = ["ALGORITHM", "TokenService"]
