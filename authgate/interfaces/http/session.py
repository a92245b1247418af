# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Session cookie delivery and the authentication middleware."""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import Request, Response, g, make_response, request

from authgate.application.services.tokens import TokenService
from authgate.domain.users.entities import IdentityClaims, User
from authgate.shared.config import SecurityConfig
from authgate.shared.errors import UnauthenticatedError
from authgate.shared.logging import logger

CONTEXT_USER_ID = "user_id"
CACHE_CONTROL = "max-age=0, private, must-revalidate"


def current_user_id() -> int:
    """User id bound by ``SessionManager.require_authentication``."""
    return int(getattr(g, CONTEXT_USER_ID))


class SessionManager:
    def __init__(self, *, tokens: TokenService, config: SecurityConfig) -> None:
        self._tokens = tokens
        self._cookie_name = config.cookie_name
        self._cookie_secure = config.cookie_secure

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def attach(self, response: Response, claims: IdentityClaims) -> None:
        response.set_cookie(
            self._cookie_name,
            self._tokens.sign(claims),
            expires=claims.expires_at,
            path="/",
            secure=self._cookie_secure,
            httponly=True,
            samesite="Strict",
        )

    def issue_session(self, response: Response, user: User) -> IdentityClaims:
        claims = self._tokens.claims_for(user)
        self.attach(response, claims)
        logger.info(f"session: issued for user_id={user.id} exp={claims.expires_at.isoformat()}")
        return claims

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self._cookie_name,
            path="/",
            secure=self._cookie_secure,
            httponly=True,
            samesite="Strict",
        )

    def extract(self, req: Request) -> str | None:
        return req.cookies.get(self._cookie_name) or None

    def authenticate(self, req: Request) -> int | None:
        # The cookie's own Expires attribute is client-controlled; the token's
        # exp claim is the only expiry that counts.
        return self._tokens.verify(self.extract(req))

    def require_authentication(self, view: Callable[..., Any]) -> Callable[..., Response]:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Response:
            user_id = self.authenticate(request)
            if user_id is None:
                logger.warning(f"Auth failed on {request.method} {request.path}")
                raise UnauthenticatedError()

            setattr(g, CONTEXT_USER_ID, user_id)
            logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
            response = make_response(view(*args, **kwargs))
            response.headers["Cache-Control"] = CACHE_CONTROL
            return response

        return inner


__all__ = ["CACHE_CONTROL", "CONTEXT_USER_ID", "SessionManager", "current_user_id"]
