# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, ClassVar


class AppError(Exception):
    """Error carrying a stable wire ``code`` and the HTTP status it maps to."""

    code: ClassVar[str] = "internal_error"
    status: ClassVar[HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(self.code)
        self.context = dict(context) if context else None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = self.context
        return payload


class DomainError(AppError):
    code = "domain_error"
    status = HTTPStatus.BAD_REQUEST


class InfrastructureError(AppError):
    code = "infrastructure_error"


class ValidationError(AppError):
    code = "validation_error"
    status = HTTPStatus.UNPROCESSABLE_ENTITY


class UnauthenticatedError(DomainError):
    """Uniform 401 for every login or session failure."""

    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class EntropyUnavailableError(InfrastructureError):
    code = "entropy_unavailable"


class SigningKeyMissingError(InfrastructureError):
    code = "signing_key_missing"
