# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum


class UserStatus(str, Enum):
    ACTIVE = "Active"
    DELETED = "Deleted"


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    created_at: datetime
    status: UserStatus = UserStatus.ACTIVE
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is UserStatus.ACTIVE


class HashValidationResult(IntEnum):
    VALID = 1
    VALID_REHASH_NEEDED = 2
    INVALID = 3


@dataclass(slots=True, frozen=True)
class IdentityClaims:
    """Assertions carried by a session token.

    ``subject`` is the user id rendered as a decimal string.
    """

    subject: str
    issuer: str
    issued_at: datetime
    not_before: datetime
    expires_at: datetime
    display_name: str

    def to_payload(self) -> dict[str, object]:
        return {
            "iss": self.issuer,
            "sub": self.subject,
            "iat": int(self.issued_at.timestamp()),
            "nbf": int(self.not_before.timestamp()),
            "exp": int(self.expires_at.timestamp()),
            "name": self.display_name,
        }
