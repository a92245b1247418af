# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of credentials and session material from log messages."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # Encoded password hashes; the salt and digest must never reach a sink.
    (re.compile(r"\$argon2(?:id|i|d)\$\S+"), f"$argon2id${REDACTED}"),
    # Compact JWS (base64url header starting with '{"').
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]*"), "***JWT-REDACTED***"),
    (re.compile(r"(bearer\s+)[\w.~+/-]{8,}=*", re.IGNORECASE), rf"\1{REDACTED}"),
    (
        re.compile(
            r"((?:password|passwd|jwt[_-]?secret|secret[_-]?key|token)\s*[:=]\s*['\"]?)[^'\"\s,}]+",
            re.IGNORECASE,
        ),
        rf"\1{REDACTED}",
    ),
    (re.compile(r"((?:authorization|cookie|set-cookie)\s*:\s*)[^\n]+", re.IGNORECASE), rf"\1{REDACTED}"),
    # userinfo in database URLs
    (re.compile(r"(\w[\w+.-]*://[^:/@\s]+:)[^@\s]+@"), rf"\1{REDACTED}@"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru sink filter: rewrites the message in place, never drops it."""
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTED", "sanitize_message", "sanitize_record"]
