# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Self-describing Argon2id hash strings.

Layout::

    $argon2id$v=19$m=<memory>,t=<time>,p=<parallelism>$<salt>$<digest>

Salt and digest use the standard base64 alphabet without padding. Decoding
accepts any positive parameter combination, so hashes written under older
targets stay verifiable.
"""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass

from argon2.low_level import ARGON2_VERSION

ALGORITHM_ID = "argon2id"
ALGORITHM_VERSION = ARGON2_VERSION

_SEGMENT_COUNT = 6
_VERSION_RE = re.compile(r"v=([0-9]{1,10})")
_PARAMS_RE = re.compile(r"m=([0-9]{1,10}),t=([0-9]{1,10}),p=([0-9]{1,10})")
# Argon2 carries m, t and p as 32-bit unsigned integers.
_UINT32_MAX = 2**32 - 1
_B64_RE = re.compile(r"[A-Za-z0-9+/]+")


class HashDecodeError(ValueError):
    pass


class InvalidFormatError(HashDecodeError):
    pass


class IncompatibleVersionError(HashDecodeError):
    pass


class MalformedParametersError(HashDecodeError):
    pass


class MalformedEncodingError(HashDecodeError):
    pass


@dataclass(slots=True, frozen=True)
class HashParameters:
    memory_cost: int
    time_cost: int
    parallelism: int
    salt_length: int
    key_length: int


@dataclass(slots=True, frozen=True)
class DecodedHash:
    digest: bytes
    salt: bytes
    params: HashParameters


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")


def _b64decode(segment: str, field: str) -> bytes:
    if not segment or not _B64_RE.fullmatch(segment) or len(segment) % 4 == 1:
        raise MalformedEncodingError(f"{field} is not unpadded base64")
    try:
        raw = base64.b64decode(segment + "=" * (-len(segment) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncodingError(f"{field} is not unpadded base64") from exc
    # Non-zero trailing bits would let two strings map to the same bytes.
    if _b64encode(raw) != segment:
        raise MalformedEncodingError(f"{field} has non-canonical base64 padding bits")
    return raw


def encode(digest: bytes, salt: bytes, params: HashParameters) -> str:
    return (
        f"${ALGORITHM_ID}$v={ALGORITHM_VERSION}"
        f"$m={params.memory_cost},t={params.time_cost},p={params.parallelism}"
        f"${_b64encode(salt)}${_b64encode(digest)}"
    )


def decode(encoded: str) -> DecodedHash:
    """Parse an encoded hash, raising a ``HashDecodeError`` subclass on bad input."""
    if not isinstance(encoded, str):
        raise InvalidFormatError("encoded hash must be a string")

    segments = encoded.split("$")
    if len(segments) != _SEGMENT_COUNT or segments[0] != "":
        raise InvalidFormatError(f"expected {_SEGMENT_COUNT} segments, got {len(segments)}")

    _, algorithm, version, cost, salt_b64, digest_b64 = segments

    if algorithm != ALGORITHM_ID:
        raise IncompatibleVersionError(f"unsupported algorithm {algorithm!r}")

    version_match = _VERSION_RE.fullmatch(version)
    if not version_match or int(version_match.group(1)) != ALGORITHM_VERSION:
        raise IncompatibleVersionError(f"unsupported version segment {version!r}")

    params_match = _PARAMS_RE.fullmatch(cost)
    if not params_match:
        raise MalformedParametersError("cost segment must be m=<int>,t=<int>,p=<int>")
    memory_cost, time_cost, parallelism = (int(value) for value in params_match.groups())
    if min(memory_cost, time_cost, parallelism) <= 0:
        raise MalformedParametersError("cost parameters must be positive")
    if max(memory_cost, time_cost, parallelism) > _UINT32_MAX:
        raise MalformedParametersError("cost parameters must fit in 32 bits")

    salt = _b64decode(salt_b64, "salt")
    digest = _b64decode(digest_b64, "digest")

    return DecodedHash(
        digest=digest,
        salt=salt,
        params=HashParameters(
            memory_cost=memory_cost,
            time_cost=time_cost,
            parallelism=parallelism,
            salt_length=len(salt),
            key_length=len(digest),
        ),
    )


__all__ = [
    "ALGORITHM_ID",
    "ALGORITHM_VERSION",
    "DecodedHash",
    "HashDecodeError",
    "HashParameters",
    "IncompatibleVersionError",
    "InvalidFormatError",
    "MalformedEncodingError",
    "MalformedParametersError",
    "decode",
    "encode",
]
