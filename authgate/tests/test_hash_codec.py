from __future__ import annotations

import base64

import pytest

from authgate.application.services.hash_codec import (
    HashDecodeError,
    HashParameters,
    IncompatibleVersionError,
    InvalidFormatError,
    MalformedEncodingError,
    MalformedParametersError,
    decode,
    encode,
)

SALT_B64 = "c29tZXNhbHRzb21lc2FsdA"
DIGEST_B64 = base64.b64encode(bytes(range(32))).decode().rstrip("=")

# Placeholder literal used by an earlier release of the service.
LEGACY_HASH = (
    "$argon2id$v=19$m=12288,t=3,p=1$RUhxczVSVE5SQV4z$T0blM/Jzk2V6LQ/TRNqfm5Mine3F6wP2564aq7Uxr+o"
)


def _hash(version: str = "v=19", cost: str = "m=1024,t=1,p=1", salt: str = SALT_B64,
          digest: str = DIGEST_B64, algorithm: str = "argon2id") -> str:
    return f"${algorithm}${version}${cost}${salt}${digest}"


@pytest.mark.parametrize(
    "params",
    [
        HashParameters(memory_cost=12288, time_cost=3, parallelism=1, salt_length=16, key_length=32),
        HashParameters(memory_cost=8, time_cost=1, parallelism=1, salt_length=8, key_length=4),
        HashParameters(memory_cost=65536, time_cost=10, parallelism=4, salt_length=17, key_length=65),
    ],
)
def test_encode_then_decode_returns_inputs(params: HashParameters) -> None:
    salt = bytes(range(params.salt_length))
    digest = bytes(reversed(range(params.key_length)))

    decoded = decode(encode(digest, salt, params))

    assert decoded.digest == digest
    assert decoded.salt == salt
    assert decoded.params == params


def test_encoded_layout() -> None:
    params = HashParameters(memory_cost=12288, time_cost=3, parallelism=1, salt_length=4, key_length=4)
    encoded = encode(b"\x00\x01\x02\x03", b"salt", params)

    assert encoded == "$argon2id$v=19$m=12288,t=3,p=1$c2FsdA$AAECAw"
    assert "=" not in encoded.split("$")[-1]


def test_legacy_hash_is_accepted_and_reencodes_identically() -> None:
    decoded = decode(LEGACY_HASH)

    assert decoded.params == HashParameters(
        memory_cost=12288, time_cost=3, parallelism=1, salt_length=12, key_length=32
    )
    assert encode(decoded.digest, decoded.salt, decoded.params) == LEGACY_HASH


@pytest.mark.parametrize(
    "encoded",
    [
        "",
        "argon2id",
        "$argon2id$v=19$m=1024,t=1,p=1$" + SALT_B64,
        _hash() + "$extra",
        "x" + _hash(),
    ],
)
def test_wrong_segment_count_is_invalid_format(encoded: str) -> None:
    with pytest.raises(InvalidFormatError):
        decode(encoded)


def test_non_string_is_invalid_format() -> None:
    with pytest.raises(InvalidFormatError):
        decode(None)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "encoded",
    [
        _hash(algorithm="argon2i"),
        _hash(algorithm="bcrypt"),
        _hash(version="v=16"),
        _hash(version="v=x"),
        _hash(version="19"),
        _hash(version="v=-19"),
    ],
)
def test_foreign_algorithm_or_version_is_incompatible(encoded: str) -> None:
    with pytest.raises(IncompatibleVersionError):
        decode(encoded)


@pytest.mark.parametrize(
    "cost",
    [
        "m=0,t=1,p=1",
        "m=1024,t=0,p=1",
        "m=1024,t=1,p=0",
        "m=-1,t=1,p=1",
        "m=a,t=1,p=1",
        "m=1024,t=1",
        "t=1,m=1024,p=1",
        "m=1024,t=1,p=1,x=2",
        "m=1024, t=1, p=1",
        "",
        "m=4294967296,t=1,p=1",
        "m=9999999999,t=1,p=1",
        "m=1024,t=4294967296,p=1",
        "m=1024,t=1,p=9999999999",
    ],
)
def test_bad_cost_segment_is_malformed_parameters(cost: str) -> None:
    with pytest.raises(MalformedParametersError):
        decode(_hash(cost=cost))


def test_largest_32_bit_costs_still_decode() -> None:
    decoded = decode(_hash(cost="m=4294967295,t=4294967295,p=4294967295"))

    assert decoded.params.memory_cost == decoded.params.time_cost == 2**32 - 1
    assert decoded.params.parallelism == 2**32 - 1


@pytest.mark.parametrize(
    ("salt", "digest"),
    [
        ("!!!!", DIGEST_B64),
        (SALT_B64, "not base64"),
        ("c2FsdA==", DIGEST_B64),
        ("", DIGEST_B64),
        (SALT_B64, ""),
        ("QUFBQ", DIGEST_B64),
        ("QR", DIGEST_B64),
        ("c2F_dA", DIGEST_B64),
    ],
)
def test_bad_base64_is_malformed_encoding(salt: str, digest: str) -> None:
    with pytest.raises(MalformedEncodingError):
        decode(_hash(salt=salt, digest=digest))


@pytest.mark.parametrize(
    "encoded",
    [
        "$$$$$",
        "$argon2id$v=99999999999999999999$m=1,t=1,p=1$QQ$QQ",
        "$argon2id$v=19$m=99999999999999999999,t=1,p=1$QQ$QQ",
        "$argon2id$v=19$m=1,t=1,p=1$éé$QQ",
        "\x00" * 64,
        "$" * 1000,
    ],
)
def test_adversarial_input_raises_decode_error_only(encoded: str) -> None:
    with pytest.raises(HashDecodeError):
        decode(encoded)
