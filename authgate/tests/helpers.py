from __future__ import annotations

from authgate.application.services.hash_codec import HashParameters
from authgate.application.services.password_hashing import argon2id_derive

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"

FAST_PARAMS = HashParameters(
    memory_cost=1024,
    time_cost=1,
    parallelism=1,
    salt_length=16,
    key_length=32,
)


class CountingDerive:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, secret: bytes, salt: bytes, params: HashParameters) -> bytes:
        self.calls += 1
        return argon2id_derive(secret, salt, params)
