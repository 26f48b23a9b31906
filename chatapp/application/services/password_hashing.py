# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from chatapp.domain.users.exceptions import HashingError
from chatapp.domain.users.repositories import PasswordHasher
from chatapp.shared.logging import logger

# scrypt with N=2**15, r=8, p=1: roughly 50-100 ms and 32 MiB per call.
DEFAULT_METHOD = "scrypt:32768:8:1"
DEFAULT_SALT_LENGTH = 16


class WerkzeugPasswordHasher(PasswordHasher):
    def __init__(
        self, method: str = DEFAULT_METHOD, salt_length: int = DEFAULT_SALT_LENGTH
    ) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (OSError, MemoryError, ValueError) as exc:
            logger.error(f"password.hash: failed ({type(exc).__name__})")
            raise HashingError() from exc

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError:
            # Unknown hash method in the stored value; never matches.
            logger.warning("password.verify: stored hash has an unsupported format")
            return False
