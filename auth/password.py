"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting.  The work factor
is fixed when the hasher is built at startup and cannot be changed per call.
"""

from __future__ import annotations

import bcrypt

from core.errors import ValidationError

DEFAULT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted)."""
        raw = password.encode()
        if len(raw) > BCRYPT_MAX_BYTES:
            raise ValidationError(
                f"password must be at most {BCRYPT_MAX_BYTES} bytes", fields=("password",)
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Constant-time comparison against a bcrypt hash.

        A wrong password is ``False``; a digest that is not a bcrypt hash
        raises ``ValueError``.
        """
        raw = password.encode()
        if len(raw) > BCRYPT_MAX_BYTES:
            # hash() never stores a digest for such a password.
            return False
        return bcrypt.checkpw(raw, password_hash.encode())
