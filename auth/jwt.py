"""
JWT creation and verification.

Tokens are compact HS256 JSON Web Tokens (``header.payload.signature``,
base64url without padding) signed with HMAC-SHA256.  The secret is supplied
once at startup from ``Settings.jwt_secret``; nothing is stored server-side.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from typing import Optional

from core.errors import InvalidToken

_HEADER = {"alg": "HS256", "typ": "JWT"}
DEFAULT_EXPIRY_SECONDS = 86400


def _b64encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(segment: str) -> bytes:
    return urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


@dataclass(frozen=True)
class Claims:
    sub: str
    iat: int
    exp: int


class TokenIssuer:
    """Mints and checks bearer tokens for a user id."""

    def __init__(self, secret: str, expiry_seconds: int = DEFAULT_EXPIRY_SECONDS) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode()
        self._expiry_seconds = expiry_seconds

    def _sign(self, signing_input: bytes) -> str:
        return _b64encode(hmac.new(self._secret, signing_input, hashlib.sha256).digest())

    def issue(self, subject: str, now: Optional[float] = None) -> str:
        """Create a signed token with ``sub`` = *subject* and a 24h-style expiry."""
        issued_at = int(time.time() if now is None else now)
        payload = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self._expiry_seconds,
        }
        signing_input = (
            _b64encode(json.dumps(_HEADER, separators=(",", ":")).encode())
            + "."
            + _b64encode(json.dumps(payload, separators=(",", ":")).encode())
        )
        return signing_input + "." + self._sign(signing_input.encode())

    def verify(self, token: str, now: Optional[float] = None) -> Claims:
        """
        Verify *token* and return its claims.

        Raises ``InvalidToken`` on bad structure, algorithm, signature or an
        expired ``exp``.
        """
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidToken("Malformed token")
        header_seg, payload_seg, sig = parts

        # Header values arrive latin-1 decoded, so compare bytes, not str.
        signing_input = f"{header_seg}.{payload_seg}".encode("utf-8", "surrogateescape")
        expected_sig = self._sign(signing_input).encode()
        if not hmac.compare_digest(sig.encode("utf-8", "surrogateescape"), expected_sig):
            raise InvalidToken("Bad token signature")

        try:
            header = json.loads(_b64decode(header_seg))
            payload = json.loads(_b64decode(payload_seg))
        except ValueError as exc:
            raise InvalidToken("Malformed token") from exc

        if not isinstance(header, dict) or header.get("alg") != "HS256":
            raise InvalidToken("Unsupported token algorithm")
        if not isinstance(payload, dict):
            raise InvalidToken("Malformed token")

        try:
            claims = Claims(
                sub=str(payload["sub"]),
                iat=int(payload.get("iat", 0)),
                exp=int(payload["exp"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidToken("Token is missing required claims") from exc

        current = time.time() if now is None else now
        if claims.exp <= current:
            raise InvalidToken("Token expired")
        return claims
