"""
Tests for bearer token issuance and verification.
"""

import json

import pytest

from auth.jwt import TokenIssuer, _b64decode, _b64encode
from core.errors import InvalidToken

NOW = 1_700_000_000


class TestTokenIssuer:
    def setup_method(self):
        self.issuer = TokenIssuer("s3cret")

    def test_issue_encodes_subject_and_24h_expiry(self):
        token = self.issuer.issue("42", now=NOW)
        header, payload, _sig = token.split(".")
        assert json.loads(_b64decode(header)) == {"alg": "HS256", "typ": "JWT"}
        claims = json.loads(_b64decode(payload))
        assert claims == {"sub": "42", "iat": NOW, "exp": NOW + 86400}

    def test_issue_is_pure_in_subject_time_and_secret(self):
        assert self.issuer.issue("1", now=NOW) == self.issuer.issue("1", now=NOW)
        assert self.issuer.issue("1", now=NOW) != TokenIssuer("other").issue("1", now=NOW)

    def test_verify_returns_claims(self):
        token = self.issuer.issue("7", now=NOW)
        claims = self.issuer.verify(token, now=NOW + 60)
        assert claims.sub == "7"
        assert claims.exp == NOW + 86400

    def test_expired_token_rejected(self):
        token = self.issuer.issue("7", now=NOW)
        with pytest.raises(InvalidToken, match="expired"):
            self.issuer.verify(token, now=NOW + 86400)

    def test_token_from_other_secret_rejected(self):
        token = TokenIssuer("other").issue("7", now=NOW)
        with pytest.raises(InvalidToken):
            self.issuer.verify(token, now=NOW)

    def test_tampered_payload_rejected(self):
        header, _payload, sig = self.issuer.issue("7", now=NOW).split(".")
        forged = _b64encode(json.dumps({"sub": "8", "exp": NOW + 10}).encode())
        with pytest.raises(InvalidToken):
            self.issuer.verify(f"{header}.{forged}.{sig}", now=NOW)

    def test_non_ascii_signature_rejected(self):
        header, payload, _sig = self.issuer.issue("7", now=NOW).split(".")
        with pytest.raises(InvalidToken):
            self.issuer.verify(f"{header}.{payload}.\u00e9", now=NOW)

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d"])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(InvalidToken):
            self.issuer.verify(token, now=NOW)

    def test_empty_secret_refused(self):
        with pytest.raises(ValueError):
            TokenIssuer("")
