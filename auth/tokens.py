"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256:
``<payload>.<hex signature>``.  Secret and lifetime come from
``config.jwt_secret`` / ``config.jwt_expiry_seconds``.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict, Optional

from auth.errors import AuthError


class TokenIssuer:
    """Signs and checks identity tokens with a shared HMAC secret."""

    def __init__(self, secret: str, expiry_seconds: int = 86400) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, claims: Dict[str, Any], now: Optional[int] = None) -> str:
        """Create a signed token containing ``claims`` plus ``iat``/``exp``."""
        iat = int(time.time()) if now is None else now
        payload = dict(claims)
        payload["iat"] = iat
        payload["exp"] = iat + self.expiry_seconds
        raw = json.dumps(payload, separators=(",", ":"), default=str).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str) -> Dict[str, Any]:
        """
        Verify token and return its claims.

        Raises ``AuthError`` on malformed, tampered or expired tokens.
        """
        try:
            encoded, signature = token.split(".", 1)
            raw = urlsafe_b64decode(encoded.encode())
            valid = hmac.compare_digest(signature, self._sign(raw))
        except (ValueError, TypeError) as exc:
            raise AuthError("Invalid token") from exc
        if not valid:
            raise AuthError("Invalid token")
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise AuthError("Invalid token") from exc
        if payload.get("exp", 0) < time.time():
            raise AuthError("Token expired")
        return payload
