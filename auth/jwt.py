"""
JWT-style token creation and verification.

Tokens are base64-encoded JSON payloads signed with HMAC-SHA256. The
secret is passed in by the caller; it comes from ``Settings.token_secret``
(env var: ``TOKEN_SECRET``).
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import b64decode, b64encode

from auth.errors import InvalidTokenError


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(user_id: str, secret: str, expiry_seconds: int = 0) -> str:
    """Create a signed token carrying ``user_id`` as its ``_id`` claim."""
    now = int(time.time())
    payload = {"_id": user_id, "iat": now}
    if expiry_seconds > 0:
        payload["exp"] = now + expiry_seconds
    raw = json.dumps(payload).encode()
    return b64encode(raw).decode() + "." + _sign(raw, secret)


def verify_token(token: str, secret: str) -> str:
    """
    Verify token and return the embedded user id.

    Raises ``InvalidTokenError`` on malformed, tampered or expired tokens.
    """
    parts = token.split(".", 1)
    if len(parts) != 2:
        raise InvalidTokenError("bad format")
    try:
        raw = b64decode(parts[0], validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidTokenError("bad encoding") from exc
    if not hmac.compare_digest(parts[1].encode(), _sign(raw, secret).encode()):
        raise InvalidTokenError("bad signature")
    payload = json.loads(raw)
    if "exp" in payload and payload["exp"] < time.time():
        raise InvalidTokenError("token expired")
    return payload["_id"]
