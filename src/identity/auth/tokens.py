"""Signed bearer tokens.

A token is ``<payload>.<signature>``: the payload is base64url-encoded JSON
``{"sub", "email", "exp"}`` and the signature is HMAC-SHA256 of the encoded
payload, also base64url-encoded. Tokens are valid for AUTH_TOKEN_TTL_DAYS
(default 7) and signed with AUTH_SECRET.
"""

import base64
import hashlib
import hmac
import json
import os
import time

import structlog

from identity.auth.errors import AuthenticationError

logger = structlog.get_logger(__name__)

_DEV_SECRET = "goldenbite-development-secret"
_warned_about_secret = False


def _secret() -> bytes:
    global _warned_about_secret
    secret = os.environ.get("AUTH_SECRET")
    if not secret:
        if not _warned_about_secret:
            logger.warning("AUTH_SECRET is not set, using the development signing key")
            _warned_about_secret = True
        secret = _DEV_SECRET
    return secret.encode()


def token_ttl_seconds() -> int:
    return int(os.environ.get("AUTH_TOKEN_TTL_DAYS", "7")) * 24 * 60 * 60


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def _sign(encoded_payload: str) -> str:
    return _b64encode(hmac.new(_secret(), encoded_payload.encode(), hashlib.sha256).digest())


def issue_token(customer_id, email, now=None) -> str:
    now = int(now if now is not None else time.time())
    payload = {"sub": str(customer_id), "email": email, "exp": now + token_ttl_seconds()}
    encoded = _b64encode(json.dumps(payload, separators=(",", ":")).encode())
    return f"{encoded}.{_sign(encoded)}"


def verify_token(token, now=None) -> dict:
    """Return the payload of a valid token, or raise AuthenticationError."""
    try:
        encoded, signature = token.split(".")
    except (AttributeError, ValueError):
        raise AuthenticationError("Invalid or expired token") from None

    try:
        presented = signature.encode("ascii")
    except UnicodeEncodeError:
        raise AuthenticationError("Invalid or expired token") from None
    if not hmac.compare_digest(presented, _sign(encoded).encode("ascii")):
        raise AuthenticationError("Invalid or expired token")

    try:
        payload = json.loads(_b64decode(encoded))
    except ValueError:
        raise AuthenticationError("Invalid or expired token") from None

    now = now if now is not None else time.time()
    if not isinstance(payload, dict) or not payload.get("sub") or payload.get("exp", 0) < now:
        raise AuthenticationError("Invalid or expired token")
    return payload
