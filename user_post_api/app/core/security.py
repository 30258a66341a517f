"""
Session helpers for the OAuth login front end.

The web front end signs users in with an OAuth provider and keeps the
session in a JSON Web Token signed with the shared secret
(``settings.secret_key``).  This module verifies such tokens with
HMAC-SHA256 and exposes the signed-in user for display purposes only:
no endpoint uses the identity to make authorization decisions, so a
missing or invalid token simply means "anonymous".

``create_access_token`` is provided for scripts and tests that need a
session token without going through the provider.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from ..schemas.session import SessionUser


logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC-SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given claims.

    The payload is extended with an ``exp`` field holding the expiration
    time as a UNIX timestamp.

    Parameters
    ----------
    data : dict
        Claims to embed, e.g. ``{"sub": "a@b.co", "name": "Bob",
        "email": "a@b.co", "picture": "https://..."}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": settings.algorithm, "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload if the signature matches and the token has not
    expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        expected_sig = _sign(signing_input, settings.secret_key)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and json.JSONDecodeError are both ValueErrors
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_session_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[SessionUser]:
    """Dependency returning the signed-in user, or ``None`` for anonymous callers."""
    if credentials is None:
        return None
    payload = decode_access_token(credentials.credentials)
    if not payload:
        logger.debug("Ignoring invalid or expired session token")
        return None
    return SessionUser(
        name=payload.get("name"),
        email=payload.get("email") or payload.get("sub"),
        image=payload.get("picture") or payload.get("image"),
    )


def resolve_redirect(url: str, base_url: str) -> str:
    """Decide where to send the browser after sign-in.

    Relative URLs are joined to ``base_url``, absolute URLs on the same
    origin are kept, and anything else lands on the dashboard.
    """
    base_url = base_url.rstrip("/")
    if url.startswith("/"):
        return f"{base_url}{url}"
    target, base = urlsplit(url), urlsplit(base_url)
    if target.scheme and (target.scheme, target.netloc) == (base.scheme, base.netloc):
        return url
    return f"{base_url}/dashboard"
