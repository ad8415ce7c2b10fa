# JWT issuance and verification
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from shifttrack.core.config import Settings
from shifttrack.core.errors import AuthenticationError, AuthorizationError
from shifttrack.models.schemas import Identity

logger = logging.getLogger(__name__)


def create_access_token(data: Dict[str, Any], settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` into a credential that expires after the configured window."""
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.JWT_ACCESS_TOKEN_EXPIRE_HOURS)

    now = datetime.now(timezone.utc)
    payload = dict(data)
    payload.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """Return the verified payload, or None when the signature or expiry check fails."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
    except jwt.InvalidTokenError as e:
        logger.info("Rejected invalid token: %s", e)
    return None


def authorize(token: Optional[str], settings: Settings) -> Identity:
    """
    Verify a bearer token and return the identity it carries.

    ``token`` is the credential part of the ``Authorization: Bearer`` header,
    or None when the header is absent or uses another scheme.

    - Raises AuthenticationError when no bearer token is present
    - Raises AuthorizationError when the token fails signature/expiry checks
    """
    if token is None or not token.strip():
        raise AuthenticationError("Kein Token vorhanden!")

    payload = decode_token(token.strip(), settings)
    if payload is None or payload.get("user_id") is None:
        raise AuthorizationError("Ungültiges Token!")

    try:
        return Identity(user_id=payload["user_id"], role=payload.get("role"))
    except ValueError as e:
        logger.warning("Token payload rejected: %s", e)
        raise AuthorizationError("Ungültiges Token!") from e
