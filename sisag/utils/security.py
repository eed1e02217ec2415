"""
Bearer-token handling for the SISAG identity boundary.

Accounts live in the national identity service, which signs tokens with the
shared ``JWT_SECRET``.  A token carries two claims this backend cares about:
``sub`` (the identity-service user id) and ``role`` (one of
``constants.ROLES``).  ``create_access_token`` mints the same shape for the
seed script and the test suite.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from sisag.config import get_settings

logger = logging.getLogger(__name__)


def create_access_token(
    subject: str, role: str, expires_minutes: int | None = None
) -> str:
    """Mint a token carrying ``sub``, ``role``, ``iat`` and ``exp``.

    Args:
        subject: Identity-service user id.
        role: Role code, e.g. ``"government"``.
        expires_minutes: Lifetime override; defaults to
            ``JWT_EXPIRATION_MINUTES``.  A negative value yields an already
            expired token.
    """
    settings = get_settings()
    lifetime = settings.JWT_EXPIRATION_MINUTES if expires_minutes is None else expires_minutes
    issued_at = datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        "sub": subject,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=lifetime),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Check signature and expiry, then return the claims.

    Raises:
        ValueError: Bad signature, expired token, or no ``sub`` claim.
    """
    settings = get_settings()
    try:
        claims: dict[str, Any] = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise ValueError("Jeton invalide ou expiré") from exc

    if not claims.get("sub"):
        logger.debug("Rejected bearer token without subject")
        raise ValueError("Jeton sans identifiant d'utilisateur")
    return claims
