"""
Identity resolution for the SISAG API.

Provides:
- ``get_current_user`` - FastAPI dependency that extracts and validates
  the Bearer JWT from the ``Authorization`` header.
- ``require_role`` - dependency factory that enforces role-based access
  control on top of ``get_current_user``.

There is no user table: the identity service owns accounts, and the token
claims (``sub``, ``role``) are the whole identity seen by this backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sisag.utils.constants import EDITOR_ROLES, ROLES
from sisag.utils.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Caller identity decoded from the bearer token."""

    id: str
    role: str


def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> CurrentUser:
    """Resolve the caller's identity from the bearer JWT.

    Args:
        credentials: ``Authorization: Bearer <token>`` header, if any.

    Returns:
        The ``CurrentUser`` described by the token claims.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired, or
                           lacks a ``sub`` claim.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Impossible de valider les identifiants",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    try:
        claims = decode_access_token(credentials.credentials)
    except ValueError:
        raise credentials_exception

    role = claims.get("role")
    if role not in ROLES:
        # Unknown or missing role claims fall back to the least-privileged role.
        role = "citizen"

    return CurrentUser(id=str(claims["sub"]), role=role)


def require_role(*roles: str):
    """Return a FastAPI dependency that restricts access to the given roles.

    Usage::

        @router.post("/")
        def create(current_user: CurrentUser = Depends(require_role("government"))):
            ...

    Args:
        *roles: Role codes from ``constants.ROLES`` allowed through.

    Returns:
        A dependency resolving to the ``CurrentUser`` or raising HTTP 403.
    """
    allowed = frozenset(roles)

    def _check_role(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if current_user.role not in allowed:
            logger.debug(
                "require_role: user %s with role %s denied", current_user.id, current_user.role
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    f"Accès refusé. Rôle requis parmi : {sorted(allowed)}"
                ),
            )
        return current_user

    return _check_role


# Government and partner users may write; citizens only read.
EditorUser = Annotated[CurrentUser, Depends(require_role(*EDITOR_ROLES))]
