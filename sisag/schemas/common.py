"""
Shared Pydantic v2 schemas reused across multiple modules.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Severity = Literal["low", "medium", "high", "critical"]


class MessageResponse(BaseModel):
    """Generic message envelope for operations that do not return a resource.

    Returned by DELETE endpoints when the caller only needs a confirmation.

    Attributes:
        message: Short human-readable result summary.
        detail: Optional extended information.
    """

    message: str = Field(..., description="Résumé du résultat de l'opération.")
    detail: str | None = Field(
        default=None,
        description="Information complémentaire (contexte, suggestion, etc.).",
    )
