"""
Domain errors for the marketplace.

Handlers raise these instead of building error payloads by hand. The server
maps each class to an HTTP status and renders ``{"success": false, "error": ...}``
so forms receive the same result shape whatever went wrong.
"""

from __future__ import annotations


class MarketplaceError(Exception):
    """Base class for errors surfaced to the client as a failed action."""

    status_code: int = 400
    default_message: str = "Une erreur est survenue"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailedError(MarketplaceError):
    """Submitted data is missing or invalid."""

    status_code = 400
    default_message = "Données invalides"


class NotAuthenticatedError(MarketplaceError):
    """The request carries no valid session."""

    status_code = 401
    default_message = "Non authentifié"


class PermissionDeniedError(MarketplaceError):
    """The caller is authenticated but not allowed to act on the target."""

    status_code = 403
    default_message = "Non autorisé"


class UserBannedError(PermissionDeniedError):
    """The caller's account is suspended."""

    default_message = "Votre compte a été suspendu"


class NotFoundError(MarketplaceError):
    """The target row does not exist."""

    status_code = 404
    default_message = "Ressource introuvable"


class ConflictError(MarketplaceError):
    """The action would duplicate an existing row."""

    status_code = 409
    default_message = "Conflit"


__all__ = [
    "ConflictError",
    "MarketplaceError",
    "NotAuthenticatedError",
    "NotFoundError",
    "PermissionDeniedError",
    "UserBannedError",
    "ValidationFailedError",
]
