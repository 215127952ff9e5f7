"""Application services."""

from sigil.application.services.authentication_service import AuthenticationService

__all__ = ["AuthenticationService"]
