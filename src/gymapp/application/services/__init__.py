"""Application layer services."""

from gymapp.application.services.authentication_service import (
    AuthenticationService,
)

__all__ = ["AuthenticationService"]
