"""Exceptions raised by the login info settings feature."""

from __future__ import annotations


class LoginInfoError(RuntimeError):
    """Base class for login info settings errors."""


class AuthorizationError(LoginInfoError):
    """Raised when the acting user may not change the settings."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class StoreUnavailableError(LoginInfoError):
    """Raised when the settings table or database cannot be used."""


class RecordNumberValidationError(LoginInfoError, ValueError):
    """Raised when a record number is not a decimal integer string."""
