"""
Exceptions raised by the auth service.

Hierarchy:
    UserAuthError (base)
    ├── ValidationError     malformed request body
    ├── ConflictError       email already registered
    ├── NotFoundError       no user with that email
    ├── AuthError           password does not match
    ├── StoreError          persistence failure
    └── InvalidTokenError   token failed verification

Every subclass is reported to the client as ``400`` with ``message`` as a
plain-text body.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class UserAuthError(Exception):
    """
    Base exception for all auth failures.

    Attributes:
        message: Human-readable error description, safe to show the client
        details: Additional context for logs
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(UserAuthError):
    """Raised when the request body does not satisfy the validation policy."""


class ConflictError(UserAuthError):
    """Raised when registering an email that already exists."""

    def __init__(self, email: Optional[str] = None):
        super().__init__(
            message="Email already exists",
            details={"email": email} if email else None,
        )


class NotFoundError(UserAuthError):
    """Raised when logging in with an unknown email."""

    def __init__(self, email: str):
        super().__init__(
            message="Email does not exist",
            details={"email": email},
        )


class AuthError(UserAuthError):
    """Raised when the supplied password does not match the stored hash."""

    def __init__(self):
        super().__init__(message="Invalid password")


class StoreError(UserAuthError):
    """Raised when the credential store fails to read or write."""

    def __init__(self, operation: str, original_error: str):
        super().__init__(
            message=f"Could not {operation} user",
            details={"operation": operation, "original_error": original_error},
        )


class InvalidTokenError(UserAuthError):
    """Raised when a token is malformed, tampered with, or expired."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid or expired token: {reason}",
            details={"reason": reason},
        )
