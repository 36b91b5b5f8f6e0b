# Rev 0.3.0
"""Exceptions raised below the view-model boundary.

View-models catch these and turn them into alerts; nothing here is meant to
reach a widget.
"""
from __future__ import annotations


class GarmentzError(Exception):
    """Base class for garmentZ errors."""


class RemoteError(GarmentzError):
    """A store call failed (connection, constraint, missing row...)."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message


class AuthRequired(GarmentzError):
    """A scoped call was attempted without a signed-in identity."""


class AuthError(GarmentzError):
    """Sign-in / sign-up rejected (bad credentials, duplicate email)."""
