"""
Custom exceptions for the license generator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


class LicenseError(Exception):
    """Base exception for fatal license failures."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class LicenseValidationError(LicenseError):
    """Exception for documents that must not be used or issued."""


class LicenseExpiredError(LicenseValidationError):
    """Exception for a license whose visible or hidden expiry has passed."""

    def __init__(self, message: str, expired_at: datetime, *, hidden: bool = False) -> None:
        super().__init__(message)
        self.expired_at = expired_at
        self.hidden = hidden


class DeserializationError(LicenseError):
    """Exception for license bytes that cannot be turned into a document."""
