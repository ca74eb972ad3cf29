# RCS license generator

from rcslicense.common.exceptions import (
    DeserializationError,
    LicenseError,
    LicenseExpiredError,
    LicenseValidationError,
)
from rcslicense.core.document import LicenseDocument
from rcslicense.core.service import LicenseService, LoadResult

__all__ = [
    "DeserializationError",
    "LicenseDocument",
    "LicenseError",
    "LicenseExpiredError",
    "LicenseService",
    "LicenseValidationError",
    "LoadResult",
]
