# License document engines and the orchestrating service
from rcslicense.core.document import LicenseDocument as LicenseDocument
from rcslicense.core.expiry import ExpiryEvaluator as ExpiryEvaluator
from rcslicense.core.integrity import IntegrityEngine as IntegrityEngine
from rcslicense.core.migration import MigrationEngine as MigrationEngine
from rcslicense.core.service import LicenseService as LicenseService

__all__ = [
    "ExpiryEvaluator",
    "IntegrityEngine",
    "LicenseDocument",
    "LicenseService",
    "MigrationEngine",
]
