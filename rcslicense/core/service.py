"""
License service orchestrating load, verification, migration and sealing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone

from rcslicense.common.codec import YamlCodec
from rcslicense.common.config import Config
from rcslicense.common.crypto import CryptoUtils
from rcslicense.common.exceptions import LicenseExpiredError
from rcslicense.common.interfaces import IClock, IDocumentCodec
from rcslicense.common.logging_utils import setup_logger
from rcslicense.common.models import ExpiryState, ExpiryStatus, VerificationReport
from rcslicense.core.document import LicenseDocument
from rcslicense.core.expiry import ExpiryEvaluator, pack_hidden_expiry, unpack_hidden_expiry
from rcslicense.core.integrity import IntegrityEngine
from rcslicense.core.migration import MigrationEngine


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LoadResult:
    """A loaded and migrated document with its advisory diagnostics."""

    document: LicenseDocument
    verification: VerificationReport
    expiry: ExpiryStatus


class LicenseService:
    """Entry point for generating, loading and sealing license documents.

    Each call works on a document the caller owns; the service itself only
    holds configuration and its engines.
    """

    def __init__(
        self,
        config: Config | None = None,
        codec: IDocumentCodec | None = None,
        integrity: IntegrityEngine | None = None,
        migrations: MigrationEngine | None = None,
        expiry: ExpiryEvaluator | None = None,
        clock: IClock | None = None,
        log_level: int | None = None,
    ):
        self.config = config or Config()
        self.logger = logging.getLogger(__name__)
        self.log_level = log_level if log_level is not None else self.config.LOG_LEVEL
        setup_logger(
            logging.getLogger("rcslicense"), self.log_level, self.config.LOG_FORMAT
        )

        self.codec = codec or YamlCodec()
        self.integrity = integrity or IntegrityEngine(self.config)
        self.migrations = migrations or MigrationEngine()
        self.expiry = expiry or ExpiryEvaluator()
        self.clock = clock or utc_now

    def generate_default(self) -> LicenseDocument:
        """Create a fresh document with the schema defaults."""
        return LicenseDocument.default(
            version=self.config.LICENSE_VERSION,
            check=CryptoUtils.watermark(self.config.WATERMARK_LENGTH),
        )

    def load(self, data: bytes) -> LoadResult:
        """Deserialize, validate, verify and migrate a license file.

        Raises:
            DeserializationError: If the bytes are not a license document
            LicenseValidationError: If the document is expired or inconsistent
        """
        document = LicenseDocument.from_mapping(self.codec.decode(data))

        status = self.validate(document)
        for line in self.describe(document):
            self.logger.info(line)

        verification = self.integrity.verify(document)
        migrated = self.migrations.migrate(document)
        return LoadResult(document=migrated, verification=verification, expiry=status)

    def apply_overrides(
        self,
        document: LicenseDocument,
        version: str | None = None,
        hidden_expiry: date | None = None,
    ) -> LicenseDocument:
        """Override the version and/or set the hidden expiry, in place.

        A new version re-runs the migration so the document takes the shape
        of the version it now declares.
        """
        if version is not None and version != document.version:
            self.logger.info("Overriding version %s -> %s", document.version, version)
            document.version = version
            migrated = self.migrations.migrate(document)
            document.clear()
            document.update(migrated)

        if hidden_expiry is not None:
            document.digest_seed = pack_hidden_expiry(hidden_expiry)
            self.logger.info("Hidden expiration set to %s", hidden_expiry.isoformat())

        return document

    def finalize(self, document: LicenseDocument) -> bytes:
        """Seal a document and serialize it.

        Raises:
            LicenseValidationError: If the document must not be issued
        """
        if document.get("check") is None:
            document["check"] = CryptoUtils.watermark(self.config.WATERMARK_LENGTH)

        self.validate(document)
        self.integrity.compute(document)
        return self.codec.encode(document.to_dict())

    def validate(self, document: LicenseDocument, now: datetime | None = None) -> ExpiryStatus:
        """Run the fatal checks: expiry first, then agent totals.

        Raises:
            LicenseExpiredError: If the visible or hidden expiry has passed
            LicenseValidationError: If agent totals are inconsistent
        """
        status = self.expiry.evaluate(document, now or self.clock())
        if status.state is ExpiryState.EXPIRED:
            msg = f"Invalid License File: license expired on {status.expired_at}"
            raise LicenseExpiredError(msg, status.expired_at)
        if status.state is ExpiryState.HIDDEN_EXPIRED:
            msg = f"Invalid License File: license hiddenly expired on {status.expired_at}"
            raise LicenseExpiredError(msg, status.expired_at, hidden=True)

        document.check_limits()
        return status

    def describe(self, document: LicenseDocument) -> list[str]:
        """Operator-facing summary of expiry, encryption and dongle settings."""
        lines = [f"Expiration date: {document.expiry or 'Never'}"]

        seed = document.digest_seed
        if seed is not None:
            lines.append(f"Hidden Expiration date: {unpack_hidden_expiry(seed)}")
        lines.append(f"Encryption: {'Restricted' if seed else 'Full'}")

        serial = document.get("serial", "off")
        if serial == "off":
            lines.append("The license will NOT ask for a HASP dongle")
        else:
            lines.append(f"The HASP dongle associated with this license is {serial}")
        return lines
