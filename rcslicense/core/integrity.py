"""
Computation and verification of the license verification fields.

A sealed document carries three computed fields:

``digest``
    Twenty random bytes. Never checked; it only makes the file look like it
    carries a content hash.
``signature``
    HMAC-SHA256 of the canonical text under an embedded key. Checked and
    reported, but a mismatch does not reject the document. It exists to make
    anyone inspecting the format think it is the real check.
``integrity``
    AES-128-CBC encryption of the SHA-256 of the canonical text, under a key
    derived from an embedded passphrase. From version 9.6 the passphrase also
    contains the declared version, so files from before and after that version
    are not valid for each other. This is the only field that is really
    enforced.
"""

from __future__ import annotations

import hmac
import logging
from typing import Any

from rcslicense.common.config import Config
from rcslicense.common.crypto import CryptoUtils
from rcslicense.common.mixins import Configurable
from rcslicense.common.models import IntegritySeal, VerificationReport
from rcslicense.common.versioning import version_lt
from rcslicense.core.document import LicenseDocument

logger = logging.getLogger(__name__)

SIGNATURE_EXCLUDED = ("integrity", "signature")
INTEGRITY_EXCLUDED = ("integrity",)


class IntegrityEngine(Configurable):
    """Seals documents and checks their seals."""

    def __init__(self, config: Config | None = None, **overrides: Any) -> None:
        self.config = config or Config()
        self.apply_config_overrides(
            overrides,
            self.config,
            [
                "signature_key",
                "integrity_passphrase",
                "integrity_passphrase_versioned",
                "integrity_breakpoint",
                "integrity_key_size",
                "decoy_digest_bytes",
            ],
        )

    def passphrase_for(self, version: str) -> str:
        """Select the integrity passphrase for a declared version."""
        if version_lt(version, self.integrity_breakpoint):
            return self.integrity_passphrase
        return self.integrity_passphrase_versioned.format(version=version)

    def signature_for(self, document: LicenseDocument) -> str:
        content = document.canonical_text(exclude=SIGNATURE_EXCLUDED)
        return CryptoUtils.hmac_sha256_hex(content, self.signature_key.encode("utf-8"))

    def integrity_for(self, document: LicenseDocument) -> str:
        content = document.canonical_text(exclude=INTEGRITY_EXCLUDED)
        key = CryptoUtils.derive_key(
            self.passphrase_for(document.version), self.integrity_key_size
        )
        return CryptoUtils.aes_cbc_encrypt(CryptoUtils.sha256(content), key).hex()

    def compute(self, document: LicenseDocument) -> IntegritySeal:
        """Recompute and store digest, signature and integrity."""
        logger.info("Recalculating integrity...")

        document.pop("integrity", None)
        document.pop("signature", None)

        document["digest"] = CryptoUtils.random_hex(self.decoy_digest_bytes)
        document["signature"] = self.signature_for(document)
        document["integrity"] = self.integrity_for(document)

        return IntegritySeal(
            digest=document["digest"],
            signature=document["signature"],
            integrity=document["integrity"],
        )

    def verify(self, document: LicenseDocument) -> VerificationReport:
        """Compare the stored signature and integrity with fresh ones.

        Mismatches are logged and reported, never raised.
        """
        logger.info("Checking integrity...")

        report = VerificationReport(
            signature_valid=_matches(document.get("signature"), self.signature_for(document)),
            integrity_valid=_matches(document.get("integrity"), self.integrity_for(document)),
        )
        for failure in report.failures:
            logger.warning(failure)
        return report


def _matches(stored: Any, expected: str) -> bool:
    if not isinstance(stored, str):
        return False
    return hmac.compare_digest(stored.encode("utf-8"), expected.encode("utf-8"))
