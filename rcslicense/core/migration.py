"""
Schema migration of license documents written by older versions.

Rules run in ascending version order and each one checks the fields it
touches, so running the migration twice gives the same document.

The first two rules can rename the same field back and forth: a 9.2-era file
carrying ``correlation`` is first renamed to ``profiling`` and then back to
``correlation``. Files issued for 9.2 and earlier rely on that, so keep both.
"""

from __future__ import annotations

import logging

from rcslicense.common.versioning import version_le
from rcslicense.core.document import LicenseDocument

logger = logging.getLogger(__name__)


class MigrationEngine:
    """Rewrites older license documents into the shape of their version."""

    def migrate(self, document: LicenseDocument) -> LicenseDocument:
        """Return a migrated copy of document."""
        migrated = document.copy()

        self._rename_correlation(migrated)

        if version_le(migrated.version, "9.2"):
            logger.info("Old license needs adjustments...")
            self._restore_correlation(migrated)
            self._archive_as_bool(migrated)

        if version_le(migrated.version, "9.3"):
            self._add_winmo(migrated)

        if version_le(migrated.version, "9.4"):
            self._enable_scout(migrated)

        return migrated

    @staticmethod
    def _rename_correlation(document: LicenseDocument) -> None:
        if document.get("correlation") is None:
            return
        logger.info("Migrating 'correlation' to 'profiling'...")
        document["profiling"] = document["correlation"]
        del document["correlation"]

    @staticmethod
    def _restore_correlation(document: LicenseDocument) -> None:
        if document.get("profiling") is None:
            return
        logger.info("Renaming 'profiling' to 'correlation'...")
        document["correlation"] = document.pop("profiling")

    @staticmethod
    def _archive_as_bool(document: LicenseDocument) -> None:
        # integer 0 only; a boolean false is already in the old shape
        archive = document.get("archive")
        if isinstance(archive, int) and not isinstance(archive, bool) and archive == 0:
            document["archive"] = False

    @staticmethod
    def _add_winmo(document: LicenseDocument) -> None:
        if "winmo" not in document.agents:
            document.agents["winmo"] = [False, False]

    @staticmethod
    def _enable_scout(document: LicenseDocument) -> None:
        document["scout"] = True
