"""
Configuration settings for the license generator.
"""

from __future__ import annotations

import logging


class Config:
    """Central configuration class for all system settings."""

    def __init__(self) -> None:
        # Schema version written by this generator
        self.LICENSE_VERSION: str = "9.6"

        # Documents below this version are sealed without the version suffix
        self.INTEGRITY_BREAKPOINT: str = "9.6"

        # Embedded secrets shared with every previously issued license file
        self.SIGNATURE_KEY: str = "əɹnʇɐuƃıs ɐ ʇou sı sıɥʇ"
        self.INTEGRITY_PASSPHRASE: str = "€ ∫∑x=1 ∆t π™"
        self.INTEGRITY_PASSPHRASE_VERSIONED: str = "€ ∫∑x=1 ∆t π™ {version} √µ…"
        self.INTEGRITY_KEY_SIZE: int = 16  # AES-128

        # Random material
        self.DECOY_DIGEST_BYTES: int = 20
        self.WATERMARK_LENGTH: int = 8

        # Logging
        self.LOG_LEVEL: int = logging.INFO
        self.LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
