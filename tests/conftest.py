from datetime import datetime, timezone

import pytest

from rcslicense.common.config import Config
from rcslicense.core.document import LicenseDocument
from rcslicense.core.service import LicenseService

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def service(config: Config, now: datetime) -> LicenseService:
    """Service with a frozen clock."""
    return LicenseService(config=config, clock=lambda: now)


@pytest.fixture
def document() -> LicenseDocument:
    """Default document with a fixed watermark."""
    return LicenseDocument.default(version="9.6", check="abcdefgh")


@pytest.fixture
def legacy_fields() -> dict:
    """Field set of a 9.2-era license file."""
    return {
        "type": "reusable",
        "serial": "off",
        "version": "9.2",
        "users": 5,
        "agents": {
            "total": 10,
            "desktop": 8,
            "mobile": 2,
            "windows": [True, False],
            "osx": [True, False],
            "linux": [False, False],
            "winphone": [False, False],
            "ios": [False, False],
            "blackberry": [False, False],
            "bb10": [False, False],
            "symbian": [False, False],
            "android": [True, True],
        },
        "alerting": True,
        "correlation": True,
        "intelligence": False,
        "connectors": False,
        "rmi": [False, False],
        "nia": [0, False],
        "shards": 2,
        "exploits": False,
        "deletion": False,
        "modify": False,
        "scout": False,
        "ocr": True,
        "translation": False,
        "archive": 0,
        "collectors": {"collectors": 1, "anonymizers": 0},
        "check": "zyxwvuts",
    }
