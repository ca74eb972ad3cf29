"""
Pydantic models for license schema validation and engine results.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictBytes,
    StrictInt,
    StrictStr,
)

PlatformPair = Annotated[list[StrictBool], Field(min_length=2, max_length=2)]
CountPair = Annotated[list[Union[StrictInt, StrictBool]], Field(min_length=2, max_length=2)]
Flag = Union[StrictBool, None]

PLATFORMS = (
    "windows",
    "osx",
    "linux",
    "winphone",
    "ios",
    "blackberry",
    "bb10",
    "symbian",
    "android",
)


def _disabled() -> list[bool]:
    return [False, False]


class AgentLimits(BaseModel):
    model_config = ConfigDict(extra="allow")

    total: StrictInt = 0
    desktop: StrictInt = 0
    mobile: StrictInt = 0
    windows: PlatformPair = Field(default_factory=_disabled)
    osx: PlatformPair = Field(default_factory=_disabled)
    linux: PlatformPair = Field(default_factory=_disabled)
    winphone: PlatformPair = Field(default_factory=_disabled)
    ios: PlatformPair = Field(default_factory=_disabled)
    blackberry: PlatformPair = Field(default_factory=_disabled)
    bb10: PlatformPair = Field(default_factory=_disabled)
    symbian: PlatformPair = Field(default_factory=_disabled)
    android: PlatformPair = Field(default_factory=_disabled)
    winmo: PlatformPair | None = None


class CollectorLimits(BaseModel):
    model_config = ConfigDict(extra="allow")

    collectors: StrictInt = Field(default=1, ge=0)
    anonymizers: StrictInt = Field(default=0, ge=0)


class LicenseLimits(BaseModel):
    """Field schema of a license document.

    Field order is the order the legacy generator wrote, which the canonical
    text depends on. Unknown keys such as ``correlation`` are kept.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["reusable"] = "reusable"
    serial: StrictStr = "off"
    version: StrictStr = "9.6"
    users: StrictInt = Field(default=1, ge=0)
    agents: AgentLimits = Field(default_factory=AgentLimits)
    alerting: Flag = False
    profiling: Flag = False
    intelligence: Flag = False
    connectors: Flag = False
    rmi: PlatformPair = Field(default_factory=_disabled)
    nia: CountPair = Field(default_factory=lambda: [0, False])
    shards: StrictInt = Field(default=1, ge=1)
    exploits: Flag = False
    deletion: Flag = False
    modify: Flag = False
    scout: Flag = True
    ocr: Flag = True
    translation: Flag = False
    archive: Union[StrictInt, StrictBool] = 0
    collectors: CollectorLimits = Field(default_factory=CollectorLimits)
    check: StrictStr | None = None
    expiry: Union[StrictStr, datetime, date, None] = None
    digest_seed: StrictBytes | None = None
    digest: StrictStr | None = None
    signature: StrictStr | None = None
    integrity: StrictStr | None = None


class IntegritySeal(BaseModel):
    """The three computed verification fields."""

    digest: str
    signature: str
    integrity: str


class VerificationReport(BaseModel):
    """Outcome of re-deriving the stored verification fields."""

    signature_valid: bool
    integrity_valid: bool

    @property
    def failures(self) -> list[str]:
        failures = []
        if not self.signature_valid:
            failures.append("Signature is NOT valid.")
        if not self.integrity_valid:
            failures.append("Integrity is NOT valid.")
        return failures

    @property
    def ok(self) -> bool:
        return self.signature_valid and self.integrity_valid


class ExpiryState(str, Enum):
    VALID = "valid"
    EXPIRED = "expired"
    HIDDEN_EXPIRED = "hidden_expired"


class ExpiryStatus(BaseModel):
    """Expiry verdict; ``expired_at`` is set for both expired states."""

    state: ExpiryState
    expired_at: datetime | None = None

    @classmethod
    def valid(cls) -> ExpiryStatus:
        return cls(state=ExpiryState.VALID)

    @classmethod
    def expired(cls, at: datetime) -> ExpiryStatus:
        return cls(state=ExpiryState.EXPIRED, expired_at=at)

    @classmethod
    def hidden_expired(cls, at: datetime) -> ExpiryStatus:
        return cls(state=ExpiryState.HIDDEN_EXPIRED, expired_at=at)

    @property
    def is_valid(self) -> bool:
        return self.state is ExpiryState.VALID

