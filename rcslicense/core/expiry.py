"""
Visible and hidden expiry of license documents.

The hidden expiry lives in ``digest_seed``: a Unix timestamp packed as a
4-byte little-endian unsigned integer, so it reads like random salt.
"""

from __future__ import annotations

import calendar
import struct
from datetime import date, datetime, timezone
from typing import Any

from pydantic import TypeAdapter, ValidationError

from rcslicense.common.exceptions import LicenseValidationError
from rcslicense.common.models import ExpiryStatus
from rcslicense.core.document import LicenseDocument

_SEED_FORMAT = "<I"
_EXPIRY_ADAPTER = TypeAdapter(datetime)


def pack_hidden_expiry(day: date) -> bytes:
    """Pack midnight UTC of day into a digest seed."""
    timestamp = calendar.timegm((day.year, day.month, day.day, 0, 0, 0))
    try:
        return struct.pack(_SEED_FORMAT, timestamp)
    except struct.error as err:
        msg = f"Hidden expiry {day.isoformat()} cannot be packed into 4 bytes"
        raise LicenseValidationError(msg) from err


def unpack_hidden_expiry(seed: bytes) -> datetime:
    """Decode a digest seed into an aware UTC datetime."""
    if len(seed) != struct.calcsize(_SEED_FORMAT):
        msg = f"Invalid License File: digest seed must be 4 bytes, got {len(seed)}"
        raise LicenseValidationError(msg)
    (timestamp,) = struct.unpack(_SEED_FORMAT, seed)
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def parse_expiry(value: Any) -> datetime:
    """Read the visible expiry field as an aware UTC datetime.

    Naive timestamps are taken as UTC and a bare date means midnight UTC.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            moment = _EXPIRY_ADAPTER.validate_python(value.strip())
        except ValidationError as err:
            msg = f"Invalid License File: cannot parse expiry {value!r}"
            raise LicenseValidationError(msg) from err
    else:
        msg = f"Invalid License File: unsupported expiry {value!r}"
        raise LicenseValidationError(msg)

    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class ExpiryEvaluator:
    """Decides whether a document has reached its visible or hidden expiry."""

    def evaluate(self, document: LicenseDocument, now: datetime) -> ExpiryStatus:
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        expiry = document.expiry
        if expiry is not None:
            expires_at = parse_expiry(expiry)
            if now >= expires_at:
                return ExpiryStatus.expired(expires_at)

        seed = document.digest_seed
        if seed is not None:
            hidden_at = unpack_hidden_expiry(seed)
            if now >= hidden_at:
                return ExpiryStatus.hidden_expired(hidden_at)

        return ExpiryStatus.valid()
