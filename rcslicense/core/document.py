"""
In-memory license document.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from pydantic import ValidationError

from rcslicense.common.canonical import render_mapping
from rcslicense.common.exceptions import DeserializationError, LicenseValidationError
from rcslicense.common.models import LicenseLimits

REQUIRED_FIELDS = ("version", "agents")


class LicenseDocument(MutableMapping[str, Any]):
    """Ordered field set of a license file.

    Key order matters: the canonical text used for every digest renders the
    fields in insertion order. Re-assigning an existing key keeps its
    position, deleting and re-adding a key moves it to the end, exactly as a
    Ruby hash behaves.
    """

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        self._fields: dict[str, Any] = copy.deepcopy(dict(fields or {}))

    @classmethod
    def default(cls, version: str, check: str) -> LicenseDocument:
        """Build a fresh document with the schema defaults."""
        limits = LicenseLimits(version=version, check=check)
        return cls(limits.model_dump(exclude_none=True))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LicenseDocument:
        """Validate a deserialized mapping and wrap it.

        Raises:
            DeserializationError: If required fields are missing or typed wrongly,
                or a field holds a value with no canonical form
        """
        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            msg = f"Invalid License File: missing field(s) {', '.join(missing)}"
            raise DeserializationError(msg)
        try:
            LicenseLimits.model_validate(dict(data))
        except ValidationError as err:
            msg = f"Invalid License File: {err.error_count()} malformed field(s)\n{err}"
            raise DeserializationError(msg) from err

        document = cls(data)
        try:
            document.canonical_text()
        except TypeError as err:
            msg = f"Invalid License File: {err}"
            raise DeserializationError(msg) from err
        return document

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._fields[key] = value

    def __delitem__(self, key: str) -> None:
        del self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fields!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LicenseDocument):
            return list(self._fields.items()) == list(other._fields.items())
        return NotImplemented

    def copy(self) -> LicenseDocument:
        return type(self)(self._fields)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._fields)

    def canonical_text(self, exclude: Iterable[str] = ()) -> bytes:
        """Render the fields, minus ``exclude``, as digest input."""
        skipped = set(exclude)
        fields = {key: value for key, value in self._fields.items() if key not in skipped}
        return render_mapping(fields).encode("utf-8")

    @property
    def version(self) -> str:
        return self._fields["version"]

    @version.setter
    def version(self, value: str) -> None:
        self._fields["version"] = value

    @property
    def agents(self) -> dict[str, Any]:
        return self._fields["agents"]

    @property
    def expiry(self) -> Any:
        """Visible expiry as stored, or None when the license never expires."""
        return self._fields.get("expiry")

    @expiry.setter
    def expiry(self, value: Any) -> None:
        self._fields["expiry"] = value

    @property
    def digest_seed(self) -> bytes | None:
        return self._fields.get("digest_seed")

    @digest_seed.setter
    def digest_seed(self, value: bytes) -> None:
        self._fields["digest_seed"] = value

    def check_limits(self) -> None:
        """Reject agent totals lower than their desktop or mobile share."""
        total = self.agents.get("total", 0)
        if total < self.agents.get("desktop", 0) or total < self.agents.get("mobile", 0):
            msg = "Invalid License File: total is lower than desktop or mobile"
            raise LicenseValidationError(msg)
