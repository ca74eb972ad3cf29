"""
YAML (de)serialization of license files.

License files were written by Ruby's Psych: keys are symbols (``:type:``) and
the hidden expiry seed is a binary string tagged ``!binary``. The codec strips
the symbol marker on load and puts it back on dump, so the rest of the package
only sees plain string keys.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from typing import Any

import yaml

from rcslicense.common.exceptions import DeserializationError


class LicenseLoader(yaml.SafeLoader):
    """Safe loader that also understands Psych's local ``!binary`` tag."""


LicenseLoader.add_constructor("!binary", yaml.SafeLoader.construct_yaml_binary)


class LicenseDumper(yaml.SafeDumper):
    """Safe dumper that writes byte strings the way Psych does."""


def _represent_binary(dumper: yaml.SafeDumper, data: bytes) -> yaml.ScalarNode:
    encoded = base64.encodebytes(data).decode("ascii")
    return dumper.represent_scalar("!binary", encoded, style="|")


LicenseDumper.add_representer(bytes, _represent_binary)


def _unsymbolize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            (key[1:] if isinstance(key, str) and key.startswith(":") else key): _unsymbolize(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_unsymbolize(item) for item in value]
    return value


def _symbolize(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            (f":{key}" if isinstance(key, str) else key): _symbolize(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_symbolize(item) for item in value]
    return value


class YamlCodec:
    """Reads and writes license files in the legacy YAML layout."""

    def decode(self, data: bytes) -> dict[str, Any]:
        """Parse license bytes into a plain mapping."""
        try:
            loaded = yaml.load(data, Loader=LicenseLoader)  # noqa: S506
        except yaml.YAMLError as err:
            msg = f"Invalid License File: cannot parse YAML ({err})"
            raise DeserializationError(msg) from err

        if not isinstance(loaded, Mapping):
            msg = "Invalid License File: top level is not a mapping"
            raise DeserializationError(msg)
        return _unsymbolize(loaded)

    def encode(self, fields: Mapping[str, Any]) -> bytes:
        """Serialize a mapping with Ruby-style symbol keys."""
        text = yaml.dump(
            _symbolize(fields),
            Dumper=LicenseDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            explicit_start=True,
        )
        return text.encode("utf-8")
