"""
Canonical text rendering of license documents.

Every digest stored in a license file was computed by the legacy Ruby 1.9
generator over ``Hash#to_s`` of the document. To stay interoperable with files
already in the field, this module reproduces Ruby's ``inspect`` output for
every value type a license document can hold.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any

_NAMED_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "\v": "\\v",
    "\b": "\\b",
    "\a": "\\a",
    "\x1b": "\\e",
}

# '#' only needs escaping where Ruby would read it as interpolation
_INTERPOLATION_STARTS = ("{", "$", "@")

_PLAIN_SYMBOL = re.compile(r"[A-Za-z_][A-Za-z0-9_]*[?!=]?\Z")

# Julian day number of 0001-01-01 minus its proleptic Gregorian ordinal
_JULIAN_DAY_OFFSET = 1721425
_ITALY_REFORM_DAY = 2299161


def inspect_string(value: str) -> str:
    """Render a text string the way Ruby inspects a UTF-8 String."""
    out = ['"']
    for index, char in enumerate(value):
        if char in _NAMED_ESCAPES:
            out.append(_NAMED_ESCAPES[char])
        elif char == "#" and value[index + 1 : index + 2] in _INTERPOLATION_STARTS:
            out.append("\\#")
        elif char.isprintable():
            out.append(char)
        else:
            codepoint = ord(char)
            if codepoint > 0xFFFF:
                out.append(f"\\u{{{codepoint:X}}}")
            else:
                out.append(f"\\u{codepoint:04X}")
    out.append('"')
    return "".join(out)


def inspect_bytes(value: bytes) -> str:
    """Render a byte string the way Ruby inspects a binary (ASCII-8BIT) String."""
    out = ['"']
    for index, byte in enumerate(value):
        char = chr(byte)
        if char in _NAMED_ESCAPES:
            out.append(_NAMED_ESCAPES[char])
        elif char == "#" and value[index + 1 : index + 2] in (b"{", b"$", b"@"):
            out.append("\\#")
        elif 0x20 <= byte < 0x7F:
            out.append(char)
        else:
            out.append(f"\\x{byte:02X}")
    out.append('"')
    return "".join(out)


def inspect_symbol(name: str) -> str:
    if _PLAIN_SYMBOL.match(name):
        return f":{name}"
    return f":{inspect_string(name)}"


def inspect_float(value: float) -> str:
    """Render a float the way Ruby's ``Float#inspect`` does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        if "." not in mantissa:
            mantissa += ".0"
        return f"{mantissa}e{exponent}"
    return text


def inspect_time(value: datetime) -> str:
    """Render a timestamp the way Ruby 1.9 inspects a Time."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    offset = value.utcoffset() or timedelta(0)
    stamp = value.strftime("%Y-%m-%d %H:%M:%S")
    if offset == timedelta(0):
        return f"{stamp} UTC"
    return f"{stamp} {value.strftime('%z')}"


def inspect_date(value: date) -> str:
    """Render a calendar date the way Ruby inspects a Date."""
    julian_day = value.toordinal() + _JULIAN_DAY_OFFSET
    return (
        f"#<Date: {value.isoformat()} "
        f"(({julian_day}j,0s,0n),+0s,{_ITALY_REFORM_DAY}j)>"
    )


def render(value: Any) -> str:
    """Render any license value as Ruby's ``inspect`` would.

    Raises:
        TypeError: If the value has no Ruby counterpart in a license file
    """
    # bool before int: bool is an int subclass
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "nil"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return inspect_float(value)
    if isinstance(value, str):
        return inspect_string(value)
    if isinstance(value, (bytes, bytearray)):
        return inspect_bytes(bytes(value))
    if isinstance(value, Mapping):
        return render_mapping(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render(item) for item in value) + "]"
    if isinstance(value, datetime):
        return inspect_time(value)
    if isinstance(value, date):
        return inspect_date(value)
    msg = f"Cannot render {type(value).__name__} in a license document"
    raise TypeError(msg)


def render_mapping(fields: Mapping[Any, Any]) -> str:
    """Render a mapping with string keys as a Ruby hash with symbol keys."""
    items = []
    for key, value in fields.items():
        rendered_key = inspect_symbol(key) if isinstance(key, str) else render(key)
        items.append(f"{rendered_key}=>{render(value)}")
    return "{" + ", ".join(items) + "}"
