"""Typed literal decoding for RQL argument values.

An argument may carry an explicit type tag (``number:12``, ``string:true``,
``epoch:0``, ``re:^foo``). Untagged arguments go through :func:`auto`, which
never fails and falls back to a URL-decoded string.
"""

import json
import math
import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import unquote

from rqlmongo.errors import ConversionError

AUTO_CONVERTED: dict[str, Any] = {
    "true": True,
    "false": False,
    "null": None,
    "undefined": None,
    "Infinity": math.inf,
    "-Infinity": -math.inf,
}

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_INT_RE = re.compile(r"[+-]?\d+")
_PREFIXED_INT_RE = re.compile(r"[+-]?0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,3}))?Z")
_TAG_RE = re.compile(r"([A-Za-z]\w*):")

# Template used to complete partial ISO dates such as "2001" or "2001-05".
_ISO_TEMPLATE = "0000-01-01T00:00:00Z"


def to_number(text: str) -> int | float:
    stripped = text.strip()
    if _INT_RE.fullmatch(stripped):
        return int(stripped)
    if _PREFIXED_INT_RE.fullmatch(stripped):
        return int(stripped, 0)
    if stripped in ("Infinity", "+Infinity"):
        return math.inf
    if stripped == "-Infinity":
        return -math.inf
    if _FLOAT_RE.fullmatch(stripped):
        return float(stripped)
    raise ConversionError(f"Invalid number {text!r}", text)


def to_string(text: str) -> str:
    return unquote(text)


def to_boolean(text: str) -> bool:
    return text.lower() == "true"


def to_date(text: str) -> datetime:
    """Decode an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        match = _ISO_DATE_RE.fullmatch(text)
        if match:
            year, month, day, hour, minute, second, millis = match.groups()
            micros = int((millis or "0").ljust(3, "0")) * 1000
            return datetime(
                int(year), int(month), int(day), int(hour), int(minute), int(second), micros, tzinfo=UTC
            )
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ConversionError(f"Invalid date {text!r}", text) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def to_epoch(text: str) -> datetime:
    """Decode milliseconds since the Unix epoch."""
    millis = to_number(text)
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except (OverflowError, ValueError):
        raise ConversionError(f"Invalid date {text!r}", text) from None


def to_isodate(text: str) -> datetime:
    """Decode a partial ISO date, defaulting the missing parts.

    Example: ``2001-05`` -> ``2001-05-01T00:00:00Z``
    """
    padded = "0" * max(0, 4 - len(text)) + text
    padded += _ISO_TEMPLATE[len(padded) :]
    return to_date(padded)


def _regex(flags: int) -> Callable[[str], re.Pattern]:
    def convert(text: str) -> re.Pattern:
        try:
            return re.compile(to_string(text), flags)
        except re.error as e:
            raise ConversionError(str(e), text) from None

    return convert


def to_json(text: str) -> Any:
    try:
        return json.loads(to_string(text))
    except json.JSONDecodeError as e:
        raise ConversionError(str(e), text) from None


def auto(text: str) -> Any:
    """Decode an untagged argument. Never fails."""
    if text in AUTO_CONVERTED:
        return AUTO_CONVERTED[text]
    try:
        return to_number(text)
    except ConversionError:
        pass
    value = to_string(text)
    # A single-quoted value that survived URL decoding is a JSON string body,
    # which keeps values like '%2712%27' from being read as numbers.
    if len(value) >= 2 and value[0] == "'" and value[-1] == "'":
        try:
            return json.loads('"' + value[1:-1] + '"')
        except json.JSONDecodeError:
            return value
    return value


CONVERTERS: dict[str, Callable[[str], Any]] = {
    "auto": auto,
    "number": to_number,
    "string": to_string,
    "boolean": to_boolean,
    "date": to_date,
    "epoch": to_epoch,
    "isodate": to_isodate,
    "re": _regex(re.IGNORECASE),
    "RE": _regex(0),
    "json": to_json,
}


def string_to_value(text: str) -> Any:
    """Decode one argument, honouring an optional ``tag:`` prefix."""
    converter = auto
    match = _TAG_RE.match(text)
    if match:
        tag = match.group(1)
        if tag not in CONVERTERS:
            raise ConversionError(f'Unknown converter: "{tag}"', text)
        converter = CONVERTERS[tag]
        text = text[match.end() :]
    return converter(text.replace("\\:", ":"))
