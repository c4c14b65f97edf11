"""Print query trees back to RQL text.

The output parses back to an equal tree: values whose untagged text would
decode differently are written with a type tag (``string:12``).
"""

import json
import math
import re
from datetime import UTC, datetime
from typing import Any
from urllib.parse import quote

from rqlmongo.query.combinators import Query
from rqlmongo.query.converters import auto
from rqlmongo.query.tokenizer import ESCAPE, unquote_arg

# Encoded `<` and `>` would be read back as URL comparators.
_COMPARATOR_RE = re.compile(r"%3[CE]")


def encode_string(text: str) -> str:
    """URL-encode everything but letters, digits and ``_.-~``.

    ``<`` and ``>`` come out as ``\\%3C`` and ``\\%3E``.
    """
    return _COMPARATOR_RE.sub(lambda m: ESCAPE + m.group(0), quote(text, safe=""))


def encode_value(value: Any) -> str:
    match value:
        case None:
            return "null"
        case bool():
            return "true" if value else "false"
        case int():
            return str(value)
        case float() if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        case float():
            return repr(value)
        case str():
            return _encode_str(value)
        case datetime():
            return f"date:{_format_date(value)}"
        case re.Pattern():
            tag = "re" if value.flags & re.IGNORECASE else "RE"
            return f"{tag}:{encode_string(value.pattern)}"
        case dict():
            return f"json:{encode_string(json.dumps(value, separators=(',', ':')))}"
        case _:
            raise TypeError(f"Cannot encode {type(value).__name__} as an RQL value")


def _encode_str(text: str) -> str:
    encoded = encode_string(text)
    if not text:
        return "string:"
    decoded = auto(unquote_arg(encoded))
    if isinstance(decoded, str) and decoded == text:
        return encoded
    return f"string:{encoded}"


def _format_date(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    if value.microsecond % 1000:
        return value.replace(tzinfo=None).isoformat() + "Z"
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def to_string(part: Any) -> str:
    """Serialize a query, an array of args, or a single value."""
    if isinstance(part, Query):
        return f"{part.name}({_join(part.args)})"
    if isinstance(part, (list, tuple)):
        return f"({_join(part)})"
    return encode_value(part)


def _join(args: list[Any] | tuple[Any, ...]) -> str:
    return ",".join(to_string(arg) for arg in args)
