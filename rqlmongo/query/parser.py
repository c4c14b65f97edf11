# rqlmongo/query/parser.py
"""RQL text parser.

Grammar:
    query      = term (separator term)*
    separator  = "&" | "," | "|"
    term       = name "(" args ")" | "(" query ")"
    args       = arg ("," arg)*
    arg        = term | "(" args ")" | literal

"&" and "," are AND, "|" is OR, and AND binds tighter than OR:
    eq(a,1),eq(b,2)|eq(c,3)  ->  or(and(eq(a,1),eq(b,2)),eq(c,3))

Shorthand comparisons are rewritten to calls before scanning:
    price>=10&name=foo       ->  ge(price,10)&eq(name,foo)
"""

import logging
import re
from typing import Any

from rqlmongo.errors import ParseError
from rqlmongo.query.combinators import Query
from rqlmongo.query.converters import string_to_value
from rqlmongo.query.tokenizer import match_group, normalize_shorthand, split_args, unquote_arg

logger = logging.getLogger(__name__)

_CALL_RE = re.compile(r"\w+\(")

SEPARATORS = {"&": "and", ",": "and", "|": "or"}


def parse(query: str) -> Query:
    """Parse RQL text into a query tree."""
    if not query:
        raise ParseError(f"Query empty or invalid: {query!r}")
    if query.startswith("?"):
        raise ParseError(f"Query must not start with ?: {query}")

    normalized = normalize_shorthand(query)
    logger.debug("Normalized query: %s", normalized)
    return _walk(normalized)


def _walk(text: str, index: int = 0, top: Query | None = None) -> Query:
    """Scan ``text`` from ``index``, collecting terms into ``top``.

    ``top`` is the and/or node being filled at this level. When a separator of
    the other kind shows up, a nested aggregate takes over the rest of the text.
    """
    current = Query("")
    closed = False

    while index < len(text):
        char = text[index]
        if char in SEPARATORS:
            operator = SEPARATORS[char]
            term = _finish(current, closed, text)
            if top is not None and top.name != operator:
                if operator == "and":
                    # or(..., and(term, <rest>))
                    top.args.append(_walk(text, index + 1, Query("and", [term])))
                    return top
                # or(and(..., term), <rest>)
                top.args.append(term)
                return _walk(text, index + 1, Query("or", [top]))
            if top is None:
                top = Query(operator)
            top.args.append(term)
            current, closed = Query(""), False
        elif char == "(":
            if closed:
                raise ParseError(f"Unexpected argument list after {current.name or 'group'}: {text}")
            group = match_group(text[index:])
            if current.name:
                current.args = [_parse_arg(arg) for arg in split_args(group)]
            else:
                current = _walk(group)
            closed = True
            index += len(group) + 2
            continue
        elif not char.isspace():
            if closed:
                raise ParseError(f"Unexpected {char!r} after {current.name}(...): {text}")
            current.name += char
        index += 1

    if top is not None:
        top.args.append(_finish(current, closed, text))
        return top
    return _finish(current, closed, text)


def _finish(current: Query, closed: bool, text: str) -> Query:
    if not current.name and not closed:
        raise ParseError(f"Missing operator: {text}")
    return current


def _parse_arg(arg: str | list) -> Any:
    if isinstance(arg, list):
        return [_parse_arg(a) for a in arg]
    if _CALL_RE.match(arg):
        return _walk(arg)
    return string_to_value(unquote_arg(arg))
