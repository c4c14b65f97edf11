"""Low level scanning of RQL text: groups, argument lists and shorthand."""

import re

from rqlmongo.errors import ParseError

ESCAPE = "\\"
QUOTES = "'\""

# Maps infix comparators to operator names: `foo<=3` -> `le(foo,3)`.
OPERATOR_MAP = {
    "!=": "ne",
    "<": "lt",
    "<=": "le",
    "=": "eq",
    "==": "eq",
    ">": "gt",
    ">=": "ge",
}

# Percent-encoded comparators from URLs. An escaped `\%3C` is a literal `<`.
_URL_COMPARATORS = [
    (re.compile(r"(?<!\\)%3C=", re.IGNORECASE), "=le="),
    (re.compile(r"(?<!\\)%3E=", re.IGNORECASE), "=ge="),
    (re.compile(r"(?<!\\)%3C", re.IGNORECASE), "=lt="),
    (re.compile(r"(?<!\\)%3E", re.IGNORECASE), "=gt="),
]

_SHORTHAND_RE = re.compile(
    # field
    r"(\([+*$\-:\w%._,]+\)|[+*$\-: \w%._]*|)"
    # comparator, either a symbol or FIQL style `=name=`
    r"([<>!]?=(?:\w*=)?|>|<)"
    # value
    r"(\([+*$\-:\w%._,]+\)|[+*$\-:\w %._]*|)"
)


def match_group(text: str) -> str:
    """Return what lies between the leading ``(`` and its matching ``)``.

    Quoted spans and backslash escapes are copied through untouched, so the
    result can be scanned again by :func:`split_args`.
    """
    depth = 1
    quote = ""
    index = 1
    while index < len(text):
        char = text[index]
        if quote:
            if char == quote:
                quote = ""
        elif char == ESCAPE:
            index += 2
            continue
        elif char in QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return text[1:index]
        index += 1
    raise ParseError(f"Could not find closing paren: {text}")


def _skip_to_next_arg(text: str, index: int) -> int:
    while index < len(text) and text[index] == " ":
        index += 1
    if index == len(text):
        return index
    if text[index] == ",":
        return index + 1
    raise ParseError(f"Unexpected {text[index]!r} after array argument: {text}")


def split_args(text: str) -> list[str | list]:
    """Split the inside of a group into its top level arguments.

    An argument that starts with ``(`` is an array and comes back as a nested
    list. Other arguments are returned as raw text with surrounding whitespace
    removed; quotes and escapes are left for :func:`unquote_arg`.
    """
    args: list[str | list] = []
    current = ""
    quote = ""
    index = 0
    while index < len(text):
        char = text[index]
        if quote:
            if char == quote:
                quote = ""
            current += char
        elif char == ESCAPE:
            current += text[index : index + 2]
            index += 2
            continue
        elif char in QUOTES:
            quote = char
            current += char
        elif not current:
            if char == "(":
                group = match_group(text[index:])
                args.append(split_args(group))
                index = _skip_to_next_arg(text, index + len(group) + 2)
                continue
            if char == ",":
                args.append("")
            elif char != " ":
                current += char
        elif char == ",":
            args.append(current.strip())
            current = ""
        elif char == "(":
            group = match_group(text[index:])
            current += f"({group})"
            index += len(group) + 2
            continue
        else:
            current += char
        index += 1

    if current.strip():
        args.append(current.strip())
    return args


def unquote_arg(raw: str) -> str:
    """Drop quotes and escapes from a plain argument.

    Quoted spans are taken literally. An escaped colon stays escaped so the
    literal converter does not read it as a type tag separator.
    """
    chars: list[str] = []
    quote = ""
    index = 0
    while index < len(raw):
        char = raw[index]
        if quote:
            if char == quote:
                quote = ""
            else:
                chars.append(char)
        elif char == ESCAPE and index + 1 < len(raw):
            following = raw[index + 1]
            chars.append(ESCAPE + following if following == ":" else following)
            index += 2
            continue
        elif char in QUOTES:
            quote = char
        else:
            chars.append(char)
        index += 1
    return "".join(chars)


def _rewrite(match: re.Match) -> str:
    field, operator, value = match.groups()
    if len(operator) >= 3 and operator[0] == "=" and operator[-1] == "=":
        name = operator[1:-1]
    elif operator in OPERATOR_MAP:
        name = OPERATOR_MAP[operator]
    else:
        raise ParseError(f'Illegal operator: "{operator}"')
    return f"{name}({field},{value})"


def normalize_shorthand(text: str) -> str:
    """Rewrite ``field<op>value`` comparisons into ``name(field,value)`` calls."""
    for pattern, replacement in _URL_COMPARATORS:
        text = pattern.sub(replacement, text)
    return _SHORTHAND_RE.sub(_rewrite, text)
