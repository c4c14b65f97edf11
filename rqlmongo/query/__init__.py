from .combinators import (
    Query,
    after,
    and_,
    before,
    eq,
    ge,
    gt,
    in_,
    le,
    limit,
    lt,
    ne,
    or_,
    out,
    select,
    sort,
)
from .parser import parse
from .serializer import to_string
from .validator import check, validate

__all__ = [
    "Query",
    "eq",
    "ne",
    "lt",
    "le",
    "gt",
    "ge",
    "in_",
    "out",
    "and_",
    "or_",
    "sort",
    "select",
    "limit",
    "after",
    "before",
    "parse",
    "validate",
    "check",
    "to_string",
]
