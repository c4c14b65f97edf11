# rqlmongo/__init__.py
"""rqlmongo - Convert RQL resource queries into Mongo queries."""

from rqlmongo.compiler import Compiler, compile
from rqlmongo.convert import convert, convert_string, convert_url, query_from_url
from rqlmongo.errors import ConflictError, ConversionError, ParseError, RQLError, ValidationError
from rqlmongo.models import MongoQuery
from rqlmongo.query import (
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
    parse,
    select,
    sort,
    to_string,
    validate,
)

__all__ = [
    # Query tree
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
    "to_string",
    # Compilation
    "Compiler",
    "compile",
    "convert",
    "convert_string",
    "convert_url",
    "query_from_url",
    "MongoQuery",
    # Errors
    "RQLError",
    "ParseError",
    "ConversionError",
    "ValidationError",
    "ConflictError",
]
