"""Grammar checks for query trees.

Trees may come from :func:`rqlmongo.query.parser.parse` or be built by callers,
either as :class:`Query` nodes or as plain ``{"name": ..., "args": [...]}``
mappings.
"""

from typing import Any

from rqlmongo.errors import ValidationError
from rqlmongo.query.combinators import Query, is_query_like
from rqlmongo.query.operators import (
    COMPARISON_OPERATORS,
    LOGICAL_OPERATORS,
    Comparison,
    Cursor,
    Limit,
    Logical,
    Operator,
    Select,
    Sort,
)


def validate(rql: object) -> Query:
    """Check a query tree and return it unchanged.

    Raises:
        ValidationError: If an operator is unknown or its arguments break its contract.
    """
    query = as_query(rql)
    check(query)
    return query


def as_query(rql: object) -> Query:
    if isinstance(rql, Query):
        if isinstance(rql.name, str):
            return rql
    elif is_query_like(rql):
        return Query.from_dict(rql)  # type: ignore[arg-type]
    raise ValidationError("Argument is not a valid query object")


def check(rql: object) -> Operator:
    """Check a query tree and return its typed form."""
    query = as_query(rql)
    args = query.args
    match query.name.lower():
        case op if op in COMPARISON_OPERATORS:
            if any(_contains_query(arg) for arg in args):
                raise ValidationError(f"RQL is not allowed in arguments for operator: {query.name}")
            if len(args) != 2:
                raise ValidationError(
                    f"RQL Operator {query.name} requires a field and a value, got {len(args)} arguments"
                )
            field, value = args
            if not isinstance(field, str) or not field:
                raise ValidationError(f"RQL Operator {query.name} requires a field name as the first argument")
            return Comparison(op, field, value)  # type: ignore[arg-type]

        case op if op in LOGICAL_OPERATORS:
            if not args or not all(is_query_like(arg) for arg in args):
                raise ValidationError(f"RQL is required in arguments for operator: {query.name}")
            return Logical(op, tuple(check(arg) for arg in args))  # type: ignore[arg-type]

        case "sort" | "select" as op:
            if not all(isinstance(arg, str) for arg in args):
                raise ValidationError(f"RQL Operator {query.name} requires string arguments")
            if not all(arg.lstrip("+-") for arg in args):
                raise ValidationError(f"RQL Operator {query.name} requires field names")
            return Sort(tuple(args)) if op == "sort" else Select(tuple(args))

        case "limit":
            if not args or not _is_count(args[0]):
                raise ValidationError(f"RQL Operator {query.name} requires a number as the first argument")
            if len(args) > 1 and not _is_count(args[1]):
                raise ValidationError(f"RQL Operator {query.name} requires a number as the second argument")
            if len(args) > 2:
                raise ValidationError(f"RQL Operator {query.name} takes at most two arguments")
            return Limit(args[0], args[1] if len(args) > 1 else None)

        case "after" | "before" as op:
            if not args or not isinstance(args[0], str):
                raise ValidationError(f"RQL Operator {query.name} requires a string as the first argument")
            return Cursor(op, args[0])  # type: ignore[arg-type]

        case _:
            raise ValidationError(f"RQL Operator is not allowed: {query.name}")


def _contains_query(arg: Any) -> bool:
    if isinstance(arg, list):
        return any(_contains_query(a) for a in arg)
    return is_query_like(arg)


def _is_count(value: Any) -> bool:
    # bool is an int subclass but never a count
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
