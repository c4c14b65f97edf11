# rqlmongo/compiler.py
import logging
import os
from typing import Any

from rqlmongo.errors import ConflictError, ValidationError
from rqlmongo.models import MongoQuery
from rqlmongo.query.operators import Comparison, Cursor, Limit, Logical, Operator, Select, Sort
from rqlmongo.query.validator import check

logger = logging.getLogger(__name__)

# RQL operator -> Mongo query operator
CRITERIA_OPERATORS = {
    "or": "$or",
    "ne": "$ne",
    "in": "$in",
    "out": "$nin",
    "le": "$lte",
    "lt": "$lt",
    "gt": "$gt",
    "ge": "$gte",
}


class FieldOperators(dict):
    """Operator map for one field, e.g. ``{"$gt": 1, "$lt": 5}``.

    Kept apart from plain dicts so an ``eq`` against a JSON object value is
    never mistaken for a range constraint.
    """


class OrBranches(list):
    """Criteria of each `or` operand, stored under ``$or``."""


class Compiler:
    """Turns a validated query tree into a :class:`MongoQuery`."""

    def __init__(self, id_field: str | None = None) -> None:
        self._id_field = id_field or self._load_from_env()

    def _load_from_env(self) -> str:
        """Load the identifier field name from the environment."""
        return os.environ.get("RQLMONGO_ID_FIELD", "_id")

    def compile(self, rql: object) -> MongoQuery:
        """Validate ``rql`` and build its Mongo query.

        Raises:
            ValidationError: If the tree breaks the grammar or mixes projection kinds.
            ConflictError: If a field gets both ``eq`` and another comparison.
        """
        operator = check(rql)
        query = MongoQuery()
        self._apply(operator, query, query.criteria)
        logger.debug("Compiled criteria: %s", query.criteria)
        return query

    def _apply(self, operator: Operator, query: MongoQuery, criteria: dict[str, Any]) -> None:
        """Fold one operator into ``query``; comparisons land in ``criteria``."""
        match operator:
            case Comparison(op="eq", field=field, value=value):
                if isinstance(criteria.get(field), FieldOperators | OrBranches):
                    raise ConflictError(f"conflicting operators: eq for {field}", field)
                criteria[field] = value
            case Comparison(op="in" | "out" as op, field=field, value=value):
                self._merge(criteria, op, field, list(value) if isinstance(value, list) else [value])
            case Comparison(op=op, field=field, value=value):
                self._merge(criteria, op, field, value)
            case Logical(op="and", operands=operands):
                for operand in operands:
                    self._apply(operand, query, criteria)
            case Logical(op="or", operands=operands):
                branches: list[dict[str, Any]] = []
                for operand in operands:
                    branch: dict[str, Any] = {}
                    self._apply(operand, query, branch)
                    branches.append(branch)
                key = CRITERIA_OPERATORS["or"]
                if key in criteria and not isinstance(criteria[key], OrBranches):
                    raise ConflictError(f"conflicting operators: or for {key}", key)
                criteria.setdefault(key, OrBranches()).extend(branches)
            case Sort(fields=fields):
                for spec in fields:
                    path, ascending = _split_sign(spec)
                    query.sort[path] = 1 if ascending else -1
            case Select(fields=fields):
                for spec in fields:
                    path, keep = _split_sign(spec)
                    query.projection[path] = 1 if keep else 0
                self._check_projection(query.projection)
            case Limit(limit=limit, skip=skip):
                query.limit = limit
                if skip is not None:
                    query.skip = skip
            case Cursor(kind="after", token=token):
                query.after = token
            case Cursor(kind="before", token=token):
                query.before = token
            case _:
                raise RuntimeError(f"Unknown operator: {operator!r}")

    def _merge(self, criteria: dict[str, Any], op: str, field: str, value: Any) -> None:
        if isinstance(criteria.get(field), OrBranches):
            raise ConflictError(f"conflicting operators: or and {op} for {field}", field)
        if field in criteria and not isinstance(criteria[field], FieldOperators):
            raise ConflictError(f"conflicting operators: eq and {op} for {field}", field)
        operators = criteria.setdefault(field, FieldOperators())
        operators[CRITERIA_OPERATORS[op]] = value

    def _check_projection(self, projection: dict[str, int]) -> None:
        """Mongo rejects projections mixing 1 and 0, except for excluding the id."""
        included = [path for path, flag in projection.items() if flag == 1]
        excluded = [path for path, flag in projection.items() if flag == 0 and path != self._id_field]
        if included and excluded:
            raise ValidationError(
                f"Projection cannot mix inclusion and exclusion: {', '.join(excluded)}"
            )


def _split_sign(spec: str) -> tuple[str, bool]:
    """``-name`` -> ("name", False); ``+name`` and ``name`` -> ("name", True)."""
    if spec[0] in "+-":
        return spec[1:], spec[0] == "+"
    return spec, True


def compile(rql: object, id_field: str | None = None) -> MongoQuery:
    """Validate and compile a query tree with a one-off :class:`Compiler`."""
    return Compiler(id_field).compile(rql)
