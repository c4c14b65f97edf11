from dataclasses import dataclass
from typing import Any, Literal

ComparisonOp = Literal["eq", "ne", "in", "out", "le", "lt", "gt", "ge"]
LogicalOp = Literal["and", "or"]
CursorKind = Literal["after", "before"]

COMPARISON_OPERATORS: frozenset[str] = frozenset({"eq", "ne", "in", "out", "le", "lt", "gt", "ge"})
LOGICAL_OPERATORS: frozenset[str] = frozenset({"and", "or"})


@dataclass(frozen=True)
class Comparison:
    """Field comparison: eq(field,value), in(field,(a,b)), ..."""

    op: ComparisonOp
    field: str
    value: Any


@dataclass(frozen=True)
class Logical:
    """and(...) / or(...) over other operators."""

    op: LogicalOp
    operands: tuple["Operator", ...]


@dataclass(frozen=True)
class Sort:
    fields: tuple[str, ...]


@dataclass(frozen=True)
class Select:
    fields: tuple[str, ...]


@dataclass(frozen=True)
class Limit:
    limit: int
    skip: int | None = None


@dataclass(frozen=True)
class Cursor:
    """Opaque paging token from after(...) or before(...)."""

    kind: CursorKind
    token: str


Operator = Comparison | Logical | Sort | Select | Limit | Cursor
