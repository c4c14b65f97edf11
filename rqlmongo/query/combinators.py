from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Self


@dataclass
class Query:
    """RQL operator node: ``name(args...)``.

    Args are nested queries, decoded literals, or lists of either (arrays).
    """

    name: str
    args: list[Any] = field(default_factory=list)

    def __and__(self, other: "Query") -> "Query":
        return self._combine("and", other)

    def __or__(self, other: "Query") -> "Query":
        return self._combine("or", other)

    def _combine(self, name: str, other: "Query") -> "Query":
        if self.name == name:
            return Query(name, [*self.args, other])
        return Query(name, [self, other])

    def __str__(self) -> str:
        from rqlmongo.query.serializer import to_string

        return to_string(self)

    def push(self, *terms: Any) -> Self:
        """Append args in place, e.g. to inject paging operators before compiling."""
        self.args.extend(terms)
        return self

    def walk(self, fn: Callable[["Query"], "Query"]) -> None:
        """Replace every nested query with ``fn(query)``, depth first from the top."""
        for i, arg in enumerate(self.args):
            if isinstance(arg, Query):
                self.args[i] = fn(arg)
                self.args[i].walk(fn)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "args": [_arg_to_plain(a) for a in self.args]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Query":
        """Build a query from the plain ``{"name": ..., "args": [...]}`` shape."""
        return cls(data["name"], [_arg_from_plain(a) for a in data["args"]])


def is_query_like(value: object) -> bool:
    if isinstance(value, Query):
        return True
    return (
        isinstance(value, dict) and isinstance(value.get("name"), str) and isinstance(value.get("args"), list)
    )


def _arg_to_plain(arg: Any) -> Any:
    if isinstance(arg, Query):
        return arg.to_dict()
    if isinstance(arg, list):
        return [_arg_to_plain(a) for a in arg]
    return arg


def _arg_from_plain(arg: Any) -> Any:
    if is_query_like(arg) and not isinstance(arg, Query):
        return Query.from_dict(arg)
    if isinstance(arg, list):
        return [_arg_from_plain(a) for a in arg]
    return arg


# Factory functions (public API)
def eq(field: str, value: Any) -> Query:
    return Query("eq", [field, value])


def ne(field: str, value: Any) -> Query:
    return Query("ne", [field, value])


def lt(field: str, value: Any) -> Query:
    return Query("lt", [field, value])


def le(field: str, value: Any) -> Query:
    return Query("le", [field, value])


def gt(field: str, value: Any) -> Query:
    return Query("gt", [field, value])


def ge(field: str, value: Any) -> Query:
    return Query("ge", [field, value])


def in_(field: str, values: list[Any]) -> Query:
    return Query("in", [field, list(values)])


def out(field: str, values: list[Any]) -> Query:
    return Query("out", [field, list(values)])


def and_(*queries: Query) -> Query:
    return Query("and", list(queries))


def or_(*queries: Query) -> Query:
    return Query("or", list(queries))


def sort(*fields: str) -> Query:
    return Query("sort", list(fields))


def select(*fields: str) -> Query:
    return Query("select", list(fields))


def limit(count: int, skip: int | None = None) -> Query:
    return Query("limit", [count] if skip is None else [count, skip])


def after(cursor: str) -> Query:
    return Query("after", [cursor])


def before(cursor: str) -> Query:
    return Query("before", [cursor])
