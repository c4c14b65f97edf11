from dataclasses import dataclass, field
from typing import Any


@dataclass
class MongoQuery:
    """Filter, sort, projection and paging for a Mongo ``find``."""

    criteria: dict[str, Any] = field(default_factory=dict)
    sort: dict[str, int] = field(default_factory=dict)  # field -> 1 | -1, in priority order
    projection: dict[str, int] = field(default_factory=dict)  # field -> 1 | 0
    limit: int = 0  # 0 means no limit
    skip: int = 0
    after: str = ""
    before: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy, nested operator maps included."""
        return {
            "criteria": _plain(self.criteria),
            "sort": dict(self.sort),
            "projection": dict(self.projection),
            "limit": self.limit,
            "skip": self.skip,
            "after": self.after,
            "before": self.before,
        }


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value
