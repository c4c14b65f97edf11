from typing import Any

from rqlmongo.models import MongoQuery

from .base import Exporter


class TreeExporter(Exporter):
    """Indented, human readable listing of a query."""

    def to_string(self, query: MongoQuery) -> str:
        lines = ["criteria:"]
        lines.extend(self._format(query.criteria, depth=1) or ["  (none)"])
        if query.sort:
            lines.append("sort:")
            lines.extend(f"  {path}: {'asc' if d == 1 else 'desc'}" for path, d in query.sort.items())
        if query.projection:
            lines.append("projection:")
            lines.extend(
                f"  {path}: {'include' if flag else 'exclude'}" for path, flag in query.projection.items()
            )
        if query.limit or query.skip:
            lines.append(f"limit: {query.limit or 'none'}, skip: {query.skip}")
        if query.after:
            lines.append(f"after: {query.after}")
        if query.before:
            lines.append(f"before: {query.before}")
        return "\n".join(lines)

    def _format(self, value: dict[str, Any], depth: int) -> list[str]:
        indent = "  " * depth
        lines: list[str] = []
        for key, item in value.items():
            if isinstance(item, dict):
                lines.append(f"{indent}{key}:")
                lines.extend(self._format(item, depth + 1))
            elif isinstance(item, list) and item and all(isinstance(i, dict) for i in item):
                lines.append(f"{indent}{key}:")
                for i, branch in enumerate(item):
                    lines.append(f"{indent}  - [{i}]")
                    lines.extend(self._format(branch, depth + 2))
            else:
                lines.append(f"{indent}{key}: {item!r}")
        return lines
