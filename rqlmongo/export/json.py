import json
import re
from datetime import date

from rqlmongo.models import MongoQuery

from .base import Exporter


def default_serializer(obj):
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, re.Pattern):
        return {"$regex": obj.pattern, "$options": "i" if obj.flags & re.IGNORECASE else ""}
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")


class JsonExporter(Exporter):
    """Export a query as JSON."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_string(self, query: MongoQuery) -> str:
        return json.dumps(
            query.to_dict(), indent=self.indent, ensure_ascii=False, default=default_serializer
        )
