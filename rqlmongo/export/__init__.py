from .base import Exporter
from .json import JsonExporter
from .tree import TreeExporter

EXPORTERS: dict[str, type[Exporter]] = {
    "json": JsonExporter,
    "tree": TreeExporter,
}


def get_exporter(name: str) -> Exporter:
    """Return an exporter instance by format name."""
    if name not in EXPORTERS:
        raise ValueError(f"Unknown format: {name}. Available: {', '.join(EXPORTERS)}")
    return EXPORTERS[name]()


__all__ = ["Exporter", "JsonExporter", "TreeExporter", "EXPORTERS", "get_exporter"]
