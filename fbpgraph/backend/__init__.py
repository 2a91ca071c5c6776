"""Backend exporters for graphs."""

from fbpgraph.backend.graphviz import GraphvizExporter
from fbpgraph.backend.yuml import YumlExporter

__all__ = [
    "GraphvizExporter",
    "YumlExporter",
]
