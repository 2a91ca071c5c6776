"""
fbpgraph - The graph model of flow-based programs.

Main APIs:
- Graph: Processes, connections and initial packets, with change events
- load_json / load_fbp / load_file: Build graphs from definitions

Exporters:
- JsonSerializer: FBP JSON interchange format
- GraphvizExporter: Graphviz DOT format
- YumlExporter: yUML diagram syntax
"""

from fbpgraph.core.ir import Graph, Node, Edge, Initializer, Endpoint
from fbpgraph.core.errors import GraphError, MalformedDefinition, FbpSyntaxError, IOFailure
from fbpgraph.core.serialization import JsonSerializer
from fbpgraph.core.storage import save_graph
from fbpgraph.frontend import load_json, load_fbp, load_file, parse_fbp
from fbpgraph.backend import GraphvizExporter, YumlExporter

__all__ = [
    # Core IR
    "Graph",
    "Node",
    "Edge",
    "Initializer",
    "Endpoint",
    # Errors
    "GraphError",
    "MalformedDefinition",
    "FbpSyntaxError",
    "IOFailure",
    # Serialization
    "JsonSerializer",
    "save_graph",
    # Frontends
    "load_json",
    "load_fbp",
    "load_file",
    "parse_fbp",
    # Backends
    "GraphvizExporter",
    "YumlExporter",
]
