"""Core data structures for fbpgraph graphs."""

from .errors import GraphError, MalformedDefinition, FbpSyntaxError, IOFailure
from .ir import Endpoint, Node, Edge, Initializer, Graph, EVENTS
from .serialization import JsonSerializer
from .storage import save_graph

__all__ = [
    "Endpoint",
    "Node",
    "Edge",
    "Initializer",
    "Graph",
    "EVENTS",
    "JsonSerializer",
    "save_graph",
    "GraphError",
    "MalformedDefinition",
    "FbpSyntaxError",
    "IOFailure",
]
