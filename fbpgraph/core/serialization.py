"""
JSON serialization for Graph objects.

The format is the FBP interchange layout:

    {
        "properties": {"name": "Hello"},
        "processes": {"Read": {"component": "ReadFile"}},
        "connections": [
            {"src": {"process": "Read", "port": "out"}, "tgt": {"process": "Display", "port": "in"}},
            {"data": "file.txt", "tgt": {"process": "Read", "port": "source"}}
        ]
    }

Port names are lower-cased when a definition is read back. The in-memory
graph itself keeps whatever case the caller used.
"""

import json
import logging
from typing import Any, Dict, List, Mapping

from fbpgraph.core.errors import MalformedDefinition
from fbpgraph.core.ir import Graph

logger = logging.getLogger(__name__)

DEFAULT_NAME = ""


class JsonSerializer:
    """Serializes and deserializes Graph objects to/from the JSON interchange format."""

    @staticmethod
    def to_dict(graph: Graph) -> Dict[str, Any]:
        processes: Dict[str, Dict[str, Any]] = {}
        for node in graph.nodes:
            process: Dict[str, Any] = {"component": node.component}
            if node.display is not None:
                process["display"] = node.display
            processes[node.id] = process

        connections: List[Dict[str, Any]] = []
        for edge in graph.edges:
            connections.append({
                "src": {"process": edge.source.node, "port": edge.source.port},
                "tgt": {"process": edge.target.node, "port": edge.target.port},
            })
        for initializer in graph.initializers:
            connections.append({
                "data": initializer.data,
                "tgt": {"process": initializer.target.node, "port": initializer.target.port},
            })

        return {
            "properties": {"name": graph.name},
            "processes": processes,
            "connections": connections,
        }

    @staticmethod
    def to_json(graph: Graph, indent: int = 4) -> str:
        return json.dumps(JsonSerializer.to_dict(graph), indent=indent)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Graph:
        """
        Build a Graph from a parsed definition.

        The whole definition is checked before the graph is built, so a
        MalformedDefinition never leaves a half-populated graph behind.
        """
        if not isinstance(data, Mapping):
            raise MalformedDefinition(f"Graph definition must be an object, got {type(data).__name__}")

        properties = data.get("properties") or {}
        if not isinstance(properties, Mapping):
            raise MalformedDefinition("'properties' must be an object")
        name = properties.get("name", DEFAULT_NAME)
        if not isinstance(name, str):
            raise MalformedDefinition(f"Graph name must be a string, got {type(name).__name__}")

        processes = data.get("processes", {})
        if not isinstance(processes, Mapping):
            raise MalformedDefinition("'processes' must be an object mapping ids to processes")
        for node_id, process in processes.items():
            if not isinstance(process, Mapping) or "component" not in process:
                raise MalformedDefinition(f"Process '{node_id}' has no component")

        connections = data.get("connections", [])
        if not isinstance(connections, list):
            raise MalformedDefinition("'connections' must be a list")
        for index, connection in enumerate(connections):
            JsonSerializer._check_connection(index, connection)

        graph = Graph(name)
        for node_id, process in processes.items():
            graph.add_node(node_id, process["component"], process.get("display"))

        for connection in connections:
            tgt = connection["tgt"]
            if "data" in connection:
                graph.add_initial(connection["data"], tgt["process"], tgt["port"].lower())
            else:
                src = connection["src"]
                graph.add_edge(src["process"], src["port"].lower(), tgt["process"], tgt["port"].lower())

        logger.debug(
            "Built graph '%s' with %d processes and %d connections",
            name, len(processes), len(connections),
        )
        return graph

    @staticmethod
    def _check_connection(index: int, connection: Any) -> None:
        if not isinstance(connection, Mapping):
            raise MalformedDefinition(f"Connection {index} must be an object")
        ends = ["tgt"] if "data" in connection else ["src", "tgt"]
        for end in ends:
            ref = connection.get(end)
            if not isinstance(ref, Mapping):
                raise MalformedDefinition(f"Connection {index} is missing '{end}'")
            if not isinstance(ref.get("process"), str) or not isinstance(ref.get("port"), str):
                raise MalformedDefinition(f"Connection {index} '{end}' needs a process and a port")

    @staticmethod
    def from_json(json_str: str) -> Graph:
        try:
            data = json.loads(json_str)
        except ValueError as e:
            raise MalformedDefinition(f"Invalid JSON: {e}") from e
        return JsonSerializer.from_dict(data)

