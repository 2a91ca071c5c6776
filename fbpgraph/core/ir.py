import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

ADD_NODE = "addNode"
REMOVE_NODE = "removeNode"
ADD_EDGE = "addEdge"
REMOVE_EDGE = "removeEdge"

EVENTS = (ADD_NODE, REMOVE_NODE, ADD_EDGE, REMOVE_EDGE)

Listener = Callable[[Any], None]


@dataclass(frozen=True)
class Endpoint:
    """A (node, port) pair at one end of a connection."""
    node: str
    port: str


class Node:
    """A process instance in the graph."""
    def __init__(self, node_id: str, component: str, display: Optional[Dict[str, Any]] = None):
        self.id = node_id
        self.component = component
        self.display = display

    def __repr__(self):
        return f"<Node id={self.id} component='{self.component}'>"


class Edge:
    """A connection from an outport to an inport."""
    def __init__(self, out_node: str, out_port: str, in_node: str, in_port: str):
        self.source = Endpoint(out_node, out_port)
        self.target = Endpoint(in_node, in_port)

    def __repr__(self):
        return (
            f"<Edge {self.source.node}.{self.source.port} -> "
            f"{self.target.node}.{self.target.port}>"
        )


class Initializer:
    """A literal value sent to an inport when the network starts (IIP)."""
    def __init__(self, data: Any, node: str, port: str):
        self.data = data
        self.target = Endpoint(node, port)

    def __repr__(self):
        return f"<Initializer {self.data!r} -> {self.target.node}.{self.target.port}>"


class Graph:
    """
    A flow-based program: processes, the connections between their ports,
    and the initial packets sent to them.

    Every mutation notifies the listeners registered with ``on()`` before
    returning. Listeners of removal events receive the entity while it is
    still part of the graph.

    Example:
        graph = Graph("Hello")
        graph.on("addNode", lambda node: print("added", node.id))
        graph.add_node("Read", "ReadFile")
        graph.add_node("Display", "Output")
        graph.add_edge("Read", "out", "Display", "in")
        graph.add_initial("file.txt", "Read", "source")
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.initializers: List[Initializer] = []
        self._listeners: Dict[str, List[Listener]] = {event: [] for event in EVENTS}

    def __repr__(self):
        return (
            f"<Graph name='{self.name}' nodes={len(self.nodes)} "
            f"edges={len(self.edges)} initializers={len(self.initializers)}>"
        )

    def __len__(self):
        return len(self.nodes)

    # Listeners

    def on(self, event: str, listener: Listener) -> None:
        """Register listener(entity) for one of the graph events."""
        self._check_event(event)
        self._listeners[event].append(listener)

    def off(self, event: str, listener: Listener) -> None:
        self._check_event(event)
        self._listeners[event] = [registered for registered in self._listeners[event] if registered is not listener]

    def _check_event(self, event: str) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unknown graph event: {event}. Use one of: {', '.join(EVENTS)}")

    def _emit(self, event: str, entity: Any) -> None:
        # Iterate over a copy so listeners may unsubscribe themselves.
        for listener in list(self._listeners[event]):
            listener(entity)

    # Nodes

    def add_node(self, node_id: str, component: str, display: Optional[Dict[str, Any]] = None) -> Node:
        if self.get_node(node_id) is not None:
            logger.warning("Graph '%s' already has a node '%s'; lookups return the first one", self.name, node_id)
        node = Node(node_id, component, display)
        self.nodes.append(node)
        logger.debug("Graph '%s': added node %s (%s)", self.name, node_id, component)
        self._emit(ADD_NODE, node)
        return node

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def remove_node(self, node_id: str) -> None:
        """Remove a node together with every connection touching it."""
        node = self.get_node(node_id)
        if node is None:
            return

        for edge in list(self.edges):
            if edge.source.node == node_id:
                self.remove_edge(edge.source.node, edge.source.port)
            if edge.target.node == node_id:
                self.remove_edge(edge.target.node, edge.target.port)
        for initializer in list(self.initializers):
            if initializer.target.node == node_id:
                self.remove_edge(initializer.target.node, initializer.target.port)

        self._emit(REMOVE_NODE, node)
        # Only the first instance goes when ids are duplicated.
        self.nodes = [n for n in self.nodes if n is not node]
        logger.debug("Graph '%s': removed node %s", self.name, node_id)

    # Connections

    def add_edge(self, out_node: str, out_port: str, in_node: str, in_port: str) -> Edge:
        edge = Edge(out_node, out_port, in_node, in_port)
        self.edges.append(edge)
        logger.debug("Graph '%s': added %r", self.name, edge)
        self._emit(ADD_EDGE, edge)
        return edge

    def remove_edge(self, node: str, port: str) -> None:
        """
        Remove every edge with an endpoint at (node, port), and every
        initializer targeting it.
        """
        endpoint = Endpoint(node, port)
        doomed_edges = [e for e in self.edges if e.source == endpoint or e.target == endpoint]
        doomed_initializers = [i for i in self.initializers if i.target == endpoint]
        if not doomed_edges and not doomed_initializers:
            return

        for entity in doomed_edges + doomed_initializers:
            self._emit(REMOVE_EDGE, entity)

        doomed = {id(entity) for entity in doomed_edges + doomed_initializers}
        self.edges = [e for e in self.edges if id(e) not in doomed]
        self.initializers = [i for i in self.initializers if id(i) not in doomed]
        logger.debug(
            "Graph '%s': removed %d edge(s) and %d initializer(s) at %s.%s",
            self.name, len(doomed_edges), len(doomed_initializers), node, port,
        )

    def add_initial(self, data: Any, node: str, port: str) -> Initializer:
        initializer = Initializer(data, node, port)
        self.initializers.append(initializer)
        logger.debug("Graph '%s': added %r", self.name, initializer)
        # Initializers are announced as edges.
        self._emit(ADD_EDGE, initializer)
        return initializer

    # Exports

    def to_json(self) -> Dict[str, Any]:
        from fbpgraph.core.serialization import JsonSerializer
        return JsonSerializer.to_dict(self)

    def to_dot(self) -> str:
        from fbpgraph.backend.graphviz import GraphvizExporter
        return GraphvizExporter.to_dot(self)

    def to_yuml(self) -> str:
        from fbpgraph.backend.yuml import YumlExporter
        return YumlExporter.to_yuml(self)

    def save(self, path, callback: Optional[Callable[[Any], None]] = None):
        """Write the JSON form of the graph to ``<path>.json``."""
        from fbpgraph.core.storage import save_graph
        return save_graph(self, path, callback)
