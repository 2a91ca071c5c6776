import re

import graphviz
from graphviz.quoting import attr_list, quote

from fbpgraph.core.ir import Graph


class GraphvizExporter:
    """Exports a Graph to Graphviz/Dot format or renders it."""

    _NODE_SHAPE = "box"

    @staticmethod
    def _clean_id(node_id: str) -> str:
        """Strip all whitespace from a node id. Ids differing only in whitespace collide."""
        return re.sub(r"\s+", "", node_id)

    @staticmethod
    def _clean_port(port: str) -> str:
        return port.replace(".", "")

    @staticmethod
    def _edge(dot: graphviz.Digraph, tail: str, head: str, label: str) -> None:
        """
        Add an edge between two node ids.

        ``Digraph.edge`` reads ``a:b`` as node ``a`` port ``b``; FBP node ids
        may contain colons, so both ends are quoted as plain node ids.
        """
        dot.body.append(f"\t{quote(tail)} -> {quote(head)}{attr_list(label)}\n")

    @staticmethod
    def to_digraph(graph: Graph) -> graphviz.Digraph:
        """
        Converts a Graph to a graphviz.Digraph object.

        Each initializer becomes an edge from a synthetic ``data<n>`` node,
        where n is the initializer's position in the graph.
        """
        dot = graphviz.Digraph(comment=graph.name or None)

        for node in graph.nodes:
            dot.node(GraphvizExporter._clean_id(node.id), shape=GraphvizExporter._NODE_SHAPE)

        for index, initializer in enumerate(graph.initializers):
            GraphvizExporter._edge(
                dot,
                f"data{index}",
                GraphvizExporter._clean_id(initializer.target.node),
                GraphvizExporter._clean_port(initializer.target.port),
            )

        for edge in graph.edges:
            GraphvizExporter._edge(
                dot,
                GraphvizExporter._clean_id(edge.source.node),
                GraphvizExporter._clean_id(edge.target.node),
                GraphvizExporter._clean_port(edge.source.port),
            )

        return dot

    @staticmethod
    def to_dot(graph: Graph) -> str:
        """Returns the DOT source string for the graph."""
        return GraphvizExporter.to_digraph(graph).source

    @staticmethod
    def render(graph: Graph, filename: str, format: str = 'png', view: bool = False) -> str:
        """Renders the graph to a file. Requires the Graphviz executables."""
        dot = GraphvizExporter.to_digraph(graph)
        return dot.render(filename, format=format, view=view, cleanup=True)
