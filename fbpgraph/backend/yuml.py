from fbpgraph.core.ir import Graph


class YumlExporter:
    """Exports a Graph to yUML activity diagram syntax."""

    @staticmethod
    def to_yuml(graph: Graph) -> str:
        """
        Convert a graph to a comma separated list of yUML fragments.

        Initializers are drawn as arrows from ``(start)``, followed by one
        fragment per edge labelled with the outport:

            (start)[source]->(Read),(Read)[out]->(Display)
        """
        fragments = []
        for initializer in graph.initializers:
            fragments.append(f"(start)[{initializer.target.port}]->({initializer.target.node})")
        for edge in graph.edges:
            fragments.append(f"({edge.source.node})[{edge.source.port}]->({edge.target.node})")
        return ",".join(fragments)
