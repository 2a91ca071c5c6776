import sys
import os

# Ensure fbpgraph is in path
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from fbpgraph import Graph, load_file


def main():
    print("Building graph...")
    graph = Graph("Count Lines")
    graph.on("addNode", lambda node: print(f"  + node {node.id} ({node.component})"))
    graph.on("removeNode", lambda node: print(f"  - node {node.id}"))
    graph.on("removeEdge", lambda edge: print(f"  - {edge!r}"))

    graph.add_node("Read", "ReadFile")
    graph.add_node("Split", "SplitStr")
    graph.add_node("Count", "Counter")
    graph.add_node("Display", "Output")
    graph.add_edge("Read", "out", "Split", "in")
    graph.add_edge("Split", "out", "Count", "in")
    graph.add_edge("Count", "count", "Display", "in")
    graph.add_initial("package.json", "Read", "source")
    print(f"Graph built with {len(graph.nodes)} nodes and {len(graph.edges)} edges.")

    print("\nDOT:")
    print(graph.to_dot())
    print("yUML:")
    print(graph.to_yuml())

    print("\nDropping the counter...")
    graph.remove_node("Count")
    graph.add_edge("Split", "out", "Display", "in")
    print(graph.to_yuml())

    print("\nLoading hello.fbp...")
    loaded = load_file(os.path.join(os.path.dirname(__file__), "hello.fbp"))
    print(loaded)


if __name__ == "__main__":
    main()
