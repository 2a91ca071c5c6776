import pytest

from fbpgraph.core.ir import Graph


@pytest.fixture
def hello_graph():
    """Read a file and display it, with the file name as an initial packet."""
    graph = Graph("Hello")
    graph.add_node("Read", "ReadFile")
    graph.add_node("Display", "Output")
    graph.add_edge("Read", "out", "Display", "in")
    graph.add_initial("file.txt", "Read", "source")
    return graph


@pytest.fixture
def recorder():
    """Collects (event, entity) pairs from a graph's listeners."""
    class Recorder:
        def __init__(self):
            self.events = []

        def attach(self, graph):
            for event in ("addNode", "removeNode", "addEdge", "removeEdge"):
                graph.on(event, lambda entity, event=event: self.events.append((event, entity)))
            return self

        def names(self):
            return [event for event, _ in self.events]

    return Recorder()
