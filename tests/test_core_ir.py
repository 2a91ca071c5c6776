import pytest
from fbpgraph.core.ir import Graph, Node, Edge, Initializer, Endpoint, EVENTS


def test_node_creation():
    node = Node("Read", "ReadFile", display={"x": 1, "y": 2})
    assert node.id == "Read"
    assert node.component == "ReadFile"
    assert node.display == {"x": 1, "y": 2}
    assert Node("Read", "ReadFile").display is None


def test_endpoints_compare_by_value():
    edge = Edge("A", "out", "B", "in")
    assert edge.source == Endpoint("A", "out")
    assert edge.target == Endpoint("B", "in")
    assert Initializer(42, "B", "in").target == edge.target


def test_graph_add_node():
    graph = Graph("Test")
    node = graph.add_node("Read", "ReadFile")

    assert graph.nodes == [node]
    assert graph.get_node("Read") is node
    assert graph.get_node("Read").component == "ReadFile"
    assert len(graph) == 1


def test_get_missing_node_returns_none():
    graph = Graph()
    assert graph.get_node("nope") is None


def test_duplicate_ids_are_allowed_and_lookup_returns_first():
    graph = Graph()
    first = graph.add_node("A", "First")
    graph.add_node("A", "Second")

    assert len(graph.nodes) == 2
    assert graph.get_node("A") is first


def test_remove_duplicate_id_removes_only_first():
    graph = Graph()
    graph.add_node("A", "First")
    second = graph.add_node("A", "Second")

    graph.remove_node("A")

    assert graph.nodes == [second]


def test_add_edge_does_not_require_nodes():
    graph = Graph()
    edge = graph.add_edge("Ghost", "out", "Other", "in")
    assert graph.edges == [edge]


def test_ports_keep_their_case():
    graph = Graph()
    edge = graph.add_edge("A", "OUT", "B", "In")
    assert edge.source.port == "OUT"
    assert edge.target.port == "In"


def test_remove_node_cascades(hello_graph):
    hello_graph.remove_node("Read")

    assert [n.id for n in hello_graph.nodes] == ["Display"]
    assert hello_graph.edges == []
    assert hello_graph.initializers == []


def test_remove_node_leaves_unrelated_entities():
    graph = Graph()
    for node_id in ("A", "B", "C", "D"):
        graph.add_node(node_id, "Component")
    ab = graph.add_edge("A", "out", "B", "in")
    bc = graph.add_edge("B", "out", "C", "in")
    cd = graph.add_edge("C", "out", "D", "in")
    iip_b = graph.add_initial(1, "B", "size")
    iip_d = graph.add_initial(2, "D", "size")

    graph.remove_node("B")

    assert [n.id for n in graph.nodes] == ["A", "C", "D"]
    assert graph.edges == [cd]
    assert graph.initializers == [iip_d]
    assert ab not in graph.edges and bc not in graph.edges and iip_b not in graph.initializers


def test_remove_node_with_self_loop():
    graph = Graph()
    graph.add_node("Loop", "Repeat")
    graph.add_edge("Loop", "out", "Loop", "in")

    graph.remove_node("Loop")

    assert graph.nodes == []
    assert graph.edges == []


def test_remove_missing_node_is_noop(hello_graph, recorder):
    recorder.attach(hello_graph)
    hello_graph.remove_node("Nope")

    assert len(hello_graph.nodes) == 2
    assert len(hello_graph.edges) == 1
    assert recorder.events == []


def test_remove_edge_matches_either_endpoint():
    graph = Graph()
    a_b = graph.add_edge("A", "out", "B", "in")
    c_d = graph.add_edge("C", "out", "D", "in")

    graph.remove_edge("B", "in")
    assert graph.edges == [c_d]

    graph.remove_edge("C", "out")
    assert graph.edges == []
    assert a_b not in graph.edges


def test_remove_edge_removes_adjacent_matches():
    graph = Graph()
    graph.add_edge("A", "out", "X", "in")
    graph.add_edge("B", "out", "X", "in")
    graph.add_edge("C", "out", "X", "in")
    keep = graph.add_edge("C", "out", "Y", "in")

    graph.remove_edge("X", "in")

    assert graph.edges == [keep]


def test_remove_edge_removes_initializers_on_port():
    graph = Graph()
    graph.add_initial("a", "X", "in")
    graph.add_initial("b", "X", "in")
    other = graph.add_initial("c", "X", "options")

    graph.remove_edge("X", "in")

    assert graph.initializers == [other]


def test_remove_edge_is_port_exact():
    graph = Graph()
    edge = graph.add_edge("A", "out", "B", "in")
    graph.remove_edge("B", "IN")
    graph.remove_edge("A", "in")
    assert graph.edges == [edge]


class TestGraphEvents:
    """Listener registration and delivery."""

    def test_add_events(self, recorder):
        graph = Graph()
        recorder.attach(graph)

        node = graph.add_node("A", "Comp")
        edge = graph.add_edge("A", "out", "B", "in")

        assert recorder.events == [("addNode", node), ("addEdge", edge)]

    def test_add_initial_emits_add_edge(self, recorder):
        graph = Graph()
        recorder.attach(graph)

        initializer = graph.add_initial("data", "A", "in")

        assert recorder.events == [("addEdge", initializer)]

    def test_remove_edge_emits_once_per_entity(self, recorder):
        graph = Graph()
        e1 = graph.add_edge("A", "out", "X", "in")
        e2 = graph.add_edge("B", "out", "X", "in")
        iip = graph.add_initial(5, "X", "in")
        recorder.attach(graph)

        graph.remove_edge("X", "in")

        assert recorder.events == [("removeEdge", e1), ("removeEdge", e2), ("removeEdge", iip)]

    def test_remove_edge_without_match_emits_nothing(self, recorder):
        graph = Graph()
        graph.add_edge("A", "out", "B", "in")
        recorder.attach(graph)

        graph.remove_edge("B", "out")

        assert recorder.events == []

    def test_remove_node_event_order(self, hello_graph, recorder):
        recorder.attach(hello_graph)
        hello_graph.remove_node("Read")

        assert recorder.names() == ["removeEdge", "removeEdge", "removeNode"]
        assert recorder.events[-1][1].id == "Read"

    def test_removal_listeners_see_entity_still_in_graph(self, hello_graph):
        seen = []

        def on_remove_node(node):
            seen.append(("node", hello_graph.get_node(node.id) is node))

        def on_remove_edge(entity):
            present = entity in hello_graph.edges or entity in hello_graph.initializers
            seen.append(("edge", present))

        hello_graph.on("removeNode", on_remove_node)
        hello_graph.on("removeEdge", on_remove_edge)
        hello_graph.remove_node("Read")

        assert seen == [("edge", True), ("edge", True), ("node", True)]

    def test_listeners_called_in_subscription_order(self):
        graph = Graph()
        calls = []
        graph.on("addNode", lambda node: calls.append("first"))
        graph.on("addNode", lambda node: calls.append("second"))

        graph.add_node("A", "Comp")

        assert calls == ["first", "second"]

    def test_node_is_in_graph_when_add_event_fires(self):
        graph = Graph()
        seen = []
        graph.on("addNode", lambda node: seen.append(graph.get_node(node.id) is node))

        graph.add_node("A", "Comp")

        assert seen == [True]

    def test_off_unsubscribes(self):
        graph = Graph()
        calls = []
        listener = lambda node: calls.append(node.id)
        graph.on("addNode", listener)
        graph.add_node("A", "Comp")
        graph.off("addNode", listener)
        graph.add_node("B", "Comp")

        assert calls == ["A"]

    def test_unknown_event_raises(self):
        graph = Graph()
        with pytest.raises(ValueError):
            graph.on("changed", lambda entity: None)

    def test_listener_errors_propagate(self):
        graph = Graph()

        def broken(node):
            raise RuntimeError("listener failed")

        graph.on("addNode", broken)
        with pytest.raises(RuntimeError):
            graph.add_node("A", "Comp")

    def test_failing_remove_edge_listener_leaves_graph_unchanged(self, hello_graph):
        def broken(entity):
            raise RuntimeError("listener failed")

        hello_graph.on("removeEdge", broken)
        with pytest.raises(RuntimeError):
            hello_graph.remove_edge("Read", "out")

        assert len(hello_graph.edges) == 1
        assert len(hello_graph.initializers) == 1

    def test_failing_remove_node_listener_keeps_node_but_not_its_edges(self, hello_graph):
        def broken(node):
            raise RuntimeError("listener failed")

        hello_graph.on("removeNode", broken)
        with pytest.raises(RuntimeError):
            hello_graph.remove_node("Read")

        assert hello_graph.get_node("Read") is not None
        assert hello_graph.edges == []
        assert hello_graph.initializers == []

    def test_events_constant(self):
        assert set(EVENTS) == {"addNode", "removeNode", "addEdge", "removeEdge"}


def test_repr(hello_graph):
    assert repr(hello_graph) == "<Graph name='Hello' nodes=2 edges=1 initializers=1>"
