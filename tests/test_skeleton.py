"""Skeleton sanity test: project layout and imports."""


def test_graph_fixture(graph):
    """Verify conftest fixture is available."""
    assert len(graph) == 11
    assert graph.ids()[0] == "KWA"
