"""
Unit tests for dependencies/export.py

Cross-checks the hand-written sort against networkx.
"""

import pytest

try:
    import networkx as nx
    HAS_NETWORKX = True
except ImportError:
    HAS_NETWORKX = False

from modreload.dependencies import (
    CycleError,
    build_mapping,
    descriptors_from_mapping,
    find_cycles,
    to_networkx,
    topo_sort,
    topo_sort_batched,
)


@pytest.fixture
def package_mapping():
    return build_mapping(descriptors_from_mapping({
        "pkg": ["pkg.models", "pkg.views"],
        "pkg.models": ["pkg.db"],
        "pkg.views": ["pkg.models", "pkg.templates"],
        "pkg.db": ["ext.sql"],
        "pkg.templates": [],
        "pkg.tests": ["pkg", "ext.pytest"],
    }))


@pytest.mark.skipif(not HAS_NETWORKX, reason="NetworkX not installed")
class TestToNetworkx:
    """Test to_networkx()."""

    def test_nodes_and_edges(self, chain_mapping):
        """Test edges point from dependency to dependent."""
        graph = to_networkx(chain_mapping)
        assert set(graph.nodes) == {"a", "b", "c"}
        assert set(graph.edges) == {("a", "b"), ("b", "c")}

    def test_isolated_nodes_kept(self):
        """Test modules without edges are still nodes."""
        graph = to_networkx({"solo": frozenset()})
        assert list(graph.nodes) == ["solo"]

    def test_acyclic_agrees(self, package_mapping):
        """Test networkx sees a DAG where the sort succeeds."""
        graph = to_networkx(package_mapping)
        assert nx.is_directed_acyclic_graph(graph)

    def test_orders_respect_networkx_edges(self, package_mapping):
        """Test both sort variants follow every exported edge."""
        graph = to_networkx(package_mapping)
        for order in (topo_sort(package_mapping), topo_sort_batched(package_mapping)):
            position = {module: i for i, module in enumerate(order)}
            for source, target in graph.edges:
                assert position[source] < position[target]

    def test_cyclic_graph_agrees(self):
        """Test networkx finds a cycle where the sort raises."""
        mapping = {"a": frozenset({"b"}), "b": frozenset({"a"})}
        assert not nx.is_directed_acyclic_graph(to_networkx(mapping))
        with pytest.raises(CycleError):
            topo_sort(mapping)


@pytest.mark.skipif(not HAS_NETWORKX, reason="NetworkX not installed")
class TestFindCycles:
    """Test find_cycles()."""

    def test_no_cycles(self, package_mapping):
        assert find_cycles(package_mapping) == []

    def test_two_node_cycle(self):
        """Test the cycle is rotated to start at its smallest member."""
        mapping = {"b": frozenset({"a"}), "a": frozenset({"b"})}
        assert find_cycles(mapping) == [["a", "b"]]

    def test_self_loop(self):
        assert find_cycles({"a": frozenset({"a"})}) == [["a"]]

    def test_every_cycle_listed(self):
        """Test the minimal core hides cycles that find_cycles shows."""
        mapping = {
            "a": frozenset({"b"}),
            "b": frozenset({"a", "c"}),
            "c": frozenset({"b"}),
        }
        assert find_cycles(mapping) == [["a", "b"], ["b", "c"]]

        with pytest.raises(CycleError) as exc_info:
            topo_sort(mapping)
        assert exc_info.value.nodes == ["b"]
