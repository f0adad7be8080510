"""
modreload/dependencies/export.py - Graph Export

Converts forward mappings into networkx graphs for callers that want to
run their own analysis or draw the graph.
"""

from typing import List

try:
    import networkx as nx
except ImportError:
    nx = None

from .descriptors import ForwardMapping, ModuleId

__all__ = [
    'to_networkx',
    'find_cycles',
]


def to_networkx(mapping: ForwardMapping) -> 'nx.DiGraph':
    """
    Build a directed graph with an edge dependency -> dependent.

    Every module of ``mapping`` is a node, including isolated ones.
    Edges into modules outside the mapping are added as well, which adds
    those modules as nodes.
    """
    if nx is None:
        raise ImportError("networkx is required for to_networkx")

    graph = nx.DiGraph()
    graph.add_nodes_from(mapping)
    for module, requires in mapping.items():
        for required in requires:
            graph.add_edge(required, module)
    return graph


def find_cycles(mapping: ForwardMapping) -> List[List[ModuleId]]:
    """
    List every elementary cycle of the mapping.

    Each cycle starts at its smallest module and follows dependency ->
    dependent edges; the list itself is sorted.
    """
    graph = to_networkx(mapping)

    cycles = []
    for cycle in nx.simple_cycles(graph):
        pivot = cycle.index(min(cycle))
        cycles.append(cycle[pivot:] + cycle[:pivot])
    return sorted(cycles)
