"""
modreload Topological Sort

Orders modules so that every module comes after everything it requires.
Ties are broken by module id, so identical input always yields identical
output.

Two strategies share one peeling loop:
- SEQUENTIAL: emit the smallest eligible root, then look again
- BATCHED: emit every eligible root of a round, in id order

When no root is left the loop either hands the blocked remainder to the
cycle reporter (normal mode) or just signals failure (probe mode, used by
the reporter itself so diagnostics never nest).
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional, Set
import heapq
import logging

from .descriptors import ForwardMapping, ModuleId
from .graph import CycleError

logger = logging.getLogger(__name__)


class SortStrategy(Enum):
    """How roots are peeled off the graph."""
    SEQUENTIAL = "sequential"  # One root per step
    BATCHED = "batched"        # All current roots per round


# =============================================================================
# PEELING CORE
# =============================================================================

def _peel(
    mapping: ForwardMapping,
    strategy: SortStrategy,
    probe: bool,
) -> Optional[List[ModuleId]]:
    """
    Kahn-style peeling over "requires" edges.

    Only edges pointing at modules inside ``mapping`` count. Returns the
    order, or None in probe mode when the graph cannot be fully sorted.
    """
    # Remaining requires per module, counted inside the domain only
    pending: Dict[ModuleId, int] = {}
    users: Dict[ModuleId, List[ModuleId]] = {module: [] for module in mapping}

    for module, requires in mapping.items():
        inside = [r for r in requires if r in users]
        pending[module] = len(inside)
        for required in inside:
            users[required].append(module)

    order: List[ModuleId] = []

    if strategy is SortStrategy.BATCHED:
        roots = sorted(m for m, count in pending.items() if count == 0)
        while roots:
            order.extend(roots)
            released = []
            for module in roots:
                for user in users[module]:
                    pending[user] -= 1
                    if pending[user] == 0:
                        released.append(user)
            roots = sorted(released)
    else:
        heap = [m for m, count in pending.items() if count == 0]
        heapq.heapify(heap)
        while heap:
            module = heapq.heappop(heap)
            order.append(module)
            for user in users[module]:
                pending[user] -= 1
                if pending[user] == 0:
                    heapq.heappush(heap, user)

    if len(order) == len(mapping):
        return order

    if probe:
        return None

    emitted = set(order)
    remaining = {
        module: frozenset(r for r in requires if r in mapping and r not in emitted)
        for module, requires in mapping.items()
        if module not in emitted
    }
    report_cycle(remaining, mapping)


def _sortable(mapping: ForwardMapping) -> bool:
    """Probe mode: can ``mapping`` be fully sorted?"""
    return _peel(mapping, SortStrategy.BATCHED, probe=True) is not None


# =============================================================================
# PUBLIC API
# =============================================================================

def topo_sort(mapping: ForwardMapping) -> List[ModuleId]:
    """
    Sort modules, dependencies first.

    At every step the smallest module (by id) with no unemitted
    requirement is emitted next.

    Args:
        mapping: Forward mapping {module -> required modules}

    Returns:
        Every module of ``mapping`` exactly once

    Raises:
        CycleError: If the mapping contains a circular dependency
    """
    order = _peel(mapping, SortStrategy.SEQUENTIAL, probe=False)
    logger.debug(f"Sorted {len(order)} modules")
    return order


def topo_sort_batched(mapping: ForwardMapping) -> List[ModuleId]:
    """
    Sort modules round by round.

    Each round emits all modules whose requirements are already emitted,
    in id order. Valid and deterministic like ``topo_sort``, though the
    two may disagree on the order of unrelated modules.

    Raises:
        CycleError: If the mapping contains a circular dependency
    """
    order = _peel(mapping, SortStrategy.BATCHED, probe=False)
    logger.debug(f"Sorted {len(order)} modules in batched rounds")
    return order


def sort_modules(
    mapping: ForwardMapping,
    strategy: SortStrategy = SortStrategy.SEQUENTIAL,
) -> List[ModuleId]:
    """Sort with the given strategy."""
    if strategy is SortStrategy.BATCHED:
        return topo_sort_batched(mapping)
    return topo_sort(mapping)


# =============================================================================
# CYCLE REPORTER
# =============================================================================

def report_cycle(remaining: ForwardMapping, full_mapping: ForwardMapping) -> None:
    """
    Find the minimal blocking core of ``remaining`` and raise.

    A node belongs to the core when taking it out lets the rest of the
    remainder sort. Nodes that only require into a cycle, or that sit on
    a second cycle, leave the remainder stuck and are not reported.

    Raises:
        CycleError: Always
    """
    circular = [
        node for node in remaining
        if _sortable({k: v for k, v in remaining.items() if k != node})
    ]

    if not circular:
        # Several independent cycles: no single removal helps
        circular = _nodes_on_cycles(remaining)

    error = CycleError(circular, full_mapping)
    logger.warning(
        f"{error} ({len(remaining)} modules blocked, "
        f"{len(full_mapping)} in graph)"
    )
    raise error


def _nodes_on_cycles(mapping: ForwardMapping) -> List[ModuleId]:
    """Modules that can reach themselves through requires edges."""
    on_cycle = []

    for start in mapping:
        seen: Set[ModuleId] = set()
        stack = [r for r in mapping[start] if r in mapping]
        while stack:
            module = stack.pop()
            if module == start:
                on_cycle.append(start)
                break
            if module in seen:
                continue
            seen.add(module)
            stack.extend(r for r in mapping[module] if r in mapping)

    return sorted(on_cycle)
