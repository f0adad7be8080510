"""
modreload Invalidation

Expands a set of changed modules into everything that has to be
reprocessed: the changed modules plus all of their transitive dependees.
"""

from __future__ import annotations
from typing import FrozenSet, Iterable, List, Mapping, Set
import logging

from .descriptors import ModuleId

logger = logging.getLogger(__name__)


def transitive_closure(
    index: Mapping[ModuleId, Iterable[ModuleId]],
    seeds: Iterable[ModuleId],
) -> FrozenSet[ModuleId]:
    """
    Collect every module reachable from ``seeds`` along dependee edges.

    Args:
        index: Dependee index {module -> modules that require it}
        seeds: Modules known to have changed

    Returns:
        The affected set; always contains every seed
    """
    queue: List[ModuleId] = list(seeds)
    affected: Set[ModuleId] = set()

    while queue:
        module = queue.pop()
        if module in affected:
            continue
        affected.add(module)
        # Absent keys behave like modules nobody depends on
        queue.extend(index.get(module, ()))

    logger.debug(f"Closure expanded to {len(affected)} affected modules")
    return frozenset(affected)
