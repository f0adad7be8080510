"""
modreload Dependency Graph

Builds the forward "requires" mapping from module descriptors and its
inverse, the dependee index. Both are rebuilt from scratch on every call;
nothing is cached between invocations.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Set
import logging

from .descriptors import (
    DependeeIndex,
    ForwardMapping,
    ModuleDescriptor,
    ModuleId,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ERRORS
# =============================================================================

class DependencyGraphError(Exception):
    """Base exception for dependency graph errors."""
    pass


class CycleError(DependencyGraphError):
    """
    Raised when the requested (sub)graph has a circular dependency.

    Attributes:
        nodes: Modules forming the minimal blocking core, in id order
        mapping: The full forward mapping the sort was started with
    """

    def __init__(self, nodes: Iterable[ModuleId], mapping: ForwardMapping):
        self.nodes: List[ModuleId] = sorted(nodes)
        self.mapping = mapping
        super().__init__(f"Cycle detected: {', '.join(map(str, self.nodes))}")

    def dependents_outside(self) -> List[ModuleId]:
        """Modules outside the cycle that directly require a cyclic module."""
        cyclic = set(self.nodes)
        return sorted(
            module for module, requires in self.mapping.items()
            if module not in cyclic and not cyclic.isdisjoint(requires)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "cycle",
            "nodes": list(self.nodes),
            "dependents_outside": self.dependents_outside(),
            "module_count": len(self.mapping),
        }


# Older name, kept for callers that catch it
CyclicDependencyError = CycleError


# =============================================================================
# BUILDERS
# =============================================================================

def build_mapping(descriptors: Iterable[ModuleDescriptor]) -> ForwardMapping:
    """
    Assemble the forward mapping (module -> direct dependencies).

    Every id that appears anywhere gets an entry. Ids only seen inside a
    requires set become leaves with no requirements. Repeated descriptors
    for the same id are merged.

    Args:
        descriptors: Module descriptors from the extraction layer

    Returns:
        Total mapping of module id to frozenset of required ids
    """
    acc: Dict[ModuleId, Set[ModuleId]] = {}

    for descriptor in descriptors:
        acc.setdefault(descriptor.id, set()).update(descriptor.requires)
        for required in descriptor.requires:
            acc.setdefault(required, set())

    mapping = {module: frozenset(requires) for module, requires in acc.items()}

    logger.debug(
        f"Built mapping: {len(mapping)} modules, "
        f"{sum(len(r) for r in mapping.values())} edges"
    )
    return mapping


def dependees(mapping: ForwardMapping) -> DependeeIndex:
    """
    Invert the requires mapping.

    Returns {module -> modules that directly require it}. Every key of
    ``mapping`` is present in the result, with an empty set when nothing
    depends on it.
    """
    acc: Dict[ModuleId, Set[ModuleId]] = {module: set() for module in mapping}

    for module, requires in mapping.items():
        for required in requires:
            acc.setdefault(required, set()).add(module)

    return {module: frozenset(users) for module, users in acc.items()}


def restrict(mapping: ForwardMapping, ids: Iterable[ModuleId]) -> ForwardMapping:
    """
    Sub-mapping over ``ids``.

    Requires sets are kept as they are; the sorter only counts edges whose
    target is inside the domain. Ids unknown to ``mapping`` become leaves.
    """
    return {module: mapping.get(module, frozenset()) for module in ids}
