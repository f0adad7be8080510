"""
modreload Dependency Engine

Provides:
- ModuleDescriptor: a module and what it requires
- build_mapping / dependees: forward mapping and its inverse
- transitive_closure: modules affected by a change
- topo_sort / topo_sort_batched: deterministic reload order
- CycleError: minimal cycle core plus the full mapping
- plan_reload: the whole pipeline in one call
"""

from .descriptors import (
    ModuleId,
    ModuleDescriptor,
    ForwardMapping,
    DependeeIndex,
    descriptors_from_mapping,
    declared_ids,
)
from .graph import (
    DependencyGraphError,
    CycleError,
    CyclicDependencyError,
    build_mapping,
    dependees,
    restrict,
)
from .invalidation import (
    transitive_closure,
)
from .toposort import (
    SortStrategy,
    topo_sort,
    topo_sort_batched,
    sort_modules,
    report_cycle,
)
from .cascade import (
    ReloadPlan,
    plan_reload,
)
from .export import (
    to_networkx,
    find_cycles,
)

__all__ = [
    # Descriptors
    "ModuleId",
    "ModuleDescriptor",
    "ForwardMapping",
    "DependeeIndex",
    "descriptors_from_mapping",
    "declared_ids",
    # Graph
    "DependencyGraphError",
    "CycleError",
    "CyclicDependencyError",
    "build_mapping",
    "dependees",
    "restrict",
    # Invalidation
    "transitive_closure",
    # Sort
    "SortStrategy",
    "topo_sort",
    "topo_sort_batched",
    "sort_modules",
    "report_cycle",
    # Planning
    "ReloadPlan",
    "plan_reload",
    # Export
    "to_networkx",
    "find_cycles",
]
