"""
modreload Reload Planner

Turns a descriptor snapshot and a set of changed modules into a reload
plan: which modules are affected, the order to unload them in, and the
order to load them back.

Pipeline:
    descriptors -> build_mapping -> dependees -> transitive_closure
                -> restrict -> sort -> ReloadPlan
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, TYPE_CHECKING
import logging

from .descriptors import ModuleDescriptor, ModuleId, declared_ids
from .graph import build_mapping, dependees, restrict
from .invalidation import transitive_closure
from .toposort import SortStrategy, sort_modules

if TYPE_CHECKING:
    from modreload.bootstrap.config import ModReloadConfig

logger = logging.getLogger(__name__)


@dataclass
class ReloadPlan:
    """Ordered work for one reload cycle."""
    changed: FrozenSet[ModuleId]
    affected: FrozenSet[ModuleId]

    # Dependents first
    unload: List[ModuleId] = field(default_factory=list)
    # Dependencies first
    load: List[ModuleId] = field(default_factory=list)

    strategy: SortStrategy = SortStrategy.SEQUENTIAL

    @property
    def total_count(self) -> int:
        return len(self.load)

    @property
    def is_empty(self) -> bool:
        return not self.load

    def to_dict(self) -> Dict[str, Any]:
        return {
            "changed": sorted(self.changed),
            "affected": sorted(self.affected),
            "unload": list(self.unload),
            "load": list(self.load),
            "strategy": self.strategy.value,
            "total_count": self.total_count,
        }


def plan_reload(
    descriptors: Iterable[ModuleDescriptor],
    changed: Iterable[ModuleId],
    config: Optional["ModReloadConfig"] = None,
) -> ReloadPlan:
    """
    Compute the reload plan for a set of changed modules.

    Args:
        descriptors: Current descriptor snapshot (read once)
        changed: Modules known to have changed
        config: Ordering options; the global config when omitted

    Returns:
        ReloadPlan with the affected modules in unload and load order

    Raises:
        CycleError: If the affected modules contain a circular dependency
    """
    if config is None:
        from modreload.bootstrap.config import get_config
        config = get_config()

    strategy = config.sort.sort_strategy
    descriptors = list(descriptors)
    changed = frozenset(changed)

    mapping = build_mapping(descriptors)
    affected = transitive_closure(dependees(mapping), changed)
    load = sort_modules(restrict(mapping, affected), strategy)

    if not config.sort.include_external:
        declared = declared_ids(descriptors)
        load = [module for module in load if module in declared]

    plan = ReloadPlan(
        changed=changed,
        affected=affected,
        unload=list(reversed(load)),
        load=load,
        strategy=strategy,
    )

    logger.info(
        f"Reload plan: {len(changed)} changed, "
        f"{plan.total_count} to reload ({strategy.value})"
    )
    logger.debug(f"Load order: {', '.join(map(str, plan.load))}")

    return plan
