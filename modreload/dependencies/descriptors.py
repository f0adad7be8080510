"""
Module descriptors

A descriptor is what the extraction layer hands over for each module:
its identifier and the identifiers it directly requires.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Set

# Any hashable, totally ordered value works; dotted names in practice.
ModuleId = str

ForwardMapping = Dict[ModuleId, FrozenSet[ModuleId]]
DependeeIndex = Dict[ModuleId, FrozenSet[ModuleId]]


@dataclass(frozen=True)
class ModuleDescriptor:
    """A module and its declared direct dependencies."""
    id: ModuleId
    requires: FrozenSet[ModuleId] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept lists/sets/generators from collaborators
        if not isinstance(self.requires, frozenset):
            object.__setattr__(self, "requires", frozenset(self.requires))

    @property
    def is_self_referencing(self) -> bool:
        return self.id in self.requires

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "requires": sorted(self.requires),
        }


def descriptors_from_mapping(
    mapping: Mapping[ModuleId, Iterable[ModuleId]]
) -> List[ModuleDescriptor]:
    """Build descriptors from a plain ``{id: requires}`` dictionary."""
    return [
        ModuleDescriptor(id=module_id, requires=frozenset(requires or ()))
        for module_id, requires in mapping.items()
    ]


def declared_ids(descriptors: Iterable[ModuleDescriptor]) -> Set[ModuleId]:
    """Ids that have a descriptor of their own (everything else is external)."""
    return {d.id for d in descriptors}
