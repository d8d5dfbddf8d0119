"""Per-snapshot index over a flat component collection."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from .models import Component


@dataclass(frozen=True)
class TreeIndex:
    """
    Arena + index for one tree snapshot.

    Built once from the flat collection; navigation is derived purely from
    ``parent_id`` back-references. Components whose parent is missing are
    treated as roots.
    """

    components: tuple[Component, ...]
    by_id: Mapping[str, Component]
    children: Mapping[str, tuple[str, ...]]
    roots: tuple[str, ...]

    @classmethod
    def build(cls, tree: Sequence[Component]) -> TreeIndex:
        by_id: dict[str, Component] = {}
        for component in tree:
            by_id[component.id] = component

        children: dict[str, list[str]] = {}
        roots: list[str] = []
        for component in tree:
            parent = component.parent_id
            if parent and parent in by_id:
                children.setdefault(parent, []).append(component.id)
            else:
                roots.append(component.id)

        return cls(
            components=tuple(tree),
            by_id=MappingProxyType(by_id),
            children=MappingProxyType({k: tuple(v) for k, v in children.items()}),
            roots=tuple(roots),
        )

    def __contains__(self, component_id: object) -> bool:
        return component_id in self.by_id

    def __len__(self) -> int:
        return len(self.by_id)

    def get(self, component_id: str) -> Component | None:
        return self.by_id.get(component_id)

    def child_ids(self, component_id: str) -> tuple[str, ...]:
        return self.children.get(component_id, ())

    def descendant_ids(self, component_id: str) -> list[str]:
        """Every transitive descendant, depth-first pre-order."""
        result: list[str] = []
        seen = {component_id}
        stack = list(reversed(self.child_ids(component_id)))
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            result.append(current)
            stack.extend(reversed(self.child_ids(current)))
        return result

    def ancestor_ids(self, component_id: str) -> list[str]:
        """Parent chain from the root down to the direct parent."""
        chain: list[str] = []
        seen = {component_id}
        current = self.by_id.get(component_id)
        while current is not None and current.parent_id and current.parent_id in self.by_id:
            if current.parent_id in seen:
                break
            seen.add(current.parent_id)
            chain.append(current.parent_id)
            current = self.by_id[current.parent_id]
        chain.reverse()
        return chain

    def is_descendant(self, candidate: str, ancestor: str) -> bool:
        """True if ``ancestor`` appears in the parent chain of ``candidate``."""
        return ancestor in self.ancestor_ids(candidate)
