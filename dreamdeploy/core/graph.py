"""
Dependency graph over component specs.

Edges come from ``Ref`` descriptors: ``Token -> Government`` means Token
needs Government's handle. The graph is built once per run and never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from dreamdeploy.core.exceptions import (
    DependencyCycleError,
    DependencyOrderError,
    DuplicateComponentError,
)
from dreamdeploy.core.types import ComponentSpec


class DependencyGraph:
    """
    Adjacency by named reference.

    Usage:
        graph = DependencyGraph.from_specs(specs)
        graph.validate_order()            # trust declared order, but check it
        ordered = graph.topological_order()  # or compute one
    """

    def __init__(self, specs: list[ComponentSpec]):
        self._specs = specs
        self._by_name: dict[str, ComponentSpec] = {}
        for spec in specs:
            if spec.name in self._by_name:
                raise DuplicateComponentError(spec.name)
            self._by_name[spec.name] = spec

    @classmethod
    def from_specs(cls, specs: Iterable[ComponentSpec]) -> DependencyGraph:
        return cls(list(specs))

    @property
    def specs(self) -> list[ComponentSpec]:
        return list(self._specs)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self._specs]

    def __len__(self) -> int:
        return len(self._specs)

    def dependencies_of(self, name: str) -> tuple[str, ...]:
        return self._by_name[name].dependencies

    def dependents_of(self, name: str) -> list[str]:
        return [s.name for s in self._specs if name in s.dependencies]

    def _check_declared(self) -> None:
        for spec in self._specs:
            for dep in spec.dependencies:
                if dep not in self._by_name:
                    raise DependencyOrderError(spec.name, dep, "is not declared")

    def validate_order(self) -> None:
        """
        Check that every reference points at a spec declared earlier.

        A self-reference or a cycle always contains a forward reference, so
        this also rejects both.

        Raises:
            DependencyOrderError: On the first offending reference
        """
        self._check_declared()
        seen: set[str] = set()
        for spec in self._specs:
            for dep in spec.dependencies:
                if dep not in seen:
                    raise DependencyOrderError(spec.name, dep)
            seen.add(spec.name)
        logger.debug(f"Deployment order validated: {' -> '.join(self.names)}")

    def topological_order(self) -> list[ComponentSpec]:
        """
        Return the specs in a dependency-respecting order.

        Stable: among specs whose dependencies are satisfied, declaration
        order wins, so an already valid order is returned unchanged.

        Raises:
            DependencyOrderError: A reference names an undeclared component
            DependencyCycleError: The graph has a cycle
        """
        self._check_declared()
        placed: set[str] = set()
        ordered: list[ComponentSpec] = []
        remaining = list(self._specs)

        while remaining:
            ready = next(
                (s for s in remaining if all(d in placed for d in s.dependencies)),
                None,
            )
            if ready is None:
                raise DependencyCycleError(self._find_cycle(remaining))
            remaining.remove(ready)
            placed.add(ready.name)
            ordered.append(ready)

        return ordered

    def _find_cycle(self, remaining: list[ComponentSpec]) -> list[str]:
        # Every remaining spec has an unplaced dependency, so walking the
        # first unplaced edge repeatedly must revisit a node.
        pending = {s.name for s in remaining}
        path: list[str] = []
        index: dict[str, int] = {}
        current = remaining[0].name
        while current not in index:
            index[current] = len(path)
            path.append(current)
            current = next(d for d in self.dependencies_of(current) if d in pending)
        return path[index[current]:] + [current]


def resolve_order(
    specs: Iterable[ComponentSpec],
    *,
    validate: bool = True,
    auto_order: bool = False,
) -> list[ComponentSpec]:
    """
    Preflight shared by the orchestrator and ``dreamdeploy plan``.

    Duplicate names are always rejected. With ``auto_order`` the specs are
    sorted topologically; otherwise the declared order is kept and, when
    ``validate`` is set, checked.
    """
    graph = DependencyGraph.from_specs(specs)
    if auto_order:
        return graph.topological_order()
    if validate:
        graph.validate_order()
    return graph.specs
