"""
Tests for the dependency graph: order validation, topological order, cycles.
"""

import pytest

from dreamdeploy.core.exceptions import (
    DependencyCycleError,
    DependencyOrderError,
    DuplicateComponentError,
    UnresolvedDependencyError,
)
from dreamdeploy.core.graph import DependencyGraph, resolve_order
from dreamdeploy.core.types import ComponentSpec, Ref


def names(specs):
    return [s.name for s in specs]


class TestValidateOrder:
    """Declared order must put every dependency first."""

    def test_manifest_order_is_valid(self, manifest):
        DependencyGraph.from_specs(manifest).validate_order()

    def test_forward_reference_rejected(self):
        specs = [
            ComponentSpec.of("Token", 1, Ref("Government")),
            ComponentSpec("Government"),
        ]

        with pytest.raises(DependencyOrderError) as exc_info:
            DependencyGraph.from_specs(specs).validate_order()

        assert exc_info.value.component == "Token"
        assert exc_info.value.dependency == "Government"

    def test_order_error_is_an_unresolved_dependency(self):
        specs = [ComponentSpec.of("Token", Ref("Government"))]

        with pytest.raises(UnresolvedDependencyError):
            DependencyGraph.from_specs(specs).validate_order()

    def test_undeclared_reference_rejected(self):
        specs = [ComponentSpec("Government"), ComponentSpec.of("Pool", Ref("Missing"))]

        with pytest.raises(DependencyOrderError, match="not declared"):
            DependencyGraph.from_specs(specs).validate_order()

    def test_self_reference_rejected(self):
        with pytest.raises(DependencyOrderError):
            DependencyGraph.from_specs([ComponentSpec.of("Loop", Ref("Loop"))]).validate_order()

    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicateComponentError):
            DependencyGraph.from_specs([ComponentSpec("A"), ComponentSpec("A")])


class TestTopologicalOrder:
    """Computed order."""

    def test_valid_order_is_unchanged(self, manifest):
        ordered = DependencyGraph.from_specs(manifest).topological_order()

        assert names(ordered) == ["Government", "Token", "TaxPool"]

    def test_reverse_order_is_sorted(self, manifest):
        ordered = DependencyGraph.from_specs(reversed(manifest)).topological_order()

        assert names(ordered) == ["Government", "Token", "TaxPool"]

    def test_independent_specs_keep_declaration_order(self):
        specs = [ComponentSpec("B"), ComponentSpec("A"), ComponentSpec.of("C", Ref("A"))]

        assert names(DependencyGraph.from_specs(specs).topological_order()) == ["B", "A", "C"]

    def test_cycle_detected(self):
        specs = [
            ComponentSpec("Root"),
            ComponentSpec.of("A", Ref("B")),
            ComponentSpec.of("B", Ref("A")),
        ]

        with pytest.raises(DependencyCycleError) as exc_info:
            DependencyGraph.from_specs(specs).topological_order()

        cycle = exc_info.value.cycle
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"A", "B"}

    def test_self_loop_is_a_cycle(self):
        with pytest.raises(DependencyCycleError) as exc_info:
            DependencyGraph.from_specs([ComponentSpec.of("Loop", Ref("Loop"))]).topological_order()

        assert exc_info.value.cycle == ["Loop", "Loop"]


class TestGraphQueries:
    def test_dependencies_and_dependents(self, manifest):
        graph = DependencyGraph.from_specs(manifest)

        assert graph.dependencies_of("TaxPool") == ("Government", "Token")
        assert graph.dependents_of("Government") == ["Token", "TaxPool"]
        assert len(graph) == 3


class TestResolveOrder:
    def test_without_validation_keeps_bad_order(self):
        specs = [ComponentSpec.of("Token", Ref("Government")), ComponentSpec("Government")]

        assert names(resolve_order(specs, validate=False)) == ["Token", "Government"]

    def test_auto_order(self):
        specs = [ComponentSpec.of("Token", Ref("Government")), ComponentSpec("Government")]

        assert names(resolve_order(specs, auto_order=True)) == ["Government", "Token"]
