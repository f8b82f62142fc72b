"""Post-build graph consistency checks."""

from __future__ import annotations

from collections import Counter

from clipgraph.core.animation.errors import InvariantViolationError
from clipgraph.core.animation.guards import guard_parameters
from clipgraph.core.animation.models import Graph


def find_invariant_violations(graph: Graph) -> list[str]:
    """Collect every structural defect in ``graph``.

    Checks:
        - state ids are unique
        - parameter names are unique
        - the initial state exists
        - every transition endpoint exists
        - every guard parameter is declared

    Returns:
        Descriptions of failed checks (empty when the graph is consistent).
    """
    violations: list[str] = []

    id_counts = Counter(s.id for s in graph.states)
    for state_id, count in id_counts.items():
        if count > 1:
            violations.append(f"state id '{state_id}' used by {count} states")

    param_counts = Counter(p.name for p in graph.parameters)
    for name, count in param_counts.items():
        if count > 1:
            violations.append(f"parameter '{name}' declared {count} times")

    state_ids = set(id_counts)
    if graph.initial not in state_ids:
        violations.append(f"initial state '{graph.initial}' is not a state")

    parameter_names = graph.parameter_names()
    for index, transition in enumerate(graph.transitions):
        label = f"transition #{index} ({transition.source} -> {transition.target})"
        if transition.source not in state_ids:
            violations.append(f"{label}: unknown source state '{transition.source}'")
        if transition.target not in state_ids:
            violations.append(f"{label}: unknown target state '{transition.target}'")
        for name in guard_parameters(transition.guard):
            if name not in parameter_names:
                violations.append(f"{label}: guard uses undeclared parameter '{name}'")

    return violations


def validate_graph(graph: Graph) -> Graph:
    """Return ``graph`` unchanged if consistent.

    Raises:
        InvariantViolationError: If any check fails.
    """
    violations = find_invariant_violations(graph)
    if violations:
        raise InvariantViolationError(violations)
    return graph
