"""Graph inspection for operators.

Flattens a graph into lightweight records (parameters, state bindings,
transitions, role coverage, consistency problems) that the CLI renders as
tables.
"""

from __future__ import annotations

from dataclasses import dataclass

from clipgraph.core.animation.enums import REPORTED_ROLES, SemanticRole
from clipgraph.core.animation.models import (
    Graph,
    GuardExpr,
    ParamGreater,
    ParamIsFalse,
    ParamIsTrue,
    ParamLess,
    TriggerFired,
    Unconditional,
)
from clipgraph.core.animation.validation import find_invariant_violations


@dataclass(frozen=True)
class StateInfo:
    """Lightweight state binding for listing."""

    state_id: str
    clip: str
    source_path: str
    duration: float
    role: SemanticRole
    is_initial: bool


@dataclass(frozen=True)
class TransitionInfo:
    """Lightweight transition description for listing."""

    source: str
    target: str
    condition: str
    exit_time: float | None
    blend_duration: float


@dataclass(frozen=True)
class GraphSummary:
    """Everything an operator needs to eyeball a graph."""

    initial: str
    parameters: tuple[tuple[str, str], ...]
    states: tuple[StateInfo, ...]
    transitions: tuple[TransitionInfo, ...]
    role_states: tuple[tuple[SemanticRole, tuple[str, ...]], ...]
    violations: tuple[str, ...]

    @property
    def missing_roles(self) -> list[SemanticRole]:
        return [role for role, states in self.role_states if not states]

    @property
    def is_valid(self) -> bool:
        return not self.violations


def format_guard(guard: GuardExpr) -> str:
    """Human-readable guard condition."""
    if isinstance(guard, ParamGreater):
        return f"{guard.name} > {guard.threshold:g}"
    if isinstance(guard, ParamLess):
        return f"{guard.name} < {guard.threshold:g}"
    if isinstance(guard, ParamIsTrue):
        return f"{guard.name} is true"
    if isinstance(guard, ParamIsFalse):
        return f"{guard.name} is false"
    if isinstance(guard, TriggerFired):
        return f"{guard.name} fired"
    if isinstance(guard, Unconditional):
        return "always"
    raise TypeError(f"Unknown guard type: {type(guard).__name__}")


def describe_graph(graph: Graph) -> GraphSummary:
    """Summarize ``graph`` for display."""
    states = tuple(
        StateInfo(
            state_id=s.id,
            clip=s.bound_clip.identifier,
            source_path=s.bound_clip.source_path,
            duration=s.bound_clip.duration,
            role=s.role,
            is_initial=s.id == graph.initial,
        )
        for s in graph.states
    )

    transitions = tuple(
        TransitionInfo(
            source=t.source,
            target=t.target,
            condition=format_guard(t.guard),
            exit_time=t.exit_time_fraction if t.uses_exit_time else None,
            blend_duration=t.blend_duration,
        )
        for t in graph.transitions
    )

    role_states = tuple(
        (role, tuple(s.id for s in graph.states_with_role(role))) for role in REPORTED_ROLES
    )

    return GraphSummary(
        initial=graph.initial,
        parameters=tuple((p.name, p.kind.value) for p in graph.parameters),
        states=states,
        transitions=transitions,
        role_states=role_states,
        violations=tuple(find_invariant_violations(graph)),
    )
