"""Guard interpreter.

Evaluates guard expressions against a snapshot of parameter values. The
rule engine only emits guards; this module gives them meaning so a runtime
player (or a test) can step a graph.

Parameter snapshots map names to floats (FLOAT) or bools (BOOL, TRIGGER).
A trigger is "fired" while its value is truthy. Missing values read as 0.0 /
False.
"""

from __future__ import annotations

from collections.abc import Mapping

from clipgraph.core.animation.models import (
    Graph,
    GuardExpr,
    ParamGreater,
    ParamIsFalse,
    ParamIsTrue,
    ParamLess,
    Transition,
    TriggerFired,
    Unconditional,
)

ParameterValues = Mapping[str, float | bool]


def guard_parameters(guard: GuardExpr) -> tuple[str, ...]:
    """Parameter names a guard reads (empty for Unconditional)."""
    if isinstance(guard, Unconditional):
        return ()
    return (guard.name,)


def evaluate_guard(guard: GuardExpr, values: ParameterValues) -> bool:
    """Evaluate ``guard`` against ``values``.

    Thresholds compare strictly, so a Speed exactly on a threshold satisfies
    neither ``ParamGreater`` nor ``ParamLess``.

    Raises:
        TypeError: If ``guard`` is not a known guard variant.
    """
    if isinstance(guard, Unconditional):
        return True
    if isinstance(guard, ParamGreater):
        return float(values.get(guard.name, 0.0)) > guard.threshold
    if isinstance(guard, ParamLess):
        return float(values.get(guard.name, 0.0)) < guard.threshold
    if isinstance(guard, ParamIsTrue):
        return bool(values.get(guard.name, False))
    if isinstance(guard, ParamIsFalse):
        return not bool(values.get(guard.name, False))
    if isinstance(guard, TriggerFired):
        return bool(values.get(guard.name, False))

    raise TypeError(f"Unknown guard type: {type(guard).__name__}")


def can_fire(
    transition: Transition,
    values: ParameterValues,
    normalized_time: float = 0.0,
) -> bool:
    """Whether ``transition`` may fire now.

    Args:
        transition: Candidate edge.
        values: Current parameter values.
        normalized_time: Playback progress of the source clip (0.0-1.0+).

    Returns:
        True if the guard holds and, for exit-time transitions, the source
        clip has played at least ``exit_time_fraction`` of its length.
    """
    if transition.uses_exit_time and normalized_time < transition.exit_time_fraction:
        return False
    return evaluate_guard(transition.guard, values)


def next_transition(
    graph: Graph,
    current: str,
    values: ParameterValues,
    normalized_time: float = 0.0,
    origin: str | None = None,
) -> Transition | None:
    """Outgoing transition of ``current`` that fires now.

    Action states (Jump, Fire, Reload) have one return edge per locomotion
    state, and several can hold at once. Passing ``origin``, the state the
    action was entered from, selects the edge back to it. Without ``origin``
    the first enabled edge in emission order wins, which returns to Idle
    whenever Idle is present.

    Args:
        graph: Graph to step.
        current: Active state id.
        values: Current parameter values.
        normalized_time: Playback progress of the current clip.
        origin: State to return to when it is among the enabled targets.
    """
    enabled = [t for t in graph.outgoing(current) if can_fire(t, values, normalized_time)]
    if origin is not None:
        for transition in enabled:
            if transition.target == origin:
                return transition
    return enabled[0] if enabled else None


def next_state(
    graph: Graph,
    current: str,
    values: ParameterValues,
    normalized_time: float = 0.0,
    origin: str | None = None,
) -> str:
    """State the graph moves to from ``current`` (``current`` if nothing fires)."""
    transition = next_transition(graph, current, values, normalized_time, origin)
    return transition.target if transition is not None else current
