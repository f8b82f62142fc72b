"""Transition rule engine.

The engine is a fixed table of role-pair rules plus a small loop that turns
the rules into edges. A rule fires only when both of its roles are present
in the graph, so an absent role never leaves a dangling edge.

Table layout:

- Locomotion ladder on ``Speed``: Idle <-> Walk at 0.1, Walk <-> Run at 4.0.
  The same threshold is used in both directions (no hysteresis).
- For every locomotion origin (Idle, Walk, Run) independently:
  origin -> Jump on ``JumpTrigger``, back when ``IsGrounded``;
  origin -> Fire on ``FireTrigger``, back unconditionally at 90% exit time;
  origin -> Reload on ``ReloadTrigger``, back when ``IsReloading`` clears.
  Return edges go to the same origin, so Fire-from-Walk returns to Walk.

When several states share a role, the first one in catalog order represents
the role.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict, Field

from clipgraph.core.animation.enums import LOCOMOTION_ROLES, SemanticRole
from clipgraph.core.animation.models import (
    FIRE_TRIGGER,
    IS_GROUNDED,
    IS_RELOADING,
    JUMP_TRIGGER,
    RELOAD_TRIGGER,
    SPEED,
    Graph,
    GuardExpr,
    ParamGreater,
    ParamIsFalse,
    ParamIsTrue,
    ParamLess,
    State,
    Transition,
    TriggerFired,
    Unconditional,
)

logger = logging.getLogger(__name__)

WALK_SPEED_THRESHOLD = 0.1
RUN_SPEED_THRESHOLD = 4.0
EXIT_TIME_FRACTION = 0.9
DEFAULT_BLEND_DURATION = 0.25


class TransitionRule(BaseModel):
    """One row of the rule table: an edge between two roles.

    Attributes:
        source_role: Role of the state the edge leaves.
        target_role: Role of the state the edge enters.
        guard: Condition that permits the edge.
        uses_exit_time: Edge waits for the source clip to reach
            ``exit_time_fraction`` before firing.
        exit_time_fraction: Completion fraction for exit-time edges.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_role: SemanticRole
    target_role: SemanticRole
    guard: GuardExpr
    uses_exit_time: bool = False
    exit_time_fraction: float = Field(default=0.0, ge=0.0, le=1.0)

    def applies_to(self, roles: Iterable[SemanticRole]) -> bool:
        """True if both roles of this rule are among ``roles``."""
        present = set(roles)
        return self.source_role in present and self.target_role in present

    def describe(self) -> str:
        return f"{self.source_role.value} -> {self.target_role.value}"


def _action_rules(origin: SemanticRole) -> tuple[TransitionRule, ...]:
    return (
        TransitionRule(
            source_role=origin,
            target_role=SemanticRole.JUMP,
            guard=TriggerFired(name=JUMP_TRIGGER),
        ),
        TransitionRule(
            source_role=SemanticRole.JUMP,
            target_role=origin,
            guard=ParamIsTrue(name=IS_GROUNDED),
        ),
        TransitionRule(
            source_role=origin,
            target_role=SemanticRole.FIRE,
            guard=TriggerFired(name=FIRE_TRIGGER),
        ),
        TransitionRule(
            source_role=SemanticRole.FIRE,
            target_role=origin,
            guard=Unconditional(),
            uses_exit_time=True,
            exit_time_fraction=EXIT_TIME_FRACTION,
        ),
        TransitionRule(
            source_role=origin,
            target_role=SemanticRole.RELOAD,
            guard=TriggerFired(name=RELOAD_TRIGGER),
        ),
        TransitionRule(
            source_role=SemanticRole.RELOAD,
            target_role=origin,
            guard=ParamIsFalse(name=IS_RELOADING),
        ),
    )


LOCOMOTION_RULES: tuple[TransitionRule, ...] = (
    TransitionRule(
        source_role=SemanticRole.IDLE,
        target_role=SemanticRole.WALK,
        guard=ParamGreater(name=SPEED, threshold=WALK_SPEED_THRESHOLD),
    ),
    TransitionRule(
        source_role=SemanticRole.WALK,
        target_role=SemanticRole.IDLE,
        guard=ParamLess(name=SPEED, threshold=WALK_SPEED_THRESHOLD),
    ),
    TransitionRule(
        source_role=SemanticRole.WALK,
        target_role=SemanticRole.RUN,
        guard=ParamGreater(name=SPEED, threshold=RUN_SPEED_THRESHOLD),
    ),
    TransitionRule(
        source_role=SemanticRole.RUN,
        target_role=SemanticRole.WALK,
        guard=ParamLess(name=SPEED, threshold=RUN_SPEED_THRESHOLD),
    ),
)

ACTION_RULES: tuple[TransitionRule, ...] = tuple(
    rule for origin in LOCOMOTION_ROLES for rule in _action_rules(origin)
)

TRANSITION_RULES: tuple[TransitionRule, ...] = LOCOMOTION_RULES + ACTION_RULES


def rules_for_roles(
    roles: Iterable[SemanticRole],
    rules: Sequence[TransitionRule] = TRANSITION_RULES,
) -> list[TransitionRule]:
    """Rules whose roles are both present, in table order."""
    present = set(roles)
    return [rule for rule in rules if rule.applies_to(present)]


def role_representatives(graph: Graph) -> dict[SemanticRole, State]:
    """First state (catalog order) for every classified role in the graph."""
    representatives: dict[SemanticRole, State] = {}
    for state in graph.states:
        if state.role is SemanticRole.UNCLASSIFIED:
            continue
        representatives.setdefault(state.role, state)
    return representatives


def connect(
    graph: Graph,
    *,
    blend_duration: float = DEFAULT_BLEND_DURATION,
    rules: Sequence[TransitionRule] = TRANSITION_RULES,
) -> Graph:
    """Emit transitions for ``graph`` from the rule table.

    Existing transitions are kept; new edges are appended in table order.

    Args:
        graph: Graph with its complete state set.
        blend_duration: Cross-fade length applied to every emitted edge.
        rules: Rule table (the fixed table unless testing a subset).

    Returns:
        A new Graph carrying the emitted transitions.
    """
    if blend_duration < 0:
        raise ValueError(f"blend_duration must be >= 0, got {blend_duration}")

    representatives = role_representatives(graph)
    transitions = list(graph.transitions)

    for rule in rules_for_roles(representatives, rules):
        source = representatives[rule.source_role]
        target = representatives[rule.target_role]
        transitions.append(
            Transition(
                source=source.id,
                target=target.id,
                guard=rule.guard,
                uses_exit_time=rule.uses_exit_time,
                exit_time_fraction=rule.exit_time_fraction,
                blend_duration=blend_duration,
            )
        )
        logger.debug(f"Transition {source.id} -> {target.id} ({rule.describe()})")

    emitted = len(transitions) - len(graph.transitions)
    logger.debug(f"Emitted {emitted} transitions, skipped {len(rules) - emitted} rules")
    return graph.model_copy(update={"transitions": tuple(transitions)})
