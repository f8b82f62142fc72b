"""Animation graph models.

Immutable pydantic models for everything the synthesizer reads and produces:
clip descriptors, states, parameters, guard expressions, transitions and the
graph itself, plus the diagnostics report.

Guards are tagged variants discriminated on ``kind`` so a graph serializes to
a stable document and loads back into the same typed structure.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from clipgraph.core.animation.enums import ParameterKind, SemanticRole

# Fixed parameter contract every synthesized graph declares
SPEED = "Speed"
IS_GROUNDED = "IsGrounded"
IS_RELOADING = "IsReloading"
FIRE_TRIGGER = "FireTrigger"
RELOAD_TRIGGER = "ReloadTrigger"
JUMP_TRIGGER = "JumpTrigger"


class ClipDescriptor(BaseModel):
    """A motion clip as read from the catalog.

    Attributes:
        identifier: Declared clip name. May collide across source paths.
        source_path: Where the clip asset lives.
        duration: Clip length in seconds (0.0 when unknown).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identifier: str = Field(min_length=1)
    source_path: str
    duration: float = Field(default=0.0, ge=0.0)


class State(BaseModel):
    """A graph node bound to exactly one clip."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    bound_clip: ClipDescriptor
    role: SemanticRole = SemanticRole.UNCLASSIFIED


class Parameter(BaseModel):
    """A named, typed value that guards reference."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    kind: ParameterKind


REQUIRED_PARAMETERS: tuple[Parameter, ...] = (
    Parameter(name=SPEED, kind=ParameterKind.FLOAT),
    Parameter(name=IS_GROUNDED, kind=ParameterKind.BOOL),
    Parameter(name=IS_RELOADING, kind=ParameterKind.BOOL),
    Parameter(name=FIRE_TRIGGER, kind=ParameterKind.TRIGGER),
    Parameter(name=RELOAD_TRIGGER, kind=ParameterKind.TRIGGER),
    Parameter(name=JUMP_TRIGGER, kind=ParameterKind.TRIGGER),
)


# ============================================================================
# Guard expressions
# ============================================================================


class _GuardBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class ParamGreater(_GuardBase):
    """Float parameter strictly greater than threshold."""

    kind: Literal["param_greater"] = "param_greater"
    name: str
    threshold: float


class ParamLess(_GuardBase):
    """Float parameter strictly less than threshold."""

    kind: Literal["param_less"] = "param_less"
    name: str
    threshold: float


class ParamIsTrue(_GuardBase):
    """Bool parameter is set."""

    kind: Literal["param_is_true"] = "param_is_true"
    name: str


class ParamIsFalse(_GuardBase):
    """Bool parameter is cleared."""

    kind: Literal["param_is_false"] = "param_is_false"
    name: str


class TriggerFired(_GuardBase):
    """Trigger parameter was fired since it was last consumed."""

    kind: Literal["trigger_fired"] = "trigger_fired"
    name: str


class Unconditional(_GuardBase):
    """Always passes; used with exit-time transitions."""

    kind: Literal["unconditional"] = "unconditional"


GuardExpr = Annotated[
    ParamGreater | ParamLess | ParamIsTrue | ParamIsFalse | TriggerFired | Unconditional,
    Field(discriminator="kind"),
]


class Transition(BaseModel):
    """A directed, guarded edge between two states.

    Serialized with ``from``/``to`` keys; ``source``/``target`` are the Python
    attribute names.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    guard: GuardExpr
    uses_exit_time: bool = False
    exit_time_fraction: float = Field(default=0.0, ge=0.0, le=1.0)
    blend_duration: float = Field(default=0.25, ge=0.0)


class Graph(BaseModel):
    """A synthesized animation state machine.

    Structural cross-references (initial state, transition endpoints, guard
    parameters) are checked by ``clipgraph.core.animation.validation`` rather
    than here, so that a defective graph can still be represented and reported.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    states: tuple[State, ...]
    initial: str
    parameters: tuple[Parameter, ...] = REQUIRED_PARAMETERS
    transitions: tuple[Transition, ...] = ()

    def state_ids(self) -> list[str]:
        """State ids in catalog order."""
        return [s.id for s in self.states]

    def get_state(self, state_id: str) -> State:
        """Lookup a state by id.

        Raises:
            KeyError: If no state has this id.
        """
        for state in self.states:
            if state.id == state_id:
                return state
        raise KeyError(f"Unknown state: {state_id}")

    def states_with_role(self, role: SemanticRole) -> list[State]:
        """States bound to ``role``, in catalog order."""
        return [s for s in self.states if s.role is role]

    def parameter_names(self) -> set[str]:
        return {p.name for p in self.parameters}

    def outgoing(self, state_id: str) -> list[Transition]:
        """Transitions leaving ``state_id``, in emission order."""
        return [t for t in self.transitions if t.source == state_id]


# ============================================================================
# Diagnostics
# ============================================================================


class RoleFulfillment(BaseModel):
    """Which clips (if any) fulfilled a semantic role."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    role: SemanticRole
    clips: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return len(self.clips) > 0


class SynthesisReport(BaseModel):
    """Per-role fulfillment report produced alongside a graph.

    Informational only: a graph with missing roles is still valid.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    fulfillment: tuple[RoleFulfillment, ...]
    unclassified: tuple[str, ...] = ()

    @property
    def found_roles(self) -> list[SemanticRole]:
        return [f.role for f in self.fulfillment if f.found]

    @property
    def missing_roles(self) -> list[SemanticRole]:
        return [f.role for f in self.fulfillment if not f.found]

    @property
    def is_complete(self) -> bool:
        return not self.missing_roles

    def for_role(self, role: SemanticRole) -> RoleFulfillment:
        for entry in self.fulfillment:
            if entry.role is role:
                return entry
        raise KeyError(f"Role not reported: {role.value}")


class SynthesisResult(BaseModel):
    """Graph plus its diagnostics report."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    graph: Graph
    report: SynthesisReport
