"""Animation enums - semantic role and parameter vocabulary.

Closed vocabularies shared by the classifier, the graph builder and the
transition rule engine.
"""

from enum import Enum


class SemanticRole(str, Enum):
    """Semantic role a motion clip plays in a character's state machine.

    A clip maps to at most one role. Clips that match no keyword are
    bound to states with role UNCLASSIFIED.

    Attributes:
        IDLE: Standing still.
        WALK: Slow locomotion.
        RUN: Fast locomotion (run/sprint).
        JUMP: Airborne action.
        FIRE: Weapon fire / attack action.
        RELOAD: Weapon reload action.
        DEATH: Death / dying.
        UNCLASSIFIED: No keyword matched.
    """

    IDLE = "idle"
    WALK = "walk"
    RUN = "run"
    JUMP = "jump"
    FIRE = "fire"
    RELOAD = "reload"
    DEATH = "death"
    UNCLASSIFIED = "unclassified"


# Locomotion roles, in ladder order (slowest first)
LOCOMOTION_ROLES: tuple[SemanticRole, ...] = (
    SemanticRole.IDLE,
    SemanticRole.WALK,
    SemanticRole.RUN,
)

# Roles reported on by the synthesizer diagnostics
REPORTED_ROLES: tuple[SemanticRole, ...] = tuple(
    role for role in SemanticRole if role is not SemanticRole.UNCLASSIFIED
)


class ParameterKind(str, Enum):
    """Type of a state machine parameter."""

    FLOAT = "float"
    BOOL = "bool"
    TRIGGER = "trigger"
