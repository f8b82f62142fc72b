"""Graph builder - states, initial state and parameter declarations.

The builder turns a catalog into a transition-free Graph. Transitions are
added afterwards by the rule engine, which works from the completed state
set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from clipgraph.core.animation.classifier import classify_clip
from clipgraph.core.animation.enums import SemanticRole
from clipgraph.core.animation.errors import EmptyCatalogError
from clipgraph.core.animation.models import (
    REQUIRED_PARAMETERS,
    ClipDescriptor,
    Graph,
    State,
)
from clipgraph.core.animation.naming import StateNamer

logger = logging.getLogger(__name__)


def build_states(clips: Iterable[ClipDescriptor]) -> list[State]:
    """Classify and name every clip, in catalog order."""
    namer = StateNamer()
    states: list[State] = []

    for clip in clips:
        role = classify_clip(clip)
        state_id = namer.claim(clip.identifier)
        states.append(State(id=state_id, bound_clip=clip, role=role))
        logger.debug(f"Created state '{state_id}' ({role.value}) for clip '{clip.identifier}'")

    return states


def select_initial_state(states: Sequence[State]) -> State:
    """First IDLE state in catalog order, else the first state.

    Raises:
        EmptyCatalogError: If there are no states.
    """
    if not states:
        raise EmptyCatalogError()

    for state in states:
        if state.role is SemanticRole.IDLE:
            return state
    return states[0]


def build(catalog: Iterable[ClipDescriptor]) -> Graph:
    """Build the state set of a graph from a clip catalog.

    Args:
        catalog: Clips in catalog order (a ClipCatalog or any iterable).

    Returns:
        Graph with one state per clip, the selected initial state and the
        full fixed parameter set. No transitions.

    Raises:
        EmptyCatalogError: If the catalog holds no clips.
        NamingExhaustedError: If a clip cannot be given a unique name.
    """
    states = build_states(catalog)
    initial = select_initial_state(states)

    logger.debug(f"Initial state: {initial.id} ({initial.role.value})")
    return Graph(
        states=tuple(states),
        initial=initial.id,
        parameters=REQUIRED_PARAMETERS,
        transitions=(),
    )
