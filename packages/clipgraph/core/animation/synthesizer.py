"""Synthesizer - catalog in, validated graph and diagnostics out.

Runs the builder, then the rule engine, then the invariant checks. Every
failure surfaces as a SynthesisError subclass; no partial graph is ever
returned. Roles with no fulfilling clip are reported, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from clipgraph.core.animation.builder import build
from clipgraph.core.animation.enums import REPORTED_ROLES, SemanticRole
from clipgraph.core.animation.errors import EmptyCatalogError
from clipgraph.core.animation.models import (
    ClipDescriptor,
    Graph,
    RoleFulfillment,
    SynthesisReport,
    SynthesisResult,
)
from clipgraph.core.animation.rules import DEFAULT_BLEND_DURATION, connect
from clipgraph.core.animation.validation import validate_graph

logger = logging.getLogger(__name__)


def build_report(graph: Graph) -> SynthesisReport:
    """Per-role fulfillment for ``graph``, in role declaration order."""
    fulfillment = tuple(
        RoleFulfillment(
            role=role,
            clips=tuple(s.bound_clip.identifier for s in graph.states_with_role(role)),
        )
        for role in REPORTED_ROLES
    )
    unclassified = tuple(
        s.bound_clip.identifier for s in graph.states_with_role(SemanticRole.UNCLASSIFIED)
    )
    return SynthesisReport(fulfillment=fulfillment, unclassified=unclassified)


def log_report(report: SynthesisReport) -> None:
    """Surface missing roles and unclassified clips to the operator."""
    for entry in report.fulfillment:
        if entry.found:
            logger.info(f"Role {entry.role.value}: {', '.join(entry.clips)}")

    if report.missing_roles:
        missing = ", ".join(role.value for role in report.missing_roles)
        logger.warning(f"No clip found for roles: {missing}")

    if report.unclassified:
        logger.info(f"Unclassified clips: {', '.join(report.unclassified)}")


def synthesize(
    catalog: Iterable[ClipDescriptor],
    *,
    blend_duration: float = DEFAULT_BLEND_DURATION,
) -> SynthesisResult:
    """Synthesize an animation graph from a clip catalog.

    Args:
        catalog: Clips in catalog order.
        blend_duration: Cross-fade length for every transition.

    Returns:
        SynthesisResult with the validated graph and its role report.

    Raises:
        EmptyCatalogError: If the catalog holds no clips.
        NamingExhaustedError: If a clip cannot be given a unique state name.
        InvariantViolationError: If the built graph is inconsistent.
    """
    clips: Sequence[ClipDescriptor] = list(catalog)
    if not clips:
        raise EmptyCatalogError()

    logger.info(f"Synthesizing animation graph from {len(clips)} clips")

    graph = build(clips)
    graph = connect(graph, blend_duration=blend_duration)
    validate_graph(graph)

    report = build_report(graph)
    log_report(report)

    logger.info(
        f"Synthesized graph: {len(graph.states)} states, "
        f"{len(graph.transitions)} transitions, initial '{graph.initial}'"
    )
    return SynthesisResult(graph=graph, report=report)
