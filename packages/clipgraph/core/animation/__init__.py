"""Motion clip classification and animation state machine synthesis.

Example:
    >>> from clipgraph.core.animation import ClipCatalog, synthesize
    >>> catalog = ClipCatalog.from_identifiers(["Idle_A", "Walking", "Sprint"])
    >>> result = synthesize(catalog)
    >>> result.graph.initial
    'Idle_A'
"""

from clipgraph.core.animation.builder import build, select_initial_state
from clipgraph.core.animation.catalog import (
    ClipCatalog,
    find_clip_folder,
    load_clip_manifest,
    read_bvh_duration,
    scan_clip_directory,
)
from clipgraph.core.animation.classifier import ROLE_KEYWORDS, classify, classify_clip
from clipgraph.core.animation.enums import ParameterKind, SemanticRole
from clipgraph.core.animation.errors import (
    EmptyCatalogError,
    InvariantViolationError,
    NamingExhaustedError,
    SynthesisError,
)
from clipgraph.core.animation.export import read_graph, write_graph
from clipgraph.core.animation.guards import evaluate_guard, next_state
from clipgraph.core.animation.inspection import GraphSummary, describe_graph
from clipgraph.core.animation.models import (
    REQUIRED_PARAMETERS,
    ClipDescriptor,
    Graph,
    Parameter,
    RoleFulfillment,
    State,
    SynthesisReport,
    SynthesisResult,
    Transition,
)
from clipgraph.core.animation.naming import StateNamer, name_for, sanitize_state_name
from clipgraph.core.animation.rules import TRANSITION_RULES, TransitionRule, connect
from clipgraph.core.animation.synthesizer import build_report, synthesize
from clipgraph.core.animation.validation import find_invariant_violations, validate_graph

__all__ = [
    # Catalog
    "ClipCatalog",
    "ClipDescriptor",
    "scan_clip_directory",
    "load_clip_manifest",
    "find_clip_folder",
    "read_bvh_duration",
    # Classification and naming
    "ROLE_KEYWORDS",
    "SemanticRole",
    "classify",
    "classify_clip",
    "StateNamer",
    "name_for",
    "sanitize_state_name",
    # Graph
    "Graph",
    "State",
    "Parameter",
    "ParameterKind",
    "Transition",
    "REQUIRED_PARAMETERS",
    "build",
    "select_initial_state",
    # Rules and guards
    "TRANSITION_RULES",
    "TransitionRule",
    "connect",
    "evaluate_guard",
    "next_state",
    # Synthesis
    "synthesize",
    "build_report",
    "RoleFulfillment",
    "SynthesisReport",
    "SynthesisResult",
    "find_invariant_violations",
    "validate_graph",
    # Export and inspection
    "read_graph",
    "write_graph",
    "GraphSummary",
    "describe_graph",
    # Errors
    "SynthesisError",
    "EmptyCatalogError",
    "NamingExhaustedError",
    "InvariantViolationError",
]
