"""Synthesis error taxonomy."""

from __future__ import annotations

from collections.abc import Iterable


class SynthesisError(Exception):
    """Base class for all failures raised while synthesizing a graph."""

    pass


class EmptyCatalogError(SynthesisError):
    """Raised when the clip catalog holds no clips."""

    def __init__(self, message: str = "Clip catalog is empty; no graph can be built") -> None:
        super().__init__(message)


class NamingExhaustedError(SynthesisError):
    """Raised when no free state name could be found for a clip."""

    def __init__(self, base_name: str, attempts: int) -> None:
        self.base_name = base_name
        self.attempts = attempts
        super().__init__(f"No free state name for '{base_name}' after {attempts} suffixes")


class InvariantViolationError(SynthesisError):
    """Raised when a built graph fails a post-build consistency check.

    This signals a defect in the builder or rule engine, never bad input.

    Attributes:
        violations: Human-readable description of every failed check.
    """

    def __init__(self, violations: Iterable[str]) -> None:
        self.violations = list(violations)
        joined = "; ".join(self.violations)
        super().__init__(f"Graph invariant violated: {joined}")
