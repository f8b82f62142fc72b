"""Role classifier - maps clip identifiers to semantic roles.

Classification is a case-insensitive substring search over an ordered
keyword table. The first role with any matching keyword wins, so the table
order is the tie-break policy: "RunAndFire" resolves to FIRE because FIRE is
checked before RUN. The table is fixed; callers cannot reorder it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from clipgraph.core.animation.enums import SemanticRole
from clipgraph.core.animation.models import ClipDescriptor

logger = logging.getLogger(__name__)

# Most specific first. Keywords are matched against casefolded identifiers.
ROLE_KEYWORDS: tuple[tuple[SemanticRole, tuple[str, ...]], ...] = (
    (SemanticRole.DEATH, ("die", "death", "dead", "dying")),
    (SemanticRole.RELOAD, ("reload",)),
    (SemanticRole.FIRE, ("shoot", "fire", "firing", "attack")),
    (SemanticRole.JUMP, ("jump",)),
    (SemanticRole.RUN, ("run", "sprint")),
    (SemanticRole.WALK, ("walk", "movefwd")),
    (SemanticRole.IDLE, ("idle", "stand")),
)


def keywords_for(role: SemanticRole) -> tuple[str, ...]:
    """Keywords that select ``role`` (empty for UNCLASSIFIED)."""
    for table_role, keywords in ROLE_KEYWORDS:
        if table_role is role:
            return keywords
    return ()


def matching_keyword(identifier: str) -> tuple[SemanticRole, str] | None:
    """Return the winning (role, keyword) pair for ``identifier``, if any."""
    folded = identifier.casefold()
    for role, keywords in ROLE_KEYWORDS:
        for keyword in keywords:
            if keyword in folded:
                return role, keyword
    return None


def classify(identifier: str) -> SemanticRole | None:
    """Classify a clip identifier.

    Args:
        identifier: Clip name as declared in the catalog.

    Returns:
        The first role in ROLE_KEYWORDS with a keyword contained in the
        identifier, or None when nothing matches.

    Example:
        >>> classify("Shoot_01")
        <SemanticRole.FIRE: 'fire'>
        >>> classify("XYZ123") is None
        True
    """
    match = matching_keyword(identifier)
    if match is None:
        logger.debug(f"Clip '{identifier}' matched no role keyword")
        return None

    role, keyword = match
    logger.debug(f"Clip '{identifier}' classified as {role.value} (keyword '{keyword}')")
    return role


def classify_clip(clip: ClipDescriptor) -> SemanticRole:
    """Classify a descriptor, folding no-match into UNCLASSIFIED."""
    return classify(clip.identifier) or SemanticRole.UNCLASSIFIED


def classify_catalog(clips: Iterable[ClipDescriptor]) -> list[tuple[ClipDescriptor, SemanticRole]]:
    """Classify every clip, preserving catalog order."""
    return [(clip, classify_clip(clip)) for clip in clips]
