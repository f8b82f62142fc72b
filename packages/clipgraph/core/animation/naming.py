"""State namer - graph-legal, collision-free state names.

Names are derived from clip identifiers: characters outside ``[A-Za-z0-9_]``
become ``_``, then collisions get ``_1``, ``_2``, ... in ascending order.
Callers must name clips in catalog order and record every returned name, so
the same catalog always yields the same names.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from clipgraph.core.animation.errors import NamingExhaustedError

_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")

# Upper bound on suffix probing; unreachable for any real catalog
MAX_SUFFIX = 1_000_000


def sanitize_state_name(identifier: str) -> str:
    """Replace characters that are illegal in state names with ``_``.

    An identifier that sanitizes to nothing becomes ``_``.

    Example:
        >>> sanitize_state_name("Run Fast.v2")
        'Run_Fast_v2'
    """
    return _DISALLOWED.sub("_", identifier) or "_"


def name_for(identifier: str, taken: set[str] | frozenset[str]) -> str:
    """Pick a state name for ``identifier`` not present in ``taken``.

    Args:
        identifier: Clip identifier.
        taken: Names already claimed in the graph being built.

    Returns:
        Sanitized name, or the sanitized name with the lowest free ``_N``
        suffix (N >= 1).

    Raises:
        NamingExhaustedError: If no free suffix exists below MAX_SUFFIX.
    """
    base = sanitize_state_name(identifier)
    if base not in taken:
        return base

    for counter in range(1, MAX_SUFFIX + 1):
        candidate = f"{base}_{counter}"
        if candidate not in taken:
            return candidate

    raise NamingExhaustedError(base, MAX_SUFFIX)


class StateNamer:
    """Incremental namer owning the ``taken`` set for one graph build.

    Example:
        >>> namer = StateNamer()
        >>> namer.claim("Idle"), namer.claim("Idle")
        ('Idle', 'Idle_1')
    """

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._taken: set[str] = set(reserved)

    def claim(self, identifier: str) -> str:
        """Name the next clip and mark the name as taken."""
        name = name_for(identifier, self._taken)
        self._taken.add(name)
        return name

    @property
    def taken(self) -> frozenset[str]:
        return frozenset(self._taken)
