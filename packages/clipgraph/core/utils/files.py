"""File-name helpers shared by the catalog scan and config models."""

from __future__ import annotations

from collections.abc import Iterable


def normalize_extensions(extensions: Iterable[str]) -> tuple[str, ...]:
    """Lower-case extensions, ensure a leading dot and drop blanks/duplicates.

    Example:
        >>> normalize_extensions(["FBX", ".bvh", "", ".fbx"])
        ('.fbx', '.bvh')
    """
    normalized: list[str] = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = f".{ext}"
        if ext not in normalized:
            normalized.append(ext)
    return tuple(normalized)
