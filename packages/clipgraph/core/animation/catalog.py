"""Clip catalog - ordered collection of motion clip descriptors.

Clips are gathered from a designated storage location (a directory scan or a
manifest file) and kept in catalog order. Catalog order drives every
order-dependent decision downstream (state name suffixing, initial state
choice), so scans are sorted to stay stable from run to run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from clipgraph.core.animation.models import ClipDescriptor
from clipgraph.core.config.loader import load_config
from clipgraph.core.utils.files import normalize_extensions

logger = logging.getLogger(__name__)

DEFAULT_CLIP_EXTENSIONS: tuple[str, ...] = (".fbx", ".anim", ".bvh", ".glb", ".gltf")

# Sub-folder names probed when locating a character's clips
CLIP_FOLDER_NAMES: tuple[str, ...] = ("Animations", "Animation", "Anims", "Mixamo")

SIDECAR_SUFFIXES: tuple[str, ...] = (".clip.yaml", ".clip.yml", ".clip.json")


class ClipCatalog:
    """Ordered, de-duplicated collection of clip descriptors.

    An entry is dropped only when another entry with the same identifier and
    the same source path is already present. The same identifier coming from
    a different source path is a distinct clip and is kept.

    Example:
        >>> catalog = ClipCatalog()
        >>> catalog.add(ClipDescriptor(identifier="Idle", source_path="a/Idle.fbx"))
        True
        >>> len(catalog)
        1
    """

    def __init__(self, clips: Iterable[ClipDescriptor] = ()) -> None:
        self._clips: list[ClipDescriptor] = []
        self._keys: set[tuple[str, str]] = set()
        self.extend(clips)

    def add(self, clip: ClipDescriptor) -> bool:
        """Append a clip unless it is already present.

        Returns:
            True if the clip was added, False if it was a duplicate.
        """
        key = (clip.identifier, clip.source_path)
        if key in self._keys:
            logger.debug(f"Skipping duplicate clip '{clip.identifier}' ({clip.source_path})")
            return False

        self._keys.add(key)
        self._clips.append(clip)
        return True

    def extend(self, clips: Iterable[ClipDescriptor]) -> int:
        """Add several clips in order. Returns the number actually added."""
        return sum(1 for clip in clips if self.add(clip))

    def identifiers(self) -> list[str]:
        return [c.identifier for c in self._clips]

    def find(self, identifier: str) -> list[ClipDescriptor]:
        """All clips declaring ``identifier``, in catalog order."""
        return [c for c in self._clips if c.identifier == identifier]

    @property
    def clips(self) -> tuple[ClipDescriptor, ...]:
        return tuple(self._clips)

    def __iter__(self) -> Iterator[ClipDescriptor]:
        return iter(tuple(self._clips))

    def __len__(self) -> int:
        return len(self._clips)

    def __bool__(self) -> bool:
        return bool(self._clips)

    def __repr__(self) -> str:
        return f"ClipCatalog({len(self._clips)} clips)"

    @classmethod
    def from_identifiers(cls, identifiers: Iterable[str], root: str = "clips") -> ClipCatalog:
        """Build a catalog from bare names, one synthetic source path per entry.

        Each entry gets its own source path (indexed) so repeated names stay
        distinct clips.
        """
        return cls(
            ClipDescriptor(identifier=name, source_path=f"{root}/{index:03d}_{name}")
            for index, name in enumerate(identifiers)
        )


def read_bvh_duration(path: Path | str) -> float:
    """Read clip length from a BVH motion header.

    Duration is ``Frames`` times ``Frame Time``.

    Raises:
        ValueError: If the MOTION header is missing or malformed.
    """
    path = Path(path)
    frames: int | None = None
    frame_time: float | None = None

    with path.open("r", encoding="utf-8", errors="replace") as f:
        in_motion = False
        for line in f:
            stripped = line.strip()
            if not in_motion:
                in_motion = stripped.upper() == "MOTION"
                continue

            label, _, value = stripped.partition(":")
            label = label.strip().lower()
            try:
                if label == "frames":
                    frames = int(value)
                elif label == "frame time":
                    frame_time = float(value)
            except ValueError as e:
                raise ValueError(f"Malformed BVH header in {path}: {stripped!r}") from e

            if frames is not None and frame_time is not None:
                break

    if frames is None or frame_time is None:
        raise ValueError(f"BVH file has no MOTION frame header: {path}")
    if frames < 0 or frame_time < 0:
        raise ValueError(f"Negative frame data in BVH file: {path}")

    return frames * frame_time


def _read_sidecar_duration(clip_path: Path) -> float | None:
    """Duration from a ``<stem>.clip.yaml``/``.clip.json`` sidecar, if one exists.

    Raises:
        ValueError: If the sidecar cannot be parsed or its duration is not a
            non-negative number.
    """
    stem = clip_path.name[: -len(clip_path.suffix)] if clip_path.suffix else clip_path.name
    for suffix in SIDECAR_SUFFIXES:
        sidecar = clip_path.with_name(f"{stem}{suffix}")
        if not sidecar.is_file():
            continue

        duration = load_config(sidecar).get("duration")
        if duration is None:
            return None
        try:
            value = float(duration)
        except (TypeError, ValueError) as e:
            raise ValueError(
                f"Sidecar {sidecar.name} has non-numeric duration: {duration!r}"
            ) from e
        if value < 0:
            raise ValueError(f"Sidecar {sidecar.name} has negative duration: {value}")
        return value
    return None


def _clip_duration(clip_path: Path) -> float:
    try:
        duration = _read_sidecar_duration(clip_path)
    except ValueError as e:
        logger.warning(f"Ignoring sidecar of {clip_path.name}: {e}")
        duration = None
    if duration is not None:
        return duration

    if clip_path.suffix.lower() == ".bvh":
        try:
            return read_bvh_duration(clip_path)
        except ValueError as e:
            logger.warning(f"Could not read duration of {clip_path.name}: {e}")

    return 0.0


def scan_clip_directory(
    root: Path | str,
    extensions: Iterable[str] = DEFAULT_CLIP_EXTENSIONS,
    *,
    recursive: bool = True,
) -> ClipCatalog:
    """Enumerate clip assets below ``root``.

    Files are visited in sorted relative-path order. The identifier is the
    file stem; duration comes from a ``<stem>.clip.yaml``/``.clip.json``
    sidecar, from the BVH header, or defaults to 0.0.

    Args:
        root: Directory holding clip assets.
        extensions: Accepted file suffixes (case-insensitive).
        recursive: Descend into sub-directories.

    Returns:
        Catalog of discovered clips.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        NotADirectoryError: If ``root`` is not a directory.
    """
    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Clip directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Clip path is not a directory: {root}")

    accepted = normalize_extensions(extensions)
    candidates = root.rglob("*") if recursive else root.glob("*")
    paths = sorted(
        (p for p in candidates if p.is_file() and p.suffix.lower() in accepted),
        key=lambda p: p.relative_to(root).as_posix(),
    )

    catalog = ClipCatalog()
    for path in paths:
        catalog.add(
            ClipDescriptor(
                identifier=path.stem,
                source_path=path.as_posix(),
                duration=_clip_duration(path),
            )
        )

    logger.info(f"Found {len(catalog)} clips in {root}")
    return catalog


def load_clip_manifest(path: Path | str) -> ClipCatalog:
    """Load a catalog from a YAML/JSON manifest.

    Expected shape::

        clips:
          - identifier: Idle
            source_path: clips/idle.fbx
            duration: 2.5

    Relative source paths are resolved against the manifest's directory.

    Raises:
        FileNotFoundError: If the manifest does not exist.
        ValueError: If the manifest is malformed.
        ValidationError: If a clip entry is invalid.
    """
    path = Path(path)
    raw = load_config(path)

    entries = raw.get("clips") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise ValueError(f"Clip manifest must contain a 'clips' list: {path}")

    catalog = ClipCatalog()
    for entry in entries:
        clip = ClipDescriptor.model_validate(entry)
        source = Path(clip.source_path)
        if not source.is_absolute():
            clip = clip.model_copy(update={"source_path": (path.parent / source).as_posix()})
        catalog.add(clip)

    logger.info(f"Loaded {len(catalog)} clips from manifest {path}")
    return catalog


def find_clip_folder(character_dir: Path | str) -> Path | None:
    """Locate the clip folder that sits next to a character model.

    Returns:
        First existing folder among CLIP_FOLDER_NAMES, or None.
    """
    character_dir = Path(character_dir)
    for name in CLIP_FOLDER_NAMES:
        candidate = character_dir / name
        if candidate.is_dir():
            logger.info(f"Auto-detected clip folder: {candidate}")
            return candidate
    return None
