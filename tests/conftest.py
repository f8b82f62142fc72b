"""Shared pytest fixtures for clipgraph tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from clipgraph.core.animation import ClipCatalog, ClipDescriptor

# ============================================================================
# Catalog Fixtures
# ============================================================================

FULL_CATALOG_NAMES = ["Idle_A", "Walking", "Sprint", "Shoot_01", "Reloading", "Jump_Up"]


@pytest.fixture
def make_catalog() -> Callable[..., ClipCatalog]:
    """Factory building a catalog from clip names (one source path per entry)."""

    def _make(*names: str) -> ClipCatalog:
        return ClipCatalog.from_identifiers(names)

    return _make


@pytest.fixture
def full_catalog() -> ClipCatalog:
    """Catalog covering every transition rule."""
    return ClipCatalog.from_identifiers(FULL_CATALOG_NAMES)


@pytest.fixture
def idle_clip() -> ClipDescriptor:
    return ClipDescriptor(identifier="Idle", source_path="clips/Idle.fbx", duration=2.0)


# ============================================================================
# Filesystem Fixtures
# ============================================================================


BVH_TEMPLATE = """HIERARCHY
ROOT Hips
{{
    OFFSET 0.0 0.0 0.0
    CHANNELS 3 Xposition Yposition Zposition
    End Site
    {{
        OFFSET 0.0 1.0 0.0
    }}
}}
MOTION
Frames: {frames}
Frame Time: {frame_time}
0.0 0.0 0.0
"""


@pytest.fixture
def write_bvh() -> Callable[[Path, int, float], Path]:
    """Write a minimal BVH file with the given frame header."""

    def _write(path: Path, frames: int, frame_time: float) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(BVH_TEMPLATE.format(frames=frames, frame_time=frame_time), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def clip_dir(tmp_path: Path, write_bvh) -> Path:
    """Directory of clip assets in mixed formats and nesting."""
    root = tmp_path / "Animations"
    root.mkdir()
    (root / "Idle_A.fbx").write_bytes(b"fbx")
    (root / "Walking.FBX").write_bytes(b"fbx")
    write_bvh(root / "Sprint.bvh", 30, 1 / 30)
    (root / "combat").mkdir()
    (root / "combat" / "Shoot_01.anim").write_text("anim", encoding="utf-8")
    (root / "combat" / "Shoot_01.clip.yaml").write_text("duration: 0.8\n", encoding="utf-8")
    (root / "notes.txt").write_text("not a clip", encoding="utf-8")
    return root
