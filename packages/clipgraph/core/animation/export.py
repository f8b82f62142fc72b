"""Graph export - stable JSON/YAML documents.

The document layout is the pydantic dump of Graph (transitions use
``from``/``to`` keys) wrapped with a format version. Field and element order
follow the graph, so the same graph always serializes to the same bytes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from clipgraph.core.animation.models import Graph
from clipgraph.core.config.loader import detect_format, load_config

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def graph_to_dict(graph: Graph) -> dict[str, Any]:
    """Serialize a graph to a plain, JSON-compatible document."""
    return {
        "format_version": FORMAT_VERSION,
        "graph": graph.model_dump(mode="json", by_alias=True),
    }


def graph_from_dict(document: dict[str, Any]) -> Graph:
    """Load a graph from a document produced by graph_to_dict.

    Raises:
        ValueError: If the document version is unsupported or the graph is missing.
        ValidationError: If the graph payload is invalid.
    """
    version = document.get("format_version")
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported graph format version: {version!r}")

    payload = document.get("graph")
    if not isinstance(payload, dict):
        raise ValueError("Graph document has no 'graph' object")

    return Graph.model_validate(payload)


def dumps_graph(graph: Graph, fmt: str = "json", indent: int = 2) -> str:
    """Serialize a graph to text.

    Args:
        graph: Graph to serialize.
        fmt: "json" or "yaml".
        indent: Indentation width.

    Raises:
        ValueError: If ``fmt`` is unsupported.
    """
    document = graph_to_dict(graph)
    if fmt == "json":
        return json.dumps(document, indent=indent, ensure_ascii=False) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, indent=indent, allow_unicode=True)
    raise ValueError(f"Unsupported export format: {fmt}")


def write_graph(
    graph: Graph,
    path: Path | str,
    fmt: str | None = None,
    indent: int = 2,
) -> Path:
    """Write a graph to ``path``.

    Args:
        graph: Graph to write.
        path: Output file.
        fmt: "json" or "yaml". Defaults to the format named by the file
            extension.
        indent: Indentation width.

    Raises:
        ValueError: If no format is given and the extension names none.
    """
    path = Path(path)
    if fmt is None:
        try:
            fmt = detect_format(path)
        except ValueError as e:
            raise ValueError(
                f"Cannot infer graph format from '{path.name}'; use a .json, .yaml or .yml file"
            ) from e
    text = dumps_graph(graph, fmt=fmt, indent=indent)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")

    logger.info(f"Wrote graph to {path}")
    return path


def read_graph(path: Path | str) -> Graph:
    """Read a graph written by write_graph.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a graph document.
    """
    return graph_from_dict(load_config(path))
