"""Host document loading.

Turns an exported design document (JSON) into the flat list of Elements
the rule engine consumes. Nested nodes are flattened depth first in
pre-order, and host-specific "mixed" sentinels are dropped so they never
reach the rules.

Supported shapes:
- a list of nodes
- ``{"document": node}`` (full file export)
- ``{"elements": [node, ...]}`` (already flat)
- a single node with ``children`` (page or frame export)
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .models import Element
from .smells_logging import get_logger

logger = get_logger()

# Structural nodes that contain the design but are not part of it
CONTAINER_TYPES = frozenset({"DOCUMENT", "CANVAS", "PAGE"})

# Keys that are identity or content and never carry a mixed sentinel
PRESERVED_KEYS = frozenset({"id", "name", "type", "characters"})

MIXED = "mixed"


class DocumentFormatError(ValueError):
    """Raised when a document cannot be interpreted as design nodes."""


def is_mixed(value: Any) -> bool:
    """True for the host's "differs across text runs" marker."""
    if isinstance(value, str):
        return value.lower() == MIXED
    if isinstance(value, dict):
        return value.get(MIXED) is True
    return False


def strip_mixed(node: dict[str, Any]) -> dict[str, Any]:
    """Copy a node without children and without mixed-valued properties."""
    cleaned = {}
    for key, value in node.items():
        if key == "children":
            continue
        if key not in PRESERVED_KEYS and is_mixed(value):
            continue
        cleaned[key] = value
    return cleaned


def iter_nodes(nodes: list[Any]) -> Iterator[dict[str, Any]]:
    """Walk nodes depth first, pre-order, skipping structural containers."""
    for node in nodes:
        if not isinstance(node, dict):
            raise DocumentFormatError(f"Expected a node object, got {type(node).__name__}")
        if node.get("type") not in CONTAINER_TYPES:
            yield node
        children = node.get("children")
        if children:
            yield from iter_nodes(children)


def _root_nodes(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        if "document" in data:
            return [data["document"]]
        if "elements" in data:
            return list(data["elements"])
        if "children" in data or "id" in data:
            return [data]
    raise DocumentFormatError(
        "Document must be a list of nodes or an object with "
        "'document', 'elements' or 'children'"
    )


def load_elements(data: Any) -> list[Element]:
    """Flatten a parsed host document into Elements.

    Args:
        data: Parsed JSON document.

    Returns:
        Elements in depth-first pre-order.

    Raises:
        DocumentFormatError: If the document shape is not recognized or a
            node lacks an id.
    """
    elements = []
    for node in iter_nodes(_root_nodes(data)):
        if "id" not in node:
            raise DocumentFormatError(f"Node without id: {node.get('name', '?')}")
        try:
            elements.append(Element.from_dict(strip_mixed(node)))
        except (AttributeError, TypeError, ValueError, KeyError) as e:
            raise DocumentFormatError(f"Invalid node {node['id']}: {e}") from e

    logger.debug(f"Loaded {len(elements)} elements")
    return elements


def load_elements_file(path: Path | str) -> list[Element]:
    """Read a JSON document from disk and flatten it into Elements.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DocumentFormatError: If the file is not valid JSON or not a
            recognized document.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"Invalid JSON in {path}: {e}") from e

    return load_elements(data)
