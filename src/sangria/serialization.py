"""AST serialization: JSON round-trip for sangria syntax trees.

Converts typed AST nodes to/from JSON-compatible dicts, so trees produced by
an external parser can be handed to the printer without a Python binding.

All output is deterministic (sorted keys).

Example:
    from sangria.serialization import to_json, from_json

    json_str = to_json(module)
    restored = from_json(json_str)
    assert module == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from sangria.location import SourceSpan
from sangria.nodes import Node, node_classes

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in node_classes()}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and SourceSpan objects.

    Args:
        node: Any sangria AST node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}
    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, SourceSpan):
        return {
            "_type": "SourceSpan",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])
    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceSpan":
            return SourceSpan(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize an AST to a JSON string.

    Args:
        node: Root node to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(node), sort_keys=True, indent=indent)


def from_json(data: str) -> Node:
    """Deserialize an AST from a JSON string.

    Raises:
        ValueError: If the JSON does not describe a node.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a serialized node object, got {type(raw).__name__}"
        raise ValueError(msg)
    return from_dict(raw)
