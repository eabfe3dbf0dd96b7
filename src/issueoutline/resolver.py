"""Outline tree resolution.

Turns the parsed outline (category name -> node) into a flat, ordered list of
:class:`IssueRecord`. A node is one of four shapes, decided in a single place
by :func:`classify_node`:

* ``POINT``    - bare integer, shorthand for ``{point: N}``
* ``LEAF``     - mapping with ``point`` and at least one of ``comment`` /
  ``assignees``
* ``SEQUENCE`` - list of single-key mappings, each naming a sub-category
* ``MAPPING``  - the single-key wrapper found inside a sequence

Traversal is depth-first and preserves document order. Each category entered
is appended to the label path of its children; the leaf's own key becomes the
title, prefixed with the outermost label only.

Validation is fail-fast: the first bad node raises :class:`ValidationError`
and no records are returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import ValidationError
from .models import IssueRecord, NodeKind

Labels = tuple[str, ...]


def _is_int(value: Any) -> bool:
    # YAML booleans load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def _check_leaf_fields(node: Mapping[str, Any], path: Labels) -> None:
    if not _is_int(node["point"]):
        raise ValidationError(
            f"'point' must be an integer, got {type(node['point']).__name__}", path=path
        )
    comment = node.get("comment")
    if comment is not None and not isinstance(comment, str):
        raise ValidationError("'comment' must be a string", path=path)
    assignees = node.get("assignees")
    if assignees is not None and (
        not isinstance(assignees, list) or not all(isinstance(a, str) for a in assignees)
    ):
        raise ValidationError("'assignees' must be a list of strings", path=path)


def classify_node(node: Any, path: Labels = ()) -> NodeKind:
    """Return the shape of ``node`` or raise :class:`ValidationError`."""
    if _is_int(node):
        return NodeKind.POINT
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    if isinstance(node, Mapping):
        if "point" in node and ("comment" in node or "assignees" in node):
            _check_leaf_fields(node, path)
            return NodeKind.LEAF
        if len(node) == 1:
            return NodeKind.MAPPING
        if "point" in node:
            raise ValidationError(
                "ambiguous leaf: 'point' needs 'comment' or 'assignees'", path=path
            )
        raise ValidationError(
            f"mapping with {len(node)} keys is neither a leaf nor a single-key grouping",
            path=path,
        )
    if node is None:
        raise ValidationError("empty value", path=path)
    raise ValidationError(f"unsupported value of type {type(node).__name__}", path=path)


def _title(key: str, labels: Labels) -> str:
    # Only a non-empty outermost label prefixes the title, however deep the leaf sits.
    return f"[{labels[0]}] {key}" if labels and labels[0] else key


def _visit(key: str, node: Any, labels: Labels) -> list[IssueRecord]:
    path = (*labels, key)
    kind = classify_node(node, path)

    if kind is NodeKind.SEQUENCE:
        records: list[IssueRecord] = []
        for position, item in enumerate(node):
            item_path = (*path, f"#{position}")
            if classify_node(item, item_path) is not NodeKind.MAPPING:
                raise ValidationError(
                    "list entries must be single-key mappings", path=item_path
                )
            ((inner_key, inner_node),) = item.items()
            records.extend(_visit(str(inner_key), inner_node, path))
        return records

    if kind is NodeKind.MAPPING:
        if "point" in node:
            raise ValidationError(
                "ambiguous leaf: 'point' needs 'comment' or 'assignees'", path=path
            )
        raise ValidationError(
            "nested groupings must be written as a list of single-key mappings",
            path=path,
        )

    title = _title(key, labels)
    if kind is NodeKind.POINT:
        return [IssueRecord(title=title, point=node, labels=labels)]

    assignees = node.get("assignees")
    return [
        IssueRecord(
            title=title,
            point=node["point"],
            comment=node.get("comment"),
            assignees=tuple(assignees) if assignees is not None else None,
            labels=labels,
        )
    ]


def resolve(outline: Any) -> list[IssueRecord]:
    """Flatten an outline mapping into issue records in document order."""
    if not isinstance(outline, Mapping):
        raise ValidationError("outline must be a mapping of category names")
    records: list[IssueRecord] = []
    for key, node in outline.items():
        records.extend(_visit(str(key), node, ()))
    return records


__all__ = ["classify_node", "resolve"]
