"""Structured output for error trees.

Two forms are available:

* :func:`to_dict` mirrors the shape of the validated data. A node with
  only direct errors becomes a list of error records; a node with fields
  or items becomes a dict keyed by field name (``str``) and item index
  (``int``) holding only children that have errors. A node with both
  keeps its direct errors under the reserved ``errors_key`` (``"$errors"``
  by default), placed first. The valid tree serializes to ``None``.
  A field named like ``errors_key`` would be indistinguishable from the
  reserved entry, so serializing it raises ``ValueError``; pick another
  key with ``NOTSOFAST_ERRORS_KEY``.
* :func:`to_pairs` flattens the tree into ``(path, error)`` string pairs,
  the same text the renderer prints on each line.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel

from notsofast.models.errors import LeafError
from notsofast.settings import Settings, get_settings
from notsofast.tree.nodes import ErrorTree, FieldSegment, IndexSegment, Path
from notsofast.tree.renderer import format_error, format_path
from notsofast.tree.visitor import TreeVisitor, sorted_fields, sorted_items

logger = logging.getLogger("notsofast.serialization")

SerializedNode = list[dict[str, Any]] | dict[str | int, Any] | None


class SerializedError(BaseModel):
    """One error record in serialized output."""

    code: str
    message: str | None = None
    params: dict[str, Any] = {}


class Serializer(TreeVisitor):
    """Builds the mirrored representation bottom-up."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._errors_key = (settings or get_settings()).errors_key

    def serialize(self, tree: ErrorTree) -> SerializedNode:
        return self.visit(tree)

    def visit_node(self, tree: ErrorTree, path: Path) -> SerializedNode:
        if tree.is_valid():
            return None
        records = [_record(err) for err in tree.errors]
        if not tree.fields and not tree.items:
            return records
        node: dict[str | int, Any] = {}
        if self._errors_key in tree.fields:
            raise ValueError(
                f"Field {self._errors_key!r} at {format_path(path)} collides with the "
                "reserved errors key; configure a different errors_key"
            )
        if records:
            node[self._errors_key] = records
        for name, child in sorted_fields(tree):
            node[name] = self.visit(child, path + (FieldSegment(name),))
        for index, child in sorted_items(tree):
            node[index] = self.visit(child, path + (IndexSegment(index),))
        return node


def _record(error: LeafError) -> dict[str, Any]:
    return SerializedError(
        code=error.code, message=error.message, params=dict(error.params)
    ).model_dump()


def to_dict(tree: ErrorTree, settings: Settings | None = None) -> SerializedNode:
    """Serialize ``tree`` into the structure-mirroring form."""
    return Serializer(settings=settings).serialize(tree)


def to_json(tree: ErrorTree, settings: Settings | None = None, indent: int | None = None) -> str:
    """Serialize ``tree`` to JSON text; item indices become string keys."""
    data = to_dict(tree, settings=settings)
    text = json.dumps(data, indent=indent, ensure_ascii=False, default=str)
    logger.debug("Serialized error tree to %d bytes of JSON", len(text))
    return text


def to_pairs(tree: ErrorTree, settings: Settings | None = None) -> list[tuple[str, str]]:
    """Flatten ``tree`` into ``(path, error)`` pairs in render order."""
    root = (settings or get_settings()).root_path
    return [(format_path(path, root), format_error(err)) for path, err in tree.leaves()]
