"""Convert :class:`pydantic.ValidationError` into an :class:`ErrorTree`.

Each pydantic error detail becomes one leaf: ``type`` is the code,
``msg`` the message and ``ctx`` (when present) the params. Non-negative
integer ``loc`` segments become items; every other segment, including
negative integer dict keys, becomes a field named by its ``str()``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from notsofast.models.errors import LeafError
from notsofast.tree.builder import TreeBuilder
from notsofast.tree.nodes import ErrorTree

logger = logging.getLogger("notsofast.integrations.pydantic")


def _at(loc: Sequence[int | str], tree: ErrorTree) -> ErrorTree:
    for segment in reversed(loc):
        if isinstance(segment, int) and segment >= 0:
            tree = ErrorTree(items={segment: tree})
        else:
            tree = ErrorTree(fields={str(segment): tree})
    return tree


def from_pydantic_error(exc: ValidationError) -> ErrorTree:
    """Build a tree holding every error reported by ``exc``."""
    builder = TreeBuilder()
    details = exc.errors(include_url=False)
    for detail in details:
        leaf = LeafError(
            code=detail["type"],
            message=detail["msg"],
            params=dict(detail.get("ctx") or {}),
        )
        builder.merge(_at(detail["loc"], ErrorTree(errors=(leaf,))))
    logger.debug("Converted %d pydantic error(s) for %s", len(details), exc.title)
    return builder.build()
