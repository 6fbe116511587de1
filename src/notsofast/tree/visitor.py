"""Depth-first traversal of error trees in render order."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from notsofast.models.errors import LeafError
from notsofast.tree.nodes import ErrorTree, FieldSegment, IndexSegment, Path


class TreeVisitor:
    """Base visitor for ErrorTree traversal.

    The walk order is the render order: a node's own errors, then its
    fields sorted by name, then its items sorted by index. Override
    :meth:`visit_error` to collect leaves, or :meth:`visit_node` to build
    a value bottom-up.
    """

    def visit(self, tree: ErrorTree, path: Path = ()) -> Any:
        return self.visit_node(tree, path)

    def visit_node(self, tree: ErrorTree, path: Path) -> Any:
        for err in tree.errors:
            self.visit_error(path, err)
        for name, child in sorted_fields(tree):
            self.visit(child, path + (FieldSegment(name),))
        for index, child in sorted_items(tree):
            self.visit(child, path + (IndexSegment(index),))
        return None

    def visit_error(self, path: Path, error: LeafError) -> Any:
        return None


class LeafCollector(TreeVisitor):
    """Collects ``(path, error)`` pairs."""

    def __init__(self) -> None:
        self.leaves: list[tuple[Path, LeafError]] = []

    def visit_error(self, path: Path, error: LeafError) -> None:
        self.leaves.append((path, error))


def sorted_fields(tree: ErrorTree) -> list[tuple[str, ErrorTree]]:
    return sorted(tree.fields.items(), key=lambda entry: entry[0])


def sorted_items(tree: ErrorTree) -> list[tuple[int, ErrorTree]]:
    return sorted(tree.items.items(), key=lambda entry: entry[0])


def iter_leaves(tree: ErrorTree) -> Iterator[tuple[Path, LeafError]]:
    collector = LeafCollector()
    collector.visit(tree)
    return iter(collector.leaves)
