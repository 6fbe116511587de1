"""Composer API: pure constructors and combinators for ErrorTree values."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Self

from notsofast.models.errors import LeafError, ParamValue
from notsofast.tree.nodes import ErrorTree, _as_tree


class TreeBuilder:
    """Local accumulator for folding many subtrees into one tree.

    Folding with :meth:`ErrorTree.merge` copies the child mappings on every
    step; the builder collects into plain dicts instead and freezes them
    once in :meth:`build`. A builder is meant to live inside one function
    call; only the built tree should escape.
    """

    def __init__(self) -> None:
        self._errors: list[LeafError] = []
        self._fields: dict[str, ErrorTree] = {}
        self._items: dict[int, ErrorTree] = {}

    def error(self, error: LeafError) -> Self:
        self._errors.append(error)
        return self

    def field(self, name: str, child: ErrorTree) -> Self:
        if child.is_err():
            existing = self._fields.get(name)
            self._fields[name] = child if existing is None else existing.merge(child)
        return self

    def item(self, index: int, child: ErrorTree) -> Self:
        if child.is_err():
            if index < 0:
                raise ValueError(f"Item index must be non-negative, got {index}")
            existing = self._items.get(index)
            self._items[index] = child if existing is None else existing.merge(child)
        return self

    def merge(self, tree: ErrorTree) -> Self:
        if tree.is_err():
            self._errors.extend(tree.errors)
            for name, child in tree.fields.items():
                self.field(name, child)
            for index, child in tree.items.items():
                self.item(index, child)
        return self

    def build(self) -> ErrorTree:
        if not (self._errors or self._fields or self._items):
            return ErrorTree.valid()
        return ErrorTree(errors=tuple(self._errors), fields=self._fields, items=self._items)


# Convenience constructors for common trees.


def valid() -> ErrorTree:
    """The tree with no errors."""
    return ErrorTree.valid()


def leaf(
    code: str, message: str | None = None, params: Mapping[str, ParamValue] | None = None
) -> ErrorTree:
    """A tree with exactly one direct error."""
    return ErrorTree(errors=(LeafError(code=code, message=message, params=dict(params or {})),))


def error(err: LeafError) -> ErrorTree:
    """A tree holding an existing LeafError."""
    return ErrorTree(errors=(err,))


def errors(errs: Iterable[LeafError]) -> ErrorTree:
    """A tree holding every error from ``errs`` as direct errors."""
    collected = tuple(errs)
    if not collected:
        return ErrorTree.valid()
    return ErrorTree(errors=collected)


def error_if(condition: bool, producer: Callable[[], LeafError | ErrorTree]) -> ErrorTree:
    """Return what ``producer`` builds if ``condition`` holds, else ``valid()``.

    ``producer`` is only called when ``condition`` is true, so formatting
    messages and params costs nothing on the success path.
    """
    if not condition:
        return ErrorTree.valid()
    return _as_tree(producer())


def field(name: str, child: ErrorTree) -> ErrorTree:
    """Attach ``child`` under field ``name``; a valid child yields ``valid()``."""
    if child.is_valid():
        return ErrorTree.valid()
    return ErrorTree(fields={name: child})


def item(index: int, child: ErrorTree) -> ErrorTree:
    """Attach ``child`` under item ``index``; a valid child yields ``valid()``."""
    if child.is_valid():
        return ErrorTree.valid()
    return ErrorTree(items={index: child})


def merge(a: ErrorTree, b: ErrorTree) -> ErrorTree:
    """Combine two trees, ``a``'s direct errors first."""
    return a.merge(b)


def merge_all(*trees: ErrorTree) -> ErrorTree:
    """Merge any number of trees left to right."""
    builder = TreeBuilder()
    for tree in trees:
        builder.merge(tree)
    return builder.build()


def fields(pairs: Iterable[tuple[Any, Any]], fn: Callable[[Any, Any], ErrorTree]) -> ErrorTree:
    """Validate ``(key, value)`` pairs, attaching each result under ``str(key)``.

    Keys are only converted to strings for entries that have errors.
    """
    builder = TreeBuilder()
    for key, value in pairs:
        child = fn(key, value)
        if child.is_err():
            builder.field(str(key), child)
    return builder.build()


def items(values: Iterable[Any], fn: Callable[[int, Any], ErrorTree]) -> ErrorTree:
    """Validate every element of ``values``, attaching results by position."""
    builder = TreeBuilder()
    for index, value in enumerate(values):
        builder.item(index, fn(index, value))
    return builder.build()
