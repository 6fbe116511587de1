"""Immutable validation error tree. Valid children are never stored."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from notsofast.models.errors import LeafError, ValidationFailedError

if TYPE_CHECKING:
    from notsofast.settings import Settings


@dataclass(frozen=True)
class FieldSegment:
    """Step into a named field: ``.name``."""

    name: str


@dataclass(frozen=True)
class IndexSegment:
    """Step into a sequence item: ``[index]``."""

    index: int


PathSegment = FieldSegment | IndexSegment
Path = tuple[PathSegment, ...]


def _sparse(children: Mapping[Any, ErrorTree]) -> Mapping[Any, ErrorTree]:
    if not children:
        return _NO_CHILDREN
    return MappingProxyType({key: child for key, child in children.items() if child.is_err()})


_NO_CHILDREN: Mapping[Any, ErrorTree] = MappingProxyType({})


@dataclass(frozen=True)
class ErrorTree:
    """Validation outcome at one position and everything below it.

    ``errors`` are the direct errors of the value itself, in attachment
    order. ``fields`` and ``items`` hold the subtrees of named fields and
    sequence items; a child that has no errors is dropped on construction,
    so the fully valid tree has no errors and no children at all.

    Trees are values: every method returns a new tree and never touches
    the receiver, which makes them safe to share between threads.
    Like errors, they hash by value when every param value is hashable.
    """

    errors: tuple[LeafError, ...] = ()
    fields: Mapping[str, ErrorTree] = field(default_factory=lambda: _NO_CHILDREN)
    items: Mapping[int, ErrorTree] = field(default_factory=lambda: _NO_CHILDREN)
    _has_errors: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "fields", _sparse(self.fields))
        object.__setattr__(self, "items", _sparse(self.items))
        for index in self.items:
            if index < 0:
                raise ValueError(f"Item index must be non-negative, got {index}")
        object.__setattr__(
            self, "_has_errors", bool(self.errors or self.fields or self.items)
        )

    def __hash__(self) -> int:
        return hash(
            (self.errors, frozenset(self.fields.items()), frozenset(self.items.items()))
        )

    @classmethod
    def valid(cls) -> ErrorTree:
        """The tree with no errors; identity element of :meth:`merge`."""
        return _VALID

    # -- inspection ------------------------------------------------------------

    def is_err(self) -> bool:
        return self._has_errors

    def is_valid(self) -> bool:
        return not self._has_errors

    def raise_if_err(self) -> None:
        """Raise :class:`ValidationFailedError` carrying ``self`` if it has errors."""
        if self._has_errors:
            raise ValidationFailedError(self)

    def leaves(self) -> Iterator[tuple[Path, LeafError]]:
        """Yield ``(path, error)`` for every direct error, in render order."""
        from notsofast.tree.visitor import iter_leaves

        return iter_leaves(self)

    # -- composition -----------------------------------------------------------

    def merge(self, other: ErrorTree) -> ErrorTree:
        """Combine two trees.

        Direct errors concatenate (``self`` first). Children under the same
        name or index are merged recursively; the rest are unioned.
        """
        if not other._has_errors:
            return self
        if not self._has_errors:
            return other
        return ErrorTree(
            errors=self.errors + other.errors,
            fields=_merge_children(self.fields, other.fields),
            items=_merge_children(self.items, other.items),
        )

    def and_error(self, error: LeafError) -> ErrorTree:
        return ErrorTree(errors=self.errors + (error,), fields=self.fields, items=self.items)

    def and_errors(self, errors: Iterable[LeafError]) -> ErrorTree:
        added = tuple(errors)
        if not added:
            return self
        return ErrorTree(errors=self.errors + added, fields=self.fields, items=self.items)

    def and_error_if(
        self, condition: bool, producer: Callable[[], LeafError | ErrorTree]
    ) -> ErrorTree:
        """Add what ``producer`` returns if ``condition`` holds.

        ``producer`` is not called when ``condition`` is false.
        """
        if not condition:
            return self
        return self.merge(_as_tree(producer()))

    def and_field(self, name: str, child: ErrorTree) -> ErrorTree:
        if not child._has_errors:
            return self
        return self.merge(ErrorTree(fields={name: child}))

    def and_item(self, index: int, child: ErrorTree) -> ErrorTree:
        if not child._has_errors:
            return self
        return self.merge(ErrorTree(items={index: child}))

    def and_fields(
        self, pairs: Iterable[tuple[Any, Any]], fn: Callable[[Any, Any], ErrorTree]
    ) -> ErrorTree:
        from notsofast.tree.builder import fields

        return self.merge(fields(pairs, fn))

    def and_items(self, values: Iterable[Any], fn: Callable[[int, Any], ErrorTree]) -> ErrorTree:
        from notsofast.tree.builder import items

        return self.merge(items(values, fn))

    def first(self) -> ErrorTree:
        """Keep only the first error in render order, or return the valid tree."""
        if self.errors:
            return ErrorTree(errors=self.errors[:1])
        if self.fields:
            name = min(self.fields)
            return ErrorTree(fields={name: self.fields[name].first()})
        if self.items:
            index = min(self.items)
            return ErrorTree(items={index: self.items[index].first()})
        return _VALID

    # -- output ----------------------------------------------------------------

    def render(self, settings: Settings | None = None) -> list[str]:
        """One ``path: code[: message][: params]`` line per direct error."""
        from notsofast.tree.renderer import render

        return render(self, settings=settings)

    def __str__(self) -> str:
        return "\n".join(self.render())


def _merge_children(
    left: Mapping[Any, ErrorTree], right: Mapping[Any, ErrorTree]
) -> Mapping[Any, ErrorTree]:
    if not right:
        return left
    if not left:
        return right
    merged = dict(left)
    for key, child in right.items():
        existing = merged.get(key)
        merged[key] = child if existing is None else existing.merge(child)
    return merged


def _as_tree(produced: LeafError | ErrorTree) -> ErrorTree:
    if isinstance(produced, ErrorTree):
        return produced
    if isinstance(produced, LeafError):
        return ErrorTree(errors=(produced,))
    raise TypeError(
        f"Error producer must return LeafError or ErrorTree, got {type(produced).__name__}"
    )


_VALID = ErrorTree()
