"""Leaf validation errors: a code, an optional message and display params."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

if TYPE_CHECKING:
    from notsofast.tree.nodes import ErrorTree


class Raw(str):
    """A param value rendered verbatim, without quotes or escapes."""

    __slots__ = ()


# bool is listed before int on purpose: bool params render as true/false.
ParamValue = bool | int | float | Raw | str


class LeafError(BaseModel):
    """One failed check at one position of the validated value.

    ``params`` keeps insertion order; the renderer sorts them by key. The
    mapping is read-only, so an error cannot change once it is in a tree.
    Equal errors are not deduplicated: two checks failing the same way on
    the same field are reported twice.

    Errors hash by value when every param value is hashable.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    code: str
    message: str | None = None
    params: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("params", mode="after")
    @classmethod
    def _read_only(cls, params: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(params))

    @field_serializer("params")
    def _dump_params(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return dict(params)

    def __hash__(self) -> int:
        return hash((self.code, self.message, frozenset(self.params.items())))

    @classmethod
    def with_code(cls, code: str) -> Self:
        """Create an error with ``code`` and no message or params."""
        return cls(code=code)

    def and_message(self, message: str) -> Self:
        """Return a copy with ``message``; the last call wins."""
        return self.model_copy(update={"message": message})

    def and_param(self, key: str, value: ParamValue) -> Self:
        """Return a copy with ``key=value`` added, replacing an existing key."""
        params = dict(self.params)
        params[key] = value
        return self.model_copy(update={"params": MappingProxyType(params)})


class ValidationFailedError(Exception):
    """Raised by :meth:`ErrorTree.raise_if_err` when the tree has errors."""

    def __init__(self, tree: ErrorTree) -> None:
        self.tree = tree
        super().__init__(str(tree))
