"""Rule base classes, validation-time arguments and value capabilities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from notsofast.tree.builder import TreeBuilder
from notsofast.tree.nodes import ErrorTree


class RuleDefinitionError(Exception):
    """Raised when a rule is declared or applied incorrectly.

    This signals a programming mistake (a missing argument, ``nested`` on
    a value that cannot validate itself), never invalid data.
    """

    def __init__(self, message: str, rule: Rule | None = None) -> None:
        self.rule = rule
        super().__init__(message)


# Capabilities a rule may require from the value it checks. Rules test
# for behaviour, never for the declared type of the field.


@runtime_checkable
class HasFields(Protocol):
    """A value that validates its own fields."""

    def validate(self, **args: Any) -> ErrorTree: ...


@runtime_checkable
class IsIterable(Protocol):
    """A value whose elements are validated by position."""

    def __iter__(self) -> Iterator[Any]: ...


@runtime_checkable
class IsMapping(Protocol):
    """A value whose entries are validated by key."""

    def items(self) -> Iterable[tuple[Any, Any]]: ...


def is_absent(value: Any) -> bool:
    """Optional values are absent when ``None``."""
    return value is None


@dataclass(frozen=True)
class Arg:
    """Placeholder for an argument supplied at validation time.

    ``range_(max=Arg("limit"))`` reads ``limit`` from
    ``obj.validate(limit=10)``.
    """

    name: str

    def resolve(self, args: Mapping[str, Any]) -> Any:
        if self.name not in args:
            raise RuleDefinitionError(f"Validation argument '{self.name}' was not supplied")
        return args[self.name]


def resolve(value: Any, args: Mapping[str, Any]) -> Any:
    """Replace an :class:`Arg` with its supplied value; pass anything else through."""
    if isinstance(value, Arg):
        return value.resolve(args)
    return value


class Rule(ABC):
    """A check applied to one value, producing an error tree for that value."""

    @abstractmethod
    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree: ...

    def __call__(self, value: Any, **args: Any) -> ErrorTree:
        return self.check(value, args)


def check_all(rules: Sequence[Rule], value: Any, args: Mapping[str, Any]) -> ErrorTree:
    """Apply every rule to ``value`` and merge the results in order."""
    builder = TreeBuilder()
    for rule in rules:
        builder.merge(rule.check(value, args))
    return builder.build()
