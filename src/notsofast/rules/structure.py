"""Rules that descend into nested values, sequences, optionals and mappings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from notsofast.rules.base import (
    HasFields,
    IsIterable,
    IsMapping,
    Rule,
    RuleDefinitionError,
    check_all,
    is_absent,
    resolve,
)
from notsofast.tree import builder
from notsofast.tree.nodes import ErrorTree


@dataclass(frozen=True)
class Nested(Rule):
    """Calls the value's own ``validate`` with the given arguments."""

    args: Mapping[str, Any]

    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree:
        if not isinstance(value, HasFields):
            raise RuleDefinitionError(
                f"nested() needs a value with a validate() method, got {type(value).__name__}",
                self,
            )
        resolved = {name: resolve(arg, args) for name, arg in self.args.items()}
        return value.validate(**resolved)


@dataclass(frozen=True)
class Items(Rule):
    """Applies ``rules`` to every element, reporting errors by index."""

    rules: tuple[Rule, ...]

    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree:
        if not isinstance(value, IsIterable):
            raise RuleDefinitionError(
                f"each_item() needs an iterable value, got {type(value).__name__}", self
            )
        return builder.items(value, lambda _index, element: check_all(self.rules, element, args))


@dataclass(frozen=True)
class Some(Rule):
    """Applies ``rules`` to the value unless it is absent."""

    rules: tuple[Rule, ...]

    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree:
        if is_absent(value):
            return ErrorTree.valid()
        return check_all(self.rules, value, args)


@dataclass(frozen=True)
class Fields(Rule):
    """Applies ``rules`` to every mapping value, reporting errors by key."""

    rules: tuple[Rule, ...]

    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree:
        if not isinstance(value, IsMapping):
            raise RuleDefinitionError(
                f"each_field() needs a mapping value, got {type(value).__name__}", self
            )
        return builder.fields(value.items(), lambda _key, entry: check_all(self.rules, entry, args))


# Convenience constructors. Without rules, each_item/some/each_field descend with
# nested(), matching a bare ``validate`` on the element type.


def nested(**args: Any) -> Nested:
    """Validate the value with its own ``validate(**args)``."""
    return Nested(args=args)


def each_item(*rules: Rule) -> Items:
    return Items(rules=rules or (nested(),))


def some(*rules: Rule) -> Some:
    return Some(rules=rules or (nested(),))


def each_field(*rules: Rule) -> Fields:
    return Fields(rules=rules or (nested(),))
