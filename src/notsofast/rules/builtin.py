"""Built-in value checks: ranges, lengths, patterns and custom functions."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from notsofast.models.errors import LeafError, Raw
from notsofast.rules.base import Rule, RuleDefinitionError, resolve
from notsofast.tree.builder import error_if
from notsofast.tree.nodes import ErrorTree


@dataclass(frozen=True)
class BoundsRule(Rule):
    """Compares a measured quantity against inclusive bounds."""

    min: Any = None
    max: Any = None
    equal: Any = None

    code: ClassVar[str]
    message: ClassVar[str]

    def __post_init__(self) -> None:
        if self.min is None and self.max is None and self.equal is None:
            raise RuleDefinitionError(f"'{self.code}' needs at least one of min, max, equal", self)

    def measure(self, value: Any) -> Any:
        return value

    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree:
        low = resolve(self.min, args)
        high = resolve(self.max, args)
        equal = resolve(self.equal, args)
        measured = self.measure(value)
        failed = (
            (low is not None and measured < low)
            or (high is not None and measured > high)
            or (equal is not None and measured != equal)
        )
        return error_if(failed, lambda: self._error(low, high, equal, measured))

    def _error(self, low: Any, high: Any, equal: Any, measured: Any) -> LeafError:
        err = LeafError.with_code(self.code).and_message(self.message)
        if low is not None:
            err = err.and_param("min", low)
        if high is not None:
            err = err.and_param("max", high)
        if equal is not None:
            err = err.and_param("equal", equal)
        return err.and_param("value", measured)


class Range(BoundsRule):
    code = "range"
    message = "Number not in range"


class Length(BoundsRule):
    code = "length"
    message = "Invalid length"

    def measure(self, value: Any) -> int:
        return len(value)


class CharLength(BoundsRule):
    code = "char_length"
    message = "Invalid character length"

    def measure(self, value: str) -> int:
        return len(value)


class ByteLength(BoundsRule):
    code = "byte_length"
    message = "Invalid byte length"

    def measure(self, value: str | bytes) -> int:
        if isinstance(value, str):
            return len(value.encode("utf-8"))
        return len(value)


@dataclass(frozen=True)
class Regex(Rule):
    """Fails when ``pattern`` is not found anywhere in the string."""

    pattern: re.Pattern[str]

    def check(self, value: str, args: Mapping[str, Any]) -> ErrorTree:
        return error_if(
            self.pattern.search(value) is None,
            lambda: LeafError.with_code("regex")
            .and_message("String does not match pattern")
            .and_param("pattern", Raw(self.pattern.pattern)),
        )


@dataclass(frozen=True)
class Contains(Rule):
    needle: Any

    def check(self, value: str, args: Mapping[str, Any]) -> ErrorTree:
        needle = resolve(self.needle, args)
        return error_if(
            needle not in value,
            lambda: LeafError.with_code("contains")
            .and_message("String does not contain substring")
            .and_param("needle", needle),
        )


@dataclass(frozen=True)
class Custom(Rule):
    """Delegates to ``function(value, *args)``, which returns an ErrorTree."""

    function: Callable[..., ErrorTree]
    args: tuple[Any, ...] = ()

    def check(self, value: Any, args: Mapping[str, Any]) -> ErrorTree:
        result = self.function(value, *(resolve(arg, args) for arg in self.args))
        if not isinstance(result, ErrorTree):
            name = getattr(self.function, "__name__", repr(self.function))
            raise RuleDefinitionError(
                f"Custom validator {name} returned {type(result).__name__}, expected ErrorTree",
                self,
            )
        return result


# Convenience constructors.


def range_(min: Any = None, max: Any = None, equal: Any = None) -> Range:
    """Inclusive numeric bounds."""
    return Range(min=min, max=max, equal=equal)


def length(min: Any = None, max: Any = None, equal: Any = None) -> Length:
    """Bounds on ``len(value)``."""
    return Length(min=min, max=max, equal=equal)


def char_length(min: Any = None, max: Any = None, equal: Any = None) -> CharLength:
    """Bounds on the number of characters of a string."""
    return CharLength(min=min, max=max, equal=equal)


def byte_length(min: Any = None, max: Any = None, equal: Any = None) -> ByteLength:
    """Bounds on the UTF-8 encoded size of a string."""
    return ByteLength(min=min, max=max, equal=equal)


def regex(pattern: str | re.Pattern[str]) -> Regex:
    return Regex(pattern=re.compile(pattern))


def contains(needle: Any) -> Contains:
    return Contains(needle=needle)


def custom(function: Callable[..., ErrorTree], *args: Any) -> Custom:
    """Wrap a validator function; extra ``args`` (or :class:`Arg` values) follow the value."""
    return Custom(function=function, args=args)
