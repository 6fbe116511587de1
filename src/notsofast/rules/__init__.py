"""Declarative validation rules attached to fields via ``typing.Annotated``."""

from notsofast.rules.base import (
    Arg,
    HasFields,
    IsIterable,
    IsMapping,
    Rule,
    RuleDefinitionError,
    check_all,
)
from notsofast.rules.builtin import (
    byte_length,
    char_length,
    contains,
    custom,
    length,
    range_,
    regex,
)
from notsofast.rules.structure import each_field, each_item, nested, some

__all__ = [
    "Arg",
    "HasFields",
    "IsIterable",
    "IsMapping",
    "Rule",
    "RuleDefinitionError",
    "byte_length",
    "char_length",
    "check_all",
    "contains",
    "custom",
    "each_field",
    "each_item",
    "length",
    "nested",
    "range_",
    "regex",
    "some",
]
