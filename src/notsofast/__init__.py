"""not-so-fast: collect every validation error into one composable tree.

Validators return :class:`ErrorTree` values; the composer functions
(:func:`valid`, :func:`leaf`, :func:`error_if`, :func:`field`,
:func:`item`, :func:`merge`) combine them without short-circuiting, and
the result renders as jq-like path lines::

    .age: range: Number not in range: max=100, min=15, value=200
    .cars[2]: char_length: Invalid character length: max=50, value=55

Structured output lives in :mod:`notsofast.serialization`.
"""

from notsofast.models.errors import LeafError, ParamValue, Raw, ValidationFailedError
from notsofast.rules import (
    Arg,
    Rule,
    RuleDefinitionError,
    byte_length,
    char_length,
    contains,
    custom,
    each_field,
    each_item,
    length,
    nested,
    range_,
    regex,
    some,
)
from notsofast.settings import Settings, get_settings
from notsofast.tree import (
    ErrorTree,
    FieldSegment,
    IndexSegment,
    Renderer,
    TreeBuilder,
    error,
    error_if,
    errors,
    field,
    fields,
    item,
    items,
    leaf,
    merge,
    merge_all,
    render,
    valid,
)
from notsofast.validate import Validate, validatable, validate

__version__ = "0.3.0"

__all__ = [
    "Arg",
    "ErrorTree",
    "FieldSegment",
    "IndexSegment",
    "LeafError",
    "ParamValue",
    "Raw",
    "Renderer",
    "Rule",
    "RuleDefinitionError",
    "Settings",
    "TreeBuilder",
    "Validate",
    "ValidationFailedError",
    "__version__",
    "byte_length",
    "char_length",
    "contains",
    "custom",
    "each_field",
    "each_item",
    "error",
    "error_if",
    "errors",
    "field",
    "fields",
    "get_settings",
    "item",
    "items",
    "leaf",
    "length",
    "merge",
    "merge_all",
    "nested",
    "range_",
    "regex",
    "render",
    "some",
    "valid",
]
