"""Error tree value, composer, traversal and rendering."""

from notsofast.tree.builder import (
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
    valid,
)
from notsofast.tree.nodes import ErrorTree, FieldSegment, IndexSegment, Path, PathSegment
from notsofast.tree.renderer import Renderer, format_error, format_path, render

__all__ = [
    "ErrorTree",
    "FieldSegment",
    "IndexSegment",
    "Path",
    "PathSegment",
    "Renderer",
    "TreeBuilder",
    "error",
    "error_if",
    "errors",
    "field",
    "fields",
    "format_error",
    "format_path",
    "item",
    "items",
    "leaf",
    "merge",
    "merge_all",
    "render",
    "valid",
]
