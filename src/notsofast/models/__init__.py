"""Leaf error model shared by the tree, renderer and serializer."""

from notsofast.models.errors import LeafError, ParamValue, Raw, ValidationFailedError

__all__ = [
    "LeafError",
    "ParamValue",
    "Raw",
    "ValidationFailedError",
]
