"""Human-readable rendering of error trees with jq-like paths.

Each direct error becomes one line::

    .: invariant_x: property x is not greater than property y
    .abc[4]: length: Invalid length: max=20, min=10, value=34
    .def.ghi: test

Param values use Python's own text: a whole float renders as ``1.0`` and
strings are escaped only for backslash, double quote, newline, carriage
return and tab, so non-ASCII characters and ``'`` appear as written.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from notsofast.models.errors import LeafError, Raw
from notsofast.settings import Settings, get_settings
from notsofast.tree.nodes import ErrorTree, FieldSegment, Path

MessageLookup = Callable[[str], str | None]

_BARE_NAME = re.compile(r"[A-Za-z0-9_]+")
_STRING_ESCAPES = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
)


def format_name(name: str) -> str:
    """Render a field name, quoting it unless it is a plain identifier."""
    if _BARE_NAME.fullmatch(name):
        return name
    return '"' + name.replace('"', '\\"') + '"'


def format_path(path: Path, root: str = ".") -> str:
    """Render a path: ``.a.b[2]``, ``.[1][2]``, or ``root`` when empty."""
    if not path:
        return root
    parts: list[str] = []
    for position, segment in enumerate(path):
        if isinstance(segment, FieldSegment):
            parts.append("." + format_name(segment.name))
        else:
            if position == 0:
                parts.append(".")
            parts.append(f"[{segment.index}]")
    return "".join(parts)


def format_param(value: Any) -> str:
    """Render one param value.

    Strings are double-quoted with backslash escapes, :class:`Raw` strings
    and anything that is not a str are rendered as-is (bools as true/false).
    """
    if isinstance(value, Raw):
        return str.__str__(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return '"' + value.translate(_STRING_ESCAPES) + '"'
    return str(value)


def format_error(error: LeafError, message_for: MessageLookup | None = None) -> str:
    """Render ``code[: message][: k=v, ...]`` with params sorted by key."""
    parts = [error.code]
    message = error.message
    if message is None and message_for is not None:
        message = message_for(error.code)
    if message is not None:
        parts.append(message)
    if error.params:
        parts.append(
            ", ".join(
                f"{key}={format_param(error.params[key])}" for key in sorted(error.params)
            )
        )
    return ": ".join(parts)


class Renderer:
    """Renders trees as ``path: error`` lines.

    ``message_for`` supplies a message for errors created without one,
    e.g. a lookup into an application's message catalogue.
    """

    def __init__(
        self, message_for: MessageLookup | None = None, settings: Settings | None = None
    ) -> None:
        self._message_for = message_for
        self._root = (settings or get_settings()).root_path

    def render(self, tree: ErrorTree) -> list[str]:
        return [
            f"{format_path(path, self._root)}: {format_error(err, self._message_for)}"
            for path, err in tree.leaves()
        ]

    def render_text(self, tree: ErrorTree) -> str:
        return "\n".join(self.render(tree))


def render(
    tree: ErrorTree,
    message_for: MessageLookup | None = None,
    settings: Settings | None = None,
) -> list[str]:
    """Render ``tree`` as one line per direct error; empty for a valid tree."""
    return Renderer(message_for=message_for, settings=settings).render(tree)
