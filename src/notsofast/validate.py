"""Class-level validation built from ``Annotated`` field rules.

Example::

    @validatable(custom=[check_invariants])
    @dataclass
    class User:
        nick: Annotated[str, custom(alpha_only), char_length(max=30)]
        age: Annotated[int, range_(min=15, max=100)]
        cars: Annotated[list[str], length(max=3), each_item(char_length(max=50))]

    tree = User(...).validate()

Only the ``Annotated`` metadata is read; the annotated type itself is
never inspected, so a rule works on any value with the capability it needs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Annotated, Any, TypeVar, get_origin, get_type_hints

from notsofast.rules.base import HasFields, Rule, RuleDefinitionError, check_all
from notsofast.rules.builtin import Custom
from notsofast.tree.builder import TreeBuilder
from notsofast.tree.nodes import ErrorTree

logger = logging.getLogger("notsofast.validate")

Validate = HasFields

T = TypeVar("T", bound=type)

_PLAN_ATTR = "__validation_plan__"


def _field_rules(cls: type) -> list[tuple[str, tuple[Rule, ...]]]:
    try:
        hints = get_type_hints(cls, include_extras=True)
    except NameError as exc:
        raise RuleDefinitionError(
            f"Cannot resolve annotations of {cls.__qualname__}: {exc}. "
            "Names used in annotations must be importable from the class's module."
        ) from exc
    plan: list[tuple[str, tuple[Rule, ...]]] = []
    for name, hint in hints.items():
        if get_origin(hint) is not Annotated:
            continue
        rules = tuple(meta for meta in hint.__metadata__ if isinstance(meta, Rule))
        if rules:
            plan.append((name, rules))
    return plan


def _type_rules(custom: Iterable[Rule | Callable[..., ErrorTree]]) -> tuple[Rule, ...]:
    return tuple(rule if isinstance(rule, Rule) else Custom(function=rule) for rule in custom)


def _check_args(cls: type, declared: tuple[str, ...], supplied: dict[str, Any]) -> None:
    missing = [name for name in declared if name not in supplied]
    unknown = [name for name in supplied if name not in declared]
    if missing or unknown:
        parts = []
        if missing:
            parts.append(f"missing {', '.join(missing)}")
        if unknown:
            parts.append(f"unexpected {', '.join(unknown)}")
        raise RuleDefinitionError(
            f"Bad validation arguments for {cls.__qualname__}: {'; '.join(parts)}"
        )


def validatable(
    cls: T | None = None,
    *,
    custom: Iterable[Rule | Callable[..., ErrorTree]] = (),
    args: Iterable[str] = (),
) -> T | Callable[[T], T]:
    """Give a class a ``validate(**args)`` method built from its field rules.

    ``custom`` validators receive the whole object and report direct errors
    at the root. ``args`` names the keyword arguments ``validate`` accepts;
    rules read them through :class:`~notsofast.rules.Arg`.

    Annotations are resolved on the first ``validate`` call, so fields may
    refer to classes defined later in the same module.
    """
    type_rules = _type_rules(custom)
    declared = tuple(args)

    def wrap(target: T) -> T:
        def validate(self: Any, **supplied: Any) -> ErrorTree:
            _check_args(target, declared, supplied)
            plan = target.__dict__.get(_PLAN_ATTR)
            if plan is None:
                plan = _field_rules(target)
                setattr(target, _PLAN_ATTR, plan)
            builder = TreeBuilder()
            for rule in type_rules:
                builder.merge(rule.check(self, supplied))
            for name, rules in plan:
                builder.field(name, check_all(rules, getattr(self, name), supplied))
            tree = builder.build()
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Validated %s: %d error(s)", target.__qualname__, sum(1 for _ in tree.leaves())
                )
            return tree

        validate.__qualname__ = f"{target.__qualname__}.validate"
        target.validate = validate  # type: ignore[attr-defined]
        return target

    if cls is None:
        return wrap
    return wrap(cls)


def validate(obj: Any, **args: Any) -> ErrorTree:
    """Validate any object exposing ``validate(**args)``."""
    if not isinstance(obj, HasFields):
        raise RuleDefinitionError(f"{type(obj).__name__} does not define validate()")
    return obj.validate(**args)
