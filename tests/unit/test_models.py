"""Tests for the LeafError model."""

from __future__ import annotations

import pydantic
import pytest

from notsofast import ErrorTree, LeafError, Raw, field, item, leaf, valid


class TestLeafError:
    def test_with_code(self) -> None:
        err = LeafError.with_code("length")
        assert err.code == "length"
        assert err.message is None
        assert err.params == {}

    def test_and_message_last_wins(self) -> None:
        err = LeafError.with_code("length").and_message("first").and_message("second")
        assert err.message == "second"

    def test_and_param_preserves_insertion_order(self) -> None:
        err = LeafError.with_code("range").and_param("value", 3).and_param("max", 2)
        assert list(err.params) == ["value", "max"]

    def test_and_param_replaces_existing_key(self) -> None:
        err = LeafError.with_code("range").and_param("max", 2).and_param("max", 5)
        assert err.params == {"max": 5}

    def test_builders_return_new_instances(self) -> None:
        base = LeafError.with_code("x")
        changed = base.and_param("a", 1).and_message("m")
        assert base.params == {}
        assert base.message is None
        assert changed is not base

    def test_frozen(self) -> None:
        err = LeafError.with_code("x")
        with pytest.raises(pydantic.ValidationError):
            err.code = "y"  # type: ignore[misc]

    def test_structural_equality(self) -> None:
        a = LeafError(code="range", message="m", params={"max": 1})
        b = LeafError.with_code("range").and_message("m").and_param("max", 1)
        assert a == b
        assert a != b.and_param("min", 0)

    def test_params_are_copied_on_construction(self) -> None:
        params = {"max": 1}
        err = LeafError(code="x", params=params)
        params["max"] = 2
        assert err.params == {"max": 1}

    def test_raw_keeps_its_type(self) -> None:
        err = LeafError.with_code("regex").and_param("pattern", Raw("^a+$"))
        assert isinstance(err.params["pattern"], Raw)

    def test_params_cannot_be_mutated(self) -> None:
        err = LeafError.with_code("range").and_param("min", 15)
        with pytest.raises(TypeError):
            err.params["min"] = 0  # type: ignore[index]
        assert err.params == {"min": 15}

    def test_params_inside_a_tree_stay_fixed(self) -> None:
        tree = field("age", leaf("range", params={"min": 15}))
        with pytest.raises(TypeError):
            tree.fields["age"].errors[0].params["min"] = 0  # type: ignore[index]
        assert str(tree) == ".age: range: min=15"

    def test_model_dump_returns_plain_params(self) -> None:
        dumped = LeafError.with_code("x").and_param("k", 1).model_dump()
        assert dumped == {"code": "x", "message": None, "params": {"k": 1}}
        assert type(dumped["params"]) is dict


class TestHashing:
    def test_equal_errors_hash_equal(self) -> None:
        a = LeafError(code="range", params={"min": 1, "max": 2})
        b = LeafError.with_code("range").and_param("max", 2).and_param("min", 1)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_trees_are_hashable(self) -> None:
        a = field("a", leaf("x")).merge(item(2, leaf("y")))
        b = item(2, leaf("y")).merge(field("a", leaf("x")))
        assert a == b
        assert hash(a) == hash(b)
        assert {a: 1}[b] == 1
        assert hash(valid()) == hash(ErrorTree())
