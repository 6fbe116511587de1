"""Tests for the structure-mirroring and flat serialized forms."""

from __future__ import annotations

import json

import pytest

from notsofast import LeafError, Raw, field, item, leaf, valid
from notsofast.serialization import SerializedError, Serializer, to_dict, to_json, to_pairs
from notsofast.settings import Settings


def _record(code: str, message: str | None = None, **params: object) -> dict[str, object]:
    return {"code": code, "message": message, "params": params}


class TestToDict:
    def test_valid_serializes_to_none(self) -> None:
        assert to_dict(valid()) is None
        assert to_json(valid()) == "null"

    def test_direct_errors_become_records(self) -> None:
        tree = leaf("a").merge(leaf("b", "B happened", {"n": 1}))
        assert to_dict(tree) == [_record("a"), _record("b", "B happened", n=1)]

    def test_records_are_never_bare_strings(self) -> None:
        data = to_dict(field("nick", leaf("alpha_only")))
        assert data == {"nick": [_record("alpha_only")]}

    def test_only_failing_fields_are_present(self) -> None:
        tree = field("a", leaf("x")).merge(field("b", valid())).merge(field("c", leaf("y")))
        assert to_dict(tree) == {"a": [_record("x")], "c": [_record("y")]}

    def test_items_are_keyed_by_sparse_index(self) -> None:
        tree = item(7, leaf("x")).merge(item(2, leaf("y")))
        data = to_dict(tree)
        assert data == {2: [_record("y")], 7: [_record("x")]}
        assert list(data) == [2, 7]

    def test_nested_structure(self) -> None:
        tree = field("orders", item(1, field("amount", leaf("range"))))
        assert to_dict(tree) == {"orders": {1: {"amount": [_record("range")]}}}

    def test_direct_errors_with_children_use_reserved_key(self) -> None:
        tree = leaf("invariant").merge(field("a", leaf("x"))).merge(item(0, leaf("y")))
        data = to_dict(tree)
        assert data == {
            "$errors": [_record("invariant")],
            "a": [_record("x")],
            0: [_record("y")],
        }
        assert list(data)[0] == "$errors"

    def test_reserved_key_is_configurable(self) -> None:
        tree = leaf("invariant").merge(field("a", leaf("x")))
        data = to_dict(tree, settings=Settings(_env_file=None, errors_key="_errors"))
        assert data == {"_errors": [_record("invariant")], "a": [_record("x")]}

    def test_params_keep_insertion_order(self) -> None:
        err = LeafError.with_code("range").and_param("min", 1).and_param("max", 2)
        data = to_dict(field("n", leaf("x").and_error(err)))
        assert list(data["n"][1]["params"]) == ["min", "max"]

    def test_serializer_instance_is_reusable(self) -> None:
        serializer = Serializer(settings=Settings(_env_file=None))
        assert serializer.serialize(leaf("a")) == [_record("a")]
        assert serializer.serialize(valid()) is None

    def test_records_match_schema(self) -> None:
        record = to_dict(leaf("a", "msg", {"k": 1}))[0]
        assert SerializedError.model_validate(record).code == "a"

    def test_field_named_like_errors_key_is_rejected(self) -> None:
        tree = leaf("root").merge(field("$errors", leaf("child")))
        with pytest.raises(ValueError, match="collides with the reserved errors key"):
            to_dict(tree)

    def test_collision_is_reported_without_own_errors(self) -> None:
        tree = field("a", field("$errors", leaf("x")).merge(field("b", leaf("y"))))
        with pytest.raises(ValueError, match="at \\.a"):
            to_dict(tree)

    def test_other_errors_key_avoids_collision(self) -> None:
        tree = leaf("root").merge(field("$errors", leaf("child")))
        data = to_dict(tree, settings=Settings(_env_file=None, errors_key="_own"))
        assert data == {"_own": [_record("root")], "$errors": [_record("child")]}


class TestToJson:
    def test_index_keys_become_strings(self) -> None:
        text = to_json(field("cars", item(2, leaf("char_length"))))
        assert json.loads(text) == {"cars": {"2": [_record("char_length")]}}

    def test_non_json_params_fall_back_to_str(self) -> None:
        text = to_json(leaf("bad", params={"error": ValueError("boom")}))
        assert json.loads(text) == [_record("bad", error="boom")]


class TestToPairs:
    def test_pairs_match_rendered_lines(self) -> None:
        tree = (
            leaf("one", "Test message one", {"param1": "value1"})
            .and_field("field_a", leaf("two"))
            .and_item(1, item(2, leaf("nine")))
            .and_item(
                2,
                leaf("c", params={"p01": True, "p02": 1, "p13": 1.1, "p16": "one\ntwo"}).and_error(
                    LeafError.with_code("d").and_param("p18", Raw("five\nsix"))
                ),
            )
        )
        assert to_pairs(tree) == [
            (".", 'one: Test message one: param1="value1"'),
            (".field_a", "two"),
            (".[1][2]", "nine"),
            (".[2]", 'c: p01=true, p02=1, p13=1.1, p16="one\\ntwo"'),
            (".[2]", "d: p18=five\nsix"),
        ]

    def test_valid_has_no_pairs(self) -> None:
        assert to_pairs(valid()) == []
