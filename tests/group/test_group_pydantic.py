# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for using Group as a pydantic field type."""

import pytest
from pydantic import BaseModel, Field, ValidationError

from keyedgroup import Group, Undefined


class Roster(BaseModel):
    name: str
    members: Group = Field(default_factory=Group)


class TestPydanticField:
    def test_default_factory(self):
        roster = Roster(name="empty")
        assert isinstance(roster.members, Group)
        assert roster.members.is_empty()

    def test_validates_from_mapping(self):
        roster = Roster(name="r", members={"a": 1, "b": 2})
        assert isinstance(roster.members, Group)
        assert list(roster.members.items()) == [("a", 1), ("b", 2)]

    def test_validates_from_pairs(self):
        roster = Roster(name="r", members=[("x", 10), ("y", 20)])
        assert roster.members.key_at(-1) == "y"

    def test_group_instance_is_revalidated(self, abc_group):
        roster = Roster(name="r", members=abc_group)
        assert isinstance(roster.members, Group)
        assert roster.members == abc_group
        assert list(roster.members.keys()) == ["a", "b", "c"]

    @pytest.mark.parametrize("bad", [5, [("a", 1, 2)], ["ab", "cd"]])
    def test_invalid_input_is_a_validation_error(self, bad):
        with pytest.raises(ValidationError):
            Roster(name="r", members=bad)

    def test_dump_to_plain_dict(self, abc_group):
        roster = Roster(name="r", members=abc_group)
        assert roster.model_dump() == {
            "name": "r",
            "members": {"a": 1, "b": 2, "c": 3},
        }

    def test_json_roundtrip(self, abc_group):
        roster = Roster(name="r", members=abc_group)
        restored = Roster.model_validate_json(roster.model_dump_json())
        assert list(restored.members.items()) == list(abc_group.items())


class Tally(BaseModel):
    counts: Group[str, int] = Field(default_factory=Group)


class TestTypedField:
    def test_values_are_validated(self):
        with pytest.raises(ValidationError):
            Tally(counts={"a": "not-an-int"})

    def test_keys_are_validated(self):
        with pytest.raises(ValidationError):
            Tally(counts={1: 2})

    def test_lax_coercion_keeps_order(self):
        tally = Tally(counts=[("b", "2"), ("a", 1)])
        assert isinstance(tally.counts, Group)
        assert list(tally.counts.items()) == [("b", 2), ("a", 1)]

    def test_typed_group_instance_is_checked(self):
        with pytest.raises(ValidationError):
            Tally(counts=Group([("a", "x")]))

    def test_json_schema(self):
        schema = Tally.model_json_schema()
        counts = schema["properties"]["counts"]
        assert counts["type"] == "object"
        assert counts["additionalProperties"]["type"] == "integer"

    def test_bare_group_json_schema(self):
        schema = Roster.model_json_schema()
        assert schema["properties"]["members"]["type"] == "object"

    def test_undefined_value_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            Roster(name="r", members={"a": Undefined})
