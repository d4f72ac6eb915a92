"""Tests for recursive schema synthesis."""

from typing import Optional

import pytest

from actiondoc.schema import ObjectSchema
from actiondoc.synthesizer import synthesize
from actiondoc.types import TypeDescriptor

from sample_actions.models import (
    Address,
    Author,
    Bag,
    Category,
    Computed,
    Event,
    Page,
    PartiallyBroken,
    Registry,
    Role,
    Timestamps,
    TreeNode,
    User,
)

OBJECT = {"type": "object"}


def render(annotation, **kwargs):
    return synthesize(annotation, **kwargs).to_dict()


class TestPrimitives:
    """Test leaf schemas."""

    @pytest.mark.parametrize(
        "annotation,expected",
        [
            (str, {"type": "string"}),
            (bool, {"type": "boolean"}),
            (int, {"type": "integer"}),
            (float, {"type": "number"}),
            (Role, {"type": "string", "enum": ["ADMIN", "MEMBER", "GUEST"]}),
        ],
    )
    def test_leaf(self, annotation, expected):
        assert render(annotation) == expected

    def test_dates_and_bytes_are_strings(self):
        schema = render(Timestamps)
        assert schema["properties"] == {
            "day": {"type": "string"},
            "at": {"type": "string"},
            "raw": {"type": "string"},
        }

    def test_void_has_no_schema(self):
        assert synthesize(None) is None
        assert synthesize(type(None)) is None


class TestObjects:
    """Test object expansion."""

    def test_user_entity(self):
        assert render(User) == {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "name": {"type": "string"},
                "active": {"type": "boolean"},
                "score": {"type": "number"},
                "balance": {"type": "number"},
                "role": {"type": "string", "enum": ["ADMIN", "MEMBER", "GUEST"]},
                "tags": {"type": "array", "items": {"type": "string"}},
                "address": {
                    "type": "object",
                    "properties": {
                        "street": {"type": "string"},
                        "zip_code": {"type": "integer"},
                    },
                },
                "created": {"type": "string"},
                "attributes": {"type": "object", "additionalProperties": {"type": "string"}},
            },
        }

    def test_response_properties_are_never_nullable(self):
        schema = render(User)
        assert "nullable" not in schema["properties"]["id"]

    def test_void_properties_are_omitted(self):
        assert list(render(Computed)["properties"]) == ["value", "doubled"]

    def test_generic_entity(self):
        schema = render(Page[User])
        assert schema["properties"]["total"] == {"type": "integer"}
        items = schema["properties"]["items"]
        assert items["type"] == "array"
        assert items["items"]["properties"]["name"] == {"type": "string"}

    def test_unresolvable_annotation_keeps_collected_properties(self):
        assert render(PartiallyBroken) == {
            "type": "object",
            "properties": {"first": {"type": "string"}},
        }

    def test_field_named_like_its_type(self):
        assert render(Event) == {
            "type": "object",
            "properties": {
                "title": {"type": "string"},
                "date": {"type": "string"},
                "time": {"type": "string"},
            },
        }


class TestContainers:
    """Test arrays, tuples and mappings."""

    def test_container_variants(self):
        props = render(Bag)["properties"]
        assert props["anything"] == {"type": "array", "items": OBJECT}
        assert props["pairs"] == {"type": "array", "items": OBJECT}
        assert props["scores"] == {"type": "array", "items": {"type": "number"}}
        assert props["lookup"] == {"type": "object", "additionalProperties": True}
        assert props["nested"] == {
            "type": "array",
            "items": {"type": "array", "items": {"type": "integer"}},
        }
        assert props["counts"] == {"type": "object", "additionalProperties": {"type": "integer"}}
        assert props["labels"] == {"type": "array", "items": {"type": "string"}}
        assert props["payload"] == OBJECT

    def test_top_level_container(self):
        assert render(list[Address])["items"]["properties"]["street"] == {"type": "string"}


class TestCycles:
    """Test termination on self-referential types."""

    def test_direct_self_reference(self):
        assert render(Category) == {
            "type": "object",
            "properties": {"name": {"type": "string"}, "parent": OBJECT},
        }

    def test_container_self_reference(self):
        assert render(TreeNode) == {
            "type": "object",
            "properties": {
                "label": {"type": "string"},
                "children": {"type": "array", "items": OBJECT},
                "parent": OBJECT,
            },
        }

    def test_mapping_self_reference(self):
        assert render(Registry) == {
            "type": "object",
            "properties": {
                "entries": {"type": "object", "additionalProperties": OBJECT},
            },
        }

    def test_indirect_cycle(self):
        assert render(Author) == {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "books": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {"title": {"type": "string"}, "author": OBJECT},
                    },
                },
            },
        }

    def test_owner_is_not_expanded(self):
        assert render(TreeNode, owner=TreeNode) == OBJECT
        assert render(list[TreeNode], owner=TreeNode) == {"type": "array", "items": OBJECT}

    def test_idempotent(self):
        """Synthesis keeps no state between calls."""
        assert render(TreeNode) == render(TreeNode)
        assert render(Author) == render(Author)


class TestParameterNullability:
    """Test nullable numeric leaves in request parameters."""

    def test_optional_parameter_numbers_are_nullable(self):
        assert render(int, parameter=True) == {"type": "integer", "nullable": True}
        assert render(float, parameter=True) == {"type": "number", "nullable": True}

    def test_required_parameter_numbers_are_not_nullable(self):
        assert render(int, parameter=True, required=True) == {"type": "integer"}

    def test_non_numeric_parameters_never_nullable(self):
        assert render(str, parameter=True) == {"type": "string"}
        assert render(bool, parameter=True) == {"type": "boolean"}

    def test_container_items_inherit_nullability(self):
        assert render(list[int], parameter=True) == {
            "type": "array",
            "items": {"type": "integer", "nullable": True},
        }

    def test_object_properties_are_not_nullable(self):
        props = render(Address, parameter=True)["properties"]
        assert props["zip_code"] == {"type": "integer"}

    def test_optional_wrapper_does_not_matter(self):
        assert render(Optional[int], parameter=True) == render(int, parameter=True)

    def test_accepts_descriptor(self):
        schema = synthesize(TypeDescriptor.of(Address))
        assert isinstance(schema, ObjectSchema)
        assert list(schema.properties) == ["street", "zip_code"]
