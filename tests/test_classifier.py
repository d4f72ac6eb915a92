"""Tests for type classification."""

from datetime import date, datetime, time
from decimal import Decimal
from fractions import Fraction

import pytest

from actiondoc.classifier import SchemaKind, classify, is_primitive_kind
from actiondoc.types import TypeDescriptor

from sample_actions.models import Color, Page, Role, User


class TestClassify:
    """Test mapping of single types to schema kinds."""

    @pytest.mark.parametrize(
        "annotation,kind",
        [
            (str, SchemaKind.STRING),
            (bytes, SchemaKind.STRING),
            (date, SchemaKind.STRING),
            (datetime, SchemaKind.STRING),
            (time, SchemaKind.STRING),
            (bool, SchemaKind.BOOLEAN),
            (int, SchemaKind.INTEGER),
            (Fraction, SchemaKind.INTEGER),
            (float, SchemaKind.NUMBER),
            (Decimal, SchemaKind.NUMBER),
            (Role, SchemaKind.ENUM),
            (list[int], SchemaKind.ARRAY),
            (list, SchemaKind.ARRAY),
            (set[str], SchemaKind.ARRAY),
            (tuple[int, ...], SchemaKind.ARRAY),
            (dict[str, int], SchemaKind.OBJECT),
            (dict, SchemaKind.FREE_FORM),
            (User, SchemaKind.OBJECT),
            (Page[User], SchemaKind.OBJECT),
        ],
    )
    def test_kinds(self, annotation, kind):
        assert classify(annotation) is kind

    def test_bool_is_not_integer(self):
        """bool subclasses int but renders as boolean."""
        assert classify(bool) is SchemaKind.BOOLEAN

    def test_str_enum_is_enum(self):
        """A str-mixin enum is an enumeration, not a string."""
        assert classify(Color) is SchemaKind.ENUM

    def test_optional_classified_by_inner_type(self):
        from typing import Optional

        assert classify(Optional[int]) is SchemaKind.INTEGER

    def test_accepts_descriptor(self):
        assert classify(TypeDescriptor.of(float)) is SchemaKind.NUMBER

    def test_same_answer_everywhere(self):
        """Classification depends only on the type."""
        assert classify(int) is classify(TypeDescriptor.of(int))


class TestPrimitiveKinds:
    """Test primitive kind detection."""

    def test_primitives(self):
        for annotation in (str, bool, int, float, Role):
            assert is_primitive_kind(annotation)

    def test_non_primitives(self):
        for annotation in (list[int], dict, User):
            assert not is_primitive_kind(annotation)
