"""
Type classification.

Maps a single TypeDescriptor to the schema kind it renders as, without
recursing into element or property types. The same answer holds wherever
the type appears (query parameter, form field, response entity).
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from actiondoc.types import TypeDescriptor


class SchemaKind(str, Enum):
    """Schema kinds a declared type can map to."""

    STRING = "string"
    BOOLEAN = "boolean"
    ENUM = "enum"
    NUMBER = "number"
    INTEGER = "integer"
    ARRAY = "array"
    FREE_FORM = "free_form"
    OBJECT = "object"


PRIMITIVE_KINDS = frozenset(
    {SchemaKind.STRING, SchemaKind.BOOLEAN, SchemaKind.ENUM, SchemaKind.NUMBER, SchemaKind.INTEGER}
)


def classify(type_: Union[TypeDescriptor, object]) -> SchemaKind:
    """Classify a type descriptor (or a raw annotation) into a SchemaKind.

    Order matters: ``bool`` is an ``int`` subclass and enums may mix in
    ``str``, so both are tested before strings and numbers. Containers and
    mappings are classified by their unsubscripted origin, so a raw
    ``list`` and a ``list[User]`` are both ARRAY; a raw mapping is
    FREE_FORM because nothing is known about its values.
    """
    td = type_ if isinstance(type_, TypeDescriptor) else TypeDescriptor.of(type_)

    if td.is_boolean():
        return SchemaKind.BOOLEAN
    if td.is_enumeration():
        return SchemaKind.ENUM
    if td.is_string_like():
        return SchemaKind.STRING
    if td.is_floating():
        return SchemaKind.NUMBER
    if td.is_numeric():
        return SchemaKind.INTEGER
    if td.is_container() or td.is_array():
        return SchemaKind.ARRAY
    if td.is_mapping():
        return SchemaKind.OBJECT if td.value_type() is not None else SchemaKind.FREE_FORM
    return SchemaKind.OBJECT


def is_primitive_kind(type_: Union[TypeDescriptor, object]) -> bool:
    return classify(type_) in PRIMITIVE_KINDS
