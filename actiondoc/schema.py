"""
Schema tree nodes.

A small tagged union mirroring the subset of OpenAPI 3.0 schema objects
actiondoc emits. Every node renders to a plain dict with ``to_dict()``;
unset attributes are omitted rather than rendered as null/false, so the
resulting YAML stays minimal.

Usage:
    from actiondoc.schema import ObjectSchema, StringSchema, IntegerSchema

    schema = ObjectSchema()
    schema.add_property("name", StringSchema(), required=True)
    schema.add_property("age", IntegerSchema(nullable=True))
    schema.to_dict()
    # {"type": "object",
    #  "properties": {"name": {"type": "string"},
    #                 "age": {"type": "integer", "nullable": True}},
    #  "required": ["name"]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from actiondoc.classifier import SchemaKind


@dataclass
class SchemaNode:
    """Base class of all schema nodes."""

    kind: ClassVar[SchemaKind]

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class StringSchema(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.STRING

    format: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "string"}
        if self.format:
            result["format"] = self.format
        return result


@dataclass
class BinarySchema(StringSchema):
    """Raw bytes: file uploads and free-form responses."""

    format: Optional[str] = "binary"


@dataclass
class BooleanSchema(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "boolean"}


@dataclass
class _NumericSchema(SchemaNode):
    openapi_type: ClassVar[str] = "number"

    nullable: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.openapi_type}
        if self.nullable:
            result["nullable"] = True
        return result


@dataclass
class IntegerSchema(_NumericSchema):
    kind: ClassVar[SchemaKind] = SchemaKind.INTEGER
    openapi_type: ClassVar[str] = "integer"


@dataclass
class NumberSchema(_NumericSchema):
    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER
    openapi_type: ClassVar[str] = "number"


@dataclass
class EnumSchema(SchemaNode):
    """String schema restricted to a fixed, ordered set of values."""

    kind: ClassVar[SchemaKind] = SchemaKind.ENUM

    values: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "string", "enum": list(self.values)}


@dataclass
class ArraySchema(SchemaNode):
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    items: Optional[SchemaNode] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "array"}
        if self.items is not None:
            result["items"] = self.items.to_dict()
        return result


@dataclass
class ObjectSchema(SchemaNode):
    """Object with named properties and/or typed additional properties.

    An ObjectSchema with neither is the untyped object leaf used wherever
    nothing more specific can be said (unknown classes, cycle breaks).
    """

    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    properties: Dict[str, SchemaNode] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    additional_properties: Optional[SchemaNode] = None

    def add_property(self, name: str, schema: SchemaNode, required: bool = False) -> "ObjectSchema":
        self.properties[name] = schema
        if required:
            self.add_required(name)
        return self

    def add_required(self, name: str) -> "ObjectSchema":
        if name not in self.required:
            self.required.append(name)
        return self

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": "object"}
        if self.properties:
            result["properties"] = {name: s.to_dict() for name, s in self.properties.items()}
        if self.required:
            result["required"] = list(self.required)
        if self.additional_properties is not None:
            result["additionalProperties"] = self.additional_properties.to_dict()
        return result


@dataclass
class FreeFormSchema(SchemaNode):
    """Object accepting arbitrary keys and values (a raw mapping)."""

    kind: ClassVar[SchemaKind] = SchemaKind.FREE_FORM

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "object", "additionalProperties": True}


__all__ = [
    "ArraySchema",
    "BinarySchema",
    "BooleanSchema",
    "EnumSchema",
    "FreeFormSchema",
    "IntegerSchema",
    "NumberSchema",
    "ObjectSchema",
    "SchemaNode",
    "StringSchema",
]
