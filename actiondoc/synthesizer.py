"""
Recursive schema synthesis.

Walks a declared type (container element types, mapping value types and
object properties) and produces the equivalent SchemaNode tree.

Self-referential types are handled by threading the lineage of object
types currently being expanded through the recursion. When a type is met
again inside its own expansion, the occurrence is emitted as an untyped
object leaf (or an array of untyped objects for a container of it) instead
of being expanded again. The lineage is an immutable tuple passed as an
argument, so synthesis keeps no state between calls and is reentrant.

Usage:
    from actiondoc.synthesizer import synthesize

    synthesize(TreeNode).to_dict()
    # {"type": "object", "properties": {
    #     "label": {"type": "string"},
    #     "children": {"type": "array", "items": {"type": "object"}}}}

    # Query parameters: optional numeric leaves become nullable
    synthesize(int, parameter=True).to_dict()
    # {"type": "integer", "nullable": True}
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Union

from actiondoc.classifier import SchemaKind, classify
from actiondoc.schema import (
    ArraySchema,
    BooleanSchema,
    EnumSchema,
    FreeFormSchema,
    IntegerSchema,
    NumberSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
)
from actiondoc.types import TypeDescriptor

Lineage = Tuple[TypeDescriptor, ...]


def synthesize(
    type_: Union[TypeDescriptor, Any],
    owner: Optional[Union[TypeDescriptor, Any]] = None,
    *,
    required: Optional[bool] = None,
    parameter: bool = False,
) -> Optional[SchemaNode]:
    """Synthesize the schema of ``type_``.

    Args:
        type_: TypeDescriptor or raw annotation to describe.
        owner: Type whose expansion is in progress, or None at the top level.
            Occurrences of ``owner`` inside ``type_`` are not expanded.
        required: Whether the value is required (parameters only).
        parameter: True when describing a request parameter; numeric leaves
            are then marked nullable unless ``required`` is True.

    Returns:
        The schema tree, or None for a void type (``None``/``NoneType``),
        meaning there is no body to describe.
    """
    td = _descriptor(type_)
    lineage: Lineage = () if owner is None else (_descriptor(owner),)
    nullable = parameter and required is not True
    return _synthesize(td, lineage, nullable)


def _descriptor(value: Union[TypeDescriptor, Any]) -> TypeDescriptor:
    return value if isinstance(value, TypeDescriptor) else TypeDescriptor.of(value)


def _synthesize(td: TypeDescriptor, lineage: Lineage, nullable: bool) -> Optional[SchemaNode]:
    if td.is_void():
        return None

    if td.is_container() or td.is_array():
        return _array(td, lineage, nullable)

    if td.is_mapping():
        return _mapping(td, lineage, nullable)

    kind = classify(td)
    if kind is SchemaKind.STRING:
        return StringSchema()
    if kind is SchemaKind.BOOLEAN:
        return BooleanSchema()
    if kind is SchemaKind.ENUM:
        return EnumSchema(values=td.enumeration_values())
    if kind is SchemaKind.NUMBER:
        return NumberSchema(nullable=nullable or None)
    if kind is SchemaKind.INTEGER:
        return IntegerSchema(nullable=nullable or None)
    return _object(td, lineage)


def _array(td: TypeDescriptor, lineage: Lineage, nullable: bool) -> ArraySchema:
    element = td.element_type()
    if element is None or element in lineage:
        # unparameterized, heterogeneous tuple, or a container of a type being expanded
        return ArraySchema(items=ObjectSchema())
    items = _synthesize(element, lineage, nullable)
    return ArraySchema(items=items if items is not None else ObjectSchema())


def _mapping(td: TypeDescriptor, lineage: Lineage, nullable: bool) -> SchemaNode:
    value = td.value_type()
    if value is None:
        return FreeFormSchema()
    if value in lineage:
        return ObjectSchema(additional_properties=ObjectSchema())
    values = _synthesize(value, lineage, nullable)
    return ObjectSchema(additional_properties=values if values is not None else ObjectSchema())


def _object(td: TypeDescriptor, lineage: Lineage) -> ObjectSchema:
    schema = ObjectSchema()
    if not td.is_object() or td in lineage:
        return schema

    inner = lineage + (td,)
    properties = td.declared_properties()
    while True:
        try:
            prop = next(properties)
        except StopIteration:
            break
        except Exception:  # noqa: BLE001
            # unresolvable annotation; keep the properties collected so far
            break
        prop_schema = _synthesize(prop.type, inner, False)
        if prop_schema is not None:
            schema.add_property(prop.name, prop_schema)
    return schema


__all__ = ["synthesize"]
