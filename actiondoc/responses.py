"""
Standard response envelopes.

Every structured REST action answers with the same JSON envelope; only
the ``status`` value and the ``entity`` differ between the success,
validation failure and error cases:

    entity          the response entity (success), the list of violations
                    (validation failure), absent for errors
    status          SUCCESS | VALIDATION_FAILURE | ERROR
    message         human readable message
    messageDetails  additional details
    authContext     {userId}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from actiondoc.schema import (
    ArraySchema,
    BinarySchema,
    EnumSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
)

JSON_MEDIA_TYPE = "application/json"
ANY_MEDIA_TYPE = "*/*"

STATUS_SUCCESS = "SUCCESS"
STATUS_VALIDATION_FAILURE = "VALIDATION_FAILURE"
STATUS_ERROR = "ERROR"


@dataclass
class ResponseSpec:
    """One entry of an operation's ``responses`` map."""

    description: Optional[str]
    media_type: str
    schema: SchemaNode

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.description:
            result["description"] = self.description
        result["content"] = {self.media_type: {"schema": self.schema.to_dict()}}
        return result


def result_schema(status: str, entity: Optional[SchemaNode]) -> ObjectSchema:
    """Envelope object for ``status``; ``entity`` is omitted when None."""
    schema = ObjectSchema()
    if entity is not None:
        schema.add_property("entity", entity)
    schema.add_property("status", EnumSchema(values=[status]))
    schema.add_property("message", StringSchema())
    schema.add_property("messageDetails", StringSchema())
    schema.add_property("authContext", ObjectSchema().add_property("userId", StringSchema()))
    return schema


def success_response(entity: Optional[SchemaNode]) -> ResponseSpec:
    return ResponseSpec(
        description="OK",
        media_type=JSON_MEDIA_TYPE,
        schema=result_schema(STATUS_SUCCESS, entity),
    )


def validation_failure_response() -> ResponseSpec:
    violation = (
        ObjectSchema()
        .add_property("path", StringSchema())
        .add_property("invalidValue", ObjectSchema())
        .add_property("message", StringSchema())
    )
    return ResponseSpec(
        description="Validation failure",
        media_type=JSON_MEDIA_TYPE,
        schema=result_schema(STATUS_VALIDATION_FAILURE, ArraySchema(items=violation)),
    )


def error_response() -> ResponseSpec:
    return ResponseSpec(
        description="Unexpected server error",
        media_type=JSON_MEDIA_TYPE,
        schema=result_schema(STATUS_ERROR, None),
    )


def free_form_response() -> ResponseSpec:
    """Binary 200 response of an action writing unstructured content.

    No 400/500 entries accompany it: the shape of errors written by such an
    action is not known.
    """
    return ResponseSpec(description=None, media_type=ANY_MEDIA_TYPE, schema=BinarySchema())


__all__ = [
    "ANY_MEDIA_TYPE",
    "JSON_MEDIA_TYPE",
    "ResponseSpec",
    "STATUS_ERROR",
    "STATUS_SUCCESS",
    "STATUS_VALIDATION_FAILURE",
    "error_response",
    "free_form_response",
    "result_schema",
    "success_response",
    "validation_failure_response",
]
