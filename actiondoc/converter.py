"""
REST action to OpenAPI path conversion.

Turns one REST action class into a PathOperation: the route, the query
parameters (GET) or multipart form body (POST) built from the request
model's fields, and the standard response envelopes around the
synthesized response entity schema.

Usage:
    converter = RestActionConverter(artifact_id="user-admin")
    operation = converter.convert(ListUsersRestAction)
    if operation is not None:
        paths[operation.path] = operation.to_path_item()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from actiondoc.extractor import ActionDescriptor, extract, qualified_name
from actiondoc.framework import (
    REQUIRED_CONSTRAINTS,
    FreeFormResponse,
    HttpMethod,
    RequestParameter,
    UploadedFile,
)
from actiondoc.logging_config import LogContext, get_logger
from actiondoc.paths import build_path
from actiondoc.responses import (
    ResponseSpec,
    error_response,
    free_form_response,
    success_response,
    validation_failure_response,
)
from actiondoc.schema import BinarySchema, ObjectSchema, SchemaNode
from actiondoc.synthesizer import synthesize
from actiondoc.types import Property, TypeDescriptor

logger = get_logger(__name__)

FORM_MEDIA_TYPE = "multipart/form-data"


@dataclass
class ParameterSpec:
    """A query parameter of a GET operation.

    ``required`` is True or None; optional parameters carry no flag at all.
    """

    name: str
    schema: SchemaNode
    required: Optional[bool] = None
    location: str = "query"

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"name": self.name, "in": self.location}
        if self.required:
            result["required"] = True
        result["schema"] = self.schema.to_dict()
        return result


@dataclass
class PathOperation:
    """One operation of the generated document."""

    path: str
    method: HttpMethod
    parameters: List[ParameterSpec] = field(default_factory=list)
    request_body: Optional[SchemaNode] = None
    responses: Dict[str, ResponseSpec] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.parameters:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        if self.request_body is not None:
            result["requestBody"] = {
                "content": {FORM_MEDIA_TYPE: {"schema": self.request_body.to_dict()}}
            }
        result["responses"] = {code: r.to_dict() for code, r in self.responses.items()}
        return result

    def to_path_item(self) -> Dict[str, Any]:
        return {self.method.value.lower(): self.to_dict()}


# =============================================================================
# Request model fields
# =============================================================================


def model_fields(model_type: Optional[TypeDescriptor]) -> List[Property]:
    """Request model fields bound from the request.

    A field qualifies when it is annotated with ``RequestParameter`` or
    declared as an ``UploadedFile``.
    """
    if model_type is None or not model_type.is_object():
        return []
    return [
        prop
        for prop in model_type.declared_properties()
        if prop.has_marker(RequestParameter) or is_upload(prop)
    ]


def is_upload(prop: Property) -> bool:
    return prop.type.annotation is UploadedFile


def is_required(prop: Property) -> Optional[bool]:
    """True when a presence constraint is declared, otherwise None (never False)."""
    if prop.has_marker(*REQUIRED_CONSTRAINTS):
        return True
    return None


def parameter_name(prop: Property) -> str:
    marker = prop.find_marker(RequestParameter)
    if marker is not None and marker.name and marker.name.strip():
        return marker.name
    return prop.name


def parameter_schema(prop: Property, required: Optional[bool]) -> SchemaNode:
    schema = synthesize(prop.type, required=required, parameter=True)
    return schema if schema is not None else ObjectSchema()


# =============================================================================
# Converter
# =============================================================================


class RestActionConverter:
    """Converts REST action classes into PathOperations for one artifact."""

    def __init__(self, artifact_id: str):
        self.artifact_id = artifact_id

    def convert(self, action_type: type) -> Optional[PathOperation]:
        """Convert ``action_type``, or return None if it has to be skipped.

        Every skip is logged with its reason. Unexpected exceptions are left
        to the caller, which decides whether a single action may fail.
        """
        with LogContext(action=qualified_name(action_type)):
            path = build_path(action_type.__name__, self.artifact_id)
            if path is None:
                return None
            descriptor = extract(action_type)
            if descriptor is None:
                return None
            return self.convert_descriptor(path, descriptor)

    def convert_descriptor(self, path: str, descriptor: ActionDescriptor) -> Optional[PathOperation]:
        logger.info(
            "Processing action",
            request_model=descriptor.request_model_name,
            response_entity=descriptor.response_entity_name,
        )
        method = descriptor.http_method
        if method is HttpMethod.GET:
            return PathOperation(
                path=path,
                method=method,
                parameters=self.build_get_parameters(descriptor.request_model_type),
                responses=self.build_responses(descriptor.response_entity_type),
            )
        if method is HttpMethod.POST:
            return PathOperation(
                path=path,
                method=method,
                request_body=self.build_form_schema(descriptor.request_model_type),
                responses=self.build_responses(descriptor.response_entity_type),
            )
        logger.warning("Unsupported method, skipping", method=method.value)
        return None

    def build_get_parameters(self, model_type: Optional[TypeDescriptor]) -> List[ParameterSpec]:
        parameters = []
        for prop in model_fields(model_type):
            required = is_required(prop)
            parameters.append(
                ParameterSpec(
                    name=parameter_name(prop),
                    required=required,
                    schema=parameter_schema(prop, required),
                )
            )
        return parameters

    def build_form_schema(self, model_type: Optional[TypeDescriptor]) -> ObjectSchema:
        schema = ObjectSchema()
        for prop in model_fields(model_type):
            if is_upload(prop):
                schema.add_property(prop.name, BinarySchema())
                continue
            required = is_required(prop)
            schema.add_property(
                parameter_name(prop),
                parameter_schema(prop, required),
                required=bool(required),
            )
        return schema

    def build_responses(self, entity_type: Optional[TypeDescriptor]) -> Dict[str, ResponseSpec]:
        if entity_type is not None and entity_type.annotation is FreeFormResponse:
            return {"200": free_form_response()}
        entity = synthesize(entity_type) if entity_type is not None else None
        return {
            "200": success_response(entity),
            "400": validation_failure_response(),
            "500": error_response(),
        }


__all__ = [
    "FORM_MEDIA_TYPE",
    "ParameterSpec",
    "PathOperation",
    "RestActionConverter",
    "is_required",
    "model_fields",
    "parameter_name",
]
