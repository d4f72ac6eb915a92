"""
Declared shape of the REST action framework.

Only the static surface is defined here: the generic base class, the
method marker, field annotations and sentinel types. actiondoc reads these
declarations and never executes an action.

Usage:
    from dataclasses import dataclass
    from typing import Annotated

    from actiondoc.framework import (
        HttpMethod, NotBlank, RequestParameter, RestAction, rest_action,
    )

    @dataclass
    class FindUsersRequest:
        query: Annotated[str, RequestParameter(), NotBlank()]
        limit: Annotated[int, RequestParameter(name="max")] = 20

    @rest_action(HttpMethod.GET)
    class FindUsersRestAction(RestAction[FindUsersRequest, list[User]]):
        def perform(self, model: FindUsersRequest) -> RestActionResult[list[User]]:
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

ModelT = TypeVar("ModelT")
EntityT = TypeVar("EntityT")

REST_ACTION_MARKER = "__rest_action__"


class HttpMethod(str, Enum):
    """HTTP methods an action can be bound to."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RestAction(Generic[ModelT, EntityT]):
    """Base capability of every REST action.

    The first type argument is the request model, the second the response
    entity. Use ``None`` for an action without a response entity and
    ``FreeFormResponse`` for an action that streams arbitrary content.
    """

    def perform(self, model: ModelT) -> "RestActionResult[EntityT]":
        raise NotImplementedError


@dataclass
class RestActionResult(Generic[EntityT]):
    """Envelope returned by ``RestAction.perform``."""

    status: str
    entity: Optional[EntityT] = None
    message: Optional[str] = None
    message_details: Optional[str] = None


@dataclass(frozen=True)
class RestActionInfo:
    """Metadata attached to a class by ``@rest_action``."""

    method: HttpMethod


def rest_action(method: HttpMethod = HttpMethod.GET) -> Callable[[type], type]:
    """Mark a class as a REST action bound to ``method``."""

    def decorator(cls: type) -> type:
        setattr(cls, REST_ACTION_MARKER, RestActionInfo(method=HttpMethod(method)))
        return cls

    return decorator


def get_rest_action_info(cls: type) -> Optional[RestActionInfo]:
    """Return the marker declared directly on ``cls``, if any.

    The marker is not inherited: a subclass of a decorated action is not an
    action unless it is decorated itself.
    """
    info = cls.__dict__.get(REST_ACTION_MARKER)
    return info if isinstance(info, RestActionInfo) else None


def is_rest_action(obj: Any) -> bool:
    return isinstance(obj, type) and get_rest_action_info(obj) is not None


# =============================================================================
# Request model field annotations
# =============================================================================


@dataclass(frozen=True)
class RequestParameter:
    """Marks a request model field as bound from a request parameter.

    ``name`` overrides the parameter name; blank means the field name.
    """

    name: str = ""


@dataclass(frozen=True)
class NotBlank:
    """Value must be present and contain non-whitespace characters."""

    message: str = "must not be blank"


@dataclass(frozen=True)
class NotEmpty:
    """Value must be present and non-empty."""

    message: str = "must not be empty"


@dataclass(frozen=True)
class NotNull:
    """Value must be present."""

    message: str = "must not be null"


REQUIRED_CONSTRAINTS: tuple[type, ...] = (NotBlank, NotEmpty, NotNull)


class UploadedFile:
    """Raw multipart upload bound to a request model field."""

    def __init__(self, filename: str, content_type: str, data: bytes):
        self.filename = filename
        self.content_type = content_type
        self.data = data


class FreeFormResponse:
    """Response entity type for actions that write unstructured content."""


__all__ = [
    "EntityT",
    "FreeFormResponse",
    "HttpMethod",
    "ModelT",
    "NotBlank",
    "NotEmpty",
    "NotNull",
    "REQUIRED_CONSTRAINTS",
    "RequestParameter",
    "RestAction",
    "RestActionInfo",
    "RestActionResult",
    "UploadedFile",
    "get_rest_action_info",
    "is_rest_action",
    "rest_action",
]
