"""
Action descriptor extraction.

Reads the declared shape of one REST action class: its HTTP method (from
``@rest_action``) and the request model and response entity types bound
to ``RestAction``'s type parameters anywhere along its ancestry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from actiondoc.framework import HttpMethod, RestAction, get_rest_action_info
from actiondoc.logging_config import get_logger
from actiondoc.types import TypeDescriptor, is_unbound, resolve_generic_arguments

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActionDescriptor:
    """Static description of one REST action."""

    http_method: HttpMethod
    request_model_type: Optional[TypeDescriptor]
    response_entity_type: Optional[TypeDescriptor]
    simple_name: str
    qualified_name: str
    action_type: type

    @property
    def request_model_name(self) -> str:
        return _type_name_or_none(self.request_model_type)

    @property
    def response_entity_name(self) -> str:
        return _type_name_or_none(self.response_entity_type)


def _type_name_or_none(td: Optional[TypeDescriptor]) -> str:
    if td is None or td.is_void():
        return "<none>"
    return repr(td.annotation) if td.args else td.simple_name


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def extract(action_type: type) -> Optional[ActionDescriptor]:
    """Build the ActionDescriptor of ``action_type``.

    Returns None (after logging a warning) when the class is not marked
    with ``@rest_action`` or when exactly two concrete type arguments for
    ``RestAction`` cannot be resolved, e.g. for a raw or partially
    parameterized action.
    """
    name = qualified_name(action_type)
    info = get_rest_action_info(action_type)
    if info is None:
        logger.warning("Class is not marked with @rest_action, skipping", action=name)
        return None

    arguments = resolve_generic_arguments(action_type, RestAction)
    if arguments is None or len(arguments) != 2 or any(is_unbound(a) for a in arguments):
        logger.warning(
            "Could not resolve request model and response entity types, skipping",
            action=name,
            resolved=[repr(a) for a in arguments or ()],
        )
        return None

    model_type, entity_type = (TypeDescriptor.of(a) for a in arguments)
    return ActionDescriptor(
        http_method=info.method,
        request_model_type=None if model_type.is_void() else model_type,
        response_entity_type=None if entity_type.is_void() else entity_type,
        simple_name=action_type.__name__,
        qualified_name=name,
        action_type=action_type,
    )


__all__ = ["ActionDescriptor", "extract", "qualified_name"]
