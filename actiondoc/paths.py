"""
Route path construction.

An action's URL is derived from its class name: ``ListUsersRestAction``
in artifact ``user-admin`` is served at
``/apps/user-admin/bin/list-users.action``.
"""

from __future__ import annotations

import re
from typing import Optional

from actiondoc.logging_config import get_logger

logger = get_logger(__name__)

REST_ACTION_CLASS_SUFFIX = "RestAction"

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_lower_hyphen(name: str) -> str:
    """Convert PascalCase to lower-hyphen-case.

    A hyphen goes before each uppercase letter that follows a lowercase
    letter or a digit: ``ListUsers`` -> ``list-users``,
    ``Get2FAStatus`` -> ``get2-fastatus``.
    """
    return _WORD_BOUNDARY.sub("-", name).lower()


def build_path(simple_name: str, artifact_id: str) -> Optional[str]:
    """Return the route of an action class, or None if it breaks the naming convention.

    Everything from the last occurrence of the ``RestAction`` suffix onwards
    is dropped before the name is hyphenated.
    """
    if not simple_name or not simple_name.strip() or REST_ACTION_CLASS_SUFFIX not in simple_name:
        logger.warning(
            f"{REST_ACTION_CLASS_SUFFIX} suffix missing, skipping class",
            class_name=simple_name,
        )
        return None
    base_name = simple_name[: simple_name.rindex(REST_ACTION_CLASS_SUFFIX)]
    return f"/apps/{artifact_id}/bin/{to_lower_hyphen(base_name)}.action"


__all__ = ["REST_ACTION_CLASS_SUFFIX", "build_path", "to_lower_hyphen"]
