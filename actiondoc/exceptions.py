"""
Custom exception types for actiondoc.

Only fatal conditions are modelled as exceptions. Per-action problems
(naming convention, unresolved generics, unsupported methods) are logged
and the action is skipped; they never surface as an ActionDocError.
"""

from __future__ import annotations

from typing import Any


class ActionDocError(Exception):
    """Base exception for all actiondoc errors.

    Catching this class is enough to stop a generation run cleanly; the CLI
    maps it to a non-zero exit status.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(ActionDocError):
    """Raised when generator configuration is missing or invalid."""

    def __init__(self, setting: str, reason: str):
        super().__init__(
            f"Invalid configuration for '{setting}': {reason}",
            {"setting": setting, "reason": reason},
        )
        self.setting = setting
        self.reason = reason


class DiscoveryError(ActionDocError):
    """Raised when the set of action types cannot be built.

    Usually an import failure inside one of the scanned packages, i.e. a
    missing dependency. The original exception is chained as __cause__.
    """

    def __init__(self, module_name: str, reason: str):
        super().__init__(
            f"Could not import '{module_name}': {reason}",
            {"module": module_name, "reason": reason},
        )
        self.module_name = module_name
        self.reason = reason


class OutputError(ActionDocError):
    """Raised when the output directory or an output file cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Could not write '{path}': {reason}",
            {"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason


__all__ = [
    "ActionDocError",
    "ConfigurationError",
    "DiscoveryError",
    "OutputError",
]
