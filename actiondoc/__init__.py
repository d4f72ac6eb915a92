"""
actiondoc: OpenAPI documentation for REST action classes.

Reads the declared shape of REST actions (generic request model and
response entity, HTTP method marker, annotated request parameters) and
produces an OpenAPI 3.0 document with the standard response envelopes.

Usage:
    from actiondoc import GeneratorConfig, generate

    result = generate(GeneratorConfig(artifact_id="user-admin",
                                      action_packages=frozenset({"user_admin.actions"})))

Or from the command line:
    actiondoc generate --artifact-id user-admin -p user_admin.actions
"""

from __future__ import annotations

import importlib
from typing import Any

from actiondoc.__version__ import __version__

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    'ActionDescriptor': ('actiondoc.extractor', 'ActionDescriptor'),
    'ActionDocError': ('actiondoc.exceptions', 'ActionDocError'),
    'ConfigurationError': ('actiondoc.exceptions', 'ConfigurationError'),
    'DiscoveryError': ('actiondoc.exceptions', 'DiscoveryError'),
    'FreeFormResponse': ('actiondoc.framework', 'FreeFormResponse'),
    'GenerationResult': ('actiondoc.document', 'GenerationResult'),
    'GeneratorConfig': ('actiondoc.config', 'GeneratorConfig'),
    'HttpMethod': ('actiondoc.framework', 'HttpMethod'),
    'NotBlank': ('actiondoc.framework', 'NotBlank'),
    'NotEmpty': ('actiondoc.framework', 'NotEmpty'),
    'NotNull': ('actiondoc.framework', 'NotNull'),
    'OutputError': ('actiondoc.exceptions', 'OutputError'),
    'PathOperation': ('actiondoc.converter', 'PathOperation'),
    'RequestParameter': ('actiondoc.framework', 'RequestParameter'),
    'RestAction': ('actiondoc.framework', 'RestAction'),
    'RestActionConverter': ('actiondoc.converter', 'RestActionConverter'),
    'RestActionResult': ('actiondoc.framework', 'RestActionResult'),
    'SchemaKind': ('actiondoc.classifier', 'SchemaKind'),
    'TypeDescriptor': ('actiondoc.types', 'TypeDescriptor'),
    'UploadedFile': ('actiondoc.framework', 'UploadedFile'),
    'build_document': ('actiondoc.document', 'build_document'),
    'build_path': ('actiondoc.paths', 'build_path'),
    'classify': ('actiondoc.classifier', 'classify'),
    'discover_rest_actions': ('actiondoc.discovery', 'discover_rest_actions'),
    'extract': ('actiondoc.extractor', 'extract'),
    'generate': ('actiondoc.document', 'generate'),
    'load_config': ('actiondoc.config', 'load_config'),
    'rest_action': ('actiondoc.framework', 'rest_action'),
    'synthesize': ('actiondoc.synthesizer', 'synthesize'),
    'write_documentation': ('actiondoc.document', 'write_documentation'),
}


def __getattr__(name: str) -> Any:
    """Lazily import public symbols to avoid import side effects."""
    try:
        module_name, attr_name = _EXPORT_MAP[name]
    except KeyError as exc:
        raise AttributeError(f"module 'actiondoc' has no attribute {name!r}") from exc
    module = importlib.import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))


__all__ = ["__version__", *sorted(_EXPORT_MAP)]
