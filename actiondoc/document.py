"""
OpenAPI document assembly and output.

Collects the converted operations into a single OpenAPI 3.0 document and
writes it, together with a Swagger UI page, into the output directory:

    build/apps/<artifact_id>/docs/
        api.yaml    the OpenAPI document
        api.html    viewer page loading api.yaml

Usage:
    from actiondoc.config import GeneratorConfig
    from actiondoc.document import generate

    result = generate(GeneratorConfig(artifact_id="user-admin",
                                      action_packages=frozenset({"user_admin.actions"})))
    print(result.yaml_path, result.converted)
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from actiondoc.config import GeneratorConfig
from actiondoc.converter import PathOperation, RestActionConverter
from actiondoc.discovery import discover_rest_actions
from actiondoc.exceptions import OutputError
from actiondoc.extractor import qualified_name
from actiondoc.logging_config import get_logger, log_function

logger = get_logger(__name__)

OPENAPI_VERSION = "3.0.1"
YAML_FILENAME = "api.yaml"
HTML_FILENAME = "api.html"
HTML_TEMPLATE = "templates/api.html"
TITLE_PLACEHOLDER = "${title}"


@dataclass
class GenerationResult:
    """Outcome of one generation run."""

    document: Dict[str, Any]
    yaml_path: Optional[Path] = None
    html_path: Optional[Path] = None
    converted: int = 0
    skipped: List[str] = field(default_factory=list)

    @property
    def operation_count(self) -> int:
        return count_operations(self.document)


def build_document(operations: Iterable[PathOperation], title: str, version: str) -> Dict[str, Any]:
    """Assemble the OpenAPI document.

    Paths keep the order of ``operations``. Each path carries a single
    operation; a later operation on a path that is already present is
    logged and dropped.
    """
    paths: Dict[str, Dict[str, Any]] = {}
    for operation in operations:
        if operation.path in paths:
            logger.warning(
                "Duplicate operation path, keeping the first one",
                path=operation.path,
                method=operation.method.value,
                kept=next(iter(paths[operation.path])).upper(),
            )
            continue
        paths[operation.path] = operation.to_path_item()
    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": version},
        "paths": paths,
    }


def count_operations(document: Dict[str, Any]) -> int:
    return sum(len(item) for item in document.get("paths", {}).values())


def method_counts(document: Dict[str, Any]) -> Counter:
    counter: Counter = Counter()
    for item in document.get("paths", {}).values():
        for method in item:
            counter[method.upper()] += 1
    return counter


def render_yaml(document: Dict[str, Any]) -> str:
    return yaml.dump(document, default_flow_style=False, sort_keys=False, width=120)


def render_html(title: str) -> str:
    """Viewer page for ``api.yaml`` with ``title`` filled in."""
    template = resources.files("actiondoc").joinpath(HTML_TEMPLATE).read_text(encoding="utf-8")
    return template.replace(TITLE_PLACEHOLDER, title)


def write_documentation(
    document: Dict[str, Any],
    output_directory: Path,
    title: str,
) -> tuple[Path, Path]:
    """Write ``api.yaml`` and ``api.html`` into ``output_directory``.

    Returns:
        The paths of the YAML document and the HTML page.

    Raises:
        OutputError: The directory cannot be created or a file cannot be written.
    """
    output_directory = Path(output_directory)
    try:
        output_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(str(output_directory), str(e)) from e

    yaml_path = output_directory / YAML_FILENAME
    html_path = output_directory / HTML_FILENAME
    for path, content in ((yaml_path, render_yaml(document)), (html_path, render_html(title))):
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputError(str(path), str(e)) from e
        logger.debug("Wrote file", path=str(path), size=len(content))
    return yaml_path, html_path


def convert_all(converter: RestActionConverter, actions: Iterable[type]) -> tuple[List[PathOperation], List[str]]:
    """Convert ``actions``; an action that is skipped or fails never aborts the run."""
    operations: List[PathOperation] = []
    skipped: List[str] = []
    for action_type in actions:
        name = qualified_name(action_type)
        try:
            operation = converter.convert(action_type)
        except Exception:
            logger.exception("Failed to convert action, skipping", action=name)
            operation = None
        if operation is None:
            skipped.append(name)
        else:
            operations.append(operation)
    return operations, skipped


@log_function(level="INFO")
def generate(config: GeneratorConfig, write: bool = True) -> GenerationResult:
    """Run discovery, conversion and output for ``config``.

    With ``write=False`` the document is only built, nothing touches the
    output directory.

    Raises:
        DiscoveryError: An action package could not be imported.
        OutputError: The output could not be written.
    """
    actions = discover_rest_actions(config.action_packages, config.search_paths)
    converter = RestActionConverter(config.artifact_id)
    operations, skipped = convert_all(converter, actions)
    document = build_document(operations, config.title, config.version)

    result = GenerationResult(document=document, converted=len(operations), skipped=skipped)
    if write:
        result.yaml_path, result.html_path = write_documentation(
            document, config.output_directory, config.title
        )

    logger.info(
        "Generated OpenAPI document",
        artifact_id=config.artifact_id,
        converted=result.converted,
        skipped=len(skipped),
        output=str(result.yaml_path) if result.yaml_path else None,
    )
    return result


__all__ = [
    "GenerationResult",
    "OPENAPI_VERSION",
    "build_document",
    "count_operations",
    "generate",
    "method_counts",
    "render_html",
    "render_yaml",
    "write_documentation",
]
