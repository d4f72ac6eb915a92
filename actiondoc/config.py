"""
Generator configuration.

Settings come from three layers, lowest precedence first:

1. A YAML file (``actiondoc.yaml`` in the working directory, or ``--config``)
2. ``ACTIONDOC_*`` environment variables
3. Explicit overrides (CLI flags)

Example actiondoc.yaml:

    artifact_id: user-admin
    title: User Administration
    version: 1.4.0
    action_packages:
      - user_admin.actions
    search_paths:
      - src
    output_directory: build/apps/user-admin/docs
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import yaml

from actiondoc.exceptions import ConfigurationError
from actiondoc.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_FILE = "actiondoc.yaml"
DEFAULT_VERSION = "0.0.0"
DEFAULT_OUTPUT_TEMPLATE = "build/apps/{artifact_id}/docs"

ENV_KEYS = {
    "artifact_id": "ACTIONDOC_ARTIFACT_ID",
    "title": "ACTIONDOC_TITLE",
    "version": "ACTIONDOC_VERSION",
    "action_packages": "ACTIONDOC_ACTION_PACKAGES",
    "search_paths": "ACTIONDOC_SEARCH_PATHS",
    "output_directory": "ACTIONDOC_OUTPUT_DIR",
}

_KNOWN_KEYS = frozenset(ENV_KEYS)


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration of one generation run.

    Attributes:
        artifact_id: Artifact identifier used in every route
            (``/apps/{artifact_id}/bin/...``).
        title: Document title; defaults to the artifact id.
        version: Document version.
        action_packages: Packages scanned for REST actions. Empty means every
            module found on the search paths.
        search_paths: Directories prepended to ``sys.path`` before scanning.
        output_directory: Where ``api.yaml`` and ``api.html`` are written;
            defaults to ``build/apps/{artifact_id}/docs``.
    """

    artifact_id: str
    title: str = ""
    version: str = DEFAULT_VERSION
    action_packages: frozenset[str] = frozenset()
    search_paths: tuple[Path, ...] = ()
    output_directory: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.artifact_id or not self.artifact_id.strip():
            raise ConfigurationError("artifact_id", "must not be blank")
        if "/" in self.artifact_id:
            raise ConfigurationError("artifact_id", "must not contain '/'")
        if not self.version or not str(self.version).strip():
            raise ConfigurationError("version", "must not be blank")
        if not self.title:
            object.__setattr__(self, "title", self.artifact_id)
        object.__setattr__(self, "action_packages", frozenset(self.action_packages))
        object.__setattr__(self, "search_paths", tuple(Path(p) for p in self.search_paths))
        if self.output_directory is None:
            default = DEFAULT_OUTPUT_TEMPLATE.format(artifact_id=self.artifact_id)
            object.__setattr__(self, "output_directory", Path(default))
        else:
            object.__setattr__(self, "output_directory", Path(self.output_directory))

    def with_overrides(self, **overrides: Any) -> GeneratorConfig:
        """Create a new config, ignoring overrides that are None.

        Example:
            config.with_overrides(title="Users API", version=None)
            # title replaced, version kept
        """
        unknown = set(overrides) - _KNOWN_KEYS
        if unknown:
            raise ConfigurationError(", ".join(sorted(unknown)), "unknown setting")
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        if changes.get("artifact_id", self.artifact_id) != self.artifact_id:
            # defaults derived from the old artifact id follow the new one
            if "title" not in changes and self.title == self.artifact_id:
                changes["title"] = ""
            default_output = Path(DEFAULT_OUTPUT_TEMPLATE.format(artifact_id=self.artifact_id))
            if "output_directory" not in changes and self.output_directory == default_output:
                changes["output_directory"] = None
        return replace(self, **changes)


def find_config(start: Optional[Path] = None) -> Optional[Path]:
    """Find ``actiondoc.yaml`` in ``start`` (default: cwd) or any parent."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> dict[str, Any]:
    """Read settings from a YAML file.

    Raises:
        ConfigurationError: the file is unreadable, not valid YAML, not a
            mapping, or contains unknown keys.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError("config", f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError("config", f"invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("config", f"{path} must contain a mapping")
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError("config", f"unknown keys in {path}: {sorted(unknown)}")
    return _normalize(data)


def load_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """Read settings from ``ACTIONDOC_*`` environment variables.

    List-valued settings are comma separated (search paths use os.pathsep).
    """
    env = os.environ if environ is None else environ
    settings: dict[str, Any] = {}
    for key, var in ENV_KEYS.items():
        value = env.get(var)
        if value is None or value == "":
            continue
        if key == "action_packages":
            settings[key] = _split(value, ",")
        elif key == "search_paths":
            settings[key] = _split(value, os.pathsep)
        else:
            settings[key] = value
    return _normalize(settings)


def _split(value: str, separator: str) -> list[str]:
    return [item.strip() for item in value.split(separator) if item.strip()]


def _normalize(settings: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(settings)
    for key in ("action_packages", "search_paths"):
        if key in result:
            value = result[key]
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, Iterable):
                raise ConfigurationError(key, "must be a list")
            result[key] = [str(item) for item in value]
    if "action_packages" in result:
        result["action_packages"] = frozenset(result["action_packages"])
    if "search_paths" in result:
        result["search_paths"] = tuple(Path(p) for p in result["search_paths"])
    if result.get("output_directory") is not None:
        result["output_directory"] = Path(result["output_directory"])
    for key in ("artifact_id", "title", "version"):
        if result.get(key) is not None:
            result[key] = str(result[key])
    return result


def load_config(
    config_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> GeneratorConfig:
    """Build the effective configuration from file, environment and overrides.

    Args:
        config_file: Explicit YAML file. When None, ``actiondoc.yaml`` is
            looked up from the working directory upwards.
        environ: Environment mapping (defaults to os.environ).
        **overrides: Highest-precedence settings; None values are ignored.

    Raises:
        ConfigurationError: on invalid settings or when no artifact id is given.
    """
    settings: dict[str, Any] = {}

    path = config_file if config_file is not None else find_config()
    if path is not None:
        logger.debug("Loading configuration file", path=str(path))
        settings.update(load_config_file(Path(path)))
    settings.update(load_env(environ))
    settings.update(_normalize({k: v for k, v in overrides.items() if v is not None}))

    unknown = set(settings) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(", ".join(sorted(unknown)), "unknown setting")
    if not settings.get("artifact_id"):
        raise ConfigurationError(
            "artifact_id",
            f"not configured (use --artifact-id, {ENV_KEYS['artifact_id']} or {CONFIG_FILE})",
        )
    return GeneratorConfig(**settings)


__all__ = [
    "CONFIG_FILE",
    "DEFAULT_VERSION",
    "ENV_KEYS",
    "GeneratorConfig",
    "find_config",
    "load_config",
    "load_config_file",
    "load_env",
]
