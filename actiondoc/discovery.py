"""
REST action discovery.

Imports the configured action packages (and all of their submodules) and
collects the classes marked with ``@rest_action`` that are defined there.
"""

from __future__ import annotations

import importlib
import inspect
import pkgutil
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator, List

from actiondoc.exceptions import DiscoveryError
from actiondoc.extractor import qualified_name
from actiondoc.framework import is_rest_action
from actiondoc.logging_config import get_logger

logger = get_logger(__name__)


def extend_search_path(search_paths: Iterable[Path]) -> None:
    """Prepend ``search_paths`` to ``sys.path``, keeping their order."""
    for path in reversed([str(Path(p).resolve()) for p in search_paths]):
        if path not in sys.path:
            sys.path.insert(0, path)
    importlib.invalidate_caches()


def import_module(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as e:
        raise DiscoveryError(name, f"{type(e).__name__}: {e}") from e


def iter_modules(package_name: str) -> Iterator[ModuleType]:
    """Yield ``package_name`` and, for a package, every submodule below it."""
    module = import_module(package_name)
    yield module
    package_path = getattr(module, "__path__", None)
    if package_path is None:
        return

    def on_error(name: str) -> None:
        # called by walk_packages from inside its except block
        error = sys.exc_info()[1]
        if error is None:
            raise DiscoveryError(name, "subpackage could not be imported")
        raise DiscoveryError(name, f"{type(error).__name__}: {error}") from error

    try:
        infos = list(pkgutil.walk_packages(package_path, prefix=f"{module.__name__}.", onerror=on_error))
    except DiscoveryError:
        raise
    except Exception as e:
        raise DiscoveryError(package_name, f"{type(e).__name__}: {e}") from e
    for info in infos:
        yield import_module(info.name)


def top_level_modules(search_paths: Iterable[Path]) -> List[str]:
    """Names of the top-level modules and packages found in ``search_paths``."""
    paths = [str(p) for p in search_paths]
    return sorted({info.name for info in pkgutil.iter_modules(paths)})


def rest_actions_in(module: ModuleType) -> List[type]:
    """Marked classes defined in ``module`` (imported names are ignored)."""
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__ and is_rest_action(obj)
    ]


def discover_rest_actions(
    packages: Iterable[str],
    search_paths: Iterable[Path] = (),
) -> List[type]:
    """Find every REST action class in ``packages``.

    Args:
        packages: Dotted package or module names. When empty, every
            top-level module found in ``search_paths`` is scanned.
        search_paths: Directories made importable before scanning.

    Returns:
        The action classes, ordered by qualified name.

    Raises:
        DiscoveryError: A module could not be imported.
    """
    search_paths = list(search_paths)
    extend_search_path(search_paths)

    names = sorted(set(packages))
    if not names:
        names = top_level_modules(search_paths)
        logger.warning(
            "No action packages configured, scanning all modules on the search paths",
            search_paths=[str(p) for p in search_paths],
            modules=len(names),
        )

    found = {}
    for name in names:
        for module in iter_modules(name):
            for cls in rest_actions_in(module):
                found[qualified_name(cls)] = cls

    actions = [found[key] for key in sorted(found)]
    logger.info("Discovered REST actions", count=len(actions), packages=names)
    return actions


__all__ = [
    "discover_rest_actions",
    "extend_search_path",
    "iter_modules",
    "rest_actions_in",
    "top_level_modules",
]
