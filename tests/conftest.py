"""
Shared pytest fixtures for the actiondoc test suite.

Sample models and actions live in the ``sample_actions`` package next to
this file; pytest puts this directory on sys.path, so tests import them
directly.
"""

import logging
from pathlib import Path

import pytest

from actiondoc.config import ENV_KEYS
from actiondoc.logging_config import clear_context

TESTS_DIR = Path(__file__).parent
ARTIFACT_ID = "user-admin"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep ACTIONDOC_* settings from the developer's shell out of the tests."""
    for var in ENV_KEYS.values():
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by configure_logging()."""
    root = logging.getLogger()
    package_logger = logging.getLogger("actiondoc")
    handlers = root.handlers[:]
    root_level = root.level
    package_level = package_logger.level
    clear_context()
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(root_level)
    package_logger.setLevel(package_level)
    clear_context()


@pytest.fixture
def artifact_id():
    return ARTIFACT_ID


@pytest.fixture
def tests_dir():
    return TESTS_DIR


@pytest.fixture
def converter(artifact_id):
    from actiondoc.converter import RestActionConverter

    return RestActionConverter(artifact_id)


@pytest.fixture
def working_dir(tmp_path, monkeypatch):
    """Run the test from an empty directory (no actiondoc.yaml above it)."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr("actiondoc.config.find_config", lambda start=None: None)
    return workdir
