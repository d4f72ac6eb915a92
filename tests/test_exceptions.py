"""Tests for the actiondoc exception hierarchy."""

import pytest

from actiondoc.exceptions import (
    ActionDocError,
    ConfigurationError,
    DiscoveryError,
    OutputError,
)


class TestActionDocError:
    """Test the base exception."""

    def test_message_only(self):
        error = ActionDocError("Something failed")
        assert str(error) == "Something failed"
        assert error.details == {}

    def test_with_details(self):
        error = ActionDocError("Something failed", {"key": "value"})
        assert "details" in str(error)
        assert error.details["key"] == "value"


class TestSubclasses:
    """Test the fatal error types."""

    @pytest.mark.parametrize("cls", [ConfigurationError, DiscoveryError, OutputError])
    def test_hierarchy(self, cls):
        assert issubclass(cls, ActionDocError)

    def test_configuration_error(self):
        error = ConfigurationError("artifact_id", "must not be blank")
        assert error.setting == "artifact_id"
        assert error.message == "Invalid configuration for 'artifact_id': must not be blank"

    def test_discovery_error(self):
        error = DiscoveryError("app.actions", "ModuleNotFoundError: No module named 'x'")
        assert error.module_name == "app.actions"
        assert error.details["module"] == "app.actions"
        assert error.message.startswith("Could not import 'app.actions'")

    def test_output_error(self):
        error = OutputError("/tmp/docs/api.yaml", "Permission denied")
        assert error.path == "/tmp/docs/api.yaml"
        assert "Permission denied" in str(error)

    def test_cause_is_chained(self):
        try:
            try:
                raise OSError("disk full")
            except OSError as e:
                raise OutputError("out", str(e)) from e
        except OutputError as error:
            assert isinstance(error.__cause__, OSError)
