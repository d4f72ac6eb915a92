"""Tests for the actiondoc command line interface."""

import subprocess
import sys
from pathlib import Path

import pytest
import yaml

from actiondoc.cli import build_parser, main


@pytest.fixture
def base_args(tests_dir):
    return [
        "--artifact-id",
        "user-admin",
        "-p",
        "sample_actions",
        "--search-path",
        str(tests_dir),
        "--log-level",
        "warning",
    ]


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.command == "generate"
        assert args.packages is None
        assert args.stdout is False
        assert args.json_logs is None

    def test_repeatable_options(self):
        args = build_parser().parse_args(
            ["generate", "-p", "a", "--package", "b", "--search-path", "src", "--search-path", "lib"]
        )
        assert args.packages == ["a", "b"]
        assert args.search_paths == ["src", "lib"]

    def test_version_is_document_version(self):
        assert build_parser().parse_args(["--version", "1.2.3"]).doc_version == "1.2.3"

    def test_unknown_command(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["publish"])
        assert exc_info.value.code == 2


class TestMain:
    """Test end-to-end runs of main()."""

    def test_writes_files(self, base_args, tmp_path, working_dir, capsys):
        out = tmp_path / "docs"
        assert main(["generate", *base_args, "-o", str(out), "--title", "Users"]) == 0
        document = yaml.safe_load((out / "api.yaml").read_text())
        assert document["info"] == {"title": "Users", "version": "0.0.0"}
        assert "/apps/user-admin/bin/list-users.action" in document["paths"]
        assert "<title>Users</title>" in (out / "api.html").read_text()
        assert "OpenAPI Generation Summary" in capsys.readouterr().err

    def test_default_output_directory(self, base_args, working_dir):
        assert main([*base_args, "--quiet"]) == 0
        assert (working_dir / "build" / "apps" / "user-admin" / "docs" / "api.yaml").is_file()

    def test_stdout(self, base_args, working_dir, capsys):
        assert main([*base_args, "--stdout", "--quiet"]) == 0
        captured = capsys.readouterr()
        document = yaml.safe_load(captured.out)
        assert document["openapi"] == "3.0.1"
        assert not (working_dir / "build").exists()

    def test_quiet(self, base_args, working_dir, capsys):
        assert main([*base_args, "--quiet"]) == 0
        assert "Summary" not in capsys.readouterr().err

    def test_missing_artifact_id(self, working_dir, capsys):
        assert main(["--log-level", "error"]) == 1
        assert "artifact_id" in capsys.readouterr().err

    def test_discovery_failure(self, tests_dir, working_dir, capsys):
        args = ["--artifact-id", "a", "-p", "broken_actions", "--search-path", str(tests_dir)]
        assert main([*args, "--log-level", "error"]) == 1
        assert "Could not import 'broken_actions'" in capsys.readouterr().err

    def test_environment_settings(self, tests_dir, working_dir, monkeypatch):
        monkeypatch.setenv("ACTIONDOC_ARTIFACT_ID", "from-env")
        monkeypatch.setenv("ACTIONDOC_ACTION_PACKAGES", "sample_actions.users")
        monkeypatch.setenv("ACTIONDOC_SEARCH_PATHS", str(tests_dir))
        assert main(["--quiet", "--log-level", "warning"]) == 0
        assert (working_dir / "build" / "apps" / "from-env" / "docs" / "api.yaml").is_file()


class TestModuleEntryPoint:
    """Test python -m actiondoc."""

    def test_invalid_arguments_exit_code(self):
        result = subprocess.run(
            [sys.executable, "-m", "actiondoc", "--no-such-flag"],
            capture_output=True,
            text=True,
            cwd=Path(__file__).resolve().parents[1],
        )
        assert result.returncode == 2
        assert "usage: actiondoc" in result.stderr
