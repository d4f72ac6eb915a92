"""
actiondoc command line interface.

Usage:
    actiondoc generate --artifact-id user-admin -p user_admin.actions --search-path src
    actiondoc --artifact-id user-admin -p user_admin.actions --stdout
    actiondoc generate --config actiondoc.yaml --json-logs

Exit status: 0 on success, 1 when generation fails (configuration, import
or output errors), 2 on invalid arguments.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from actiondoc.config import CONFIG_FILE, load_config
from actiondoc.document import GenerationResult, generate, method_counts, render_yaml
from actiondoc.exceptions import ActionDocError
from actiondoc.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

COMMANDS = ("generate",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="actiondoc",
        description="Generate an OpenAPI 3.0 document from REST action classes",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=COMMANDS,
        default="generate",
        help="Command to run (default: generate)",
    )
    parser.add_argument("--artifact-id", help="Artifact id used in every route")
    parser.add_argument("--title", help="Document title (default: artifact id)")
    parser.add_argument("--version", dest="doc_version", help="Document version (default: 0.0.0)")
    parser.add_argument(
        "--package",
        "-p",
        action="append",
        dest="packages",
        help="Package containing REST actions (repeatable)",
    )
    parser.add_argument(
        "--search-path",
        action="append",
        dest="search_paths",
        help="Directory added to the import path before scanning (repeatable)",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        help="Output directory (default: build/apps/<artifact-id>/docs)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Configuration file (default: {CONFIG_FILE} in the working directory or a parent)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the YAML document to stdout instead of writing files",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (default: ACTIONDOC_LOG_LEVEL or INFO)",
    )
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit JSON logs")
    parser.add_argument("--quiet", "-q", action="store_true", help="Suppress summary output")
    return parser


def print_summary(result: GenerationResult) -> None:
    """Print a human-readable summary of the run to stderr."""
    document = result.document
    print("\n--- OpenAPI Generation Summary ---", file=sys.stderr)
    print(f"Title           : {document['info']['title']}", file=sys.stderr)
    print(f"Version         : {document['info']['version']}", file=sys.stderr)
    print(f"Total paths     : {len(document['paths'])}", file=sys.stderr)
    print(f"Total operations: {result.operation_count}", file=sys.stderr)
    for method, count in sorted(method_counts(document).items()):
        print(f"  {method:8s} {count}", file=sys.stderr)
    if result.skipped:
        print(f"\nSkipped ({len(result.skipped)}):", file=sys.stderr)
        for name in result.skipped:
            print(f"  {name}", file=sys.stderr)
    if result.yaml_path is not None:
        print(f"\nOutput: {result.yaml_path}", file=sys.stderr)
    print("--- End Summary ---\n", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, json_output=args.json_logs)

    try:
        config = load_config(
            config_file=args.config,
            artifact_id=args.artifact_id,
            title=args.title,
            version=args.doc_version,
            action_packages=args.packages,
            search_paths=args.search_paths,
            output_directory=args.output_dir,
        )
        result = generate(config, write=not args.stdout)
    except ActionDocError as e:
        logger.error(f"Generation failed: {e.message}", **e.details)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.stdout:
        sys.stdout.write(render_yaml(result.document))
    if not args.quiet:
        print_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
