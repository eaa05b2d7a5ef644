"""Main CLI entry point for protokit."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from .. import __version__
from ..config import load_project_config
from ..exceptions import ProtokitError, ToolFailedError
from ..logging_utils import configure_logging
from . import commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protokit",
        description="protokit: tooling for protobuf schema repositories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  protokit add-service product         Scaffold product/v1/product.proto
  protokit validate-buf                Lint and check breaking changes vs. latest tag
  protokit validate-protoc user        Compile every schema of the user package
  protokit generate --package user     Generate code with buf.gen.yaml
        """,
    )
    parser.add_argument(
        "--root",
        metavar="DIR",
        type=Path,
        default=Path("."),
        help="Repository root (default: current directory)",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        type=Path,
        default=None,
        help="Path to protokit.yaml (default: <root>/protokit.yaml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    parser.add_argument("--version", action="version", version=f"protokit {__version__}")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser("lint", help="Run Buf lint on all modules")
    p.set_defaults(func=commands.cmd_lint)

    p = sub.add_parser("breaking", help="Check for breaking changes")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--branch", help="Compare against a branch (default: origin/main)")
    group.add_argument("--tag", help="Compare against a tag")
    group.add_argument(
        "--latest-tag", action="store_true", help="Compare against the most recent tag"
    )
    p.set_defaults(func=commands.cmd_breaking)

    p = sub.add_parser("format", help="Format proto files in place using Buf")
    p.set_defaults(func=commands.cmd_format)

    p = sub.add_parser("generate", help="Generate code using Buf")
    p.add_argument("--package", help="Limit generation to one package directory")
    p.set_defaults(func=commands.cmd_generate)

    p = sub.add_parser("protoc-generate", help="Generate code using protoc plugins")
    p.add_argument("--package", help="Limit generation to one package directory")
    p.set_defaults(func=commands.cmd_protoc_generate)

    p = sub.add_parser(
        "validate-buf", help="Buf lint plus breaking-change detection against the latest tag"
    )
    p.set_defaults(func=commands.cmd_validate_buf)

    p = sub.add_parser("validate-protoc", help="Validate proto files using protoc")
    p.add_argument("package", nargs="?", help="Package to validate (default: all)")
    p.set_defaults(func=commands.cmd_validate_protoc)

    p = sub.add_parser("validate", help="Run lint and protoc validation")
    p.add_argument("--ci", action="store_true", help="Also check breaking changes")
    p.set_defaults(func=commands.cmd_validate)

    p = sub.add_parser("add-service", help="Scaffold a new service")
    p.add_argument("name", help="Service name, e.g. product or order_item")
    p.set_defaults(func=commands.cmd_add_service)

    p = sub.add_parser("clean", help="Remove generated Go files")
    p.add_argument(
        "--buf-cache", action="store_true", help="Remove only the .buf cache, keep generated files"
    )
    p.set_defaults(func=commands.cmd_clean)

    p = sub.add_parser("install", help="Install buf and protoc plugins with go install")
    p.add_argument("--buf", action="store_true", help="Only install buf")
    p.add_argument("--protoc", action="store_true", help="Only install protoc plugins")
    p.set_defaults(func=commands.cmd_install)

    return parser


def _report_error(error: ProtokitError) -> None:
    if isinstance(error, ToolFailedError):
        print(f"✗ {error}", file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)
    hint = error.hint()
    if hint:
        if isinstance(error, ToolFailedError):
            print(file=sys.stderr)
        print(hint, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the protokit CLI.

    Returns:
        Exit code (0 for success, the tool's exit code when an external tool
        fails, 1 for any other error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, show help
    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    try:
        root = args.root.resolve()
        config = load_project_config(root, args.config)
        ctx = commands.CommandContext(root=root, config=config)
        return int(args.func(ctx, args))
    except ToolFailedError as e:
        _report_error(e)
        return e.returncode or 1
    except ProtokitError as e:
        _report_error(e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
