"""Implementations of the protokit subcommands.

Each command prints progress the way the repository's make targets always
have and returns an exit code. Errors are raised as ProtokitError and turned
into messages by :func:`protokit.cli.main.main`.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from .. import buf, install, protoc, workspace
from ..config import BUF_CONFIG_FILE, ProjectConfig, load_buf_config
from ..protoc import FileResult
from ..scaffold import add_service
from ..tools import require_tool


@dataclass
class CommandContext:
    """Resolved repository root and configuration shared by all commands."""

    root: Path
    config: ProjectConfig

    @property
    def packages(self) -> list[str]:
        return self.config.resolve_packages(self.root)


def cmd_lint(ctx: CommandContext, args: argparse.Namespace) -> int:
    require_tool("buf")
    if (ctx.root / BUF_CONFIG_FILE).exists():
        rules = ", ".join(load_buf_config(ctx.root).lint.use)
        print(f"Running Buf lint (rules: {rules})...")
    else:
        print("Running Buf lint...")
    buf.lint(ctx.root)
    print("✓ Buf lint passed")
    return 0


def _breaking(
    ctx: CommandContext,
    tag: str | None = None,
    latest_tag: bool = False,
    branch: str | None = None,
) -> int:
    print("Checking for breaking changes...")

    if tag:
        buf.breaking(ctx.root, buf.tag_input(tag))
        print(f"✓ No breaking changes against tag {tag}")
        return 0

    if latest_tag:
        tag = buf.breaking_against_latest_tag(ctx.root)
        if tag is None:
            print("No tags found, skipping breaking change detection")
            return 0
        print(f"✓ No breaking changes against tag {tag}")
        return 0

    branch = branch or ctx.config.breaking_branch
    if not buf.breaking_against_branch(ctx.root, branch):
        print(f"No {branch} branch found, skipping breaking change detection")
        return 0
    print(f"✓ No breaking changes against {branch}")
    return 0


def cmd_breaking(ctx: CommandContext, args: argparse.Namespace) -> int:
    return _breaking(ctx, tag=args.tag, latest_tag=args.latest_tag, branch=args.branch)


def cmd_format(ctx: CommandContext, args: argparse.Namespace) -> int:
    print("Formatting proto files...")
    buf.format_files(ctx.root)
    return 0


def cmd_generate(ctx: CommandContext, args: argparse.Namespace) -> int:
    if args.package:
        print(f"Generating Go code for {args.package} using Buf...")
    else:
        print("Generating Go code for all packages using Buf...")
    config = buf.generate(ctx.root, args.package)
    plugins = ", ".join(p.label for p in config.plugins)
    print(f"✓ Generated with plugins: {plugins}")
    return 0


def cmd_protoc_generate(ctx: CommandContext, args: argparse.Namespace) -> int:
    plugins = ctx.config.protoc_plugins
    if args.package:
        print(f"Generating Go code for {args.package} using protoc...")
        protoc.generate_package(ctx.root, args.package, plugins)
        return 0

    print("Generating Go code for all packages using protoc...")
    protoc.generate_all(
        ctx.root,
        ctx.packages,
        plugins,
        on_package=lambda package: print(f"Generating {package}..."),
    )
    return 0


def cmd_validate_buf(ctx: CommandContext, args: argparse.Namespace) -> int:
    print("Validating proto files with Buf...")
    print()
    buf.validate(ctx.root, progress=print)
    print()
    print("✓ All Buf validations passed!")
    return 0


def _validate_protoc(ctx: CommandContext, package: str | None) -> int:
    print("Validating proto files with protoc...")
    print()
    require_tool("protoc")

    if package:
        print(f"Validating package: {package}")
        protoc.validate_package(
            ctx.root,
            package,
            on_result=lambda result: print(f"  Validating {result.path}..."),
        )
        print(f"✓ Package {package} validated successfully")
        return 0

    def report(result: FileResult) -> None:
        if result.ok:
            print(f"  ✓ Valid: {result.path}")
        else:
            print(f"  ✗ Failed: {result.path}")

    print("Validating all proto files...")
    outcome = protoc.validate_all(
        ctx.root,
        ctx.packages,
        on_result=report,
        on_package=lambda name: print(f"  Validating {name}..."),
    )
    if not outcome.ok:
        print()
        print("✗ Validation failed for some files")
        return 1

    print()
    print("✓ All proto files validated successfully")
    return 0


def cmd_validate_protoc(ctx: CommandContext, args: argparse.Namespace) -> int:
    return _validate_protoc(ctx, args.package)


def cmd_validate(ctx: CommandContext, args: argparse.Namespace) -> int:
    code = cmd_lint(ctx, args)
    if code != 0:
        return code
    if args.ci:
        code = _breaking(ctx)
        if code != 0:
            return code
    return _validate_protoc(ctx, None)


def cmd_add_service(ctx: CommandContext, args: argparse.Namespace) -> int:
    result = add_service(ctx.root, args.name, ctx.config.go_module, progress=print)
    print()
    print(f"✓ Service '{result.names.name}' created successfully!")
    print()
    print("Next steps:")
    for i, step in enumerate(result.next_steps(ctx.root), 1):
        print(f"  {i}. {step}")
    return 0


def cmd_clean(ctx: CommandContext, args: argparse.Namespace) -> int:
    if args.buf_cache:
        print("Removing Buf cache...")
        if workspace.clean_buf_cache(ctx.root):
            print("Buf cache removed")
        else:
            print("No Buf cache found")
        return 0

    print("Removing generated files...")
    removed = workspace.clean_generated(ctx.root)
    print(f"Clean complete ({len(removed)} file{'s' if len(removed) != 1 else ''} removed)")
    return 0


def cmd_install(ctx: CommandContext, args: argparse.Namespace) -> int:
    everything = not (args.buf or args.protoc)

    if args.buf or everything:
        print("Installing Buf...")
        if install.install_buf(ctx.root):
            print("Buf installed successfully")
        else:
            print("Buf is already installed")

    if args.protoc or everything:
        print("Installing protoc-gen-go and protoc-gen-go-grpc...")
        install.install_protoc_plugins(ctx.root)
        print("Protoc plugins installed successfully")
    return 0
