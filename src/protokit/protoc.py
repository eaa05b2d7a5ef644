"""Wrappers around the traditional protobuf compiler.

``protoc`` is used as an independent second opinion next to Buf: each schema
file is compiled to a throwaway descriptor set to prove that it parses and
that its imports resolve.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .config import ProtocPlugin
from .exceptions import NoProtoFilesError, ToolFailedError
from .tools import require_tool, run_tool
from .workspace import find_proto_files

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Compilation result for a single schema file.

    Attributes:
        path: Schema path relative to the repository root
        returncode: protoc exit status (0 on success)
    """

    path: Path
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass
class ProtocReport:
    """Per-file results of a validation or generation run."""

    results: list[FileResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed(self) -> list[FileResult]:
        return [r for r in self.results if not r.ok]

    @property
    def passed(self) -> list[FileResult]:
        return [r for r in self.results if r.ok]


def _relative(root: Path, path: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _proto_path_args(include_paths: Sequence[str]) -> list[str]:
    return [f"--proto_path={p}" for p in include_paths]


def validate_file(
    root: Path,
    proto: Path,
    include_paths: Sequence[str] = (".",),
    *,
    quiet: bool = False,
) -> FileResult:
    """Compile one schema to a discarded descriptor set.

    Args:
        root: Repository root (protoc working directory)
        proto: Schema file
        include_paths: ``--proto_path`` entries, relative to ``root``
        quiet: Capture protoc's diagnostics instead of showing them

    Returns:
        The file result; failures are reported, not raised
    """
    protoc = require_tool("protoc")
    rel = _relative(root, proto)
    command = [
        protoc,
        *_proto_path_args(include_paths),
        f"--descriptor_set_out={os.devnull}",
        str(rel),
    ]
    result = run_tool(command, cwd=root, check=False, capture=quiet)
    if result.returncode != 0 and quiet and result.stderr:
        logger.debug("protoc output for %s:\n%s", rel, result.stderr.rstrip())
    return FileResult(path=rel, returncode=result.returncode)


def validate_package(
    root: Path,
    package: str,
    on_result: Callable[[FileResult], None] | None = None,
) -> ProtocReport:
    """Validate every schema in one package, stopping at the first failure.

    Raises:
        ToolNotFoundError: If protoc is not installed
        NoProtoFilesError: If the package holds no .proto files
        ToolFailedError: With protoc's exit code, for the first file that fails
    """
    protoc = require_tool("protoc")
    files = find_proto_files(root / package)
    if not files:
        raise NoProtoFilesError(f"No proto files found in {package}")

    report = ProtocReport()
    for proto in files:
        result = validate_file(root, proto, (".", package))
        report.results.append(result)
        if on_result is not None:
            on_result(result)
        if not result.ok:
            raise ToolFailedError(
                [protoc, str(result.path)],
                result.returncode,
                f"protoc failed on {result.path}",
            )
    return report


def validate_all(
    root: Path,
    packages: Sequence[str],
    on_result: Callable[[FileResult], None] | None = None,
    on_package: Callable[[str], None] | None = None,
) -> ProtocReport:
    """Validate every schema of every package, reporting each file.

    Unlike :func:`validate_package` this keeps going after a failure so that
    all broken files are listed; check ``report.ok`` for the verdict.
    Packages whose directory does not exist are skipped.

    Raises:
        ToolNotFoundError: If protoc is not installed
    """
    require_tool("protoc")
    report = ProtocReport()
    for package in packages:
        if not (root / package).is_dir():
            logger.debug("Skipping missing package directory %s", package)
            continue
        if on_package is not None:
            on_package(package)
        for proto in find_proto_files(root / package):
            result = validate_file(root, proto, (".",), quiet=True)
            report.results.append(result)
            if on_result is not None:
                on_result(result)
    return report


def generate_package(root: Path, package: str, plugins: Sequence[ProtocPlugin]) -> list[Path]:
    """Generate code for one package with the configured protoc plugins.

    Returns:
        The schema files that were compiled

    Raises:
        ToolNotFoundError: If protoc is not installed
        NoProtoFilesError: If the package holds no .proto files
        ToolFailedError: If protoc fails on a file
    """
    protoc = require_tool("protoc")
    files = find_proto_files(root / package)
    if not files:
        raise NoProtoFilesError(f"No proto files found in {package}")

    plugin_args = [arg for plugin in plugins for arg in plugin.arguments()]
    compiled = []
    for proto in files:
        rel = _relative(root, proto)
        command = [protoc, *_proto_path_args((".", package)), *plugin_args, str(rel)]
        run_tool(command, cwd=root)
        compiled.append(rel)
    return compiled


def generate_all(
    root: Path,
    packages: Sequence[str],
    plugins: Sequence[ProtocPlugin],
    on_package: Callable[[str], None] | None = None,
) -> dict[str, list[Path]]:
    """Run :func:`generate_package` for each package in order."""
    require_tool("protoc")
    generated = {}
    for package in packages:
        if on_package is not None:
            on_package(package)
        generated[package] = generate_package(root, package, plugins)
    return generated
