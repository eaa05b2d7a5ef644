"""Wrappers around the Buf CLI: lint, breaking-change detection, format, generate.

Breaking-change semantics (field removal, type change, renumbering) are
decided by Buf according to the rules in ``buf.yaml``; these wrappers only
choose what to compare against and propagate Buf's exit status.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import git
from .config import BufGenConfig, load_buf_gen_config
from .exceptions import BreakingChangeError, ToolFailedError
from .tools import require_tool, run_tool

logger = logging.getLogger(__name__)

Progress = Callable[[str], None]


def _silent(message: str) -> None:
    pass


@dataclass
class BufValidation:
    """Outcome of a successful :func:`validate` run.

    Attributes:
        lint_passed: Whether ``buf lint`` succeeded
        against: Tag compared against, or None when detection was skipped
        skipped_reason: Why breaking-change detection did not run
    """

    lint_passed: bool
    against: str | None = None
    skipped_reason: str | None = None

    @property
    def breaking_checked(self) -> bool:
        return self.against is not None


def tag_input(tag: str) -> str:
    """Build a Buf input referring to a git tag of the local repository."""
    return f".git#tag={tag}"


def branch_input(branch: str) -> str:
    """Build a Buf input referring to a git branch of the local repository."""
    return f".git#branch={branch}"


def lint(root: Path) -> None:
    """Run ``buf lint``.

    Raises:
        ToolNotFoundError: If buf is not installed
        ToolFailedError: If lint reports problems
    """
    buf = require_tool("buf")
    command = [buf, "lint"]
    try:
        run_tool(command, cwd=root)
    except ToolFailedError as e:
        raise ToolFailedError(command, e.returncode, "Buf lint failed") from e


def breaking(root: Path, against: str) -> None:
    """Run ``buf breaking`` against a Buf input.

    Args:
        root: Repository root
        against: Buf input, e.g. from :func:`tag_input` or :func:`branch_input`

    Raises:
        ToolNotFoundError: If buf is not installed
        BreakingChangeError: If Buf reports breaking changes
    """
    buf = require_tool("buf")
    command = [buf, "breaking", "--against", against]
    try:
        run_tool(command, cwd=root)
    except ToolFailedError as e:
        raise BreakingChangeError(command, e.returncode, "Breaking changes detected") from e


def breaking_against_branch(root: Path, branch: str) -> bool:
    """Compare against ``branch`` if it exists.

    Returns:
        True if the comparison ran, False if the branch was not found

    Raises:
        ToolNotFoundError: If buf is not installed
        BreakingChangeError: If Buf reports breaking changes
    """
    require_tool("buf")
    if not git.ref_exists(root, branch):
        logger.debug("Ref %s does not resolve in %s", branch, root)
        return False
    breaking(root, branch_input(branch))
    return True


def breaking_against_latest_tag(root: Path) -> str | None:
    """Compare against the most recent tag reachable from HEAD.

    Returns:
        The tag compared against, or None when the repository has no tags

    Raises:
        ToolNotFoundError: If buf is not installed
        BreakingChangeError: If Buf reports breaking changes
    """
    require_tool("buf")
    tag = git.latest_tag(root)
    if tag is None:
        logger.debug("No tags found in %s", root)
        return None
    breaking(root, tag_input(tag))
    return tag


def format_files(root: Path, write: bool = True) -> None:
    """Run ``buf format``, rewriting files in place when ``write`` is set."""
    buf = require_tool("buf")
    command = [buf, "format"]
    if write:
        command.append("-w")
    run_tool(command, cwd=root)


def generate(root: Path, path: str | None = None) -> BufGenConfig:
    """Run ``buf generate``, optionally limited to one package directory.

    Returns:
        The validated ``buf.gen.yaml`` used for generation

    Raises:
        ToolNotFoundError: If buf is not installed
        ConfigError: If buf.gen.yaml is missing or declares no plugins
        ToolFailedError: If generation fails
    """
    buf = require_tool("buf")
    config = load_buf_gen_config(root)
    command = [buf, "generate"]
    if path:
        command.extend(["--path", path])
    run_tool(command, cwd=root)
    return config


def validate(root: Path, progress: Progress = _silent) -> BufValidation:
    """Lint, then check for breaking changes against the latest git tag.

    Breaking-change detection is skipped when the root is not a git
    repository or has no tags.

    Raises:
        ToolNotFoundError: If buf is not installed (nothing else runs)
        ToolFailedError: If lint fails
        BreakingChangeError: If breaking changes are found
    """
    require_tool("buf")

    progress("Running buf lint...")
    lint(root)
    progress("✓ Buf lint passed")
    progress("")

    if not git.is_git_repository(root):
        reason = "Not a git repository, skipping breaking change detection"
        progress(reason)
        return BufValidation(lint_passed=True, skipped_reason=reason)

    tag = git.latest_tag(root)
    if tag is None:
        reason = "No tags found, skipping breaking change detection"
        progress(reason)
        return BufValidation(lint_passed=True, skipped_reason=reason)

    progress(f"Checking for breaking changes against tag: {tag}")
    breaking(root, tag_input(tag))
    progress("✓ No breaking changes detected")
    return BufValidation(lint_passed=True, against=tag)
