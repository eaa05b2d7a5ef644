"""Version-control queries used by breaking-change detection."""

from __future__ import annotations

from pathlib import Path

from .tools import find_tool, run_tool


def _git(root: Path, *args: str) -> tuple[int, str]:
    git = find_tool("git")
    if git is None:
        return 127, ""
    result = run_tool([git, *args], cwd=root, check=False, capture=True)
    return result.returncode, result.stdout.strip()


def is_git_repository(root: Path) -> bool:
    """Return True if ``root`` is inside a git work tree with at least one commit."""
    code, _ = _git(root, "rev-parse", "--verify", "HEAD")
    return code == 0


def ref_exists(root: Path, ref: str) -> bool:
    """Return True if ``ref`` (branch, tag or commit) resolves."""
    code, _ = _git(root, "rev-parse", "--verify", "--quiet", ref)
    return code == 0


def latest_tag(root: Path) -> str | None:
    """Return the most recent tag reachable from HEAD, or None if there is none."""
    code, out = _git(root, "describe", "--tags", "--abbrev=0")
    if code != 0 or not out:
        return None
    return out
