"""Repository layout helpers: schema discovery and cleanup of generated files."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

# Top-level directories that never hold schema packages
IGNORED_DIRS = frozenset({"src", "tests", "node_modules", "vendor"})

GENERATED_SUFFIX = ".pb.go"
BUF_CACHE_DIR = ".buf"


def _is_hidden(path: Path, root: Path) -> bool:
    return any(part.startswith(".") for part in path.relative_to(root).parts)


def find_proto_files(directory: Path) -> list[Path]:
    """Find all .proto files below a directory.

    Args:
        directory: Directory to search recursively

    Returns:
        Sorted list of .proto paths (empty if the directory does not exist)
    """
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.rglob("*.proto") if p.is_file())


def discover_packages(root: Path) -> list[str]:
    """List the top-level directories that contain .proto files.

    Hidden directories and tooling directories (src, tests, ...) are skipped.
    """
    packages = []
    for child in sorted(root.iterdir()):
        if not child.is_dir() or child.name.startswith(".") or child.name in IGNORED_DIRS:
            continue
        if find_proto_files(child):
            packages.append(child.name)
    logger.debug("Discovered packages: %s", packages)
    return packages


def clean_generated(root: Path) -> list[Path]:
    """Delete generated Go sources (``*.pb.go`` and ``*_grpc.pb.go``).

    Returns:
        The deleted files
    """
    removed = []
    for path in sorted(root.rglob(f"*{GENERATED_SUFFIX}")):
        if not path.is_file() or _is_hidden(path, root):
            continue
        path.unlink()
        logger.debug("Removed %s", path)
        removed.append(path)
    return removed


def clean_buf_cache(root: Path) -> bool:
    """Remove the ``.buf/`` cache directory.

    Returns:
        True if a cache directory was removed
    """
    cache = root / BUF_CACHE_DIR
    if not cache.is_dir():
        return False
    shutil.rmtree(cache)
    return True
