"""Installation of the external toolchain through ``go install``."""

from __future__ import annotations

import logging
from pathlib import Path

from .tools import find_tool, require_tool, run_tool

logger = logging.getLogger(__name__)

BUF_PACKAGE = "github.com/bufbuild/buf/cmd/buf@latest"
PROTOC_PLUGIN_PACKAGES = (
    "google.golang.org/protobuf/cmd/protoc-gen-go@latest",
    "google.golang.org/grpc/cmd/protoc-gen-go-grpc@latest",
)


def install_buf(root: Path) -> bool:
    """Install the Buf CLI unless it is already on PATH.

    Returns:
        True if buf was installed, False if it was already present

    Raises:
        ToolNotFoundError: If go is needed but not installed
        ToolFailedError: If ``go install`` fails
    """
    if find_tool("buf") is not None:
        logger.debug("buf already installed, skipping")
        return False
    go = require_tool("go")
    run_tool([go, "install", BUF_PACKAGE], cwd=root)
    return True


def install_protoc_plugins(root: Path) -> list[str]:
    """Install protoc-gen-go and protoc-gen-go-grpc.

    Returns:
        The installed module paths
    """
    go = require_tool("go")
    for package in PROTOC_PLUGIN_PACKAGES:
        run_tool([go, "install", package], cwd=root)
    return list(PROTOC_PLUGIN_PACKAGES)
