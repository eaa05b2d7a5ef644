"""protokit: tooling for protobuf schema repositories

protokit keeps a repository of protocol buffer schemas healthy. It wraps the
Buf CLI and protoc for linting, breaking-change detection and code generation,
and scaffolds new service schemas from a fixed template.

Key Features:
- Buf lint and breaking-change detection against the latest git tag
- Per-file protoc validation of every schema package
- Code generation through buf.gen.yaml or protoc plugins
- New service scaffolding (schema + README)

Quick Start:
    >>> from pathlib import Path
    >>> from protokit import add_service
    >>> result = add_service(Path("."), "product")
    >>> result.proto_file
    PosixPath('product/v1/product.proto')

Command line:
    $ protokit add-service product
    $ protokit validate-buf
    $ protokit validate-protoc product
"""

from __future__ import annotations

from .config import ProjectConfig, ProtocPlugin, load_project_config
from .exceptions import (
    BreakingChangeError,
    ConfigError,
    InvalidServiceNameError,
    NoProtoFilesError,
    ProtokitError,
    ScaffoldError,
    ServiceExistsError,
    ToolFailedError,
    ToolNotFoundError,
)
from .scaffold import ScaffoldResult, ServiceNames, add_service
from .tools import find_tool, require_tool, run_tool

__version__ = "0.1.0"

__all__ = [
    # Scaffolding
    "add_service",
    "ScaffoldResult",
    "ServiceNames",
    # Configuration
    "ProjectConfig",
    "ProtocPlugin",
    "load_project_config",
    # Tools
    "find_tool",
    "require_tool",
    "run_tool",
    # Exceptions
    "ProtokitError",
    "ToolNotFoundError",
    "ToolFailedError",
    "BreakingChangeError",
    "ConfigError",
    "ScaffoldError",
    "InvalidServiceNameError",
    "ServiceExistsError",
    "NoProtoFilesError",
    # Version
    "__version__",
]
