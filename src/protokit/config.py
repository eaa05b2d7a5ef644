"""Configuration files read by protokit.

Three files live at the repository root:

- ``protokit.yaml``: settings for protokit itself (optional)
- ``buf.yaml``: Buf module, lint and breaking rules
- ``buf.gen.yaml``: Buf code-generation plugins

All of them are YAML documents validated with Pydantic models.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError
from .workspace import discover_packages

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILE = "protokit.yaml"
BUF_CONFIG_FILE = "buf.yaml"
BUF_GEN_CONFIG_FILE = "buf.gen.yaml"

DEFAULT_GO_MODULE = "github.com/andskur/protocols-template"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class ProtocPlugin(BaseModel):
    """A protoc plugin invocation (``--<name>_out`` / ``--<name>_opt``)."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    out: str = "."
    opt: str | None = None

    def arguments(self) -> list[str]:
        """Return the protoc command-line flags for this plugin."""
        args = [f"--{self.name}_out={self.out}"]
        if self.opt:
            args.append(f"--{self.name}_opt={self.opt}")
        return args


def _default_plugins() -> list[ProtocPlugin]:
    return [
        ProtocPlugin(name="go", opt="paths=source_relative"),
        ProtocPlugin(name="go-grpc", opt="paths=source_relative"),
    ]


class ProjectConfig(BaseModel):
    """Settings from ``protokit.yaml``.

    Attributes:
        go_module: Go module path used to build ``go_package`` options
        packages: Top-level schema packages; discovered from the tree when empty
        breaking_branch: Branch compared against by ``protokit breaking``
        protoc_plugins: Plugins used by ``protokit protoc-generate``
    """

    model_config = ConfigDict(extra="forbid")

    go_module: str = DEFAULT_GO_MODULE
    packages: list[str] = Field(default_factory=list)
    breaking_branch: str = "origin/main"
    protoc_plugins: list[ProtocPlugin] = Field(default_factory=_default_plugins)

    def resolve_packages(self, root: Path) -> list[str]:
        """Return the configured packages, or the discovered ones if none are configured."""
        if self.packages:
            return list(self.packages)
        return discover_packages(root)


class BufLintConfig(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    use: list[str] = Field(default_factory=lambda: ["DEFAULT"])
    except_: list[str] = Field(default_factory=list, alias="except")


class BufBreakingConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    use: list[str] = Field(default_factory=lambda: ["FILE"])


class BufConfig(BaseModel):
    """The subset of ``buf.yaml`` protokit reports on."""

    model_config = ConfigDict(extra="allow")

    version: str
    lint: BufLintConfig = Field(default_factory=BufLintConfig)
    breaking: BufBreakingConfig = Field(default_factory=BufBreakingConfig)


class BufGenPlugin(BaseModel):
    model_config = ConfigDict(extra="allow")

    plugin: str | None = None
    local: str | None = None
    remote: str | None = None
    out: str
    opt: str | list[str] | None = None

    @property
    def label(self) -> str:
        return self.plugin or self.local or self.remote or "<unnamed>"


class BufGenConfig(BaseModel):
    """The subset of ``buf.gen.yaml`` protokit validates before generating."""

    model_config = ConfigDict(extra="allow")

    version: str
    plugins: list[BufGenPlugin] = Field(default_factory=list)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path.name} is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the top level")
    return data


def _load_model(model: type[_ModelT], path: Path) -> _ModelT:
    data = _read_yaml(path)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid {path.name}:\n{e}") from e


def load_project_config(root: Path, path: Path | None = None) -> ProjectConfig:
    """Load ``protokit.yaml``, falling back to defaults when it is absent.

    Args:
        root: Repository root
        path: Explicit config file; it must exist when given

    Raises:
        ConfigError: If the file is missing (explicit path only) or invalid
    """
    if path is None:
        path = root / PROJECT_CONFIG_FILE
        if not path.exists():
            logger.debug("No %s in %s, using defaults", PROJECT_CONFIG_FILE, root)
            return ProjectConfig()
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading project config from %s", path)
    return _load_model(ProjectConfig, path)


def load_buf_config(root: Path) -> BufConfig:
    """Load ``buf.yaml`` from the repository root.

    Raises:
        ConfigError: If the file is missing or invalid
    """
    path = root / BUF_CONFIG_FILE
    if not path.exists():
        raise ConfigError(f"{BUF_CONFIG_FILE} not found in {root}")
    return _load_model(BufConfig, path)


def load_buf_gen_config(root: Path) -> BufGenConfig:
    """Load ``buf.gen.yaml`` and make sure it declares at least one plugin.

    Raises:
        ConfigError: If the file is missing, invalid or has no plugins
    """
    path = root / BUF_GEN_CONFIG_FILE
    if not path.exists():
        raise ConfigError(f"{BUF_GEN_CONFIG_FILE} not found in {root}")
    config = _load_model(BufGenConfig, path)
    if not config.plugins:
        raise ConfigError(f"{BUF_GEN_CONFIG_FILE} declares no plugins")
    return config
