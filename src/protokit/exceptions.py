"""Exception hierarchy for protokit.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ProtokitError for easy catching of any protokit-specific error.
"""

from __future__ import annotations

from collections.abc import Sequence


class ProtokitError(Exception):
    """Base exception for all protokit errors."""

    def hint(self) -> str | None:
        """Return an actionable follow-up message for the user, if any."""
        return None


class ToolNotFoundError(ProtokitError):
    """Raised when a required external tool is not on PATH.

    Examples:
        - buf is not installed
        - protoc is not installed
        - go is missing when installing tools
    """

    def __init__(self, tool: str, install_hint: str | None = None) -> None:
        super().__init__(f"{tool} is not installed")
        self.tool = tool
        self.install_hint = install_hint

    def hint(self) -> str | None:
        return self.install_hint


class ToolFailedError(ProtokitError):
    """Raised when an external tool exits with a non-zero status.

    The tool's own exit code is kept so that the CLI can propagate it.
    """

    def __init__(self, command: Sequence[str], returncode: int, message: str | None = None) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(message or f"{self.command[0]} exited with status {returncode}")


class BreakingChangeError(ToolFailedError):
    """Raised when buf reports breaking changes against a previous version."""

    def hint(self) -> str | None:
        return (
            "Breaking changes are not allowed without a major version bump.\n"
            "If this is intentional, update the version and create a new tag."
        )


class ConfigError(ProtokitError):
    """Raised when a configuration file is invalid.

    Examples:
        - protokit.yaml is not valid YAML
        - Unknown or mistyped keys in protokit.yaml
        - buf.gen.yaml declares no plugins
    """


class ScaffoldError(ProtokitError):
    """Raised when a new service cannot be scaffolded."""


class InvalidServiceNameError(ScaffoldError):
    """Raised when a service name cannot be used as a protobuf package name.

    Examples:
        - Empty name
        - Name with dashes or spaces
        - Name starting with a digit
    """


class ServiceExistsError(ScaffoldError):
    """Raised when the service directory already exists."""


class NoProtoFilesError(ProtokitError):
    """Raised when a package directory holds no .proto files."""
