"""Scaffolding of a new service: schema file plus README."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..config import DEFAULT_GO_MODULE
from ..exceptions import ServiceExistsError
from .naming import ServiceNames
from .renderer import TemplateRenderer, render_readme, render_service

logger = logging.getLogger(__name__)


def _silent(message: str) -> None:
    pass


@dataclass(frozen=True)
class ScaffoldResult:
    """Files written by :func:`add_service`.

    Attributes:
        names: Identifiers used for substitution
        service_dir: Top-level directory of the new service
        proto_file: Generated schema
        readme_file: Generated documentation
    """

    names: ServiceNames
    service_dir: Path
    proto_file: Path
    readme_file: Path

    def next_steps(self, root: Path) -> list[str]:
        proto = self.proto_file.relative_to(root)
        return [
            f"Review and customize {proto}",
            "Run 'make buf-lint' to validate",
            f"Run 'make buf-generate PACKAGE={self.names.name}' to generate Go code",
            "Commit your changes",
        ]


def add_service(
    root: Path,
    raw_name: str,
    go_module: str = DEFAULT_GO_MODULE,
    progress: Callable[[str], None] = _silent,
) -> ScaffoldResult:
    """Create ``<name>/v1/<name>.proto`` and ``<name>/README.md`` under ``root``.

    Args:
        root: Repository root
        raw_name: Service name; it is lowercased before use
        go_module: Go module path for the ``go_package`` option
        progress: Called with a status line once the service is known to be new

    Returns:
        The paths that were written

    Raises:
        InvalidServiceNameError: If the name is not a valid package name
        ServiceExistsError: If ``<root>/<name>`` already exists; nothing is written
    """
    names = ServiceNames.from_name(raw_name, go_module)
    service_dir = root / names.name
    if service_dir.exists():
        raise ServiceExistsError(f"Service '{names.name}' already exists")
    progress(f"Creating new service: {names.name}")

    renderer = TemplateRenderer()
    # Render before touching the filesystem so a template error leaves no partial service
    proto_text = render_service(names, renderer)
    readme_text = render_readme(names, renderer)

    version_dir = service_dir / names.version
    version_dir.mkdir(parents=True)
    proto_file = version_dir / f"{names.name}.proto"
    readme_file = service_dir / "README.md"
    proto_file.write_text(proto_text, encoding="utf-8")
    readme_file.write_text(readme_text, encoding="utf-8")
    logger.debug("Wrote %s and %s", proto_file, readme_file)

    return ScaffoldResult(
        names=names,
        service_dir=service_dir,
        proto_file=proto_file,
        readme_file=readme_file,
    )
