"""Jinja2 rendering of the bundled service templates."""

from __future__ import annotations

import os
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .naming import ServiceNames

SERVICE_TEMPLATE = "service.proto.j2"
README_TEMPLATE = "README.md.j2"


def _template_directory() -> str:
    base_dir = os.path.dirname(os.path.abspath(__file__))
    return os.path.abspath(os.path.join(base_dir, "..", "templates"))


class TemplateRenderer:
    """Renders templates from the package's ``templates`` directory."""

    def __init__(self, template_dir: str | None = None) -> None:
        self.template_dir = template_dir or _template_directory()
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
        )

    def render_template(self, template_name: str, **kwargs: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)


def render_service(names: ServiceNames, renderer: TemplateRenderer | None = None) -> str:
    """Render the schema of a new service."""
    return (renderer or TemplateRenderer()).render_template(SERVICE_TEMPLATE, names=names)


def render_readme(names: ServiceNames, renderer: TemplateRenderer | None = None) -> str:
    """Render the README documenting a new service."""
    return (renderer or TemplateRenderer()).render_template(README_TEMPLATE, names=names)
