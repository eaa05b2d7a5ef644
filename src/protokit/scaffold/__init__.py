"""Scaffolding of new service schemas from the bundled templates."""

from __future__ import annotations

from .generator import ScaffoldResult, add_service
from .naming import ServiceNames, normalize_service_name, to_pascal_case
from .renderer import TemplateRenderer, render_readme, render_service

__all__ = [
    "add_service",
    "ScaffoldResult",
    "ServiceNames",
    "normalize_service_name",
    "to_pascal_case",
    "TemplateRenderer",
    "render_service",
    "render_readme",
]
