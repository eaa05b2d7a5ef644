"""Service name normalization and the identifiers derived from it."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..config import DEFAULT_GO_MODULE
from ..exceptions import InvalidServiceNameError

# lower_snake_case, as Buf requires for package and field names
SERVICE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)*$")

API_VERSION = "v1"


def normalize_service_name(raw: str) -> str:
    """Lowercase a service name and check that it is usable as a package name.

    Args:
        raw: Name as typed by the user (e.g. "Product", "order_item")

    Returns:
        Lowercased name

    Raises:
        InvalidServiceNameError: If the name is empty or not lower_snake_case
    """
    name = raw.strip().lower()
    if not name:
        raise InvalidServiceNameError("Service name is required")
    if not SERVICE_NAME_PATTERN.match(name):
        raise InvalidServiceNameError(
            f"Invalid service name '{raw}': use letters, digits and single underscores, "
            "starting with a letter (e.g. 'product' or 'order_item')"
        )
    return name


def to_pascal_case(name: str) -> str:
    """Convert a snake_case name to PascalCase.

    Example:
        >>> to_pascal_case("order_item")
        'OrderItem'
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


@dataclass(frozen=True)
class ServiceNames:
    """Every identifier substituted into the service templates.

    Attributes:
        name: Lowercase service name, also the directory and field name
        pascal: PascalCase name used for messages, service and methods
        package: Protobuf package (``<name>.v1``)
        go_import: Go import path of the generated package
        go_package: Value of the ``go_package`` option
        version: API version directory
    """

    name: str
    pascal: str
    package: str
    go_import: str
    go_package: str
    version: str = API_VERSION

    @classmethod
    def from_name(cls, raw: str, go_module: str = DEFAULT_GO_MODULE) -> ServiceNames:
        name = normalize_service_name(raw)
        go_import = f"{go_module.rstrip('/')}/{name}/{API_VERSION}"
        return cls(
            name=name,
            pascal=to_pascal_case(name),
            package=f"{name}.{API_VERSION}",
            go_import=go_import,
            go_package=f"{go_import};{name}{API_VERSION}",
        )

    @property
    def go_alias(self) -> str:
        return f"{self.name}{self.version}"
