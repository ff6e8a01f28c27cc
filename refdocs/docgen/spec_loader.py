"""Load an already-parsed API spec model from a JSON dump.

The dump mirrors the dataclasses in ``refdocs.docgen.models`` with snake_case
keys. Only the shape is checked: a missing required key raises
``SpecModelError``; optional keys fall back to their defaults.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from refdocs.core.exceptions import SpecModelError
from refdocs.docgen.models import (
    ApiSpec,
    Definition,
    Field,
    HttpResponse,
    Operation,
    OperationCategory,
    OperationType,
    Resource,
    ResourceCategory,
)


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as e:
        raise SpecModelError(f"{where}: missing required key '{key}'") from e


def _field(data: dict[str, Any]) -> Field:
    return Field(
        name=_require(data, "name", "field"),
        type_name=data.get("type_name", ""),
        description=data.get("description", ""),
    )


def _response(data: dict[str, Any]) -> HttpResponse:
    return HttpResponse(
        name=_require(data, "name", "response"),
        code=str(data.get("code", "")),
        description=data.get("description", ""),
        type_name=data.get("type_name", ""),
    )


def _operation(data: dict[str, Any]) -> Operation:
    op_id = _require(data, "id", "operation")
    return Operation(
        id=op_id,
        type=OperationType(name=data.get("type", op_id)),
        path=data.get("path", ""),
        http_method=data.get("http_method", ""),
        description=data.get("description", ""),
        group=data.get("group", ""),
        version=data.get("version", ""),
        kind=data.get("kind", ""),
        subresource=data.get("subresource", ""),
        http_responses=[_response(r) for r in data.get("http_responses", [])],
        parameters=[_field(p) for p in data.get("parameters", [])],
    )


def _definition(data: dict[str, Any]) -> Definition:
    name = _require(data, "name", "definition")
    return Definition(
        name=name,
        version=_require(data, "version", f"definition {name}"),
        group=data.get("group", ""),
        group_full_name=data.get("group_full_name", ""),
        description=data.get("description", ""),
        fields=[_field(f) for f in data.get("fields", [])],
        operation_categories=[
            OperationCategory(
                name=_require(category, "name", f"definition {name} category"),
                operations=[_operation(o) for o in category.get("operations", [])],
            )
            for category in data.get("operation_categories", [])
        ],
    )


def _resource_category(data: dict[str, Any]) -> ResourceCategory:
    name = _require(data, "name", "resource category")
    resources = []
    for entry in data.get("resources", []):
        resource_name = _require(entry, "name", f"resource in {name}")
        resources.append(
            Resource(
                name=resource_name,
                definition=_definition(
                    _require(entry, "definition", f"resource {resource_name}")
                ),
            )
        )
    return ResourceCategory(
        name=name,
        include=_require(data, "include", f"resource category {name}"),
        resources=resources,
    )


def parse_api_spec(data: dict[str, Any]) -> ApiSpec:
    """Build an ``ApiSpec`` from a decoded model dump."""
    if not isinstance(data, dict):
        raise SpecModelError("Spec model must be a JSON object")

    return ApiSpec(
        group_versions={
            str(group): [str(v) for v in versions]
            for group, versions in data.get("group_versions", {}).items()
        },
        resource_categories=[
            _resource_category(c) for c in data.get("resource_categories", [])
        ],
        definitions=[_definition(d) for d in data.get("definitions", [])],
        operations=[_operation(o) for o in data.get("operations", [])],
        old_version_definitions=[
            _definition(d) for d in data.get("old_version_definitions", [])
        ],
    )


def load_api_spec(path: Path) -> ApiSpec:
    """Read and parse a spec model dump.

    Raises:
        OSError: If the file cannot be read
        SpecModelError: If the file is not valid JSON or lacks required keys
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SpecModelError(f"Invalid JSON in {path}: {e}") from e

    spec = parse_api_spec(data)
    logger.debug(
        f"Loaded spec model from {path}: "
        f"{len(spec.resource_categories)} categories, "
        f"{len(spec.definitions)} definitions, {len(spec.operations)} operations"
    )
    return spec
