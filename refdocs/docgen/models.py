from __future__ import annotations

from dataclasses import dataclass, field

from refdocs.docgen.links import make_anchor

CORE_GROUP_DISPLAY_NAME = "Core"


@dataclass
class HttpResponse:
    """One documented response of an operation."""

    name: str
    code: str = ""
    description: str = ""
    type_name: str = ""


@dataclass
class Field:
    name: str
    type_name: str
    description: str = ""


@dataclass
class OperationType:
    """Display name of an operation inside a category (e.g. ``Read Status``)."""

    name: str


@dataclass
class Operation:
    """A single API operation.

    ``group``/``version``/``kind``/``subresource`` mirror the operation's
    group-version-kind annotation; an empty ``group`` means the operation
    carries none.
    """

    id: str
    type: OperationType
    path: str = ""
    http_method: str = ""
    description: str = ""
    group: str = ""
    version: str = ""
    kind: str = ""
    subresource: str = ""
    http_responses: list[HttpResponse] = field(default_factory=list)
    parameters: list[Field] = field(default_factory=list)

    def group_version_kind_sub(self) -> tuple[str, str, str, str]:
        return self.group, self.version, self.kind, self.subresource

    def toc_id(self, definition: Definition) -> str:
        return make_anchor(f"{self.type.name} {definition.composite()}")


@dataclass
class OperationCategory:
    name: str
    operations: list[Operation] = field(default_factory=list)

    def toc_id(self, definition: Definition) -> str:
        return make_anchor(f"{self.name} {definition.composite()}")


@dataclass
class Definition:
    """A type definition in a given group and version."""

    name: str
    version: str
    group: str = ""
    group_full_name: str = ""
    description: str = ""
    fields: list[Field] = field(default_factory=list)
    operation_categories: list[OperationCategory] = field(default_factory=list)

    def group_display_name(self) -> str:
        if self.group_full_name:
            return self.group_full_name
        if not self.group or self.group == "core":
            return CORE_GROUP_DISPLAY_NAME
        return self.group

    def composite(self) -> str:
        """Name, version and group joined the way anchors are derived."""
        return f"{self.name} {self.version} {self.group_display_name()}"

    def sort_key(self) -> tuple[str, str, str]:
        return self.name, self.version, self.group_display_name()


@dataclass
class Resource:
    name: str
    definition: Definition


@dataclass
class ResourceCategory:
    """A top-level grouping of resources; ``include`` names its heading file."""

    name: str
    include: str
    resources: list[Resource] = field(default_factory=list)


@dataclass
class ApiSpec:
    """The parsed API specification the generator consumes.

    Attributes:
        group_versions: API group name -> versions served for it
        resource_categories: Categories in display order
        definitions: Definitions not owned by any resource
        operations: Operations not attached to any resource
        old_version_definitions: Definitions of superseded API versions
    """

    group_versions: dict[str, list[str]] = field(default_factory=dict)
    resource_categories: list[ResourceCategory] = field(default_factory=list)
    definitions: list[Definition] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)
    old_version_definitions: list[Definition] = field(default_factory=list)
