"""Fragment writer: one HTML fragment per documented entity.

Every ``write_*`` call renders its entity fully in memory, writes it to its
own file in the staging directory and only then records it in the TOC. A
render failure therefore never leaves a half-written fragment behind for the
assembler to pick up.

Child entries (resources, operations, definitions) attach to an explicit
``parent`` when given and otherwise to the most recently opened top-level
section.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from loguru import logger
from markupsafe import Markup, escape

from refdocs.docgen.assembler import assemble
from refdocs.docgen.links import (
    API_GROUPS_FILE,
    DEFINITIONS_FILE,
    OLD_VERSIONS_FILE,
    OPERATIONS_FILE,
    OVERVIEW_FILE,
    category_file_name,
    concept_file_name,
    definition_file_name,
    gvk_markup,
    make_anchor,
    operation_file_name,
    section_link,
)
from refdocs.docgen.models import Definition, Operation, Resource
from refdocs.docgen.rendering import RenderContext
from refdocs.docgen.toc import TOC, TOCItem, TOCItemKind

if TYPE_CHECKING:
    from refdocs.core.config.docs_config import DocsConfig


class DocWriter(Protocol):
    """Operations the generator drives, in document order."""

    toc: TOC

    def write_overview(self) -> TOCItem: ...

    def write_api_group_versions(self, group_versions: dict[str, list[str]]) -> TOCItem: ...

    def write_resource_category(self, name: str, include: str) -> TOCItem: ...

    def write_resource(self, resource: Resource, parent: TOCItem | None = None) -> TOCItem: ...

    def write_definitions_overview(self) -> TOCItem: ...

    def write_definition(self, definition: Definition, parent: TOCItem | None = None) -> TOCItem: ...

    def write_orphaned_operations_overview(self) -> TOCItem: ...

    def write_operation(self, operation: Operation, parent: TOCItem | None = None) -> TOCItem: ...

    def write_old_versions_overview(self) -> TOCItem: ...

    def finalize(self, missing: list[str] | None = None) -> Path: ...


class HTMLWriter:
    """Writes HTML fragments and builds the TOC that orders them."""

    def __init__(
        self, config: DocsConfig, title: str, render_context: RenderContext
    ) -> None:
        self.config = config
        self.toc = TOC(title=title)
        self.render_context = render_context

    @property
    def includes_dir(self) -> Path:
        return self.config.includes_dir

    def write_overview(self) -> TOCItem:
        return self._write_static_section(
            OVERVIEW_FILE, heading="API Overview", title="Overview", link="api-overview"
        )

    def write_api_group_versions(self, group_versions: dict[str, list[str]]) -> TOCItem:
        """Write the table of API groups, both groups and versions sorted."""
        groups = [
            {"group": group, "versions": sorted(group_versions[group])}
            for group in sorted(group_versions)
        ]
        content = self._render("api-groups.html", {"groups": groups})

        item = TOCItem(
            level=1,
            title=Markup("API Groups"),
            link="api-groups",
            file=API_GROUPS_FILE,
        )
        return self._emit_section(item, content)

    def write_resource_category(self, name: str, include: str) -> TOCItem:
        link = section_link(name)
        content = self._render(
            "resource-category-heading.html", {"title": name, "section_id": link}
        )
        item = TOCItem(
            level=1,
            title=escape(name),
            link=link,
            file=category_file_name(include),
            kind=TOCItemKind.CATEGORY,
        )
        return self._emit_section(item, content)

    def write_definitions_overview(self) -> TOCItem:
        return self._write_static_section(
            DEFINITIONS_FILE, heading="Definitions", title="DEFINITIONS", link="definitions"
        )

    def write_orphaned_operations_overview(self) -> TOCItem:
        return self._write_static_section(
            OPERATIONS_FILE, heading="Operations", title="OPERATIONS", link="operations"
        )

    def write_old_versions_overview(self) -> TOCItem:
        return self._write_static_section(
            OLD_VERSIONS_FILE,
            heading="Old API Versions",
            title="OLD API VERSIONS",
            link="old-api-versions",
        )

    def write_definition(
        self, definition: Definition, parent: TOCItem | None = None
    ) -> TOCItem:
        link_id = make_anchor(definition.composite())
        title = gvk_markup(
            definition.group_display_name(), definition.version, definition.name
        )
        content = self._render(
            "definition.html",
            {"nvg": title, "link_id": link_id, "definition": definition},
        )
        item = TOCItem(
            level=2,
            title=title,
            link=link_id,
            file=definition_file_name(definition),
            kind=TOCItemKind.DEFINITION,
        )
        return self._emit_child(item, content, parent)

    def write_operation(
        self, operation: Operation, parent: TOCItem | None = None
    ) -> TOCItem:
        nvg = operation.id
        link_id = make_anchor(nvg)

        group, version, kind, _ = operation.group_version_kind_sub()
        title = gvk_markup(group, version, kind) if group else escape(nvg)

        ordered = dataclasses.replace(
            operation,
            http_responses=sorted(operation.http_responses, key=lambda r: r.name),
        )
        content = self._render(
            "operation.html", {"link_id": link_id, "nvg": nvg, "operation": ordered}
        )
        item = TOCItem(
            level=2,
            title=title,
            link=link_id,
            file=operation_file_name(operation),
            kind=TOCItemKind.OPERATION,
        )
        return self._emit_child(item, content, parent)

    def write_resource(
        self, resource: Resource, parent: TOCItem | None = None
    ) -> TOCItem:
        """Write a resource fragment together with its in-page operation outline.

        Operation categories (level 3) and their operations (level 4) become
        outline-only TOC entries: they carry anchors into the resource fragment
        but no file of their own.
        """
        definition = resource.definition
        group = definition.group_display_name()
        link_id = make_anchor(f"{resource.name} {definition.version} {group}")

        item = TOCItem(
            level=2,
            title=gvk_markup(group, definition.version, resource.name),
            link=link_id,
            file=concept_file_name(definition),
            kind=TOCItemKind.RESOURCE,
        )

        categories: list[dict[str, Any]] = []
        for category in definition.operation_categories:
            if not category.operations:
                continue

            category_item = item.add_child(
                TOCItem(
                    level=3,
                    title=escape(category.name),
                    link=category.toc_id(definition),
                    kind=TOCItemKind.OPERATION_CATEGORY,
                )
            )
            entries: list[dict[str, Any]] = []
            for operation in category.operations:
                entry = category_item.add_child(
                    TOCItem(
                        level=4,
                        title=escape(operation.type.name),
                        link=operation.toc_id(definition),
                        kind=TOCItemKind.OPERATION_ENTRY,
                    )
                )
                entries.append(
                    {
                        "name": operation.type.name,
                        "link": entry.link,
                        "operation": operation,
                    }
                )
            categories.append(
                {"name": category.name, "link": category_item.link, "operations": entries}
            )

        content = self._render(
            "resource.html",
            {
                "resource": resource,
                "dvg": item.title,
                "link_id": link_id,
                "categories": categories,
            },
        )
        return self._emit_child(item, content, parent)

    def finalize(self, missing: list[str] | None = None) -> Path:
        """Assemble every fragment into the final document."""
        return assemble(self.toc, self.config, self.render_context, missing)

    def _write_static_section(
        self, file_name: str, *, heading: str, title: str, link: str
    ) -> TOCItem:
        content = self._render("section-heading.html", {"title": heading, "link": link})
        item = TOCItem(level=1, title=Markup(title), link=link, file=file_name)
        return self._emit_section(item, content)

    def _render(self, template_name: str, data: dict[str, Any]) -> Markup:
        return self.render_context.render(template_name, data)

    def _emit_section(self, item: TOCItem, content: str) -> TOCItem:
        self.toc.check_available(item)
        self._write_fragment(item.file, content)
        return self.toc.open_section(item)

    def _emit_child(
        self, item: TOCItem, content: str, parent: TOCItem | None
    ) -> TOCItem:
        target = self.toc.resolve_parent(parent)
        self.toc.check_available(item)
        self._write_fragment(item.file, content)
        return self.toc.attach(item, target)

    def _write_fragment(self, file_name: str, content: str) -> None:
        self.includes_dir.mkdir(parents=True, exist_ok=True)
        path = self.includes_dir / file_name
        path.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote fragment {path}")
