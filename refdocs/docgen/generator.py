from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from refdocs.core.config.docs_config import DocsConfig
from refdocs.docgen.html_writer import DocWriter, HTMLWriter
from refdocs.docgen.models import ApiSpec, Definition, Resource
from refdocs.docgen.rendering import RenderContext


@dataclass
class GenerationResult:
    """Outcome of a reference generation run."""

    output_path: Path
    fragment_count: int
    missing_fragments: list[str] = field(default_factory=list)


def _sorted_definitions(definitions: list[Definition]) -> list[Definition]:
    return sorted(definitions, key=lambda d: d.sort_key())


def _resource_sort_key(resource: Resource) -> tuple[str, tuple[str, str, str]]:
    # Same-named resources from different groups (core/events.k8s.io Event)
    return resource.name, resource.definition.sort_key()


def write_document(spec: ApiSpec, writer: DocWriter) -> None:
    """Drive ``writer`` through every section in document order.

    Top-level sections keep this fixed order and resource categories keep the
    order they have in ``spec``; only the entities listed inside a section are
    sorted.
    """
    writer.write_overview()
    writer.write_api_group_versions(spec.group_versions)

    for category in spec.resource_categories:
        section = writer.write_resource_category(category.name, category.include)
        for resource in sorted(category.resources, key=_resource_sort_key):
            writer.write_resource(resource, parent=section)

    if spec.definitions:
        section = writer.write_definitions_overview()
        for definition in _sorted_definitions(spec.definitions):
            writer.write_definition(definition, parent=section)

    if spec.operations:
        section = writer.write_orphaned_operations_overview()
        for operation in sorted(spec.operations, key=lambda o: o.id):
            writer.write_operation(operation, parent=section)

    if spec.old_version_definitions:
        section = writer.write_old_versions_overview()
        for definition in _sorted_definitions(spec.old_version_definitions):
            writer.write_definition(definition, parent=section)


def generate_reference_docs(
    spec: ApiSpec,
    config: DocsConfig,
    render_context: RenderContext | None = None,
    log_info: Callable[[str], None] | None = None,
    log_warning: Callable[[str], None] | None = None,
) -> GenerationResult:
    """Render every fragment for ``spec`` and assemble the final document.

    Any render or filesystem failure aborts the run; a fragment that has gone
    missing by assembly time is only reported.
    """
    context = render_context or RenderContext.create()
    writer = HTMLWriter(config, config.title, context)

    write_document(spec, writer)
    fragment_count = len(writer.toc.files())
    logger.info(f"Wrote {fragment_count} fragments to {config.includes_dir}")
    if log_info:
        log_info(f"Wrote {fragment_count} fragments to {config.includes_dir}")

    missing: list[str] = []
    output_path = writer.finalize(missing)
    if missing and log_warning:
        log_warning(
            f"{len(missing)} fragment(s) were missing and left out of the document: "
            + ", ".join(missing)
        )

    return GenerationResult(
        output_path=output_path,
        fragment_count=fragment_count,
        missing_fragments=missing,
    )
