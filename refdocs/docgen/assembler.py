"""Assemble staged fragments into the final reference document.

The TOC's pre-order traversal is the document order. Fragments that cannot
be read are reported and skipped so one missing section does not block the
rest of the reference.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from markupsafe import Markup

from refdocs.docgen.toc import TOC

if TYPE_CHECKING:
    from refdocs.core.config.docs_config import DocsConfig
    from refdocs.docgen.rendering import RenderContext

INDEX_FILE = "index.html"


def collect_content(
    toc: TOC, includes_dir: Path, missing: list[str] | None = None
) -> str:
    """Concatenate every fragment referenced by ``toc`` in document order.

    Entries without a file are outline-only and contribute nothing. Names of
    fragments that could not be read are appended to ``missing`` when given.
    """
    parts: list[str] = []
    for item in toc.walk():
        if not item.file:
            continue
        path = includes_dir / item.file
        try:
            parts.append(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Collecting {item.file}... unreadable ({e})")
            if missing is not None:
                missing.append(item.file)
            continue
        logger.debug(f"Collecting {item.file}... OK")
    return "".join(parts)


def assemble(
    toc: TOC,
    config: DocsConfig,
    render_context: RenderContext,
    missing: list[str] | None = None,
) -> Path:
    """Write ``index.html`` with the navigation tree and all collected fragments.

    Returns:
        Path of the written document

    Raises:
        OSError: If the build directory or output file cannot be written
        TemplateRenderError: If the navigation shell fails to render
    """
    config.build_dir.mkdir(parents=True, exist_ok=True)

    content = collect_content(toc, config.includes_dir, missing)
    document = render_context.render(
        INDEX_FILE,
        {
            "toc": toc,
            "config": config,
            "spec_link": config.spec_link,
            "content": Markup(content),
        },
    )

    output_path = config.build_dir / INDEX_FILE
    output_path.write_text(document, encoding="utf-8")
    logger.info(f"Wrote {output_path}")
    return output_path
