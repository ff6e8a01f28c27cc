from refdocs.core.exceptions.docgen import (
    DocGenError,
    DuplicateAnchorError,
    FragmentCollisionError,
    SpecModelError,
    TemplateRenderError,
    TemplateSetupError,
    TOCCursorError,
)

__all__ = [
    "DocGenError",
    "DuplicateAnchorError",
    "FragmentCollisionError",
    "SpecModelError",
    "TemplateRenderError",
    "TemplateSetupError",
    "TOCCursorError",
]
