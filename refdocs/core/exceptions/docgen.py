"""Document generation exceptions.

Everything raised here is fatal for a generation run. The one tolerated
partial failure (a fragment missing at assembly time) is logged, not raised.
Filesystem errors are not wrapped; ``OSError`` propagates as-is.
"""


class DocGenError(Exception):
    """Base exception for reference document generation errors."""

    pass


class TemplateSetupError(DocGenError):
    """Raised when the rendering context cannot be constructed.

    This occurs when:
    - The packaged template directory cannot be located
    - A template fails to compile
    """

    pass


class TemplateRenderError(DocGenError):
    """Raised when a template cannot be rendered.

    This occurs when:
    - The template name is unknown
    - The data passed to the template lacks a referenced attribute
    """

    def __init__(self, template_name: str, message: str):
        self.template_name = template_name
        super().__init__(f"Failed to render {template_name}: {message}")


class TOCCursorError(DocGenError):
    """Raised when a child fragment is written before any top-level section."""

    pass


class FragmentCollisionError(DocGenError):
    """Raised when two TOC entries claim the same fragment file name."""

    pass


class DuplicateAnchorError(DocGenError):
    """Raised when two TOC entries claim the same anchor link."""

    pass


class SpecModelError(DocGenError):
    """Raised when a spec model dump is missing required data."""

    pass
