"""Table of contents built while fragments are written.

The TOC records, for every fragment, where it lives and where it sits in the
final document. Top-level sections are opened in call order and never
re-sorted; the most recently opened one is the default parent for children.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from markupsafe import Markup

from refdocs.core.exceptions import (
    DuplicateAnchorError,
    FragmentCollisionError,
    TOCCursorError,
)


class TOCItemKind(Enum):
    SECTION = "section"
    CATEGORY = "category"
    RESOURCE = "resource"
    OPERATION = "operation"
    DEFINITION = "definition"
    OPERATION_CATEGORY = "operation_category"
    OPERATION_ENTRY = "operation_entry"


@dataclass
class TOCItem:
    """One entry in the table of contents.

    Attributes:
        level: Nesting level, 1 for top-level sections
        title: Display title, may carry markup
        link: Anchor, unique within the document
        file: Fragment file name; empty for outline-only entries
        kind: What kind of entity the entry describes
        sub_sections: Children in attach order
    """

    level: int
    title: Markup
    link: str
    file: str = ""
    kind: TOCItemKind = TOCItemKind.SECTION
    sub_sections: list[TOCItem] = field(default_factory=list)

    @property
    def in_nav(self) -> bool:
        # Definitions are collected but would swamp the navigation tree.
        return self.kind is not TOCItemKind.DEFINITION

    @property
    def nav_children(self) -> list[TOCItem]:
        return [item for item in self.sub_sections if item.in_nav]

    def add_child(self, item: TOCItem) -> TOCItem:
        self.sub_sections.append(item)
        return item

    def walk(self) -> Iterator[TOCItem]:
        """Yield this item and all descendants depth-first, pre-order."""
        yield self
        for child in self.sub_sections:
            yield from child.walk()


@dataclass
class TOC:
    """Document root: title plus top-level sections in the order opened.

    File names and anchors are tracked for the whole document; claiming one
    twice raises instead of silently producing a broken page.
    """

    title: str
    sections: list[TOCItem] = field(default_factory=list)
    _current: TOCItem | None = field(default=None, init=False, repr=False)
    _files: set[str] = field(default_factory=set, init=False, repr=False)
    _links: set[str] = field(default_factory=set, init=False, repr=False)
    _members: set[int] = field(default_factory=set, init=False, repr=False)

    @property
    def current(self) -> TOCItem | None:
        """The most recently opened top-level section."""
        return self._current

    def open_section(self, item: TOCItem) -> TOCItem:
        """Append a top-level section and make it the default parent."""
        self.check_available(item)
        self._register(item)
        self.sections.append(item)
        self._current = item
        return item

    def resolve_parent(self, parent: TOCItem | None = None) -> TOCItem:
        """Return ``parent`` or, when omitted, the current section.

        Raises:
            TOCCursorError: If no parent is given and no section is open, or
                if ``parent`` was never added to this TOC
        """
        if parent is not None:
            if id(parent) not in self._members:
                raise TOCCursorError(
                    f"Parent entry '{parent.link}' is not part of this table of contents"
                )
            return parent
        if self._current is None:
            raise TOCCursorError(
                "Cannot attach a child entry: no top-level section is open"
            )
        return self._current

    def attach(self, item: TOCItem, parent: TOCItem | None = None) -> TOCItem:
        """Attach ``item`` (with any outline children) under a parent."""
        target = self.resolve_parent(parent)
        self.check_available(item)
        self._register(item)
        return target.add_child(item)

    def check_available(self, item: TOCItem) -> None:
        """Fail if ``item`` or its subtree reuses a claimed file or anchor.

        Raises:
            FragmentCollisionError: On a duplicate fragment file name
            DuplicateAnchorError: On a duplicate anchor
        """
        files: set[str] = set()
        links: set[str] = set()
        for node in item.walk():
            if node.file and (node.file in self._files or node.file in files):
                raise FragmentCollisionError(
                    f"Fragment file '{node.file}' is already used by another entry"
                )
            if node.link in self._links or node.link in links:
                raise DuplicateAnchorError(
                    f"Anchor '{node.link}' is already used by another entry"
                )
            if node.file:
                files.add(node.file)
            links.add(node.link)

    def walk(self) -> Iterator[TOCItem]:
        """Yield every item depth-first, pre-order, at any depth."""
        for section in self.sections:
            yield from section.walk()

    def files(self) -> list[str]:
        """Fragment file names in document order."""
        return [item.file for item in self.walk() if item.file]

    @property
    def nav_sections(self) -> list[TOCItem]:
        return [item for item in self.sections if item.in_nav]

    def _register(self, item: TOCItem) -> None:
        for node in item.walk():
            self._members.add(id(node))
            if node.file:
                self._files.add(node.file)
            self._links.add(node.link)
