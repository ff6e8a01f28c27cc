"""Anchor, file-name and badge helpers shared by the fragment writer.

All functions are pure: the same input always yields the same output, and
anchors are derived from the full name/version/group composite so that
identically named kinds in different groups or versions never share one.
"""

from __future__ import annotations

import re
from hashlib import sha256
from typing import TYPE_CHECKING

from markupsafe import Markup, escape

if TYPE_CHECKING:
    from refdocs.docgen.models import Definition, Operation

OVERVIEW_FILE = "_overview.html"
API_GROUPS_FILE = "_api_groups.html"
DEFINITIONS_FILE = "_definitions.html"
OPERATIONS_FILE = "_operations.html"
OLD_VERSIONS_FILE = "_oldversions.html"

SPEC_LINK_TEMPLATE = (
    "https://github.com/kubernetes/kubernetes/blob/{release}/api/openapi-spec/swagger.json"
)

_UNSAFE_RUN = re.compile(r"[^a-z0-9_-]+")
# Words joined by single spaces or dots; slugging these only folds case.
_PLAIN_COMPOSITE = re.compile(r"[A-Za-z0-9]+(?:[ .][A-Za-z0-9]+)*")


def make_anchor(composite: str) -> str:
    """Turn a "name version group" composite into a URL-fragment-safe anchor.

    Plain composites map to a readable slug. Any other input, such as one
    with a literal hyphen, also gets a short digest of the original text so
    "a.b" and "a-b" groups never share an anchor. Slugs map to themselves.

    >>> make_anchor("Pod v1 Core")
    'pod-v1-core'
    >>> make_anchor("Role v1 rbac.authorization.k8s.io")
    'role-v1-rbac-authorization-k8s-io'
    """
    slug = _UNSAFE_RUN.sub("-", composite.lower()).strip("-")
    if slug == composite or _PLAIN_COMPOSITE.fullmatch(composite):
        return slug
    digest = sha256(composite.encode("utf-8")).hexdigest()[:8]
    return f"{slug}-{digest}" if slug else digest


def section_link(title: str) -> str:
    """Anchor for a category heading ("Workloads APIs" -> "workloads-apis")."""
    return title.lower().replace(" ", "-")


def gvk_markup(group: str, version: str, kind: str) -> Markup:
    """Render the kind/version/group badge used as a rich TOC title.

    Falls back to a plain escaped label when any part is missing.
    """
    if not (group and version and kind):
        label = kind or version or group
        return escape(label)
    return Markup(
        '<span class="gvk"><span class="k">{}</span> '
        '<span class="v">{}</span> <span class="g">{}</span></span>'
    ).format(kind, version, group)


def definition_file_name(definition: Definition) -> str:
    return f"_{make_anchor(definition.composite())}_definition.html"


def concept_file_name(definition: Definition) -> str:
    """File name for the resource ("concept") fragment of a definition."""
    return f"_{make_anchor(definition.composite())}_concept.html"


def operation_file_name(operation: Operation) -> str:
    return f"_{make_anchor(operation.id)}_operation.html"


def category_file_name(include: str) -> str:
    return f"_{include}.html"


def release_tag(spec_version: str) -> str:
    """Derive the release branch from a spec version ("v1.29.3" -> "release-1.29")."""
    pos = spec_version.rfind(".")
    if pos < 1:
        raise ValueError(f"Cannot derive a release from spec version '{spec_version}'")
    return f"release-{spec_version[1:pos]}"


def spec_link(spec_version: str) -> str:
    return SPEC_LINK_TEMPLATE.format(release=release_tag(spec_version))
