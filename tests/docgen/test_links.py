import re

import pytest
from markupsafe import Markup

from refdocs.docgen import links
from refdocs.docgen.models import Definition, Operation, OperationType


def test_make_anchor_distinguishes_groups() -> None:
    assert links.make_anchor("Pod v1 Core") == "pod-v1-core"
    assert links.make_anchor("Pod v1 Apps") == "pod-v1-apps"


def test_make_anchor_replaces_dots_in_full_group_names() -> None:
    assert (
        links.make_anchor("Role v1 rbac.authorization.k8s.io")
        == "role-v1-rbac-authorization-k8s-io"
    )


def test_make_anchor_is_idempotent() -> None:
    anchor = links.make_anchor("Deployment v1 Apps")
    assert links.make_anchor(anchor) == anchor
    assert links.make_anchor("Deployment v1 Apps") == anchor


def test_make_anchor_is_url_fragment_safe() -> None:
    anchor = links.make_anchor("  Weird <Name> / v1 & Group  ")
    assert re.fullmatch(r"weird-name-v1-group-[0-9a-f]{8}", anchor)
    assert links.make_anchor(anchor) == anchor


def test_make_anchor_keeps_hyphen_and_dot_groups_apart() -> None:
    dotted = links.make_anchor("Foo v1 a.b")
    hyphenated = links.make_anchor("Foo v1 a-b")

    assert dotted == "foo-v1-a-b"
    assert hyphenated.startswith("foo-v1-a-b-")
    assert dotted != hyphenated
    assert links.make_anchor("Foo v1 a-b") == hyphenated


def test_distinct_definitions_get_distinct_anchors() -> None:
    definitions = [
        Definition(name="Pod", version="v1", group="core"),
        Definition(name="Pod", version="v1", group="apps"),
        Definition(name="Pod", version="v1beta1", group="core"),
        Definition(name="Pods", version="v1", group="core"),
    ]
    anchors = {links.make_anchor(d.composite()) for d in definitions}
    assert len(anchors) == len(definitions)


def test_gvk_markup_escapes_parts() -> None:
    badge = links.gvk_markup("apps", "v1", "<Deployment>")

    assert isinstance(badge, Markup)
    assert '<span class="k">&lt;Deployment&gt;</span>' in badge
    assert '<span class="v">v1</span>' in badge
    assert '<span class="g">apps</span>' in badge


def test_gvk_markup_falls_back_to_plain_label() -> None:
    assert links.gvk_markup("", "v1", "Pod") == Markup("Pod")
    assert links.gvk_markup("", "", "") == Markup("")
    assert "gvk" not in links.gvk_markup("apps", "", "Deployment")


def test_file_names_differ_per_entity_category() -> None:
    definition = Definition(name="Pod", version="v1", group="core")

    assert links.definition_file_name(definition) == "_pod-v1-core_definition.html"
    assert links.concept_file_name(definition) == "_pod-v1-core_concept.html"
    assert links.definition_file_name(definition) != links.concept_file_name(definition)


def test_operation_file_name_is_deterministic() -> None:
    op = Operation(id="readCoreV1NamespacedPod", type=OperationType(name="Read"))
    assert links.operation_file_name(op) == "_readcorev1namespacedpod_operation.html"
    assert links.operation_file_name(op) == links.operation_file_name(op)


def test_section_link() -> None:
    assert links.section_link("Workloads APIs") == "workloads-apis"


@pytest.mark.parametrize(
    ("version", "release"),
    [
        ("v1.29.0", "release-1.29"),
        ("v1.8.15", "release-1.8"),
        ("v2.0", "release-2"),
    ],
)
def test_release_tag(version: str, release: str) -> None:
    assert links.release_tag(version) == release


def test_release_tag_rejects_version_without_dot() -> None:
    with pytest.raises(ValueError):
        links.release_tag("v129")


def test_spec_link_points_at_release_branch() -> None:
    assert links.spec_link("v1.29.0") == (
        "https://github.com/kubernetes/kubernetes/blob/release-1.29"
        "/api/openapi-spec/swagger.json"
    )
