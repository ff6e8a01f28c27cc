from pathlib import Path

from markupsafe import Markup

from refdocs.docgen.assembler import INDEX_FILE, assemble, collect_content
from refdocs.docgen.html_writer import HTMLWriter
from refdocs.docgen.models import Resource
from refdocs.docgen.toc import TOC, TOCItem, TOCItemKind
from tests.helpers.spec_factory import make_definition


def _stage(includes_dir: Path, files: dict[str, str]) -> None:
    includes_dir.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (includes_dir / name).write_text(content, encoding="utf-8")


def _item(level: int, link: str, file: str = "", kind=TOCItemKind.SECTION) -> TOCItem:
    return TOCItem(level=level, title=Markup(link), link=link, file=file, kind=kind)


def test_collect_content_follows_document_order(tmp_path: Path) -> None:
    toc = TOC(title="Docs")
    toc.open_section(_item(1, "s1", "_s1.html"))
    toc.attach(_item(2, "c1", "_c1.html"))
    toc.open_section(_item(1, "s2", "_s2.html"))
    toc.attach(_item(2, "c2", "_c2.html"))
    _stage(tmp_path, {f"_{n}.html": f"[{n}]" for n in ["s1", "c1", "s2", "c2"]})

    assert collect_content(toc, tmp_path) == "[s1][c1][s2][c2]"


def test_collect_content_recurses_past_two_levels(tmp_path: Path) -> None:
    toc = TOC(title="Docs")
    toc.open_section(_item(1, "s1", "_s1.html"))
    deep = _item(2, "c1", "_c1.html")
    deep.add_child(_item(3, "g1", "_g1.html")).add_child(_item(4, "gg1", "_gg1.html"))
    toc.attach(deep)
    _stage(tmp_path, {f"_{n}.html": f"[{n}]" for n in ["s1", "c1", "g1", "gg1"]})

    assert collect_content(toc, tmp_path) == "[s1][c1][g1][gg1]"


def test_outline_entries_contribute_nothing(tmp_path: Path) -> None:
    toc = TOC(title="Docs")
    toc.open_section(_item(1, "s1", "_s1.html"))
    resource = _item(2, "pod", "_pod.html")
    resource.add_child(_item(3, "read-pod"))
    toc.attach(resource)
    _stage(tmp_path, {"_s1.html": "[s1]", "_pod.html": "[pod]"})

    assert collect_content(toc, tmp_path) == "[s1][pod]"


def test_missing_fragment_is_reported_and_skipped(tmp_path: Path, log_messages) -> None:
    toc = TOC(title="Docs")
    toc.open_section(_item(1, "s1", "_s1.html"))
    toc.attach(_item(2, "gone", "_gone.html"))
    toc.attach(_item(2, "c2", "_c2.html"))
    _stage(tmp_path, {"_s1.html": "[s1]", "_c2.html": "[c2]"})
    missing: list[str] = []

    content = collect_content(toc, tmp_path, missing)

    assert content == "[s1][c2]"
    assert missing == ["_gone.html"]
    assert any("Collecting _gone.html... unreadable" in m for m in log_messages)


def test_assemble_writes_index_with_navigation(docs_config, render_context) -> None:
    writer = HTMLWriter(docs_config, docs_config.title, render_context)
    writer.write_overview()
    writer.write_resource_category("Workloads APIs", "workloads")
    writer.write_resource(Resource(name="Pod", definition=make_definition("Pod")))
    writer.write_definitions_overview()
    writer.write_definition(make_definition("PodSpec"))

    output = assemble(writer.toc, docs_config, render_context)

    assert output == docs_config.build_dir / INDEX_FILE
    html = output.read_text(encoding="utf-8")
    assert "<title>Test API Reference</title>" in html
    assert "release-1.29/api/openapi-spec/swagger.json" in html
    assert "v1.29.0" in html

    nav, body = html.split('<main id="page-content-wrapper">')
    for link in ["api-overview", "workloads-apis", "pod-v1-core", "definitions"]:
        assert f'href="#{link}"' in nav
    # definitions are in the body but not in the navigation
    assert 'href="#podspec-v1-core"' not in nav
    assert 'id="podspec-v1-core"' in body
    assert body.index('id="api-overview"') < body.index('id="pod-v1-core"') < body.index(
        'id="podspec-v1-core"'
    )


def test_assemble_nests_navigation(docs_config, render_context) -> None:
    writer = HTMLWriter(docs_config, docs_config.title, render_context)
    writer.write_resource_category("Workloads APIs", "workloads")
    writer.write_resource(Resource(name="Pod", definition=make_definition("Pod")))

    html = assemble(writer.toc, docs_config, render_context).read_text(encoding="utf-8")

    nav = html.split('<main id="page-content-wrapper">')[0]
    category = nav.index('href="#workloads-apis"')
    resource = nav.index('href="#pod-v1-core"')
    assert category < nav.index("<ul>", category) < resource
    assert '<span class="k">Pod</span>' in nav


def test_assemble_survives_deleted_fragment(docs_config, render_context, log_messages) -> None:
    writer = HTMLWriter(docs_config, docs_config.title, render_context)
    writer.write_overview()
    writer.write_definitions_overview()
    item = writer.write_definition(make_definition("PodSpec"))
    (docs_config.includes_dir / item.file).unlink()
    missing: list[str] = []

    html = writer.finalize(missing).read_text(encoding="utf-8")

    assert missing == [item.file]
    assert 'id="api-overview"' in html
    assert 'id="podspec-v1-core"' not in html
    assert any(item.file in m for m in log_messages)


def test_undecodable_fragment_is_reported_and_skipped(
    docs_config, render_context, log_messages
) -> None:
    writer = HTMLWriter(docs_config, docs_config.title, render_context)
    writer.write_overview()
    writer.write_definitions_overview()
    item = writer.write_definition(make_definition("PodSpec"))
    (docs_config.includes_dir / item.file).write_bytes(b"\xff\xfe\x80")
    missing: list[str] = []

    html = writer.finalize(missing).read_text(encoding="utf-8")

    assert missing == [item.file]
    assert 'id="api-overview"' in html
    assert any(f"Collecting {item.file}... unreadable" in m for m in log_messages)
