import io
import logging

from bs4 import BeautifulSoup

from pagekit.assets import ScriptFlags
from pagekit.element import PageElement
from pagekit.elements import HorizontalRule, Paragraph
from pagekit.page import Page, current_page
from pagekit.settings import Application, DictSettings
from pagekit.text_edit import InlineTextEdit


def _page(settings=None, title="Demo") -> Page:
    return Page(Application(title=title, uid="demo", settings=settings))


def test_document_skeleton_without_settings():
    page = _page(title="Demo")

    assert page.render() == (
        "<!DOCTYPE html>\n"
        "<html><head><title>Demo</title></head><body>"
        '<header><p>Demo</p></header><section id="app-main-container">\n'
        '<div id="demo-main"><div id="demo-menubar"></div></div>\n'
        '<div id="demo-navbar"></div>'
        "</section><footer></footer>\n"
        "</body></html>"
    )


def test_paragraph_in_main_is_escaped_and_wrapped():
    page = _page()
    page.add_main_element(Paragraph("A & B", "para"))

    document = page.render()

    assert '<p id="para">A &amp; B</p>' in document
    soup = BeautifulSoup(document, "html.parser")
    main = soup.find(id="demo-main")
    assert main.find("p", id="para").get_text() == "A & B"
    assert main.find(id="demo-menubar") is not None


def test_title_is_escaped():
    document = _page(title="<Tom & Jerry>").render()

    assert "<title>&lt;Tom &amp; Jerry&gt;</title>" in document


def test_sections_can_be_disabled():
    settings = DictSettings({"page.main.enabled": False, "page.navbar.enabled": "false"})
    page = _page(settings)
    page.add_main_element(Paragraph("hidden"))

    document = page.render()

    assert "demo-main" not in document
    assert "demo-navbar" not in document
    assert '<section id="app-main-container"></section>' in document


def test_navbar_follows_main():
    page = _page()
    page.add_navbar_element(HorizontalRule("nav-rule"))
    page.add_main_element(Paragraph("body"))

    document = page.render()

    assert document.index("demo-main") < document.index("nav-rule")


def test_fragments_are_inserted_verbatim():
    settings = DictSettings(
        {
            "page.head.content": '<meta name="robots" content="none">',
            "page.body.head.content": "<main>",
            "page.body.tail.content": "</main>",
        }
    )

    document = _page(settings).render()

    assert '<title>Demo</title><meta name="robots" content="none"></head>' in document
    assert "<body><main>\n" in document
    assert '<div id="demo-navbar"></div></main>\n</body></html>' in document


def test_duplicate_stylesheet_url_yields_one_link(caplog):
    page = _page()
    page.add_stylesheet_url("css/site.css")
    page.add_css(".a > .b { color: red; }")
    page.add_stylesheet_url("css/site.css")

    with caplog.at_level(logging.WARNING):
        document = page.render()

    soup = BeautifulSoup(document, "html.parser")
    links = soup.head.find_all("link", rel="stylesheet")
    assert [link["href"] for link in links] == ["css/site.css"]
    assert soup.head.find("style").get_text().strip() == ".a > .b { color: red; }"
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1


def test_stylesheets_precede_scripts_in_registration_order():
    page = _page()
    page.add_javascript("boot();", ScriptFlags.DEFER)
    page.add_script_url("js/a.js", flags=ScriptFlags.ASYNC)
    page.add_stylesheet_url("css/b.css")
    page.add_script_url("js/a.js")

    head = page.render().split("</head>")[0]

    assert head.index("css/b.css") < head.index("boot();") < head.index("js/a.js")
    assert head.count('src="js/a.js"') == 1
    assert '<script type="text/javascript" src="js/a.js" async="async"></script>' in head
    assert '<script type="text/javascript" defer="defer">\nboot();\n</script>' in head


class _RegistersAssets(PageElement):
    def render(self) -> str:
        page = current_page()
        page.add_stylesheet_url("css/late.css")
        return "<span>late</span>"


def test_elements_can_register_assets_while_rendering():
    page = _page()
    page.add_main_element(_RegistersAssets())

    document = page.render()

    assert 'href="css/late.css"' in document.split("</head>")[0]
    assert current_page() is None


def test_inline_edit_registers_runtime_script_once():
    page = _page()
    for _ in range(2):
        edit = InlineTextEdit()
        edit.set_submit_endpoint("note/save")
        page.add_main_element(edit)

    first = page.render()
    second = page.render()

    assert first.count('src="js/InlineTextEdit.js"') == 1
    assert second.count('src="js/InlineTextEdit.js"') == 1
    assert len(page.scripts()) == 1


def test_render_reflects_mutation_between_calls():
    page = _page()
    first = page.render()
    page.add_main_element(Paragraph("more"))

    assert page.render() != first
    assert page.html() == page.render()


def test_output_writes_document_to_stream():
    page = _page()
    stream = io.StringIO()

    page.output(stream)

    assert stream.getvalue() == page.render()
