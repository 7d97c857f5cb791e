import logging

from pagekit.element import Division
from pagekit.elements import HorizontalRule, Paragraph
from pagekit.page import Page
from pagekit.settings import Application


def _page() -> Page:
    return Page(Application(title="Demo", uid="demo"))


def test_sections_exist_with_uid_prefixed_ids():
    page = _page()

    assert page.main_section().id() == "demo-main"
    assert page.menu_bar().id() == "demo-menubar"
    assert page.navbar().id() == "demo-navbar"
    assert all(isinstance(s, Division) for s in (page.main_section(), page.menu_bar(), page.navbar()))


def test_menubar_is_nested_first_in_main():
    page = _page()

    assert page.main_section().children() == (page.menu_bar(),)


def test_add_element_to_section_appends():
    page = _page()
    rule = HorizontalRule()

    assert page.add_element_to_section("navbar", rule) is True
    assert page.add_main_element(Paragraph("x")) is True
    assert page.add_menubar_element(Paragraph("menu")) is True

    assert page.navbar().children() == (rule,)
    assert len(page.main_section().children()) == 2
    assert len(page.menu_bar().children()) == 1


def test_add_element_rejects_invalid_element(caplog):
    page = _page()

    with caplog.at_level(logging.ERROR):
        assert page.add_element_to_section("main", "<p>raw</p>") is False

    assert page.main_section().children() == (page.menu_bar(),)
    assert any("invalid page element" in r.getMessage() for r in caplog.records)


def test_add_element_rejects_unknown_section(caplog):
    page = _page()

    with caplog.at_level(logging.ERROR):
        assert page.add_element_to_section("footer", HorizontalRule()) is False

    assert any("footer" in r.getMessage() for r in caplog.records)


def test_section_handles_allow_direct_mutation():
    page = _page()
    page.navbar().add_class_name("top-nav")

    assert 'class="top-nav"' in page.render()


def test_asset_registration_validates_input(caplog):
    page = _page()

    with caplog.at_level(logging.ERROR):
        assert page.add_stylesheet_url(None) is False
        assert page.add_stylesheet_url("a.css", mimetype=None) is False
        assert page.add_css(12) is False
        assert page.add_script_url(None) is False
        assert page.add_javascript(None) is False

    assert page.stylesheets() == ()
    assert page.scripts() == ()
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 5


def test_asset_registration_keeps_order():
    page = _page()

    assert page.add_stylesheet_url("a.css") is True
    assert page.add_css("p {}") is True
    assert page.add_script_url("a.js", flags=1) is True
    assert page.add_javascript("go()") is True

    assert [s.kind for s in page.stylesheets()] == ["url", "css"]
    assert [s.kind for s in page.scripts()] == ["url", "inline"]
    assert page.has_script_url("a.js")
    assert not page.has_script_url("b.js")
