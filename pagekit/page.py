"""The application page: sections, head/body fragments and asset injection."""

from __future__ import annotations

import html
import logging
import sys
from contextvars import ContextVar
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Tuple, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup
from pydantic import BaseModel, ValidationError

from .assets import (
    DEFAULT_SCRIPT_FLAGS,
    InlineScript,
    InlineStylesheet,
    ScriptUrl,
    StylesheetUrl,
    emit_scripts,
    emit_stylesheets,
)
from .element import Division, PageElement
from .errors import ConfigurationError, InvalidElementError, InvalidSectionError
from .io_utils import error, read_text, warn
from .settings import Application, setting_enabled

logger = logging.getLogger(__name__)

SECTION_NAMES = ("main", "menubar", "navbar")

DEFAULT_BODY_TAIL = "</section><footer></footer>"

_current_page: ContextVar[Optional["Page"]] = ContextVar("pagekit_current_page", default=None)


def current_page() -> Optional["Page"]:
    """Return the page whose sections are being rendered, if any."""

    return _current_page.get()


@lru_cache(maxsize=1)
def document_environment() -> Environment:
    """Jinja environment holding the document skeleton template."""

    return Environment(
        loader=FileSystemLoader(Path(__file__).parent / "templates"),
        autoescape=select_autoescape(["html", "jinja"]),
        undefined=StrictUndefined,
    )


class Page:
    """The HTML document being composed for one request.

    The page is divided into three sections, each a ``Division``:

    - ``main``: the primary content. The ``menubar`` section is nested at the
      top of it for the lifetime of the page.
    - ``menubar``: page-specific menu.
    - ``navbar``: global navigation.

    Stylesheets and scripts are collected in registration order and only
    turned into head markup after the sections have been rendered, so that
    elements can still register assets while they render.
    """

    def __init__(self, app: Application) -> None:
        self.app = app
        self._sections: Dict[str, Division] = {
            name: Division(f"{app.uid}-{name}") for name in SECTION_NAMES
        }
        self._sections["main"].add_child(self._sections["menubar"])
        self._stylesheets: List[Union[StylesheetUrl, InlineStylesheet]] = []
        self._scripts: List[Union[ScriptUrl, InlineScript]] = []
        self._head_content: Optional[str] = None
        self._body_head_content: Optional[str] = None
        self._body_tail_content: Optional[str] = None

    # sections

    def main_section(self) -> Division:
        return self._sections["main"]

    def menu_bar(self) -> Division:
        return self._sections["menubar"]

    def navbar(self) -> Division:
        return self._sections["navbar"]

    def section(self, name: str) -> Division:
        if name not in self._sections:
            raise InvalidSectionError(f"unknown page section \"{name}\"")
        return self._sections[name]

    def add_element_to_section(self, section: str, element: Any) -> bool:
        """Append ``element`` to the named section.

        Returns False, after reporting the error, if ``element`` is not a page
        element or ``section`` is not one of main, menubar or navbar.
        """

        try:
            if not isinstance(element, PageElement):
                raise InvalidElementError(f"invalid page element: {element!r}")
            target = self.section(section)
        except (InvalidElementError, InvalidSectionError) as exc:
            error(exc, log=logger)
            return False
        target.add_child(element)
        return True

    def add_main_element(self, element: Any) -> bool:
        return self.add_element_to_section("main", element)

    def add_menubar_element(self, element: Any) -> bool:
        return self.add_element_to_section("menubar", element)

    def add_navbar_element(self, element: Any) -> bool:
        return self.add_element_to_section("navbar", element)

    # stylesheets and scripts

    def _register(self, target: list, model: type[BaseModel], **fields: Any) -> bool:
        try:
            descriptor = model(**fields)
        except ValidationError as exc:
            error(ConfigurationError(f"invalid {model.__name__}: {exc}"), log=logger)
            return False
        target.append(descriptor)
        return True

    def add_stylesheet_url(self, url: str, mimetype: str = "text/css") -> bool:
        return self._register(self._stylesheets, StylesheetUrl, url=url, mimetype=mimetype)

    def add_css(self, css: str) -> bool:
        return self._register(self._stylesheets, InlineStylesheet, css=css)

    def add_script_url(
        self, url: str, mimetype: str = "text/javascript", flags: int = DEFAULT_SCRIPT_FLAGS
    ) -> bool:
        return self._register(self._scripts, ScriptUrl, url=url, mimetype=mimetype, flags=flags)

    def add_javascript(self, source: str, flags: int = DEFAULT_SCRIPT_FLAGS) -> bool:
        return self._register(self._scripts, InlineScript, source=source, flags=flags)

    def stylesheets(self) -> Tuple[Union[StylesheetUrl, InlineStylesheet], ...]:
        return tuple(self._stylesheets)

    def scripts(self) -> Tuple[Union[ScriptUrl, InlineScript], ...]:
        return tuple(self._scripts)

    def has_script_url(self, url: str) -> bool:
        return any(isinstance(s, ScriptUrl) and s.url == url for s in self._scripts)

    # head and body fragments

    def head_content(self) -> str:
        if self._head_content is None:
            self._head_content = self._text_setting("page.head.content") or ""
        return self._head_content

    def body_head_content(self) -> str:
        if self._body_head_content is None:
            default = (
                f"<header><p>{html.escape(self.app.title)}</p></header>"
                '<section id="app-main-container">'
            )
            self._body_head_content = self._resolve_body_fragment("page.body.head", default)
        return self._body_head_content

    def body_tail_content(self) -> str:
        if self._body_tail_content is None:
            self._body_tail_content = self._resolve_body_fragment(
                "page.body.tail", DEFAULT_BODY_TAIL
            )
        return self._body_tail_content

    def _resolve_body_fragment(self, prefix: str, default: str) -> str:
        """Resolve a body fragment from settings.

        Tried in order: ``{prefix}.content.{locale}``, ``{prefix}.content``,
        then the files named by ``{prefix}.file.{locale}`` and
        ``{prefix}.file``. Empty values fall through; locale-qualified keys
        are skipped when no locale is active.
        """

        if self.app.settings is None:
            return default
        locale = self.app.current_locale()

        content = None
        if locale:
            content = self._text_setting(f"{prefix}.content.{locale}")
        if not content:
            content = self._text_setting(f"{prefix}.content")
        if not content:
            file_keys = [f"{prefix}.file.{locale}"] if locale else []
            file_keys.append(f"{prefix}.file")
            for key in file_keys:
                content = self._read_fragment_file(self._text_setting(key))
                if content:
                    break
        return content or default

    def _text_setting(self, key: str) -> Optional[str]:
        # nested settings can yield mappings for partial keys; only text counts
        value = self.app.setting(key)
        return value if isinstance(value, str) else None

    def _read_fragment_file(self, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        try:
            return read_text(path)
        except OSError as exc:
            warn(f"cannot read page fragment file \"{path}\": {exc}", log=logger)
            return None

    # output

    def render(self) -> str:
        """Render the complete HTML document."""

        do_main = setting_enabled(self.app.setting("page.main.enabled", True))
        do_navbar = setting_enabled(self.app.setting("page.navbar.enabled", True))

        sections: List[Markup] = []
        token = _current_page.set(self)
        try:
            if do_main:
                sections.append(Markup(self._sections["main"].render()))
            if do_navbar:
                sections.append(Markup(self._sections["navbar"].render()))
        finally:
            _current_page.reset(token)

        # all section content exists now, so every asset has been registered
        template = document_environment().get_template("document.jinja")
        return template.render(
            title=self.app.title,
            head_content=Markup(self.head_content()),
            stylesheets=Markup(emit_stylesheets(self._stylesheets)),
            scripts=Markup(emit_scripts(self._scripts)),
            body_head=Markup(self.body_head_content()),
            sections=sections,
            body_tail=Markup(self.body_tail_content()),
        )

    def html(self) -> str:
        return self.render()

    def output(self, stream: Optional[TextIO] = None) -> None:
        (stream or sys.stdout).write(self.render())


__all__ = ["Page", "SECTION_NAMES", "current_page", "document_environment"]
