"""Leaf page elements: paragraphs, horizontal rules and templates."""

from __future__ import annotations

import html
from typing import Optional, Union

from .element import ChildElements, HtmlLiteral, PageElement, Tooltip


class Paragraph(ChildElements, Tooltip, PageElement):
    """A ``<p>`` element.

    String content is escaped and wrapped in an ``HtmlLiteral`` child; element
    content is added as the first child.
    """

    def __init__(
        self, content: Union[str, PageElement, None] = None, id: Optional[str] = None
    ) -> None:
        super().__init__(id)
        self._children = []
        if content is not None:
            if isinstance(content, str):
                content = HtmlLiteral(html.escape(content))
            self.add_child(content)

    def emit_paragraph_start(self) -> str:
        return f"<p{self.emit_attributes()}>"

    def emit_paragraph_end(self) -> str:
        return "</p>"

    def render(self) -> str:
        return (
            self.emit_paragraph_start()
            + self.emit_child_elements()
            + self.emit_paragraph_end()
        )


class Template(ChildElements, Tooltip, PageElement):
    """A ``<template>`` element holding inert markup for client-side use."""

    def __init__(self, id: Optional[str] = None) -> None:
        super().__init__(id)
        self._children = []

    def emit_section_start(self) -> str:
        return f"<template{self.emit_attributes()}>"

    def emit_section_end(self) -> str:
        return "</template>"

    def render(self) -> str:
        return self.emit_section_start() + self.emit_child_elements() + self.emit_section_end()


class HorizontalRule(PageElement):
    def render(self) -> str:
        return f"<hr{self.emit_attributes()} />"


__all__ = ["HorizontalRule", "Paragraph", "Template"]
