"""Pydantic models for YAML page descriptions."""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .assets import Script, Stylesheet
from .element import HtmlLiteral, PageElement
from .elements import HorizontalRule, Paragraph, Template
from .errors import ConfigurationError
from .page import Page
from .settings import Application, SettingsStore, Translator
from .text_edit import InlineTextEdit, TextEditType


class BlockBase(BaseModel):
    id: Optional[str] = Field(None, description="Element id attribute.")
    classes: List[str] = Field(default_factory=list, description="Class names, in order.")

    model_config = ConfigDict(populate_by_name=True)

    def _apply_common(self, element: PageElement) -> PageElement:
        element.set_class_names(self.classes)
        return element


class ParagraphBlock(BlockBase):
    """Paragraph of plain text (escaped when rendered)."""

    kind: Literal["paragraph"] = "paragraph"
    text: str = Field(..., description="Paragraph text.")
    tooltip: Optional[str] = Field(None, description="Tooltip shown on hover.")

    def to_element(self) -> PageElement:
        paragraph = Paragraph(self.text, self.id)
        paragraph.set_tooltip(self.tooltip)
        return self._apply_common(paragraph)


class RuleBlock(BlockBase):
    """Horizontal rule."""

    kind: Literal["rule"] = "rule"

    def to_element(self) -> PageElement:
        return self._apply_common(HorizontalRule(self.id))


class TemplateBlock(BlockBase):
    """Inert ``<template>`` markup for client-side scripts."""

    kind: Literal["template"] = "template"
    html: str = Field("", description="Trusted HTML placed inside the template.")

    def to_element(self) -> PageElement:
        template = Template(self.id)
        if self.html:
            template.add_child(HtmlLiteral(self.html))
        return self._apply_common(template)


class InlineEditBlock(BlockBase):
    """Inline text editor submitting to an API function."""

    kind: Literal["inline-edit"] = "inline-edit"
    text: str = Field("", description="Current value.")
    input_type: Literal["text", "email", "url", "search"] = Field(
        "text", alias="inputType", description="Editor input type."
    )
    name: Optional[str] = Field(None, description="Form field name.")
    placeholder: Optional[str] = Field(None, description="Editor placeholder text.")
    tooltip: Optional[str] = Field(None, description="Tooltip shown on hover.")
    function: str = Field(..., description="API function called on submit.")
    param_name: Optional[str] = Field(
        None, alias="paramName", description="Parameter carrying the edited content."
    )
    params: Dict[str, str] = Field(
        default_factory=dict, description="Additional fixed API parameters."
    )

    def to_element(self) -> PageElement:
        edit = InlineTextEdit(TextEditType(self.input_type), self.id)
        edit.set_text(self.text)
        edit.set_name(self.name)
        edit.set_placeholder(self.placeholder)
        edit.set_tooltip(self.tooltip)
        if not edit.set_submit_endpoint(self.function, self.param_name, self.params):
            raise ConfigurationError(f"invalid submit endpoint for inline edit '{self.id}'")
        return self._apply_common(edit)


Block = Annotated[
    Union[ParagraphBlock, RuleBlock, TemplateBlock, InlineEditBlock],
    Field(discriminator="kind"),
]


class PageDocument(BaseModel):
    """Schema for a page description file."""

    title: str = Field(..., description="Document title.")
    uid: str = Field("app", description="Prefix for the section ids.")
    stylesheets: List[Stylesheet] = Field(
        default_factory=list, description="Stylesheets, in emission order."
    )
    scripts: List[Script] = Field(default_factory=list, description="Scripts, in emission order.")
    main: List[Block] = Field(default_factory=list, description="Main section content.")
    menubar: List[Block] = Field(default_factory=list, description="Menu bar content.")
    navbar: List[Block] = Field(default_factory=list, description="Navigation content.")

    model_config = ConfigDict(populate_by_name=True)

    def build(
        self,
        settings: Optional[SettingsStore] = None,
        translator: Optional[Translator] = None,
    ) -> Page:
        """Create a Page holding the described content and assets."""

        app = Application(
            title=self.title, uid=self.uid, settings=settings, translator=translator
        )
        page = Page(app)
        for section in ("main", "menubar", "navbar"):
            for block in getattr(self, section):
                page.add_element_to_section(section, block.to_element())
        for sheet in self.stylesheets:
            if sheet.kind == "url":
                page.add_stylesheet_url(sheet.url, sheet.mimetype)
            else:
                page.add_css(sheet.css)
        for script in self.scripts:
            if script.kind == "url":
                page.add_script_url(script.url, script.mimetype, script.flags)
            else:
                page.add_javascript(script.source, script.flags)
        return page


__all__ = [
    "Block",
    "InlineEditBlock",
    "PageDocument",
    "ParagraphBlock",
    "RuleBlock",
    "TemplateBlock",
]
