"""Stylesheet and script descriptors and their head markup."""

from __future__ import annotations

import html
import logging
from enum import IntFlag
from typing import Annotated, Any, Iterable, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .io_utils import warn

logger = logging.getLogger(__name__)


class ScriptFlags(IntFlag):
    """Loading flags for ``<script>`` elements."""

    NONE = 0
    DEFER = 1
    ASYNC = 2


DEFAULT_SCRIPT_FLAGS = ScriptFlags.NONE


class StylesheetUrl(BaseModel):
    """Stylesheet referenced by URL."""

    kind: Literal["url"] = "url"
    url: str = Field(..., description="Stylesheet href, emitted verbatim (escaped).")
    mimetype: str = Field("text/css", description="Value of the link type attribute.")

    model_config = ConfigDict(frozen=True)


class InlineStylesheet(BaseModel):
    """Stylesheet supplied as CSS source."""

    kind: Literal["css"] = "css"
    css: str = Field(..., description="CSS source placed in a <style> block.")

    model_config = ConfigDict(frozen=True)


Stylesheet = Annotated[
    Union[StylesheetUrl, InlineStylesheet],
    Field(discriminator="kind"),
]


def _coerce_flags(value: Any) -> ScriptFlags:
    # Anything that is not an integer falls back to the default flags.
    if isinstance(value, bool) or not isinstance(value, int):
        return DEFAULT_SCRIPT_FLAGS
    return ScriptFlags(value)


class ScriptUrl(BaseModel):
    """Script referenced by URL."""

    kind: Literal["url"] = "url"
    url: str = Field(..., description="Script src, emitted verbatim (escaped).")
    mimetype: str = Field("text/javascript", description="Value of the script type attribute.")
    flags: int = Field(DEFAULT_SCRIPT_FLAGS, description="ScriptFlags bitset.")

    model_config = ConfigDict(frozen=True)

    @field_validator("flags", mode="before")
    @classmethod
    def _validate_flags(cls, value: Any) -> int:
        return int(_coerce_flags(value))


class InlineScript(BaseModel):
    """Script supplied as JavaScript source."""

    kind: Literal["inline"] = "inline"
    source: str = Field(..., description="JavaScript source placed in a <script> block.")
    flags: int = Field(DEFAULT_SCRIPT_FLAGS, description="ScriptFlags bitset.")

    model_config = ConfigDict(frozen=True)

    @field_validator("flags", mode="before")
    @classmethod
    def _validate_flags(cls, value: Any) -> int:
        return int(_coerce_flags(value))


Script = Annotated[
    Union[ScriptUrl, InlineScript],
    Field(discriminator="kind"),
]


def _script_flag_attributes(flags: int) -> str:
    attrs = ""
    if flags & ScriptFlags.DEFER:
        attrs += ' defer="defer"'
    if flags & ScriptFlags.ASYNC:
        attrs += ' async="async"'
    return attrs


def emit_stylesheets(sheets: Iterable[Union[StylesheetUrl, InlineStylesheet]]) -> str:
    """Render stylesheet markup in registration order.

    URL entries are deduplicated by exact URL; the first occurrence wins and
    each later duplicate is reported as a warning. Inline CSS is always kept.
    """

    seen_urls: set[str] = set()
    parts: List[str] = []
    for sheet in sheets:
        if isinstance(sheet, StylesheetUrl):
            if sheet.url in seen_urls:
                warn(f'ignoring duplicate stylesheet URL "{sheet.url}"', log=logger)
                continue
            seen_urls.add(sheet.url)
            parts.append(
                f'<link rel="stylesheet" type="{html.escape(sheet.mimetype)}"'
                f' href="{html.escape(sheet.url)}" />\n'
            )
        else:
            parts.append(f'<style type="text/css">\n{sheet.css}\n</style>\n')
    return "".join(parts)


def emit_scripts(scripts: Iterable[Union[ScriptUrl, InlineScript]]) -> str:
    """Render script markup in registration order, deduplicating URLs."""

    seen_urls: set[str] = set()
    parts: List[str] = []
    for script in scripts:
        attrs = _script_flag_attributes(script.flags)
        if isinstance(script, ScriptUrl):
            if script.url in seen_urls:
                warn(f'ignoring duplicate script URL "{script.url}"', log=logger)
                continue
            seen_urls.add(script.url)
            parts.append(
                f'<script type="{html.escape(script.mimetype)}"'
                f' src="{html.escape(script.url)}"{attrs}></script>\n'
            )
        else:
            parts.append(f'<script type="text/javascript"{attrs}>\n{script.source}\n</script>\n')
    return "".join(parts)


__all__ = [
    "DEFAULT_SCRIPT_FLAGS",
    "InlineScript",
    "InlineStylesheet",
    "Script",
    "ScriptFlags",
    "ScriptUrl",
    "Stylesheet",
    "StylesheetUrl",
    "emit_scripts",
    "emit_stylesheets",
]
