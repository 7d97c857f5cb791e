"""Text entry widgets."""

from __future__ import annotations

import html
import logging
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .element import Name, PageElement, Tooltip, emit_attribute, generate_uid
from .errors import ConfigurationError
from .io_utils import error
from .page import current_page

logger = logging.getLogger(__name__)


class TextEditType(Enum):
    SINGLE_LINE = "text"
    MULTI_LINE = "textarea"
    PASSWORD = "password"
    EMAIL = "email"
    URL = "url"
    SEARCH = "search"


class TextEdit(Name, Tooltip, PageElement):
    """A text input, or a textarea for ``TextEditType.MULTI_LINE``."""

    def __init__(
        self, type: TextEditType = TextEditType.SINGLE_LINE, id: Optional[str] = None
    ) -> None:
        super().__init__(id)
        self._type = TextEditType.SINGLE_LINE
        self._text: Optional[str] = None
        self._placeholder: Optional[str] = None
        self.set_type(type)

    def type(self) -> TextEditType:
        return self._type

    def set_type(self, type: TextEditType) -> bool:
        if not isinstance(type, TextEditType):
            error(ConfigurationError(f"invalid text edit type: {type!r}"), log=logger)
            return False
        self._type = type
        return True

    def text(self) -> Optional[str]:
        return self._text

    def set_text(self, text: Optional[str]) -> None:
        self._text = text

    def placeholder(self) -> Optional[str]:
        return self._placeholder

    def set_placeholder(self, placeholder: Optional[str]) -> None:
        self._placeholder = placeholder

    def render(self) -> str:
        placeholder = emit_attribute("placeholder", self._placeholder) if self._placeholder else ""
        if self._type is TextEditType.MULTI_LINE:
            return (
                f"<textarea{self.emit_attributes()}{placeholder}>"
                f"{html.escape(self._text or '')}</textarea>"
            )
        value = emit_attribute("value", self._text) if self._text else ""
        return f'<input type="{self._type.value}"{self.emit_attributes()}{placeholder}{value} />'


_PARAMETER_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]+$")


def _is_valid_parameter_name(name: Any) -> bool:
    return isinstance(name, str) and _PARAMETER_NAME.fullmatch(name) is not None


class InlineTextEdit(TextEdit):
    """Text shown as plain content that turns into an editor when activated.

    The client-side script submits edits to the configured API function,
    passing the new content under the content parameter name along with any
    additional fixed parameters. Only single-line input types are supported.
    """

    HTML_CLASS_NAME = "pk-inline-text-edit"
    SUPPORTED_TYPES = (
        TextEditType.SINGLE_LINE,
        TextEditType.EMAIL,
        TextEditType.URL,
        TextEditType.SEARCH,
    )

    def __init__(
        self, type: TextEditType = TextEditType.SINGLE_LINE, id: Optional[str] = None
    ) -> None:
        self._api_function: Optional[str] = None
        self._api_param_name = "value"
        self._other_args: Dict[str, Optional[str]] = {}
        self._render_uid: Optional[str] = None
        super().__init__(type, id)

    def set_type(self, type: TextEditType) -> bool:
        if type not in self.SUPPORTED_TYPES:
            error(ConfigurationError(f"unsupported inline text edit type: {type!r}"), log=logger)
            return False
        return super().set_type(type)

    def submit_function(self) -> Optional[str]:
        return self._api_function

    def content_param_name(self) -> str:
        return self._api_param_name

    def other_params(self) -> Dict[str, Optional[str]]:
        return dict(self._other_args)

    def set_submit_endpoint(
        self,
        function_name: str,
        content_param_name: Optional[str] = None,
        other_params: Optional[Mapping[str, Optional[str]]] = None,
    ) -> bool:
        """Configure the API call made when an edit is submitted.

        Nothing is changed unless every parameter name and value is valid.
        """

        try:
            if other_params is not None and not isinstance(other_params, Mapping):
                raise ConfigurationError(
                    f"invalid additional API function call parameters: {other_params!r}"
                )
            other_params = dict(other_params or {})
            if not isinstance(function_name, str):
                raise ConfigurationError(f"invalid API function name: {function_name!r}")
            if content_param_name is not None and not _is_valid_parameter_name(content_param_name):
                raise ConfigurationError(
                    f"invalid API function parameter name \"{content_param_name}\""
                )
            for key, value in other_params.items():
                if not _is_valid_parameter_name(key):
                    raise ConfigurationError(
                        f"invalid additional API function call parameter name \"{key}\""
                    )
                if value is not None and not isinstance(value, str):
                    raise ConfigurationError(
                        f"invalid additional API function call argument for parameter \"{key}\""
                    )
        except ConfigurationError as exc:
            error(exc, log=logger)
            return False

        self._api_function = function_name
        if content_param_name is not None:
            self._api_param_name = content_param_name
        self._other_args = other_params
        return True

    @staticmethod
    def runtime_script_urls() -> List[str]:
        return ["js/InlineTextEdit.js"]

    def _register_runtime_scripts(self) -> None:
        page = current_page()
        if page is None:
            return
        for url in self.runtime_script_urls():
            if not page.has_script_url(url):
                page.add_script_url(url)

    def render(self) -> str:
        self._register_runtime_scripts()
        added_class = not self.has_class_name(self.HTML_CLASS_NAME)
        if added_class:
            self.add_class_name(self.HTML_CLASS_NAME)
        try:
            return self._emit()
        finally:
            if added_class:
                self.remove_class_name(self.HTML_CLASS_NAME)

    def _fallback_id(self) -> str:
        # generated once so repeated renders of an unchanged widget match
        if self._render_uid is None:
            self._render_uid = generate_uid()
        return self._render_uid

    def _emit(self) -> str:
        value = self._text or ""
        parts = [
            "<div",
            emit_attribute("id", self._id or self._fallback_id()),
            emit_attribute("class", self.class_names_string()),
            emit_attribute("data-api-function-name", self._api_function or ""),
            emit_attribute("data-api-function-content-parameter-name", self._api_param_name),
        ]
        for name, arg in self._other_args.items():
            parts.append(emit_attribute(f"data-api-function-parameter-{name}", arg or ""))
        style = self.attribute("style")
        if style is not None:
            parts.append(emit_attribute("style", style))
        parts.append(
            f'><span class="{self.HTML_CLASS_NAME}-display">{html.escape(value)}</span>'
            f'<input style="display: none;" class="{self.HTML_CLASS_NAME}-editor"'
            f' type="{self._type.value}"'
        )
        if self._placeholder:
            parts.append(emit_attribute("placeholder", self._placeholder))
        if self.name():
            parts.append(emit_attribute("name", self.name()))
        if value:
            parts.append(emit_attribute("value", value))
        if self.tooltip():
            parts.append(emit_attribute("title", self.tooltip()))
        parts.append(" /></div>")
        return "".join(parts)


__all__ = ["InlineTextEdit", "TextEdit", "TextEditType"]
