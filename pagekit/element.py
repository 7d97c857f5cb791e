"""Base page element and shared element capabilities."""

from __future__ import annotations

import html
import itertools
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import InvalidElementError

_uid_counter = itertools.count(1)


def generate_uid(prefix: str = "pk-uid") -> str:
    """Return an id that is unique within the running process."""

    return f"{prefix}-{next(_uid_counter)}"


def emit_attribute(name: str, value: str) -> str:
    return f' {name}="{html.escape(value, quote=True)}"'


class PageElement:
    """Node in the render tree.

    Holds an optional id, an ordered list of class names and a mapping of
    other attribute names to string values. Subclasses implement ``render``.
    """

    def __init__(self, id: Optional[str] = None) -> None:
        self._id = id
        self._class_names: List[str] = []
        self._attributes: Dict[str, str] = {}

    def id(self) -> Optional[str]:
        return self._id

    def set_id(self, id: Optional[str]) -> None:
        self._id = id

    def class_names(self) -> List[str]:
        return list(self._class_names)

    def class_names_string(self) -> str:
        return " ".join(self._class_names)

    def set_class_names(self, names: Iterable[str]) -> None:
        self._class_names = list(dict.fromkeys(names))

    def has_class_name(self, name: str) -> bool:
        return name in self._class_names

    def add_class_name(self, name: str) -> None:
        if name not in self._class_names:
            self._class_names.append(name)

    def remove_class_name(self, name: str) -> None:
        if name in self._class_names:
            self._class_names.remove(name)

    def attribute(self, name: str) -> Optional[str]:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: Optional[str]) -> None:
        """Set an attribute, or remove it when ``value`` is None."""

        if value is None:
            self._attributes.pop(name, None)
        else:
            self._attributes[name] = str(value)

    def emit_attributes(self) -> str:
        """Render id, class list and the remaining attributes, in that order."""

        parts: List[str] = []
        if self._id:
            parts.append(emit_attribute("id", self._id))
        if self._class_names:
            parts.append(emit_attribute("class", self.class_names_string()))
        for name, value in self._attributes.items():
            parts.append(emit_attribute(name, value))
        return "".join(parts)

    def render(self) -> str:
        raise NotImplementedError

    def html(self) -> str:
        return self.render()


class Tooltip:
    """Tooltip capability stored in the ``title`` attribute."""

    def set_tooltip(self, tooltip: Optional[str]) -> None:
        self.set_attribute("title", tooltip)

    def tooltip(self) -> Optional[str]:
        return self.attribute("title")


class Name:
    """Form-name capability stored in the ``name`` attribute."""

    def set_name(self, name: Optional[str]) -> None:
        self.set_attribute("name", name)

    def name(self) -> Optional[str]:
        return self.attribute("name")


class ChildElements:
    """Ordered, append-only child list for container elements."""

    _children: List[PageElement]

    def add_child(self, child: PageElement) -> None:
        if not isinstance(child, PageElement):
            raise InvalidElementError(f"invalid page element: {child!r}")
        self._children.append(child)

    def children(self) -> Tuple[PageElement, ...]:
        return tuple(self._children)

    def clear(self) -> None:
        self._children = []

    def emit_child_elements(self) -> str:
        return "".join(child.render() for child in self._children)


class HtmlLiteral(PageElement):
    """Trusted HTML inserted verbatim."""

    def __init__(self, html_text: str = "") -> None:
        super().__init__()
        self._html = html_text

    def render(self) -> str:
        return self._html


class Division(ChildElements, Tooltip, PageElement):
    """``<div>`` container used for page sections."""

    def __init__(self, id: Optional[str] = None) -> None:
        super().__init__(id)
        self._children = []

    def render(self) -> str:
        return f"<div{self.emit_attributes()}>{self.emit_child_elements()}</div>"


__all__ = [
    "ChildElements",
    "Division",
    "HtmlLiteral",
    "Name",
    "PageElement",
    "Tooltip",
    "emit_attribute",
    "generate_uid",
]
