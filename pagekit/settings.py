"""Collaborators consulted while composing a page.

A ``SettingsStore`` answers dotted setting keys (optionally locale-qualified,
e.g. ``page.body.head.content.en``), a ``Translator`` reports the active
locale, and an ``Application`` ties them together with the page title and
the uid prefix used for section ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

import yaml

_MISSING = object()


@runtime_checkable
class SettingsStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...


@runtime_checkable
class Translator(Protocol):
    def current_locale(self) -> Optional[str]:
        ...


class DictSettings:
    """Settings backed by a mapping.

    Keys are looked up verbatim first (``{"page.main.enabled": False}``) and
    then by walking nested mappings (``{"page": {"main": {"enabled": False}}}``).
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    @classmethod
    def from_yaml(cls, path: Path) -> "DictSettings":
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Settings file must contain a mapping: {path}")
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._values:
            return self._values[key]
        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, Mapping):
                return default
            node = node.get(part, _MISSING)
            if node is _MISSING:
                return default
        return node

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


@dataclass
class FixedTranslator:
    locale: Optional[str] = None

    def current_locale(self) -> Optional[str]:
        return self.locale or None


@dataclass
class Application:
    """Identity and collaborators of the application that owns a page."""

    title: str
    uid: str = "app"
    settings: Optional[SettingsStore] = None
    translator: Optional[Translator] = None

    def current_locale(self) -> Optional[str]:
        if self.translator is None:
            return None
        return self.translator.current_locale() or None

    def setting(self, key: str, default: Any = None) -> Any:
        if self.settings is None:
            return default
        return self.settings.get(key, default)


def setting_enabled(value: Any) -> bool:
    """Interpret a feature-toggle value read from settings."""

    if isinstance(value, str):
        return value.strip().lower() not in {"", "0", "false", "no", "off"}
    return bool(value)


__all__ = [
    "Application",
    "DictSettings",
    "FixedTranslator",
    "SettingsStore",
    "Translator",
    "setting_enabled",
]
