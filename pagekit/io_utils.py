"""Utility helpers for fragment IO and diagnostics."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

logger = logging.getLogger("pagekit")


def read_text(path: PathLike, *, encoding: str = "utf-8") -> str:
    with Path(path).open("r", encoding=encoding) as fh:
        return fh.read()


def write_document(path: PathLike, document: str) -> Path:
    """Write a rendered HTML document as UTF-8, creating its directory."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(document)
    return target


def warn(msg: str, *, log: logging.Logger | None = None) -> None:
    (log or logger).warning(msg)


def error(exc: Exception | str, *, log: logging.Logger | None = None) -> None:
    """Report a rejected configuration call on the diagnostic channel."""
    (log or logger).error(str(exc))


__all__ = ["error", "read_text", "warn", "write_document"]
