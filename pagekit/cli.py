"""Command-line interface for pagekit."""

import argparse
import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .io_utils import write_document
from .models import PageDocument
from .settings import DictSettings, FixedTranslator


def _load_page_document(path: Path) -> PageDocument:
    if not path.exists():
        raise SystemExit(f"Page description not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return PageDocument.model_validate(data)
    except (yaml.YAMLError, ValidationError) as exc:
        raise SystemExit(f"Invalid page description {path}: {exc}") from exc


def _load_settings(path: Optional[str]) -> Optional[DictSettings]:
    if not path:
        return None
    settings_path = Path(path)
    if not settings_path.exists():
        raise SystemExit(f"Settings file not found: {settings_path}")
    try:
        return DictSettings.from_yaml(settings_path)
    except (yaml.YAMLError, ValueError) as exc:
        raise SystemExit(f"Invalid settings file {settings_path}: {exc}") from exc


def _handle_render(args: argparse.Namespace) -> None:
    document = _load_page_document(Path(args.input))
    settings = _load_settings(args.settings)
    translator = FixedTranslator(args.locale) if args.locale else None
    try:
        page = document.build(settings=settings, translator=translator)
    except ConfigurationError as exc:
        raise SystemExit(f"Invalid page description {args.input}: {exc}") from exc

    if args.output:
        output_path = write_document(args.output, page.render())
        print(f"Wrote {output_path}")
    else:
        page.output()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagekit", description="Compose HTML pages from typed page elements."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug diagnostics.",
    )
    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser(
        "render",
        help="Render a page description to HTML.",
        description="Validate a YAML page description and render the full document.",
    )
    render_parser.add_argument(
        "--in",
        dest="input",
        required=True,
        help="Path to the page description YAML file.",
    )
    render_parser.add_argument(
        "--out",
        dest="output",
        default=None,
        help="Path to write the HTML document (default: stdout).",
    )
    render_parser.add_argument(
        "--settings",
        default=None,
        help="Path to a settings YAML file (page.* keys).",
    )
    render_parser.add_argument(
        "--locale",
        default=None,
        help="Locale used for locale-qualified page fragments.",
    )
    render_parser.set_defaults(func=_handle_render)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
