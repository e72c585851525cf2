#!/usr/bin/env python3
"""
Command-line entry point: ``curtains build`` and ``curtains parse``.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULTS, THEMES, BuildOptions
from .errors import CurtainsError, FileAccessError, OutputError
from .models import CurtainsDocument
from .parser import parse
from .renderer import render
from .transformer import transform

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_EXIT = 99


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--debug", action="store_true", help="Enable verbose logging")

    p = argparse.ArgumentParser(prog="curtains", description="Build HTML presentations from .curtain files.")
    sub = p.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", parents=[common], help="Build a .curtain file into an HTML presentation")
    build.add_argument("input", help="Input .curtain file")
    build.add_argument("--output", "-o", help="Output HTML file (default: input name with .html)")
    build.add_argument("--theme", "-t", default=DEFAULTS["THEME"], choices=THEMES, help="Theme (light or dark)")

    dump = sub.add_parser("parse", parents=[common], help="Print the parsed document as JSON")
    dump.add_argument("input", help="Input .curtain file")
    return p


def _read_source(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Cannot read {path}: {exc}") from exc


def build(options: BuildOptions) -> CurtainsDocument:
    """Parse, transform, render and write one presentation."""
    logger.info(f"Building {options.input}...")

    document = parse(_read_source(options.input))
    html = render(transform(document), options)

    try:
        Path(options.output).write_text(html, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"Cannot write {options.output}: {exc}") from exc

    logger.info(f"✓ Built {options.output} ({len(document.slides)} slides)")
    return document


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point for curtains."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s  %(message)s",
    )

    try:
        if args.command == "build":
            build(BuildOptions.from_args(args.input, args.output, args.theme))
        else:
            document = parse(_read_source(args.input))
            print(json.dumps(document.to_dict(), indent=2))
    except CurtainsError as exc:
        logger.error(f"Error [{exc.code}]: {exc}")
        return exc.exit_code
    except Exception as exc:
        logger.exception(f"Unexpected error: {exc}")
        return UNEXPECTED_ERROR_EXIT
    return 0


if __name__ == "__main__":
    sys.exit(main())
