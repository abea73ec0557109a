# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import ToonConfig, ToonError
from .files import align_file, convert_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toon-tabular",
        description="Convert JSON to TOON and align/shrink TOON tabular arrays",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging")
    sub = parser.add_subparsers(dest="command", required=True)

    conv = sub.add_parser("json2toon", help="Convert a .json file to TOON")
    conv.add_argument("source", help="Path to a .json file")
    conv.add_argument("-o", "--output", help="Write TOON to this path instead of stdout")
    conv.add_argument("--save", action="store_true", help="Save next to the source with a .toon suffix")
    conv.add_argument("--stats", action="store_true", help="Print a size comparison to stderr")

    for name, help_text in (("align", "Pad tabular columns to a common width"),
                            ("shrink", "Remove padding from tabular columns")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("file", help="Path to a .toon file")
        cmd.add_argument("--check", action="store_true",
                         help="Do not write; exit 1 if the file would change")
    return parser


def _run_convert(args: argparse.Namespace, cfg: ToonConfig) -> int:
    result = convert_file(args.source, save=args.save, cfg=cfg)
    if args.output:
        Path(args.output).write_text(result.toon_text + "\n", encoding="utf-8")
    elif not args.save:
        sys.stdout.write(result.toon_text + "\n")
    if args.stats:
        sys.stderr.write(f"{result.comparison}\n")
    return 0


def _run_align(args: argparse.Namespace) -> int:
    result = align_file(args.file, shrink=args.command == "shrink", write=not args.check)
    if args.check:
        if result.changed:
            sys.stderr.write(f"would reformat {result.path}\n")
            return 1
        return 0
    sys.stderr.write(f"{result.report}\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = ToonConfig.from_env()
    level = logging.INFO if args.verbose else getattr(logging, cfg.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "json2toon":
            return _run_convert(args, cfg)
        return _run_align(args)
    except ToonError as e:
        sys.stderr.write(f"toon-tabular: {e}\n")
        return 1
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        sys.stderr.write(f"toon-tabular: {e}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
