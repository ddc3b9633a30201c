# pystl/__main__.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .document import Document, StlFormat
from .errors import StlError
from .logging_config import setup_logging

logger = logging.getLogger("pystl.cli")

_DEF_HELP = """
Examples:
  python -m pystl info part.stl
  python -m pystl convert part.stl part_ascii.stl --text
  python -m pystl convert part_ascii.stl part.stl --binary
  python -m pystl shift part.stl raised.stl 0 0 10
  python -m pystl invert part.stl flipped.stl --text
"""


def _save(doc: Document, path: str, as_text: bool) -> None:
    if as_text:
        doc.save_as_text(path)
    else:
        doc.save_as_binary(path)
    logger.info("Wrote %d facets to %s (%s)", len(doc), path, "text" if as_text else "binary")


def _cmd_info(args: argparse.Namespace) -> None:
    with open(args.path, "rb") as f:
        fmt = Document.detect_format(f)
        doc = Document.read(f)
    print(f"name: {doc.name}")
    print(f"format: {fmt.value}")
    print(f"facets: {len(doc)}")


def _cmd_convert(args: argparse.Namespace) -> None:
    with open(args.src, "rb") as src:
        fmt = Document.detect_format(src)
        doc = Document.read(src)
    if args.text:
        as_text = True
    elif args.binary:
        as_text = False
    else:
        # no flag: flip to the other format
        as_text = fmt is StlFormat.BINARY
    _save(doc, args.dst, as_text)


def _cmd_shift(args: argparse.Namespace) -> None:
    doc = Document.open(args.src)
    doc.shift_all(args.dx, args.dy, args.dz)
    _save(doc, args.dst, args.text)


def _cmd_invert(args: argparse.Namespace) -> None:
    doc = Document.open(args.src)
    doc.invert_all()
    _save(doc, args.dst, args.text)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pystl", description="pystl: read, convert and transform STL files",
                                epilog=_DEF_HELP, formatter_class=argparse.RawTextHelpFormatter)
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print name, format and facet count")
    info.add_argument("path")
    info.set_defaults(func=_cmd_info)

    convert = sub.add_parser("convert", help="Rewrite an STL as text or binary")
    convert.add_argument("src")
    convert.add_argument("dst")
    group = convert.add_mutually_exclusive_group()
    group.add_argument("--text", action="store_true", help="Write text STL")
    group.add_argument("--binary", action="store_true", help="Write binary STL")
    convert.set_defaults(func=_cmd_convert)

    shift = sub.add_parser("shift", help="Translate every vertex")
    shift.add_argument("src")
    shift.add_argument("dst")
    shift.add_argument("dx", type=float)
    shift.add_argument("dy", type=float)
    shift.add_argument("dz", type=float)
    shift.add_argument("--text", action="store_true", help="Write text STL (default binary)")
    shift.set_defaults(func=_cmd_shift)

    invert = sub.add_parser("invert", help="Flip every facet normal")
    invert.add_argument("src")
    invert.add_argument("dst")
    invert.add_argument("--text", action="store_true", help="Write text STL (default binary)")
    invert.set_defaults(func=_cmd_invert)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except (StlError, OSError) as e:
        print(f"pystl: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
