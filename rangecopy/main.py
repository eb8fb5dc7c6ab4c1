import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console

from . import __version__
from .config import Settings
from .core.exceptions import RangeCopyError
from .logging_config import setup_logging
from .models import CopyRequest
from .services.copy.range_copier import RangeCopier
from .services.progress import NullProgressSink, ProgressSink, RichProgressSink


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rangecopy",
        description=(
            "Copy a range of bytes from SRC into DST at a given offset. "
            "DST is created if it does not exist and is never truncated."
        ),
    )
    parser.add_argument("src", metavar="SRC", type=Path, help="The source file to copy from.")
    parser.add_argument(
        "dst",
        metavar="DST",
        type=Path,
        help="The destination file to copy to. Will create the file if it does not exist.",
    )
    parser.add_argument(
        "-s", "--src-offset", type=non_negative_int, default=0,
        help="The byte offset in the source file to start reading from. "
             "Must not be larger than the file in question.",
    )
    parser.add_argument(
        "-d", "--dst-offset", type=non_negative_int, default=0,
        help="The byte offset in the destination file to start writing to. "
             "Must not be larger than the file in question, and the file must exist.",
    )
    parser.add_argument(
        "-c", "--count", type=non_negative_int, default=None,
        help="The number of bytes to copy. Defaults to everything from "
             "--src-offset to the end of the source. Reading past the end is an error.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Verbose output, with progress bar.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = settings or Settings()
    except ValidationError as e:
        print(f"ERROR: invalid settings: {e}", file=sys.stderr)
        return 1

    console = Console(stderr=True)
    setup_logging(settings, console=console, level="INFO" if args.verbose else None)

    request = CopyRequest(
        source_path=args.src,
        dest_path=args.dst,
        source_offset=args.src_offset,
        dest_offset=args.dst_offset,
        count=args.count,
    )

    progress_sink: ProgressSink = (
        RichProgressSink(description=args.src.name, console=console)
        if args.verbose
        else NullProgressSink()
    )

    copier = RangeCopier(settings)
    try:
        copier.copy(request, progress_sink)
    except RangeCopyError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    logging.debug("rangecopy finished")
    return 0


def run() -> None:
    sys.exit(main())
