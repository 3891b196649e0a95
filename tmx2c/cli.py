"""Command-line interface for the TMX to C header converter.

WHY: Build scripts need a single command that turns every level file
into one header: ``tmx2c maps/*.tmx`` writes ``out.h`` in the working
directory.

HOW: Uses argparse to accept any number of input paths plus a few
switches (output file, attribute coverage, failure policy, verbosity).
Builds the emitter, hands everything to convert_files(), and reports a
summary. Diagnostics go to stderr through logging.

RULES:
- Positional arguments: zero or more input paths, processed in order
- No arguments still creates an empty output file
- --output defaults to TMX2C_OUTPUT (out.h) in the working directory
- --all-attributes switches to the extended definition table
- --lenient keeps converting malformed documents as empty maps
- --fail-fast stops at the first failed input
- Exit code: 0 when every input was converted, 1 otherwise
- stdout is never written to
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from tmx2c import __version__
from tmx2c.config import (
    DEFAULT_FAIL_FAST,
    DEFAULT_LENIENT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FILENAME,
)
from tmx2c.core.batch import convert_files
from tmx2c.core.errors import Tmx2cError
from tmx2c.emitters import DEFAULT_EMITTER, EMITTERS
from tmx2c.emitters.base import BaseEmitter
from tmx2c.emitters.c_header import EXTENDED_MAP_DEFINITIONS, CHeaderEmitter
from tmx2c.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_emitter(key: str, all_attributes: bool) -> BaseEmitter:
    """Instantiate the selected emitter.

    RULES:
    - all_attributes only affects the C header emitter
    """
    emitter_cls = EMITTERS[key]
    if all_attributes and issubclass(emitter_cls, CHeaderEmitter):
        return emitter_cls(EXTENDED_MAP_DEFINITIONS)
    return emitter_cls()


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without converting anything.
    """
    parser = argparse.ArgumentParser(
        prog="tmx2c",
        description="Convert Tiled .tmx maps into a C header of #define constants.",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE",
        help="TMX files to convert, in output order.",
    )

    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_FILENAME,
        help="Output header path (default: %(default)s).",
    )

    parser.add_argument(
        "--format",
        default=DEFAULT_EMITTER,
        choices=sorted(EMITTERS.keys()),
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "--all-attributes",
        action="store_true",
        help="Emit every map attribute and collection count, "
             "not just Version and Orientation.",
    )

    parser.add_argument(
        "--lenient",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_LENIENT,
        help="Convert malformed documents as empty maps instead of skipping them "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "--fail-fast",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_FAIL_FAST,
        help="Stop at the first input that cannot be converted (default: %(default)s).",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug diagnostics.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only show errors.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Returns the process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(logging.DEBUG)
    elif args.quiet:
        setup_logging(logging.ERROR)
    else:
        setup_logging(DEFAULT_LOG_LEVEL)

    emitter = _build_emitter(args.format, args.all_attributes)

    try:
        ctx = convert_files(
            args.inputs,
            args.output,
            emitter=emitter,
            lenient=args.lenient,
            fail_fast=args.fail_fast,
        )
    except Tmx2cError as e:
        logger.error("Aborted: %s", e)
        return 1
    except OSError as e:
        # output file could not be created or written
        logger.error("Cannot write %s: %s", args.output, e)
        return 1

    logger.info(
        "Wrote %d block(s) to %s, skipped %d input(s)",
        len(ctx.appended),
        args.output,
        len(ctx.skipped),
    )
    return 0 if ctx.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
