"""Batch driver: convert a list of TMX files into one shared output stream.

WHY: A build usually converts every level at once into a single header.
Each input goes through the same short pipeline, and one bad input must
not cost the user the rest of the batch.

HOW: Three pieces work together:
  FileStatus   — enum of the per-argument states
  FileResult   — what happened to one argument (status, path, error)
  BatchContext — the shared output stream, the emitter, the failure
                 policy and the list of results, passed explicitly to
                 every per-file step

process_argument() moves one argument through
PATH_RESOLVED → DESERIALIZED → EMITTED → APPENDED, or to SKIPPED when a
Tmx2cError is raised on the way. run_batch() loops over the arguments
in order; convert_files() owns the output file around it.

RULES:
- Arguments are processed sequentially, in command-line order
- Identifier = final path component with every "." replaced by "_"
- A skipped argument writes nothing to the output
- Every failure class is skip-and-continue unless fail_fast is set,
  in which case the first failure is re-raised
- Each appended block is flushed (and fsynced when possible) at once
- Identifier collisions are only reported, never resolved
- Nothing is retried
"""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from tmx2c.config import TMX_SUFFIXES
from tmx2c.core.errors import PathResolutionFailure, Tmx2cError
from tmx2c.core.reader import load_map
from tmx2c.emitters.base import BaseEmitter
from tmx2c.emitters.c_header import CHeaderEmitter

logger = logging.getLogger(__name__)


class FileStatus(str, enum.Enum):
    """States an input argument moves through.

    RULES:
    - pending: not looked at yet
    - path_resolved: argument turned into an absolute path
    - deserialized: TileMap built from the file
    - emitted: block produced by the emitter
    - appended: block written and flushed to the output (terminal)
    - skipped: a failure stopped processing of this argument (terminal)
    """

    PENDING = "pending"
    PATH_RESOLVED = "path_resolved"
    DESERIALIZED = "deserialized"
    EMITTED = "emitted"
    APPENDED = "appended"
    SKIPPED = "skipped"


@dataclass
class FileResult:
    """Outcome of one command-line argument.

    RULES:
    - argument: the raw value as given
    - path: absolute path, None if resolution failed
    - identifier: derived prefix, "" if resolution failed
    - error: message of the failure when status is SKIPPED, else None
    """

    argument: str
    status: FileStatus = FileStatus.PENDING
    path: Optional[Path] = None
    identifier: str = ""
    error: Optional[str] = None


@dataclass
class BatchContext:
    """State shared by every per-file step of one batch.

    WHY: The output stream is opened once and written once per converted
    file. Keeping it on an explicit object passed to each step avoids a
    module-level handle and keeps runs independent of each other.

    RULES:
    - output must be a binary, writable stream
    - results keeps one FileResult per processed argument, in order
    """

    output: BinaryIO
    emitter: BaseEmitter = field(default_factory=CHeaderEmitter)
    lenient: bool = False
    fail_fast: bool = False
    results: List[FileResult] = field(default_factory=list)

    def append(self, data: bytes) -> None:
        """Write one block and push it to disk before continuing."""
        self.output.write(data)
        self.output.flush()
        try:
            fileno = self.output.fileno()
        except (AttributeError, OSError):
            # in-memory streams have no descriptor to sync
            return
        os.fsync(fileno)

    @property
    def appended(self) -> List[FileResult]:
        return [r for r in self.results if r.status is FileStatus.APPENDED]

    @property
    def skipped(self) -> List[FileResult]:
        return [r for r in self.results if r.status is FileStatus.SKIPPED]

    @property
    def ok(self) -> bool:
        """True when no argument was skipped."""
        return not self.skipped


def derive_identifier(path: Union[str, Path]) -> str:
    """Build the guard/prefix token from a file name.

    Every "." becomes "_", not just the extension separator:
    ``level1.tmx`` → ``level1_tmx``, ``a.b.c.tmx`` → ``a_b_c_tmx``.
    """
    return Path(path).name.replace(".", "_")


def resolve_path(argument: str) -> Path:
    """Turn a command-line argument into an absolute path.

    HOW: Absolute arguments are returned as-is. Relative ones are joined
    to the current working directory. Nothing is required to exist yet;
    opening the file is the reader's job.

    Raises:
        PathResolutionFailure: For an empty argument, an embedded NUL
            byte, or when the working directory cannot be determined.
    """
    if not argument:
        raise PathResolutionFailure(argument, "empty path")
    if "\x00" in argument:
        raise PathResolutionFailure(argument, "path contains a NUL byte")

    path = Path(argument)
    if path.is_absolute():
        return path

    try:
        return path.absolute()
    except (OSError, ValueError) as e:
        raise PathResolutionFailure(argument, str(e)) from e


def process_argument(ctx: BatchContext, argument: str) -> FileResult:
    """Convert one argument and append its block to the batch output.

    Args:
        ctx: The batch being run.
        argument: Raw path argument, possibly relative.

    Returns:
        The FileResult, also recorded on ``ctx.results``.

    Raises:
        Tmx2cError: Only when ``ctx.fail_fast`` is set.
    """
    result = FileResult(argument=argument)
    ctx.results.append(result)

    try:
        result.path = resolve_path(argument)
        result.status = FileStatus.PATH_RESOLVED

        if result.path.suffix.lower() not in TMX_SUFFIXES:
            logger.debug("%s does not look like a TMX file, converting anyway", result.path)

        identifier = derive_identifier(result.path)
        if any(r.identifier == identifier for r in ctx.appended):
            logger.warning(
                "Identifier %s already used in this batch (from %s)", identifier, argument
            )
        result.identifier = identifier

        tile_map = load_map(result.path, lenient=ctx.lenient)
        result.status = FileStatus.DESERIALIZED
    except Tmx2cError as e:
        result.status = FileStatus.SKIPPED
        result.error = str(e)
        logger.warning("Skipping %s: %s", argument or "''", e)
        if ctx.fail_fast:
            raise
        return result

    block = ctx.emitter.emit(tile_map, result.identifier)
    result.status = FileStatus.EMITTED

    ctx.append(block)
    result.status = FileStatus.APPENDED
    logger.info("Converted %s as %s", result.path, result.identifier)
    return result


def run_batch(
    arguments: Iterable[str],
    output: BinaryIO,
    *,
    emitter: Optional[BaseEmitter] = None,
    lenient: bool = False,
    fail_fast: bool = False,
) -> BatchContext:
    """Process every argument in order against one output stream.

    Args:
        arguments: Input paths as given on the command line.
        output: Binary stream receiving every appended block.
        emitter: Emitter to use; defaults to CHeaderEmitter().
        lenient: Convert malformed documents as empty maps.
        fail_fast: Re-raise the first failure instead of skipping.

    Returns:
        The BatchContext holding one FileResult per argument.
    """
    ctx = BatchContext(
        output=output,
        emitter=emitter if emitter is not None else CHeaderEmitter(),
        lenient=lenient,
        fail_fast=fail_fast,
    )
    for argument in arguments:
        process_argument(ctx, argument)
    return ctx


def convert_files(
    arguments: Iterable[str],
    output_path: Union[str, Path],
    *,
    emitter: Optional[BaseEmitter] = None,
    lenient: bool = False,
    fail_fast: bool = False,
) -> BatchContext:
    """Create the output file, run the batch, and close the file.

    RULES:
    - The output is truncated up front, even if no input succeeds
    - The file is closed on every exit path, including fail_fast aborts
    """
    with open(output_path, "wb") as output:
        return run_batch(
            arguments,
            output,
            emitter=emitter,
            lenient=lenient,
            fail_fast=fail_fast,
        )
