"""Typed failures raised while converting a batch of TMX files.

WHY: The driver treats each class of failure the same way (skip the
argument, log, continue), but callers and tests still need to tell them
apart: a bad argument, an unreadable file and a broken document are
different problems for the user.

HOW: A small hierarchy under Tmx2cError. Each exception keeps the
fields needed to build a useful diagnostic, and formats a readable
message for logs.

RULES:
- PathResolutionFailure: the argument cannot be made absolute
- ReadFailure: the file cannot be opened or fully read (wraps the OSError)
- MalformedInput: the content is not a well-formed XML document
- All three are recoverable per argument; anything else propagates
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple


class Tmx2cError(Exception):
    """Base class for all per-file conversion failures."""


class PathResolutionFailure(Tmx2cError):
    """Raised when a command-line argument cannot be resolved to an absolute path.

    RULES:
    - argument is the raw value exactly as given
    - reason is a short human-readable explanation
    """

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        self.reason = reason
        super().__init__(f"Cannot resolve path {argument!r}: {reason}")


class ReadFailure(Tmx2cError):
    """Raised when a source document cannot be opened or read.

    WHY: Missing files, permission errors and I/O errors all surface as
    OSError subclasses; wrapping them keeps the path next to the cause.
    """

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = cause.strerror or str(cause)
        super().__init__(f"Cannot read {self.path}: {detail}")


class MalformedInput(Tmx2cError):
    """Raised when a source document is not well-formed XML.

    RULES:
    - position is (line, column) when the parser reports one, else None
    """

    def __init__(
        self,
        source: str,
        reason: str,
        position: Optional[Tuple[int, int]] = None,
    ) -> None:
        self.source = source
        self.reason = reason
        self.position = position
        super().__init__(f"Malformed TMX document {source}: {reason}")
