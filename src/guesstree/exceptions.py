"""exceptions.py - Exception hierarchy for GuessTree documents.

Defines exceptions for:
- Malformed or truncated knowledge-base files
- Caller contract breaches (bad indices, foreign handles, bad text)
- Underlying file read/write failures
"""

from __future__ import annotations

from pathlib import Path


class GuessTreeError(Exception):
    """Base exception for all GuessTree errors."""

    pass


class FormatError(GuessTreeError):
    """Raised when a byte stream is not a well-formed knowledge base.

    Examples:
        - File shorter than a declared node count or pool length
        - Trailing bytes after the pool section
        - Unknown node kind byte
        - Child index or text offset pointing outside the document
    """

    def __init__(self, reason: str, offset: int | None = None):
        self.reason = reason
        self.offset = offset
        where = f" at byte {offset}" if offset is not None else ""
        super().__init__(f"Malformed knowledge base{where}: {reason}")


class PreconditionViolation(GuessTreeError):
    """Raised when a caller breaks an operation's contract.

    Examples:
        - split() on a Question node
        - Node index outside 0..count-1
        - Text handle issued by a different pool, or not a string start
        - Interning empty text or text containing NUL
    """

    pass


class StorageError(GuessTreeError):
    """Raised when the knowledge-base file cannot be read or written."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Storage failure for '{self.path}': {reason}")
