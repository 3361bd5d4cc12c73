"""Exception hierarchy for weaving failures.

WHY: Weaving is all-or-nothing. Callers (the CLI, tests) need one type to
catch for any environment problem that aborted a document, while the
message still names the exact command or file that failed.

RULES:
- Every fatal weaving failure derives from WeavingError
- Messages carry the failing command line and exit status, or the path
- Nothing in the package retries or degrades on these errors
"""

from __future__ import annotations

from typing import Optional


class WeavingError(Exception):
    """Base class for errors that abort the weaving of a document."""


class HighlightError(WeavingError):
    """Raised when the external highlighter could not produce markup.

    HOW: Raised by the highlight delegates when the tool exits non-zero
    or cannot be started at all (exit code 127, as a shell reports it).
    """

    def __init__(self, command: str, exit_code: int, stderr: Optional[str] = None) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        message = 'pygmentize command "{}" returned with error code {}'.format(command, exit_code)
        if stderr:
            message += ": {}".format(stderr.strip())
        super().__init__(message)


class MetadataLookupError(WeavingError):
    """Raised when a source file's modification time cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__("Cannot read modification time of {}: {}".format(path, reason))


class ItemStreamError(WeavingError):
    """Raised when the upstream item stream document is malformed."""
