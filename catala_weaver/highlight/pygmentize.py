"""Highlight delegate that runs the ``pygmentize`` executable.

WHY: The reference rendering of Catala code comes from Pygments with the
catala_fr / catala_en lexers, invoked as an external program so that any
installed Pygments (or a wrapper script named by the user) can be used.

HOW: For each fragment, the text is written to a scratch input file, then
``pygmentize -l <lexer> -f html -O <options> -P lineanchors=<file> -o <out> <in>``
runs as a blocking subprocess and the output file is read back. The
scratch files live in a TemporaryDirectory, so they are removed whether
the call succeeds or fails. The stylesheet comes from
``pygmentize -f html -S <style> -a <scope>`` on stdout.

RULES:
- command defaults to config.DEFAULT_PYGMENTIZE; it is split with shlex,
  so an override may carry its own arguments ("python -m pygments")
- Non-zero exit → HighlightError(command, exit code)
- Executable not found → HighlightError(command, 127)
- No timeout: a hung tool hangs the weave
- lineanchors goes through -P because file names may contain commas
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from catala_weaver.config import DEFAULT_PYGMENTIZE, DEFAULT_STYLE
from catala_weaver.errors import HighlightError
from catala_weaver.highlight.base import BaseHighlighter, HighlightRequest, StylesheetRequest

logger = logging.getLogger(__name__)

_COMMAND_NOT_FOUND = 127


class PygmentizeHighlighter(BaseHighlighter):
    """Highlighter backed by the pygmentize command-line tool."""

    def __init__(self, command: Optional[str] = None, style: str = DEFAULT_STYLE) -> None:
        super().__init__(style=style)
        self.command = command or DEFAULT_PYGMENTIZE

    @property
    def name(self) -> str:
        return "pygmentize"

    def _base_argv(self) -> List[str]:
        return shlex.split(self.command)

    def fragment_argv(self, request: HighlightRequest, input_path: Path, output_path: Path) -> List[str]:
        """Build the argument vector for highlighting one fragment."""
        options = "encoding=utf-8,style={},anchorlinenos=True,linenos=table,linenostart={}".format(
            self.style, request.start_line
        )
        return self._base_argv() + [
            "-l", request.lexer,
            "-f", request.output_mode,
            "-O", options,
            "-P", "lineanchors={}".format(request.source_file),
            "-o", str(output_path),
            str(input_path),
        ]

    def stylesheet_argv(self, request: StylesheetRequest) -> List[str]:
        return self._base_argv() + ["-f", "html", "-S", request.style, "-a", request.css_scope]

    def _run(self, argv: List[str]) -> subprocess.CompletedProcess:
        command = shlex.join(argv)
        logger.debug("Running %s", command)
        try:
            result = subprocess.run(argv, capture_output=True, text=True, encoding="utf-8")
        except FileNotFoundError as e:
            raise HighlightError(command, _COMMAND_NOT_FOUND, str(e)) from e
        if result.returncode != 0:
            raise HighlightError(command, result.returncode, result.stderr)
        return result

    def highlight(self, request: HighlightRequest) -> str:
        with tempfile.TemporaryDirectory(prefix="catala_html_pygments_") as scratch:
            input_path = Path(scratch) / "in"
            output_path = Path(scratch) / "out"
            input_path.write_text(request.text, encoding="utf-8")
            self._run(self.fragment_argv(request, input_path, output_path))
            return output_path.read_text(encoding="utf-8")

    def stylesheet(self, request: StylesheetRequest) -> str:
        return self._run(self.stylesheet_argv(request)).stdout
