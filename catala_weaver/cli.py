"""Command-line interface for the Catala literate weaver.

WHY: Users need a simple way to turn a parsed literate Catala program
into an HTML document from the terminal. The CLI wires together the full
pipeline — item stream loading, highlighter selection, weaving, page
wrapping, and saving — behind a single command.

HOW: Uses argparse to accept the item stream file, the document
language, the highlighter and its executable override, the wrap flag and
the output path. Status messages go to stderr; the HTML goes to the
output file, or to stdout when none is given.

RULES:
- Positional argument: item stream JSON produced by the upstream parser
- --language: fr, en or non-verbose (default from CATALA_WEAVER_LANGUAGE)
- --pygmentize: replaces the pygmentize executable name
- --wrap/--no-wrap: page shell around the body (default: wrap)
- Nothing is written when weaving fails; exit code 1 with "Error: ..."
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from catala_weaver import __version__
from catala_weaver.config import (
    DEFAULT_HIGHLIGHTER,
    DEFAULT_LANGUAGE,
    DEFAULT_STYLE,
    SUPPORTED_LANGUAGES,
    WeaveConfig,
)
from catala_weaver.core.loader import load_program
from catala_weaver.errors import WeavingError
from catala_weaver.highlight import HIGHLIGHTERS, make_highlighter
from catala_weaver.weaving.html import weave_program
from catala_weaver.weaving.page import wrap_html

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, keeping stdout for piped HTML."""
    print(msg, file=sys.stderr, flush=True)


def _run(args: argparse.Namespace) -> None:
    """Load, weave, wrap and save one document.

    RULES:
    - Validate the output directory before any highlighter runs
    - The document is assembled fully in memory before anything is written
    """
    input_path = Path(args.input_file).resolve()
    if not input_path.is_file():
        raise WeavingError("File not found: {}".format(input_path))

    output_path: Optional[Path] = None
    if args.output:
        output_path = Path(args.output).resolve()
        if not output_path.parent.is_dir():
            raise WeavingError("Output directory does not exist: {}".format(output_path.parent))

    config = WeaveConfig(
        language=args.language,
        highlighter_override=args.pygmentize,
        highlighter=args.highlighter,
        style=args.style,
    )

    _status("Loading {}...".format(input_path.name))
    program = load_program(input_path)
    _status("  {} items from {} source file(s)".format(
        len(program.items), len(program.source_files)
    ))

    highlighter = make_highlighter(config)
    _status("Weaving with {} ({})...".format(highlighter.name, config.language))
    document = weave_program(program, config, highlighter=highlighter)

    if args.wrap:
        document = wrap_html(
            document,
            program.source_files,
            language=config.language,
            highlighter=highlighter,
        )

    if output_path is None:
        sys.stdout.write(document)
        sys.stdout.flush()
    else:
        output_path.write_text(document, encoding="utf-8")
        _status("Saved: {}".format(output_path))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable — tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="catala-weave",
        description="Weave the legislative text and the code of a parsed literate "
                    "Catala program into a single HTML document.",
    )

    parser.add_argument(
        "input_file",
        help="Item stream JSON file produced by the Catala parser.",
    )

    parser.add_argument(
        "-l", "--language",
        default=DEFAULT_LANGUAGE,
        type=str.lower,
        choices=sorted(SUPPORTED_LANGUAGES),
        help="Language of the document (default: %(default)s).",
    )

    parser.add_argument(
        "--pygmentize",
        default=None,
        help="Command to run instead of 'pygmentize' (may include arguments).",
    )

    parser.add_argument(
        "--highlighter",
        default=DEFAULT_HIGHLIGHTER,
        choices=sorted(HIGHLIGHTERS.keys()),
        help="Highlighting backend (default: %(default)s).",
    )

    parser.add_argument(
        "--style",
        default=DEFAULT_STYLE,
        help="Pygments style for code fragments (default: %(default)s).",
    )

    parser.add_argument(
        "--wrap",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Wrap the woven body in a page with stylesheet and source list "
             "(default: %(default)s).",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output HTML file (default: stdout).",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every highlighter invocation.",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        _run(args)
    except (WeavingError, ValueError) as e:
        logger.debug("Weaving aborted", exc_info=True)
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
