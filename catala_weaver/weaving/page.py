"""Page shell around a woven body.

WHY: The woven body is a sequence of fragments; a reader also needs the
stylesheet that colours the highlighted code, a title, and the list of
source files the document was woven from, with the time each was last
modified so stale printouts can be spotted.

HOW: The stylesheet comes from a second, independent call to the same
highlighter (stylesheet mode). Modification times come from an
injectable lookup, by default the file system. Everything else is
string assembly.

RULES:
- Title, subtitle and list labels follow the document language
- Times are shown in local time as "YYYY-MM-DD, H:MM"
- File names are shown without their directory
- A stylesheet failure or an unreadable source file aborts the page
"""

from __future__ import annotations

import os
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Callable, Iterable

from catala_weaver import __version__
from catala_weaver.config import CSS_SCOPE, message
from catala_weaver.errors import MetadataLookupError
from catala_weaver.highlight.base import BaseHighlighter, StylesheetRequest

GENERATOR_NAME = "Catala weaver"


def file_modified_at(path: str) -> datetime:
    """Return the local last-modification time of ``path``.

    Raises:
        MetadataLookupError: If the file cannot be stat'ed.
    """
    try:
        mtime = os.stat(path).st_mtime
    except OSError as e:
        raise MetadataLookupError(path, e.strerror or str(e)) from e
    return datetime.fromtimestamp(mtime)


def format_timestamp(moment: datetime) -> str:
    return "{}-{:02d}-{:02d}, {}:{:02d}".format(
        moment.year, moment.month, moment.day, moment.hour, moment.minute
    )


def source_file_list(
    source_files: Iterable[str],
    language: str,
    mtime_lookup: Callable[[str], datetime] = file_modified_at,
) -> str:
    label = message(language, "last_modified")
    return "\n".join(
        "<li><tt>{}</tt>, {} {}</li>".format(
            escape(Path(filename).name), label, format_timestamp(mtime_lookup(filename))
        )
        for filename in source_files
    )


def wrap_html(
    body: str,
    source_files: Iterable[str],
    *,
    language: str,
    highlighter: BaseHighlighter,
    mtime_lookup: Callable[[str], datetime] = file_modified_at,
) -> str:
    """Wrap a woven body in the page shell.

    Args:
        body: Output of weave_items().
        source_files: Files the document was woven from, in footer order.
        language: Reduced document language ("fr" or "en").
        highlighter: Delegate asked for the stylesheet.
        mtime_lookup: Returns the last-modification time of a file.

    Raises:
        HighlightError: If the stylesheet could not be produced.
        MetadataLookupError: If a source file's time could not be read.
    """
    css = highlighter.stylesheet(StylesheetRequest(style=highlighter.style, css_scope=CSS_SCOPE))
    files = source_file_list(source_files, language, mtime_lookup)
    return (
        "<head>\n"
        "<style>\n"
        "{css}\n"
        "</style>\n"
        "<meta http-equiv='Content-Type' content='text/html; charset=utf-8'/>\n"
        "</head>\n"
        "<h1>{title}<br />\n"
        "<small>{generated_by} {generator} version {version}</small>\n"
        "</h1>\n"
        "<p>\n"
        "{source_files}\n"
        "</p>\n"
        "<ul>\n"
        "{files}\n"
        "</ul>\n"
        "{body}"
    ).format(
        css=css,
        title=message(language, "title"),
        generated_by=message(language, "generated_by"),
        generator=GENERATOR_NAME,
        version=__version__,
        source_files=message(language, "source_files"),
        files=files,
        body=body,
    )
