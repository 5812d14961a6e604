"""GABC parse entrypoints."""

from __future__ import annotations

import logging
from pathlib import Path

from gabcpy.diagnostics import collect_diagnostics
from gabcpy.model import Comment, Document
from gabcpy.parser.headers import parse_headers
from gabcpy.parser.notation import parse_notation
from gabcpy.scanner import FragmentKind, Scanner
from gabcpy.text import LineIndex

logger = logging.getLogger(__name__)


def parse(text: str) -> Document:
    """Parse a full GABC source into a document.

    Malformed input never raises; every problem is recorded in `Document.errors`.
    """
    line_index = LineIndex(text)
    scanner = Scanner(text, line_index=line_index)
    fragments = scanner.scan()

    separator_at = next(
        (index for index, fragment in enumerate(fragments) if fragment.kind is FragmentKind.SEPARATOR),
        len(fragments),
    )
    headers = parse_headers(fragments[:separator_at], line_index)
    notation = parse_notation(fragments[separator_at + 1 :], line_index)

    comments = tuple(
        Comment(text=fragment.text, range=line_index.range(fragment.range))
        for fragment in fragments
        if fragment.kind is FragmentKind.COMMENT
    )
    errors = sorted(
        collect_diagnostics(scanner.diagnostics, headers.diagnostics, notation.diagnostics),
        key=lambda diagnostic: (diagnostic.range.start, diagnostic.range.end),
    )

    document = Document(
        source_text=text,
        headers=headers.headers,
        header_entries=headers.entries,
        comments=comments,
        syllables=notation.syllables,
        errors=tuple(errors),
    )
    logger.debug(
        "parsed %d header(s), %d syllable(s), %d parse diagnostic(s)",
        len(document.header_entries),
        len(document.syllables),
        len(document.errors),
    )
    return document


def parse_file(path: str | Path, *, encoding: str = "utf-8-sig") -> Document:
    """Read and parse a `.gabc` file; a UTF-8 byte order mark is dropped."""
    return parse(Path(path).read_text(encoding=encoding))
