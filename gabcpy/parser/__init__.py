"""GABC parser."""

from gabcpy.parser.gabc import parse, parse_file
from gabcpy.parser.headers import HeaderSection, parse_headers
from gabcpy.parser.nabc import NabcParse, NabcParser, parse_nabc_segment
from gabcpy.parser.notation import (
    NotationParser,
    NotationSection,
    clean_lyric,
    match_bar,
    match_clef,
    parse_notation,
    split_note_group,
)
from gabcpy.parser.notes import (
    GabcScan,
    NoteTokenizer,
    alteration_length,
    is_pitch,
    tokenize_notes,
)

__all__ = [
    "GabcScan",
    "HeaderSection",
    "NabcParse",
    "NabcParser",
    "NotationParser",
    "NotationSection",
    "NoteTokenizer",
    "alteration_length",
    "clean_lyric",
    "is_pitch",
    "match_bar",
    "match_clef",
    "parse",
    "parse_file",
    "parse_headers",
    "parse_nabc_segment",
    "parse_notation",
    "split_note_group",
    "tokenize_notes",
]
