"""Notation region parser: fragments to syllables."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import re

from gabcpy.diagnostics import Diagnostic
from gabcpy.model import (
    Bar,
    BarKind,
    Clef,
    ClefRole,
    LineBreak,
    NoteGroup,
    Syllable,
)
from gabcpy.parser.nabc import parse_nabc_segment
from gabcpy.parser.notes import tokenize_notes
from gabcpy.scanner import Fragment, FragmentKind
from gabcpy.text import LineIndex, TextRange

_CLEF = re.compile(r"\s*([cf])(b?)([1-5])\s*")

_BARS: tuple[tuple[re.Pattern[str], BarKind], ...] = (
    (re.compile(r"::[_'?]?"), BarKind.DIVISIO_FINALIS),
    (re.compile(r":[_'?]?"), BarKind.DIVISIO_MAIOR),
    (re.compile(r";[1-8]"), BarKind.DOMINICAN),
    (re.compile(r";[_'?]?"), BarKind.DIVISIO_MINOR),
    (re.compile(r",[0_'?]?"), BarKind.DIVISIO_MINIMA),
    (re.compile(r"`0?"), BarKind.VIRGULA),
)

_STYLE_TAG = re.compile(r"</?(?:b|i|sc|ul|tt|c)>")
_DROPPED_ELEMENT = re.compile(r"<(v|alt)>.*?</\1>", re.DOTALL)


def match_clef(content: str) -> tuple[str, bool, int] | None:
    """Return (letter, flat, line) when the group content is a lone clef."""
    match = _CLEF.fullmatch(content)
    if match is None:
        return None
    return match.group(1), bool(match.group(2)), int(match.group(3))


def match_bar(content: str) -> BarKind | None:
    symbol = content.strip()
    for pattern, kind in _BARS:
        if pattern.fullmatch(symbol):
            return kind
    return None


def clean_lyric(raw: str) -> str:
    """Lyric text without style tags, verbatim/alternate elements or line continuations."""
    text = _DROPPED_ELEMENT.sub("", raw)
    text = _STYLE_TAG.sub("", text)
    return text.replace("\\\n", "").replace("\\\r\n", "").strip()


def split_note_group(content: str) -> tuple[str, list[tuple[int, str]]]:
    """Split group content on unescaped `|`.

    Returns the GABC part and the NABC segments as (offset in content, text).
    """
    pieces: list[tuple[int, str]] = []
    start = 0
    index = 0
    while index < len(content):
        char = content[index]
        if char == "\\":
            index += 2
            continue
        if char == "|":
            pieces.append((start, content[start:index]))
            start = index + 1
        index += 1
    pieces.append((start, content[start:]))
    return pieces[0][1], pieces[1:]


@dataclass(slots=True)
class _SyllableBuilder:
    start: int
    end: int
    raw_text: str = ""
    clef: Clef | None = None
    groups: list[NoteGroup] = field(default_factory=list)
    bar: Bar | None = None
    line_break: LineBreak | None = None

    @property
    def has_notation(self) -> bool:
        return bool(self.groups) or self.bar is not None


@dataclass(frozen=True, slots=True)
class NotationSection:
    syllables: tuple[Syllable, ...]
    diagnostics: tuple[Diagnostic, ...]


class NotationParser:
    """Groups text runs and note groups into syllables.

    Adjacent groups share a syllable; whitespace after notation, or new text,
    starts the next one. A group holding only a clef is attached to the next
    syllable, and the first clef of the document is the initial clef.
    """

    def __init__(self, fragments: Sequence[Fragment], line_index: LineIndex) -> None:
        self._fragments = fragments
        self._line_index = line_index
        self._syllables: list[Syllable] = []
        self._diagnostics: list[Diagnostic] = []
        self._builder: _SyllableBuilder | None = None
        self._pending_clef: tuple[Clef, TextRange] | None = None
        self._seen_clef = False

    def parse(self) -> NotationSection:
        boundary = False
        for fragment in self._fragments:
            if fragment.kind.is_trivia:
                boundary = True
            elif fragment.kind is FragmentKind.TEXT:
                self._finish()
                builder = self._new_builder(fragment.range.start)
                builder.raw_text = fragment.text
                builder.end = fragment.range.end
                boundary = False
            elif fragment.kind is FragmentKind.NOTE_GROUP:
                self._handle_group(fragment, boundary)
                boundary = False

        self._finish()
        if self._pending_clef is not None:
            self._emit_clef_only(*self._pending_clef)
            self._pending_clef = None
        return NotationSection(syllables=tuple(self._syllables), diagnostics=tuple(self._diagnostics))

    def _new_builder(self, start: int) -> _SyllableBuilder:
        builder = _SyllableBuilder(start=start, end=start)
        if self._pending_clef is not None:
            clef, clef_range = self._pending_clef
            builder.clef = clef
            builder.start = clef_range.start
            self._pending_clef = None
        self._builder = builder
        return builder

    def _handle_group(self, fragment: Fragment, boundary: bool) -> None:
        builder = self._builder
        if builder is not None and boundary and builder.has_notation:
            self._finish()
            builder = None

        content = fragment.content
        clef_parts = match_clef(content) if fragment.terminated else None
        if clef_parts is not None:
            clef = self._make_clef(clef_parts, fragment.range)
            if builder is None:
                if self._pending_clef is not None:
                    self._emit_clef_only(*self._pending_clef)
                self._pending_clef = (clef, fragment.range)
            elif builder.clef is None:
                builder.clef = clef
                builder.end = fragment.range.end
            else:
                self._finish()
                self._pending_clef = (clef, fragment.range)
            return

        if builder is None:
            builder = self._new_builder(fragment.range.start)

        bar_kind = match_bar(content)
        if bar_kind is not None:
            if builder.bar is not None:
                self._finish()
                builder = self._new_builder(fragment.range.start)
            builder.bar = Bar(bar_kind, content.strip(), self._line_index.range(fragment.range))
            builder.end = fragment.range.end
            return

        if builder.bar is not None:
            self._finish()
            builder = self._new_builder(fragment.range.start)

        group, line_break = self._parse_group(fragment)
        builder.groups.append(group)
        if builder.line_break is None:
            builder.line_break = line_break
        builder.end = fragment.range.end

    def _make_clef(self, parts: tuple[str, bool, int], text_range: TextRange) -> Clef:
        letter, flat, line = parts
        role = ClefRole.CHANGE if self._seen_clef else ClefRole.INITIAL
        self._seen_clef = True
        return Clef(letter=letter, line=line, flat=flat, range=self._line_index.range(text_range), role=role)

    def _parse_group(self, fragment: Fragment) -> tuple[NoteGroup, LineBreak | None]:
        assert fragment.content_range is not None
        base = fragment.content_range.start
        gabc, nabc_pieces = split_note_group(fragment.content)

        scan = tokenize_notes(gabc, base, self._line_index)
        self._diagnostics.extend(scan.diagnostics)

        segments = []
        for offset, text in nabc_pieces:
            parsed = parse_nabc_segment(text, base + offset, self._line_index)
            self._diagnostics.extend(parsed.diagnostics)
            segments.append(parsed.segment)

        group = NoteGroup(
            gabc=gabc,
            range=self._line_index.range(fragment.range),
            notes=scan.notes,
            nabc=tuple(text for _, text in nabc_pieces),
            nabc_segments=tuple(segments),
            attributes=scan.attributes,
            custos=scan.custos,
        )
        return group, scan.line_break

    def _emit_clef_only(self, clef: Clef, text_range: TextRange) -> None:
        self._syllables.append(Syllable(text="", range=self._line_index.range(text_range), clef=clef))

    def _finish(self) -> None:
        builder = self._builder
        if builder is None:
            return
        self._builder = None
        self._syllables.append(
            Syllable(
                text=clean_lyric(builder.raw_text),
                raw_text=builder.raw_text,
                range=self._line_index.range_of(builder.start, builder.end),
                clef=builder.clef,
                note_groups=tuple(builder.groups),
                bar=builder.bar,
                line_break=builder.line_break,
            )
        )


def parse_notation(fragments: Sequence[Fragment], line_index: LineIndex) -> NotationSection:
    return NotationParser(fragments, line_index).parse()
