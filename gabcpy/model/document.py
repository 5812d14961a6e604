"""Immutable GABC document model."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gabcpy.diagnostics import Diagnostic
from gabcpy.model.kinds import (
    AlterationKind,
    BarKind,
    ClefRole,
    CustosKind,
    LineBreakKind,
    ModifierType,
    NoteShape,
    NoteTokenKind,
)
from gabcpy.model.nabc import NabcGlyphDescriptor, NabcSegment
from gabcpy.text import Range


@dataclass(frozen=True, slots=True)
class HeaderEntry:
    """One `name: value;` declaration, in source order."""

    name: str
    value: str
    range: Range
    name_range: Range
    value_range: Range


@dataclass(frozen=True, slots=True)
class Comment:
    text: str
    range: Range


@dataclass(frozen=True, slots=True)
class Clef:
    letter: str
    line: int
    range: Range
    flat: bool = False
    role: ClefRole = ClefRole.INITIAL

    @property
    def text(self) -> str:
        return f"{self.letter}{'b' if self.flat else ''}{self.line}"


@dataclass(frozen=True, slots=True)
class Bar:
    kind: BarKind
    symbol: str
    range: Range


@dataclass(frozen=True, slots=True)
class LineBreak:
    kind: LineBreakKind
    range: Range


@dataclass(frozen=True, slots=True)
class Custos:
    kind: CustosKind
    range: Range
    pitch: str | None = None


@dataclass(frozen=True, slots=True)
class GabcAttribute:
    """Bracketed `[name:value]` or `[name]` attribute inside a note group."""

    name: str
    value: str | None
    range: Range


@dataclass(frozen=True, slots=True)
class Alteration:
    """Accidental written after a pitch; `length` is the exact source length."""

    char: str
    kind: AlterationKind
    length: int
    range: Range
    parenthesized: bool = False


@dataclass(frozen=True, slots=True)
class Modifier:
    type: ModifierType
    value: int | None = None


@dataclass(frozen=True, slots=True)
class NoteToken:
    kind: NoteTokenKind
    text: str
    range: Range


@dataclass(frozen=True, slots=True)
class Note:
    pitch: str
    shape: NoteShape
    range: Range
    modifiers: tuple[Modifier, ...] = ()
    alteration: Alteration | None = None
    inclinatum: bool = False
    tokens: tuple[NoteToken, ...] = ()

    def has_modifier(self, modifier_type: ModifierType) -> bool:
        return any(modifier.type is modifier_type for modifier in self.modifiers)

    def modifier(self, modifier_type: ModifierType) -> Modifier | None:
        for modifier in self.modifiers:
            if modifier.type is modifier_type:
                return modifier
        return None

    def tokens_of(self, kind: NoteTokenKind) -> tuple[NoteToken, ...]:
        return tuple(token for token in self.tokens if token.kind is kind)


@dataclass(frozen=True, slots=True)
class NoteGroup:
    """One parenthesized unit: GABC notes plus optional NABC segments."""

    gabc: str
    range: Range
    notes: tuple[Note, ...] = ()
    nabc: tuple[str, ...] = ()
    nabc_segments: tuple[NabcSegment, ...] = ()
    attributes: tuple[GabcAttribute, ...] = ()
    custos: Custos | None = None

    @property
    def has_nabc(self) -> bool:
        return bool(self.nabc)

    @property
    def nabc_descriptors(self) -> tuple[NabcGlyphDescriptor, ...]:
        """Chain heads of every segment, in source order."""
        return tuple(
            descriptor for segment in self.nabc_segments for descriptor in segment.head_descriptors()
        )


@dataclass(frozen=True, slots=True)
class Syllable:
    text: str
    range: Range
    raw_text: str = ""
    clef: Clef | None = None
    note_groups: tuple[NoteGroup, ...] = ()
    bar: Bar | None = None
    line_break: LineBreak | None = None

    @property
    def has_line_break(self) -> bool:
        return self.line_break is not None

    @property
    def is_clef_only(self) -> bool:
        return (
            self.clef is not None
            and not self.text
            and not self.note_groups
            and self.bar is None
            and self.line_break is None
        )

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(note for group in self.note_groups for note in group.notes)


@dataclass(frozen=True, slots=True)
class Document:
    source_text: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    header_entries: tuple[HeaderEntry, ...] = ()
    comments: tuple[Comment, ...] = ()
    syllables: tuple[Syllable, ...] = ()
    errors: tuple[Diagnostic, ...] = ()

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def duplicate_headers(self) -> Mapping[str, tuple[HeaderEntry, ...]]:
        grouped: dict[str, list[HeaderEntry]] = {}
        for entry in self.header_entries:
            grouped.setdefault(entry.name, []).append(entry)
        return MappingProxyType(
            {name: tuple(entries) for name, entries in grouped.items() if len(entries) > 1}
        )

    @property
    def nabc_lines(self) -> int | None:
        """Declared `nabc-lines` count, or None when absent or not a positive integer."""
        raw = self.header("nabc-lines")
        if raw is None:
            return None
        try:
            value = int(raw.strip())
        except ValueError:
            return None
        return value if value >= 1 else None

    @property
    def has_errors(self) -> bool:
        return any(error.severity == "error" for error in self.errors)

    def clefs(self) -> tuple[Clef, ...]:
        return tuple(syllable.clef for syllable in self.syllables if syllable.clef is not None)

    def iter_note_groups(self) -> Iterator[tuple[int, Syllable, NoteGroup]]:
        for index, syllable in enumerate(self.syllables):
            for group in syllable.note_groups:
                yield index, syllable, group

    def first_musical_syllable(self) -> tuple[int, Syllable] | None:
        """First syllable that is not a bare clef declaration."""
        for index, syllable in enumerate(self.syllables):
            if not syllable.is_clef_only:
                return index, syllable
        return None
