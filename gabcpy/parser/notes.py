"""Note, modifier and alteration tokenizer for the GABC part of a note group."""

from __future__ import annotations

from dataclasses import dataclass, replace

from gabcpy.diagnostics import Diagnostic
from gabcpy.diagnostics.codes import PARSER_UNRECOGNIZED_CHARACTER, PARSER_UNTERMINATED_ATTRIBUTE
from gabcpy.model import (
    Alteration,
    AlterationKind,
    Custos,
    CustosKind,
    GabcAttribute,
    LineBreak,
    Modifier,
    ModifierType,
    Note,
    NoteShape,
    NoteToken,
    NoteTokenKind,
)
from gabcpy.model.kinds import (
    ALTERATION_CHARACTERS,
    ALTERATION_SHAPES,
    LINE_BREAK_CHARACTERS,
    PITCHES,
    SHAPE_CHARACTERS,
)
from gabcpy.text import LineIndex, Range

# spacing, in-group bars and digits that only matter to the engraver
_SKIPPED = frozenset(" \t\r\n/`,;:^{}0123456789")
_REPEATABLE_SHAPES = frozenset("vs")


def is_pitch(char: str) -> bool:
    return char.lower() in PITCHES


def alteration_length(text: str, position: int) -> int:
    """Exact source length of the alteration starting at position."""
    following = text[position + 1 : position + 3]
    if text[position] == "#" and following.startswith("#"):
        return 3 if following == "#?" else 2
    return 2 if following.startswith("?") else 1


@dataclass(frozen=True, slots=True)
class GabcScan:
    notes: tuple[Note, ...]
    attributes: tuple[GabcAttribute, ...]
    custos: Custos | None
    line_break: LineBreak | None
    diagnostics: tuple[Diagnostic, ...]


class NoteTokenizer:
    """Scans notes left to right; `base` is the source offset of the first character."""

    def __init__(self, text: str, base: int, line_index: LineIndex) -> None:
        self._text = text
        self._base = base
        self._line_index = line_index
        self._position = 0
        self._notes: list[Note] = []
        self._attributes: list[GabcAttribute] = []
        self._custos: Custos | None = None
        self._line_break: LineBreak | None = None
        self._diagnostics: list[Diagnostic] = []
        self._connect_next = False

    def tokenize(self) -> GabcScan:
        text = self._text
        while self._position < len(text):
            start = self._position
            char = text[start]
            if is_pitch(char) or (char == "-" and start + 1 < len(text) and is_pitch(text[start + 1])):
                self._notes.append(self._scan_note())
            elif char == "@":
                self._fuse_previous(start)
            elif char == "!":
                self._connect_next = True
                self._position += 1
            elif char == "[":
                self._scan_attribute()
            elif char in LINE_BREAK_CHARACTERS:
                self._scan_line_break_or_custos()
            elif char == "+" and start + 1 < len(text) and is_pitch(text[start + 1]):
                self._custos = Custos(
                    CustosKind.EXPLICIT,
                    self._range(start, start + 2),
                    pitch=text[start + 1].lower(),
                )
                self._position += 2
            elif char in _SKIPPED:
                self._position += 1
            else:
                self._diagnostics.append(
                    Diagnostic.from_spec(
                        PARSER_UNRECOGNIZED_CHARACTER,
                        self._range(start, start + 1),
                        message=f"Unrecognized character `{char}` in note group.",
                    )
                )
                self._position += 1

        return GabcScan(
            notes=tuple(self._notes),
            attributes=tuple(self._attributes),
            custos=self._custos,
            line_break=self._line_break,
            diagnostics=tuple(self._diagnostics),
        )

    def _range(self, start: int, end: int) -> Range:
        return self._line_index.range_of(self._base + start, self._base + end)

    def _token(self, kind: NoteTokenKind, start: int, end: int) -> NoteToken:
        return NoteToken(kind, self._text[start:end], self._range(start, end))

    def _scan_note(self) -> Note:
        text = self._text
        start = self._position
        pos = start
        tokens: list[NoteToken] = []
        modifiers: list[Modifier] = []

        if text[pos] == "-":
            tokens.append(self._token(NoteTokenKind.INITIO_DEBILIS, pos, pos + 1))
            modifiers.append(Modifier(ModifierType.INITIO_DEBILIS))
            pos += 1
        if self._connect_next:
            modifiers.append(Modifier(ModifierType.CONNECTOR))
            self._connect_next = False

        pitch_char = text[pos]
        inclinatum = pitch_char.isupper()
        tokens.append(self._token(NoteTokenKind.PITCH, pos, pos + 1))
        pos += 1
        shape = NoteShape.PUNCTUM_INCLINATUM if inclinatum else NoteShape.PUNCTUM
        if inclinatum and pos < len(text) and text[pos] in "012":
            tokens.append(self._token(NoteTokenKind.LEANING, pos, pos + 1))
            modifiers.append(Modifier(ModifierType.LEANING, int(text[pos])))
            pos += 1

        alteration: Alteration | None = None
        previous_shape_char: str | None = None
        repeat = 1
        while pos < len(text):
            char = text[pos]
            entry = SHAPE_CHARACTERS.get(char)
            if entry is not None:
                kind = NoteTokenKind.LIQUESCENCE if entry.modifier is ModifierType.LIQUESCENT else NoteTokenKind.SHAPE
                tokens.append(self._token(kind, pos, pos + 1))
                if char == "o" and shape is NoteShape.VIRGA:
                    modifiers.append(Modifier(ModifierType.STRATA))
                elif char == previous_shape_char and char in _REPEATABLE_SHAPES:
                    repeat += 1
                else:
                    if entry.shape is not None and (
                        entry.replaces_shape or shape in (NoteShape.PUNCTUM, NoteShape.PUNCTUM_INCLINATUM)
                    ):
                        shape = entry.shape
                    if entry.modifier is not None:
                        value: int | None = None
                        if entry.takes_orientation and pos + 1 < len(text) and text[pos + 1] in "01":
                            tokens.append(self._token(NoteTokenKind.ORIENTATION, pos + 1, pos + 2))
                            value = int(text[pos + 1])
                            pos += 1
                        modifiers.append(Modifier(entry.modifier, value))
                previous_shape_char = char
                pos += 1
            elif char in ALTERATION_CHARACTERS and alteration is None:
                length = alteration_length(text, pos)
                spelled = text[pos : pos + length]
                alteration_kind = (
                    AlterationKind.DOUBLE_SHARP if spelled.startswith("##") else ALTERATION_CHARACTERS[char]
                )
                alteration = Alteration(
                    char=char,
                    kind=alteration_kind,
                    length=length,
                    range=self._range(pos, pos + length),
                    parenthesized=spelled.endswith("?"),
                )
                tokens.append(self._token(NoteTokenKind.ALTERATION, pos, pos + length))
                shape = ALTERATION_SHAPES[alteration_kind]
                pos += length
            elif char == "'":
                pos = self._scan_placed_sign(
                    pos, NoteTokenKind.ICTUS, ModifierType.VERTICAL_EPISEMA, "01", tokens, modifiers
                )
            elif char == "_":
                pos = self._scan_placed_sign(
                    pos, NoteTokenKind.EPISEMA, ModifierType.HORIZONTAL_EPISEMA, "012345", tokens, modifiers
                )
            elif char == ".":
                end = pos + 2 if text.startswith("..", pos) else pos + 1
                tokens.append(self._token(NoteTokenKind.MORA, pos, end))
                modifiers.append(Modifier(ModifierType.PUNCTUM_MORA, end - pos))
                pos = end
            elif char == "@":
                tokens.append(self._token(NoteTokenKind.FUSION, pos, pos + 1))
                modifiers.append(Modifier(ModifierType.FUSION))
                pos += 1
                break
            else:
                break

        if repeat > 1:
            modifiers.append(Modifier(ModifierType.REPEAT, repeat))

        self._position = pos
        return Note(
            pitch=pitch_char.lower(),
            shape=shape,
            range=self._range(start, pos),
            modifiers=tuple(modifiers),
            alteration=alteration,
            inclinatum=inclinatum,
            tokens=tuple(tokens),
        )

    def _scan_placed_sign(
        self,
        pos: int,
        token_kind: NoteTokenKind,
        modifier_type: ModifierType,
        digits: str,
        tokens: list[NoteToken],
        modifiers: list[Modifier],
    ) -> int:
        """Ictus or episema with an optional placement digit."""
        value: int | None = None
        end = pos + 1
        if end < len(self._text) and self._text[end] in digits:
            value = int(self._text[end])
            end += 1
        tokens.append(self._token(token_kind, pos, end))
        modifiers.append(Modifier(modifier_type, value))
        return end

    def _fuse_previous(self, start: int) -> None:
        self._position = start + 1
        if not self._notes:
            return
        previous = self._notes[-1]
        if previous.has_modifier(ModifierType.FUSION):
            return
        self._notes[-1] = replace(
            previous,
            modifiers=(*previous.modifiers, Modifier(ModifierType.FUSION)),
            tokens=(*previous.tokens, self._token(NoteTokenKind.FUSION, start, start + 1)),
        )

    def _scan_attribute(self) -> None:
        text = self._text
        start = self._position
        close = text.find("]", start + 1)
        if close == -1:
            self._diagnostics.append(
                Diagnostic.from_spec(PARSER_UNTERMINATED_ATTRIBUTE, self._range(start, len(text)))
            )
            self._position = len(text)
            return
        body = text[start + 1 : close]
        name, separator, value = body.partition(":")
        self._attributes.append(
            GabcAttribute(
                name=name.strip(),
                value=value.strip() if separator else None,
                range=self._range(start, close + 1),
            )
        )
        self._position = close + 1

    def _scan_line_break_or_custos(self) -> None:
        text = self._text
        start = self._position
        char = text[start]
        if char == "z" and text.startswith("0", start + 1):
            self._custos = Custos(CustosKind.AUTO, self._range(start, start + 2))
            self._position = start + 2
            return
        end = start + 1
        if end < len(text) and text[end] in "+-":
            end += 1
        self._line_break = LineBreak(LINE_BREAK_CHARACTERS[char], self._range(start, end))
        self._position = end


def tokenize_notes(text: str, base: int, line_index: LineIndex) -> GabcScan:
    """Tokenize the GABC part of one note group; base is its source offset."""
    return NoteTokenizer(text, base, line_index).tokenize()
