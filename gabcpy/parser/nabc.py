"""NABC descriptor parser.

Each `|` segment of a note group is parsed into a flat arena of descriptors.
Descriptors joined by `!` are linked through `next_fusion`; every other
descriptor starts a new chain.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from gabcpy.diagnostics import Diagnostic
from gabcpy.diagnostics.codes import PARSER_NABC_INVALID_DESCRIPTOR
from gabcpy.model import (
    NabcDescriptorKind,
    NabcGlyphCode,
    NabcGlyphDescriptor,
    NabcGlyphModifier,
    NabcModifier,
    NabcSegment,
    SignificantLetterFamily,
)
from gabcpy.model.nabc import LAON_LETTERS, PUNCTIS_MODIFIERS
from gabcpy.text import LineIndex, Range

_GLYPH_CODES = frozenset(code.value for code in NabcGlyphCode)
_GLYPH_MODIFIERS = frozenset(modifier.value for modifier in NabcGlyphModifier)
_SIGNIFICANT_LETTER_PREFIXES = ("ls", "lt")
_PUNCTIS_PREFIXES = ("su", "pp")
_SEPARATORS = frozenset(" \t/")


@dataclass(frozen=True, slots=True)
class NabcParse:
    segment: NabcSegment
    diagnostics: tuple[Diagnostic, ...]


class NabcParser:
    """Parses one NABC segment; `base` is the source offset of its first character."""

    def __init__(self, text: str, base: int, line_index: LineIndex) -> None:
        self._text = text
        self._base = base
        self._line_index = line_index
        self._diagnostics: list[Diagnostic] = []

    def parse(self) -> NabcParse:
        text = self._text
        descriptors: list[NabcGlyphDescriptor] = []
        heads: list[int] = []
        previous: int | None = None
        fuse_next = False
        pos = 0
        while pos < len(text):
            char = text[pos]
            if char in _SEPARATORS:
                pos += 1
                continue
            if char == "!":
                fuse_next = previous is not None
                pos += 1
                continue

            descriptor, end = self._scan_descriptor(pos)
            if descriptor is None:
                end = self._skip_invalid(pos)
                self._diagnostics.append(
                    Diagnostic.from_spec(
                        PARSER_NABC_INVALID_DESCRIPTOR,
                        self._range(pos, end),
                        message=f"{PARSER_NABC_INVALID_DESCRIPTOR.message} Found `{text[pos:end]}`.",
                    )
                )
                previous = None
                fuse_next = False
                pos = end
                continue

            index = len(descriptors)
            descriptors.append(descriptor)
            if fuse_next and previous is not None:
                descriptors[previous] = replace(descriptors[previous], next_fusion=index)
            else:
                heads.append(index)
            previous = index
            fuse_next = False
            pos = end

        segment = NabcSegment(
            text=text,
            range=self._range(0, len(text)),
            descriptors=tuple(descriptors),
            heads=tuple(heads),
        )
        return NabcParse(segment=segment, diagnostics=tuple(self._diagnostics))

    def _range(self, start: int, end: int) -> Range:
        return self._line_index.range_of(self._base + start, self._base + end)

    def _skip_invalid(self, pos: int) -> int:
        end = pos + 1
        while end < len(self._text) and self._text[end] != "!" and self._text[end] not in _SEPARATORS:
            end += 1
        return end

    def _scan_descriptor(self, start: int) -> tuple[NabcGlyphDescriptor | None, int]:
        text = self._text
        if text.startswith(_SIGNIFICANT_LETTER_PREFIXES, start):
            return self._scan_significant_letter(start)
        if text.startswith(_PUNCTIS_PREFIXES, start):
            return self._scan_punctis(start)

        code = text[start : start + 2]
        if code not in _GLYPH_CODES:
            return None, start

        pos = start + 2
        modifiers: list[NabcModifier] = []
        while pos < len(text) and text[pos] in _GLYPH_MODIFIERS:
            modifier = NabcGlyphModifier(text[pos])
            pos += 1
            variant: int | None = None
            if pos < len(text) and text[pos] in "123456789":
                variant = int(text[pos])
                pos += 1
            modifiers.append(NabcModifier(modifier, variant))

        pitch: str | None = None
        if text.startswith("h", pos) and pos + 1 < len(text) and text[pos + 1].isalpha():
            pitch = text[pos + 1]
            pos += 2

        attachments: list[NabcGlyphDescriptor] = []
        while text.startswith(_SIGNIFICANT_LETTER_PREFIXES + _PUNCTIS_PREFIXES, pos):
            attachment, end = self._scan_descriptor(pos)
            if attachment is None:
                break
            attachments.append(attachment)
            pos = end

        return (
            NabcGlyphDescriptor(
                kind=NabcDescriptorKind.GLYPH,
                text=text[start:pos],
                range=self._range(start, pos),
                code=NabcGlyphCode(code),
                pitch=pitch,
                modifiers=tuple(modifiers),
                attachments=tuple(attachments),
            ),
            pos,
        )

    def _scan_significant_letter(self, start: int) -> tuple[NabcGlyphDescriptor | None, int]:
        text = self._text
        pos = start + 2
        letters_start = pos
        while pos < len(text) and text[pos].isascii() and text[pos].islower():
            pos += 1
        letters = text[letters_start:pos]
        if not letters:
            return None, start
        family = SignificantLetterFamily(text[start : start + 2])
        laon_dash = text.startswith("-", pos) and f"{letters}-" in LAON_LETTERS
        if family is SignificantLetterFamily.LETTER and laon_dash:
            letters += "-"
            pos += 1
        digits_start = pos
        while pos < len(text) and text[pos].isdigit():
            pos += 1
        position = int(text[digits_start:pos]) if pos > digits_start else None
        return (
            NabcGlyphDescriptor(
                kind=NabcDescriptorKind.SIGNIFICANT_LETTER,
                text=text[start:pos],
                range=self._range(start, pos),
                family=family,
                letters=letters,
                position=position,
            ),
            pos,
        )

    def _scan_punctis(self, start: int) -> tuple[NabcGlyphDescriptor | None, int]:
        text = self._text
        pos = start + 2
        modifier: str | None = None
        if pos < len(text) and text[pos] in PUNCTIS_MODIFIERS:
            modifier = text[pos]
            pos += 1
        digits_start = pos
        while pos < len(text) and text[pos].isdigit():
            pos += 1
        count = int(text[digits_start:pos]) if pos > digits_start else None
        kind = NabcDescriptorKind.SUBPUNCTIS if text.startswith("su", start) else NabcDescriptorKind.PREPUNCTIS
        return (
            NabcGlyphDescriptor(
                kind=kind,
                text=text[start:pos],
                range=self._range(start, pos),
                punctis_modifier=modifier,
                count=count,
            ),
            pos,
        )


def parse_nabc_segment(text: str, base: int, line_index: LineIndex) -> NabcParse:
    """Parse one `|`-delimited NABC segment; base is its source offset."""
    return NabcParser(text, base, line_index).parse()
