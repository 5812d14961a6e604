"""Diagnostic builders and musical helpers shared by the rules and the semantic analyzer.

Both passes build overlapping findings through these helpers so that merged
output can drop exact duplicates.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeAlias

from gabcpy.diagnostics import Diagnostic, RelatedInformation
from gabcpy.diagnostics.codes import (
    RULE_CLEF_CHANGE_ON_FIRST_SYLLABLE,
    RULE_DUPLICATE_HEADER,
    RULE_LINE_BREAK_ON_FIRST_SYLLABLE,
    RULE_NABC_FUSION_MODIFIER_PLACEMENT,
    RULE_NABC_UNBALANCED_PITCH,
    RULE_QUILISMA_EQUAL_OR_LOWER,
    RULE_QUILISMA_MISSING_CONNECTOR,
    RULE_QUILISMA_PES_PRECEDED_BY_HIGHER,
    RULE_VIRGA_STRATA_EQUAL_OR_HIGHER,
)
from gabcpy.model import (
    ClefRole,
    Document,
    HeaderEntry,
    ModifierType,
    NabcDescriptorKind,
    NabcGlyphDescriptor,
    Note,
    NoteGroup,
    NoteShape,
    Syllable,
)
from gabcpy.model.kinds import PITCH_ORDER
from gabcpy.text import Range

NabcChain: TypeAlias = tuple[NabcGlyphDescriptor, ...]


def compare_pitch(first: str, second: str) -> int:
    """Ordinal comparison over a..n; unknown letters compare equal."""
    first_index = PITCH_ORDER.find(first.lower())
    second_index = PITCH_ORDER.find(second.lower())
    if first_index == -1 or second_index == -1:
        return 0
    return (first_index > second_index) - (first_index < second_index)


def step_pitch(pitch: str, steps: int, *, default: str) -> str:
    index = PITCH_ORDER.find(pitch.lower())
    if index == -1:
        return default
    return PITCH_ORDER[max(0, min(len(PITCH_ORDER) - 1, index + steps))]


def is_quilisma(note: Note) -> bool:
    return note.shape is NoteShape.QUILISMA


def is_virga_strata(note: Note) -> bool:
    return note.shape is NoteShape.VIRGA and note.has_modifier(ModifierType.STRATA)


def is_fused(note: Note) -> bool:
    return note.has_modifier(ModifierType.FUSION)


def is_quilisma_pes(notes: Sequence[Note], index: int) -> bool:
    """Quilisma followed by a higher note."""
    return (
        is_quilisma(notes[index])
        and index + 1 < len(notes)
        and compare_pitch(notes[index + 1].pitch, notes[index].pitch) > 0
    )


def has_connector(notes: Sequence[Note], index: int) -> bool:
    note = notes[index]
    if is_fused(note) or note.has_modifier(ModifierType.CONNECTOR):
        return True
    return index > 0 and is_fused(notes[index - 1])


def iter_nabc_chains(document: Document) -> Iterator[tuple[NoteGroup, NabcChain]]:
    for _, _, group in document.iter_note_groups():
        for segment in group.nabc_segments:
            for chain in segment.chains():
                yield group, chain


def chain_range(chain: NabcChain) -> Range:
    return chain[0].range.cover(chain[-1].range)


def chain_text(chain: NabcChain) -> str:
    return "!".join(descriptor.text for descriptor in chain)


# -------------------------
# Builders
# -------------------------


def duplicate_header(name: str, entries: Sequence[HeaderEntry]) -> Diagnostic:
    last = entries[-1]
    return Diagnostic.from_spec(
        RULE_DUPLICATE_HEADER,
        last.name_range,
        message=RULE_DUPLICATE_HEADER.message.format(name=name),
        related_info=tuple(
            RelatedInformation(f"Previous {name} definition", entry.name_range) for entry in entries[:-1]
        ),
    )


def line_break_on_first_syllable(syllable: Syllable) -> Diagnostic:
    assert syllable.line_break is not None
    return Diagnostic.from_spec(RULE_LINE_BREAK_ON_FIRST_SYLLABLE, syllable.line_break.range)


def clef_change_on_first_syllable(syllable: Syllable) -> Diagnostic:
    assert syllable.clef is not None
    return Diagnostic.from_spec(RULE_CLEF_CHANGE_ON_FIRST_SYLLABLE, syllable.clef.range)


def first_syllable_line_break(document: Document) -> Diagnostic | None:
    found = document.first_musical_syllable()
    if found is None:
        return None
    _, syllable = found
    if syllable.line_break is None:
        return None
    return line_break_on_first_syllable(syllable)


def first_syllable_clef_change(document: Document) -> Diagnostic | None:
    found = document.first_musical_syllable()
    if found is None:
        return None
    _, syllable = found
    if syllable.clef is None or syllable.clef.role is not ClefRole.CHANGE:
        return None
    return clef_change_on_first_syllable(syllable)


def quilisma_equal_or_lower(quilisma: Note, following: Note) -> Diagnostic:
    higher = step_pitch(quilisma.pitch, 1, default="g")
    return Diagnostic.from_spec(
        RULE_QUILISMA_EQUAL_OR_LOWER,
        quilisma.range,
        hint=RULE_QUILISMA_EQUAL_OR_LOWER.hint.format(example=f"{quilisma.pitch}w{higher}"),
        related_info=(RelatedInformation("Following note", following.range),),
    )


def quilisma_pes_preceded_by_higher(previous: Note, quilisma: Note) -> Diagnostic:
    return Diagnostic.from_spec(
        RULE_QUILISMA_PES_PRECEDED_BY_HIGHER,
        quilisma.range,
        related_info=(RelatedInformation("Preceding note", previous.range),),
    )


def virga_strata_equal_or_higher(virga: Note, following: Note) -> Diagnostic:
    return Diagnostic.from_spec(
        RULE_VIRGA_STRATA_EQUAL_OR_HIGHER,
        virga.range,
        related_info=(RelatedInformation("Following note", following.range),),
    )


def quilisma_missing_connector(notes: Sequence[Note], index: int) -> Diagnostic:
    previous = notes[index - 1]
    quilisma = notes[index]
    example = "".join(
        (previous.pitch, "!", quilisma.pitch, "w", *(note.pitch for note in notes[index + 1 :]))
    )
    return Diagnostic.from_spec(
        RULE_QUILISMA_MISSING_CONNECTOR,
        quilisma.range,
        hint=RULE_QUILISMA_MISSING_CONNECTOR.hint.format(example=example),
    )


def unbalanced_pitch_descriptors(chain: NabcChain) -> Diagnostic | None:
    glyphs = [descriptor for descriptor in chain if descriptor.kind is NabcDescriptorKind.GLYPH]
    if len(chain) < 2:
        return None
    with_pitch = sum(1 for descriptor in glyphs if descriptor.pitch is not None)
    if with_pitch == 0 or with_pitch == len(glyphs):
        return None
    return Diagnostic.from_spec(
        RULE_NABC_UNBALANCED_PITCH,
        chain_range(chain),
        hint=RULE_NABC_UNBALANCED_PITCH.hint.format(chain=chain_text(chain)),
    )


def misplaced_fusion_modifiers(chain: NabcChain) -> Diagnostic | None:
    if any(descriptor.modifiers for descriptor in chain[:-1]):
        return Diagnostic.from_spec(
            RULE_NABC_FUSION_MODIFIER_PLACEMENT,
            chain_range(chain),
            hint=RULE_NABC_FUSION_MODIFIER_PLACEMENT.hint.format(chain=chain_text(chain)),
        )
    return None
