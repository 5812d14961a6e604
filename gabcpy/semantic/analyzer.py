"""Semantic analysis over a parsed document.

Cross-note and cross-syllable checks: each note is looked at together with the
previous and next notes, and the first note of a syllable with the last note of
the syllable before it. NABC fusion chains are walked recursively.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from gabcpy.diagnostics import Diagnostic, sort_by_severity
from gabcpy.diagnostics.codes import (
    SEMANTIC_NABC_CONFLICTING_LIQUESCENCE,
    SEMANTIC_NABC_INVALID_LETTER_POSITION,
    SEMANTIC_NABC_INVALID_PITCH,
    SEMANTIC_NABC_PUNCTIS_MISSING_COUNT,
    SEMANTIC_NABC_UNKNOWN_SIGNIFICANT_LETTER,
    SEMANTIC_ORISCUS_SCAPUS_ISOLATED,
    SEMANTIC_ORISCUS_SCAPUS_MISSING_PRECEDING,
    SEMANTIC_ORISCUS_SCAPUS_MISSING_SUBSEQUENT,
    SEMANTIC_PES_QUADRATUM_MISSING_NOTE,
    SEMANTIC_QUILISMA_MISSING_NOTE,
)
from gabcpy.model import (
    Document,
    ModifierType,
    NabcDescriptorKind,
    NabcGlyphDescriptor,
    NabcGlyphModifier,
    NabcSegment,
    Note,
    NoteShape,
    SignificantLetterFamily,
)
from gabcpy.model.kinds import PITCHES
from gabcpy.model.nabc import LAON_LETTERS, ST_GALL_LETTERS, TIRONIAN_LETTERS
from gabcpy.validation.findings import (
    compare_pitch,
    duplicate_header,
    first_syllable_clef_change,
    first_syllable_line_break,
    has_connector,
    is_fused,
    is_quilisma,
    is_quilisma_pes,
    is_virga_strata,
    quilisma_equal_or_lower,
    quilisma_missing_connector,
    quilisma_pes_preceded_by_higher,
    step_pitch,
    virga_strata_equal_or_higher,
)

logger = logging.getLogger(__name__)


class SemanticAnalyzer:
    """Second pass that keeps findings for one document at a time."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []
        self._document: Document | None = None

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._diagnostics

    def analyze(self, document: Document) -> list[Diagnostic]:
        self._diagnostics = []
        self._document = document
        self._run_stage("headers", self._check_headers)
        self._run_stage("first syllable", self._check_first_syllable)
        self._run_stage("notes", self._check_notes)
        self._run_stage("nabc", self._check_nabc)
        return sort_by_severity(self._diagnostics)

    def _run_stage(self, name: str, stage: Callable[[Document], None]) -> None:
        assert self._document is not None
        try:
            stage(self._document)
        except Exception:
            logger.exception("semantic analysis stage %s failed; skipping it", name)

    def _report(self, diagnostic: Diagnostic | None) -> None:
        if diagnostic is not None:
            self._diagnostics.append(diagnostic)

    # -------------------------
    # Document level
    # -------------------------

    def _check_headers(self, document: Document) -> None:
        for name, entries in document.duplicate_headers().items():
            self._report(duplicate_header(name, entries))

    def _check_first_syllable(self, document: Document) -> None:
        self._report(first_syllable_line_break(document))
        self._report(first_syllable_clef_change(document))

    # -------------------------
    # Notes
    # -------------------------

    def _check_notes(self, document: Document) -> None:
        previous_syllable_last: Note | None = None
        for syllable in document.syllables:
            syllable_notes = syllable.notes
            offset = 0
            for group in syllable.note_groups:
                notes = group.notes
                for index, note in enumerate(notes):
                    previous = notes[index - 1] if index > 0 else None
                    following = notes[index + 1] if index + 1 < len(notes) else None
                    self._check_isolated_ornaments(note, previous, following)
                    self._check_pitch_relations(note, following)

                    if is_quilisma_pes(notes, index):
                        position = offset + index
                        before = syllable_notes[position - 1] if position > 0 else previous_syllable_last
                        if before is not None and compare_pitch(before.pitch, note.pitch) >= 0:
                            self._report(quilisma_pes_preceded_by_higher(before, note))

                if len(notes) >= 3:
                    for index in range(1, len(notes)):
                        if is_quilisma(notes[index]) and not has_connector(notes, index):
                            self._report(quilisma_missing_connector(notes, index))
                offset += len(notes)
            previous_syllable_last = syllable_notes[-1] if syllable_notes else None

    def _check_isolated_ornaments(self, note: Note, previous: Note | None, following: Note | None) -> None:
        fused = is_fused(note)
        if (
            note.has_modifier(ModifierType.QUADRATUM)
            and note.shape is not NoteShape.QUILISMA
            and following is None
            and not fused
        ):
            higher = step_pitch(note.pitch, 1, default="g")
            self._report(
                Diagnostic.from_spec(
                    SEMANTIC_PES_QUADRATUM_MISSING_NOTE,
                    note.range,
                    hint=SEMANTIC_PES_QUADRATUM_MISSING_NOTE.hint.format(example=f"{note.pitch}q{higher}"),
                )
            )

        if is_quilisma(note) and following is None and not fused:
            higher = step_pitch(note.pitch, 1, default="g")
            self._report(
                Diagnostic.from_spec(
                    SEMANTIC_QUILISMA_MISSING_NOTE,
                    note.range,
                    hint=SEMANTIC_QUILISMA_MISSING_NOTE.hint.format(example=f"{note.pitch}w{higher}"),
                )
            )

        if note.shape is NoteShape.ORISCUS_SCAPUS:
            has_previous = previous is not None
            has_following = following is not None or fused
            lower = step_pitch(note.pitch, -1, default="d")
            higher = step_pitch(note.pitch, 1, default="g")
            example = f"{lower}{note.pitch}O{higher}"
            if not has_previous and not has_following:
                spec = SEMANTIC_ORISCUS_SCAPUS_ISOLATED
            elif not has_previous:
                spec = SEMANTIC_ORISCUS_SCAPUS_MISSING_PRECEDING
            elif not has_following:
                spec = SEMANTIC_ORISCUS_SCAPUS_MISSING_SUBSEQUENT
            else:
                return
            self._report(Diagnostic.from_spec(spec, note.range, hint=f"Write it between two notes, as in `{example}`."))

    def _check_pitch_relations(self, note: Note, following: Note | None) -> None:
        if following is None:
            return
        if is_quilisma(note) and compare_pitch(following.pitch, note.pitch) <= 0:
            self._report(quilisma_equal_or_lower(note, following))
        if is_virga_strata(note) and compare_pitch(following.pitch, note.pitch) >= 0:
            self._report(virga_strata_equal_or_higher(note, following))

    # -------------------------
    # NABC
    # -------------------------

    def _check_nabc(self, document: Document) -> None:
        for _, _, group in document.iter_note_groups():
            for segment in group.nabc_segments:
                for head in segment.heads:
                    self._check_descriptor(segment, head)

    def _check_descriptor(self, segment: NabcSegment, index: int) -> None:
        descriptor = segment.descriptors[index]
        self._check_single_descriptor(descriptor)
        for attachment in descriptor.attachments:
            self._check_single_descriptor(attachment)
        if descriptor.next_fusion is not None:
            self._check_descriptor(segment, descriptor.next_fusion)

    def _check_single_descriptor(self, descriptor: NabcGlyphDescriptor) -> None:
        if descriptor.kind is NabcDescriptorKind.GLYPH:
            if descriptor.has_modifier(NabcGlyphModifier.AUGMENTIVE_LIQUESCENCE) and descriptor.has_modifier(
                NabcGlyphModifier.DIMINUTIVE_LIQUESCENCE
            ):
                self._report(
                    Diagnostic.from_spec(
                        SEMANTIC_NABC_CONFLICTING_LIQUESCENCE,
                        descriptor.range,
                        message=SEMANTIC_NABC_CONFLICTING_LIQUESCENCE.message.format(glyph=descriptor.text),
                    )
                )
            if descriptor.pitch is not None and descriptor.pitch not in PITCHES:
                self._report(
                    Diagnostic.from_spec(
                        SEMANTIC_NABC_INVALID_PITCH,
                        descriptor.range,
                        message=SEMANTIC_NABC_INVALID_PITCH.message.format(pitch=descriptor.pitch),
                    )
                )
        elif descriptor.kind is NabcDescriptorKind.SIGNIFICANT_LETTER:
            self._check_significant_letter(descriptor)
        elif descriptor.count is None:
            self._report(
                Diagnostic.from_spec(
                    SEMANTIC_NABC_PUNCTIS_MISSING_COUNT,
                    descriptor.range,
                    message=SEMANTIC_NABC_PUNCTIS_MISSING_COUNT.message.format(descriptor=descriptor.text),
                    hint=SEMANTIC_NABC_PUNCTIS_MISSING_COUNT.hint.format(descriptor=descriptor.text),
                )
            )

    def _check_significant_letter(self, descriptor: NabcGlyphDescriptor) -> None:
        letters = descriptor.letters or ""
        if descriptor.family is SignificantLetterFamily.TIRONIAN:
            known = letters in TIRONIAN_LETTERS
            family = "Tironian"
        else:
            known = letters in ST_GALL_LETTERS or letters in LAON_LETTERS
            family = "St. Gall or Laon"
        if not known:
            self._report(
                Diagnostic.from_spec(
                    SEMANTIC_NABC_UNKNOWN_SIGNIFICANT_LETTER,
                    descriptor.range,
                    message=SEMANTIC_NABC_UNKNOWN_SIGNIFICANT_LETTER.message.format(family=family, letters=letters),
                )
            )

        position = descriptor.position
        if position is None:
            return
        invalid = not 1 <= position <= 9 or (
            descriptor.family is SignificantLetterFamily.TIRONIAN and position == 5
        )
        if invalid:
            self._report(
                Diagnostic.from_spec(
                    SEMANTIC_NABC_INVALID_LETTER_POSITION,
                    descriptor.range,
                    message=SEMANTIC_NABC_INVALID_LETTER_POSITION.message.format(
                        position=position,
                        descriptor=descriptor.text,
                    ),
                )
            )


def analyze(document: Document) -> list[Diagnostic]:
    """Run the semantic pass; errors first, then warnings, then info."""
    return SemanticAnalyzer().analyze(document)
