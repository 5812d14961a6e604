"""Document model."""

from gabcpy.model.document import (
    Alteration,
    Bar,
    Clef,
    Comment,
    Custos,
    Document,
    GabcAttribute,
    HeaderEntry,
    LineBreak,
    Modifier,
    Note,
    NoteGroup,
    NoteToken,
    Syllable,
)
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
from gabcpy.model.nabc import (
    NabcDescriptorKind,
    NabcGlyphCode,
    NabcGlyphDescriptor,
    NabcGlyphModifier,
    NabcModifier,
    NabcSegment,
    SignificantLetterFamily,
)

__all__ = [
    "Alteration",
    "AlterationKind",
    "Bar",
    "BarKind",
    "Clef",
    "ClefRole",
    "Comment",
    "Custos",
    "CustosKind",
    "Document",
    "GabcAttribute",
    "HeaderEntry",
    "LineBreak",
    "LineBreakKind",
    "Modifier",
    "ModifierType",
    "NabcDescriptorKind",
    "NabcGlyphCode",
    "NabcGlyphDescriptor",
    "NabcGlyphModifier",
    "NabcModifier",
    "NabcSegment",
    "Note",
    "NoteGroup",
    "NoteShape",
    "NoteToken",
    "NoteTokenKind",
    "SignificantLetterFamily",
    "Syllable",
]
