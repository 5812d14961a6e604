"""Closed kinds used by the GABC document model."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Final


class NoteShape(StrEnum):
    PUNCTUM = "punctum"
    PUNCTUM_INCLINATUM = "punctum-inclinatum"
    VIRGA = "virga"
    VIRGA_REVERSA = "virga-reversa"
    QUILISMA = "quilisma"
    ORISCUS = "oriscus"
    ORISCUS_SCAPUS = "oriscus-scapus"
    STROPHA = "stropha"
    LIQUESCENT = "liquescent"
    CAVUM = "cavum"
    LINEA = "linea"
    FLAT = "flat"
    SHARP = "sharp"
    NATURAL = "natural"


class ModifierType(StrEnum):
    INITIO_DEBILIS = "initio-debilis"
    PUNCTUM_MORA = "punctum-mora"
    HORIZONTAL_EPISEMA = "horizontal-episema"
    VERTICAL_EPISEMA = "vertical-episema"
    LIQUESCENT = "liquescent"
    LEANING = "leaning"
    ORISCUS = "oriscus"
    ORISCUS_SCAPUS = "oriscus-scapus"
    QUADRATUM = "quadratum"
    CAVUM = "cavum"
    STRATA = "strata"
    REPEAT = "repeat"
    FUSION = "fusion"
    CONNECTOR = "connector"


class NoteTokenKind(StrEnum):
    """Lexical pieces of one note, kept for range mapping."""

    INITIO_DEBILIS = "initio-debilis"
    PITCH = "pitch"
    LEANING = "leaning"
    SHAPE = "shape"
    ORIENTATION = "orientation"
    ALTERATION = "alteration"
    ICTUS = "ictus"
    EPISEMA = "episema"
    MORA = "mora"
    LIQUESCENCE = "liquescence"
    FUSION = "fusion"


class AlterationKind(StrEnum):
    FLAT = "flat"
    SOFT_FLAT = "soft-flat"
    NATURAL = "natural"
    SOFT_NATURAL = "soft-natural"
    SHARP = "sharp"
    DOUBLE_SHARP = "double-sharp"


class BarKind(StrEnum):
    VIRGULA = "virgula"
    DIVISIO_MINIMA = "divisio-minima"
    DIVISIO_MINOR = "divisio-minor"
    DIVISIO_MAIOR = "divisio-maior"
    DIVISIO_FINALIS = "divisio-finalis"
    DOMINICAN = "dominican"


class ClefRole(StrEnum):
    """Whether a clef opens the score or changes it later on."""

    INITIAL = "initial"
    CHANGE = "change"


class LineBreakKind(StrEnum):
    JUSTIFIED = "justified"
    RAGGED = "ragged"


class CustosKind(StrEnum):
    AUTO = "auto"
    EXPLICIT = "explicit"


@dataclass(frozen=True, slots=True)
class ShapeCharacter:
    """What one shape character does to the note it follows."""

    shape: NoteShape | None
    modifier: ModifierType | None = None
    replaces_shape: bool = True
    takes_orientation: bool = False


SHAPE_CHARACTERS: Final[dict[str, ShapeCharacter]] = {
    "w": ShapeCharacter(NoteShape.QUILISMA),
    "W": ShapeCharacter(NoteShape.QUILISMA, ModifierType.QUADRATUM),
    "v": ShapeCharacter(NoteShape.VIRGA),
    "V": ShapeCharacter(NoteShape.VIRGA_REVERSA),
    "o": ShapeCharacter(NoteShape.ORISCUS, ModifierType.ORISCUS, takes_orientation=True),
    "O": ShapeCharacter(NoteShape.ORISCUS_SCAPUS, ModifierType.ORISCUS_SCAPUS, takes_orientation=True),
    "s": ShapeCharacter(NoteShape.STROPHA),
    "r": ShapeCharacter(NoteShape.CAVUM, ModifierType.CAVUM),
    "R": ShapeCharacter(NoteShape.CAVUM),
    "=": ShapeCharacter(NoteShape.LINEA),
    "q": ShapeCharacter(None, ModifierType.QUADRATUM),
    "~": ShapeCharacter(NoteShape.LIQUESCENT, ModifierType.LIQUESCENT, replaces_shape=False),
    "<": ShapeCharacter(NoteShape.LIQUESCENT, ModifierType.LIQUESCENT, replaces_shape=False),
    ">": ShapeCharacter(NoteShape.LIQUESCENT, ModifierType.LIQUESCENT, replaces_shape=False),
}
"""Table-driven dispatch from shape character to shape and modifier."""

ALTERATION_CHARACTERS: Final[dict[str, AlterationKind]] = {
    "x": AlterationKind.FLAT,
    "X": AlterationKind.SOFT_FLAT,
    "y": AlterationKind.NATURAL,
    "Y": AlterationKind.SOFT_NATURAL,
    "#": AlterationKind.SHARP,
}

ALTERATION_SHAPES: Final[dict[AlterationKind, NoteShape]] = {
    AlterationKind.FLAT: NoteShape.FLAT,
    AlterationKind.SOFT_FLAT: NoteShape.FLAT,
    AlterationKind.NATURAL: NoteShape.NATURAL,
    AlterationKind.SOFT_NATURAL: NoteShape.NATURAL,
    AlterationKind.SHARP: NoteShape.SHARP,
    AlterationKind.DOUBLE_SHARP: NoteShape.SHARP,
}

LINE_BREAK_CHARACTERS: Final[dict[str, LineBreakKind]] = {
    "z": LineBreakKind.JUSTIFIED,
    "Z": LineBreakKind.RAGGED,
}

PITCH_ORDER: Final[str] = "abcdefghijklmn"
"""Ordinal sequence used for pitch comparison."""

PITCHES: Final[frozenset[str]] = frozenset("abcdefghijklmnp")
