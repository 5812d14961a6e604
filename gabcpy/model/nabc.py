"""NABC neume descriptors.

A segment owns its descriptors in a flat arena. Fusion (`!`) links a descriptor
to the next one by index, so a chain is always a left-to-right walk that ends.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from gabcpy.text import Range


class NabcDescriptorKind(StrEnum):
    GLYPH = "glyph"
    SIGNIFICANT_LETTER = "significant-letter"
    SUBPUNCTIS = "subpunctis"
    PREPUNCTIS = "prepunctis"


class NabcGlyphCode(StrEnum):
    VIRGA = "vi"
    PUNCTUM = "pu"
    TRACTULUS = "ta"
    GRAVIS = "gr"
    CLIVIS = "cl"
    PES = "pe"
    PORRECTUS = "po"
    TORCULUS = "to"
    CLIMACUS = "ci"
    SCANDICUS = "sc"
    PORRECTUS_FLEXUS = "pf"
    SCANDICUS_FLEXUS = "sf"
    TORCULUS_RESUPINUS = "tr"
    STROPHA = "st"
    DISTROPHA = "ds"
    TRISTROPHA = "ts"
    TRIGONUS = "tg"
    BIVIRGA = "bv"
    TRIVIRGA = "tv"
    PRESSUS_MAIOR = "pr"
    PRESSUS_MINOR = "pi"
    VIRGA_STRATA = "vs"
    ORISCUS = "or"
    SALICUS = "sa"
    PES_QUASSUS = "pq"
    QUILISMA_3_LOOPS = "ql"
    QUILISMA_2_LOOPS = "qi"
    PES_STRATUS = "pt"
    NIHIL = "ni"
    UNCINUS = "un"
    ORISCUS_CLIVIS = "oc"


class NabcGlyphModifier(StrEnum):
    MARK = "S"
    GROUPING = "G"
    MELODIC = "M"
    EPISEMA = "-"
    AUGMENTIVE_LIQUESCENCE = ">"
    DIMINUTIVE_LIQUESCENCE = "~"


class SignificantLetterFamily(StrEnum):
    """`ls` letters are St. Gall or Laon, `lt` letters are Tironian notes."""

    LETTER = "ls"
    TIRONIAN = "lt"


ST_GALL_LETTERS: Final[frozenset[str]] = frozenset(
    {
        "al", "am", "b", "c", "cm", "co", "cw", "d", "e", "eq", "ew", "fid", "fr", "g", "i",
        "im", "iv", "k", "l", "lb", "lc", "len", "lm", "lp", "lt", "m", "moll", "p", "par",
        "pfec", "pm", "pulcre", "s", "sb", "sc", "simil", "simul", "sm", "st", "sta", "t",
        "tb", "tm", "tw", "v", "vol", "x",
    }
)

LAON_LETTERS: Final[frozenset[str]] = frozenset(
    {
        "a", "c", "eq", "eq-", "equ", "f", "h", "hn", "hp", "l", "n", "nl", "nt", "m", "md",
        "s", "simp", "simpl", "sp", "st", "t", "th",
    }
)

TIRONIAN_LETTERS: Final[frozenset[str]] = frozenset(
    {"i", "do", "dr", "dx", "ps", "qm", "sb", "se", "sj", "sl", "sn", "sp", "sr", "st", "us"}
)

PUNCTIS_MODIFIERS: Final[frozenset[str]] = frozenset("tuvwxynqz")
"""St. Gall (t u v w x y) and Laon (n q z x) subpunctis/prepunctis modifiers."""


@dataclass(frozen=True, slots=True)
class NabcModifier:
    modifier: NabcGlyphModifier
    variant: int | None = None


@dataclass(frozen=True, slots=True)
class NabcGlyphDescriptor:
    """One unit of NABC notation.

    Only the fields that belong to `kind` are set: glyphs carry `code`, `pitch`
    and `modifiers`; significant letters carry `letters` and `position`; punctis
    forms carry `punctis_modifier` and `count`.
    """

    kind: NabcDescriptorKind
    text: str
    range: Range
    code: NabcGlyphCode | None = None
    pitch: str | None = None
    modifiers: tuple[NabcModifier, ...] = ()
    family: SignificantLetterFamily | None = None
    letters: str | None = None
    position: int | None = None
    punctis_modifier: str | None = None
    count: int | None = None
    attachments: tuple[NabcGlyphDescriptor, ...] = ()
    next_fusion: int | None = None

    def has_modifier(self, modifier: NabcGlyphModifier) -> bool:
        return any(item.modifier is modifier for item in self.modifiers)


@dataclass(frozen=True, slots=True)
class NabcSegment:
    """One `|`-delimited NABC section of a note group."""

    text: str
    range: Range
    descriptors: tuple[NabcGlyphDescriptor, ...]
    heads: tuple[int, ...]

    def chain(self, head: int) -> Iterator[NabcGlyphDescriptor]:
        index: int | None = head
        while index is not None:
            descriptor = self.descriptors[index]
            yield descriptor
            index = descriptor.next_fusion

    def chains(self) -> list[tuple[NabcGlyphDescriptor, ...]]:
        return [tuple(self.chain(head)) for head in self.heads]

    def head_descriptors(self) -> tuple[NabcGlyphDescriptor, ...]:
        return tuple(self.descriptors[head] for head in self.heads)
