"""Scanner fragments."""

from dataclasses import dataclass
from enum import IntEnum

from gabcpy.text import TextRange


class FragmentKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia
    # -------------------------
    WHITESPACE = 10
    COMMENT = 11

    # -------------------------
    # Header region
    # -------------------------
    HEADER_LINE = 20
    SEPARATOR = 21  # %%

    # -------------------------
    # Notation region
    # -------------------------
    TEXT = 30
    NOTE_GROUP = 31  # ( ... )

    @property
    def is_trivia(self) -> bool:
        return self in (FragmentKind.WHITESPACE, FragmentKind.COMMENT)


@dataclass(frozen=True, slots=True)
class Fragment:
    """Positioned lexical fragment.

    For note groups `range` includes the parentheses and `content_range` covers
    only what is between them.
    """

    kind: FragmentKind
    range: TextRange
    text: str
    content_range: TextRange | None = None
    terminated: bool = True

    @property
    def content(self) -> str:
        if self.content_range is None:
            return self.text
        offset = self.content_range.start - self.range.start
        return self.text[offset : offset + self.content_range.len()]
