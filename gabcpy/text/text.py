from bisect import bisect_right
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open range [start, end) of character offsets into the source text.

    Invariant:
    - 0 <= start <= end
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self.start > self.end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def at(offset: int, length: int) -> "TextRange":
        """Create a TextRange at offset with given length."""
        return TextRange(offset, offset + length)

    @staticmethod
    def empty(offset: int) -> "TextRange":
        """Create an empty TextRange at the given offset."""
        return TextRange(offset, offset)

    def len(self) -> int:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def contains_range(self, other: "TextRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def cover(self, other: "TextRange") -> "TextRange":
        """Get the minimal range that covers both this range and another range."""
        return TextRange(min(self.start, other.start), max(self.end, other.end))

    def shift(self, delta: int) -> "TextRange":
        return TextRange(self.start + delta, self.end + delta)

    def ordering(self, other: "TextRange") -> Literal[-1, 0, 1]:
        """Compare this range to another range for ordering.

        Returns:
        - -1 if this range is before the other range
        - 0 if the ranges overlap
        - 1 if this range is after the other range
        """
        if self.end <= other.start:
            return -1
        elif other.end <= self.start:
            return 1
        else:
            return 0

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end})"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based line and character position."""

    line: int
    character: int

    def __post_init__(self):
        if self.line < 0 or self.character < 0:
            raise ValueError("Position cannot be negative")

    def __repr__(self) -> str:
        return f"Position({self.line}:{self.character})"


@dataclass(frozen=True, slots=True, order=True)
class Range:
    """Start/end position pair used by every diagnostic and model entity."""

    start: Position
    end: Position

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError("Range invariant violated: start > end")

    @staticmethod
    def zero() -> "Range":
        """Range at the very beginning of the document."""
        origin = Position(0, 0)
        return Range(origin, origin)

    @staticmethod
    def on_line(line: int, start: int, end: int) -> "Range":
        return Range(Position(line, start), Position(line, end))

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, position: Position) -> bool:
        return self.start <= position < self.end

    def cover(self, other: "Range") -> "Range":
        return Range(min(self.start, other.start), max(self.end, other.end))

    def __repr__(self) -> str:
        return f"Range({self.start.line}:{self.start.character}-{self.end.line}:{self.end.character})"


class LineIndex:
    """Maps character offsets to line/character positions.

    Lines are split on `\\n`; a `\\r` before it counts as a character of the line.
    """

    __slots__ = ("_line_starts", "_length")

    def __init__(self, text: str) -> None:
        starts = [0]
        for offset, char in enumerate(text):
            if char == "\n":
                starts.append(offset + 1)
        self._line_starts = starts
        self._length = len(text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_start(self, line: int) -> int:
        return self._line_starts[line]

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, self._length))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def offset(self, position: Position) -> int:
        if position.line >= len(self._line_starts):
            return self._length
        return min(self._line_starts[position.line] + position.character, self._length)

    def range(self, text_range: TextRange) -> Range:
        return Range(self.position(text_range.start), self.position(text_range.end))

    def range_of(self, start: int, end: int) -> Range:
        return Range(self.position(start), self.position(end))


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange.

    Coord system matches python string indices so we can just do this.
    """
    return source[range.start : range.end]
