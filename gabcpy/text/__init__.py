"""Text positions, ranges and offset mapping."""

from gabcpy.text.text import (
    LineIndex,
    Position,
    Range,
    TextRange,
    slice_text_range,
)

__all__ = [
    "LineIndex",
    "Position",
    "Range",
    "TextRange",
    "slice_text_range",
]
