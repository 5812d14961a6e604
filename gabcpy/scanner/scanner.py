"""Scanner."""

from gabcpy.diagnostics import Diagnostic
from gabcpy.diagnostics.codes import PARSER_UNTERMINATED_NOTE_GROUP
from gabcpy.scanner.tokens import Fragment, FragmentKind
from gabcpy.text import LineIndex, TextRange

_TEXT_STOP = frozenset("(%\n")
_WHITESPACE = frozenset(" \t\r\n\f\v")


class Scanner:
    """Splits a GABC source into header-region and notation-region fragments.

    The header region ends at the first line consisting solely of `%%`. Without
    such a line the whole source is header region.
    """

    def __init__(self, source: str, *, line_index: LineIndex | None = None) -> None:
        self._source = source
        self._position = 0
        self._line_index = line_index if line_index is not None else LineIndex(source)
        self._diagnostics: list[Diagnostic] = []
        self._separator: TextRange | None = None

    @property
    def source(self) -> str:
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during scanning."""
        return self._diagnostics

    @property
    def line_index(self) -> LineIndex:
        return self._line_index

    @property
    def separator(self) -> TextRange | None:
        """Range of the `%%` line, if the source has one."""
        return self._separator

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def scan(self) -> list[Fragment]:
        fragments: list[Fragment] = []
        if self._scan_header_region(fragments):
            self._scan_notation_region(fragments)
        fragments.append(Fragment(FragmentKind.EOF, TextRange.empty(len(self._source)), ""))
        return fragments

    def _line_bounds(self, start: int) -> tuple[int, int]:
        """Return (content end, next line start) for the line beginning at start."""
        newline = self._source.find("\n", start)
        if newline == -1:
            end = len(self._source)
            next_start = end
        else:
            end = newline
            next_start = newline + 1
        if end > start and self._source[end - 1] == "\r":
            end -= 1
        return end, next_start

    def _scan_header_region(self, fragments: list[Fragment]) -> bool:
        source = self._source
        while not self.is_eof:
            start = self._position
            end, next_start = self._line_bounds(start)
            line = source[start:end]
            self._position = next_start

            if line.strip() == "%%":
                self._separator = TextRange(start, end)
                fragments.append(Fragment(FragmentKind.SEPARATOR, self._separator, line))
                return True

            comment_at = line.find("%")
            if comment_at != -1:
                comment_range = TextRange(start + comment_at, end)
                fragments.append(Fragment(FragmentKind.COMMENT, comment_range, line[comment_at:]))
                line = line[:comment_at]

            stripped = line.strip()
            if stripped:
                lead = len(line) - len(line.lstrip())
                fragments.append(
                    Fragment(
                        FragmentKind.HEADER_LINE,
                        TextRange.at(start + lead, len(stripped)),
                        stripped,
                    )
                )
        return False

    def _scan_notation_region(self, fragments: list[Fragment]) -> None:
        source = self._source
        while not self.is_eof:
            start = self._position
            char = source[start]
            if char == "%":
                end, _ = self._line_bounds(start)
                self._position = end
                fragments.append(Fragment(FragmentKind.COMMENT, TextRange(start, end), source[start:end]))
            elif char in _WHITESPACE:
                end = start
                while end < len(source) and source[end] in _WHITESPACE:
                    end += 1
                self._position = end
                fragments.append(Fragment(FragmentKind.WHITESPACE, TextRange(start, end), source[start:end]))
            elif char == "(":
                fragments.append(self._scan_note_group(start))
            else:
                fragments.append(self._scan_text(start))

    def _scan_note_group(self, start: int) -> Fragment:
        line_end, _ = self._line_bounds(start)
        close = self._source.find(")", start + 1, line_end)
        if close == -1:
            self._diagnostics.append(
                Diagnostic.from_spec(
                    PARSER_UNTERMINATED_NOTE_GROUP,
                    self._line_index.range_of(start, start + 1),
                )
            )
            self._position = line_end
            return Fragment(
                FragmentKind.NOTE_GROUP,
                TextRange(start, line_end),
                self._source[start:line_end],
                content_range=TextRange(start + 1, line_end),
                terminated=False,
            )
        self._position = close + 1
        return Fragment(
            FragmentKind.NOTE_GROUP,
            TextRange(start, close + 1),
            self._source[start : close + 1],
            content_range=TextRange(start + 1, close),
        )

    def _scan_text(self, start: int) -> Fragment:
        source = self._source
        end = start
        while end < len(source) and source[end] not in _TEXT_STOP:
            # `\` followed by a line break continues the lyric on the next line
            if source[end] == "\\" and source.startswith("\n", end + 1):
                end += 2
                continue
            end += 1
        while end > start + 1 and source[end - 1] in _WHITESPACE:
            end -= 1
        self._position = end
        return Fragment(FragmentKind.TEXT, TextRange(start, end), source[start:end])


def scan(source: str, *, line_index: LineIndex | None = None) -> tuple[list[Fragment], list[Diagnostic]]:
    """Scan a full source and return its fragments plus scanner diagnostics."""
    scanner = Scanner(source, line_index=line_index)
    fragments = scanner.scan()
    return fragments, scanner.diagnostics
