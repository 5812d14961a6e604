from gabcpy.scanner import FragmentKind, Scanner, scan
from gabcpy.text import TextRange


def _kinds(source: str) -> list[FragmentKind]:
    fragments, _ = scan(source)
    return [fragment.kind for fragment in fragments]


def test_scanner_splits_header_and_notation_regions() -> None:
    assert _kinds("name: x;\n%%\n(c4) A(f)") == [
        FragmentKind.HEADER_LINE,
        FragmentKind.SEPARATOR,
        FragmentKind.NOTE_GROUP,
        FragmentKind.WHITESPACE,
        FragmentKind.TEXT,
        FragmentKind.NOTE_GROUP,
        FragmentKind.EOF,
    ]


def test_scanner_without_separator_treats_everything_as_headers() -> None:
    scanner = Scanner("name: x;\nmode: 1;\n")

    fragments = scanner.scan()

    assert scanner.separator is None
    assert [fragment.kind for fragment in fragments] == [
        FragmentKind.HEADER_LINE,
        FragmentKind.HEADER_LINE,
        FragmentKind.EOF,
    ]


def test_scanner_separates_header_comments_from_header_text() -> None:
    fragments, _ = scan("name: x; % the title\n%%\n")

    texts = {fragment.kind: fragment.text for fragment in fragments[:2]}
    assert texts[FragmentKind.HEADER_LINE] == "name: x;"
    assert texts[FragmentKind.COMMENT] == "% the title"


def test_scanner_reads_notation_comments_to_end_of_line() -> None:
    fragments, _ = scan("%%\nA(f) % note\nB(g)")

    comments = [fragment for fragment in fragments if fragment.kind is FragmentKind.COMMENT]
    assert [comment.text for comment in comments] == ["% note"]


def test_scanner_note_group_content_excludes_parentheses() -> None:
    source = "%%\nA(fgh)"
    fragments, diagnostics = scan(source)

    group = next(fragment for fragment in fragments if fragment.kind is FragmentKind.NOTE_GROUP)
    assert diagnostics == []
    assert group.text == "(fgh)"
    assert group.content == "fgh"
    assert group.content_range == TextRange(5, 8)


def test_scanner_reports_unterminated_note_group_at_opening_parenthesis() -> None:
    source = "%%\n(c4) A(fg\nB(h)"
    fragments, diagnostics = scan(source)

    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.code == "unterminated-note-group"
    assert diagnostic.severity == "error"
    assert (diagnostic.range.start.line, diagnostic.range.start.character) == (1, 6)

    unterminated = [fragment for fragment in fragments if not fragment.terminated]
    assert len(unterminated) == 1
    assert unterminated[0].content == "fg"
    assert any(fragment.text == "(h)" for fragment in fragments)


def test_scanner_lyric_text_continues_after_backslash_newline() -> None:
    fragments, _ = scan("%%\nAl\\\nle(f)")

    text = next(fragment for fragment in fragments if fragment.kind is FragmentKind.TEXT)
    assert text.text == "Al\\\nle"


def test_scanner_trims_trailing_whitespace_from_text() -> None:
    fragments, _ = scan("%%\n* (,)")

    kinds = [fragment.kind for fragment in fragments]
    text = next(fragment for fragment in fragments if fragment.kind is FragmentKind.TEXT)
    assert text.text == "*"
    assert kinds[:3] == [FragmentKind.SEPARATOR, FragmentKind.TEXT, FragmentKind.WHITESPACE]
