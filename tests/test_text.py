from gabcpy.text import LineIndex, Position, Range, TextRange, slice_text_range


def test_text_range_rejects_inverted_bounds() -> None:
    try:
        TextRange(5, 2)
    except ValueError as exc:
        assert "start > end" in str(exc)
    else:
        raise AssertionError("Expected ValueError for inverted range")


def test_text_range_helpers() -> None:
    first = TextRange.at(2, 3)
    second = TextRange(7, 9)

    assert first.len() == 3
    assert first.contains(4)
    assert not first.contains(5)
    assert first.cover(second) == TextRange(2, 9)
    assert first.ordering(second) == -1
    assert second.ordering(first) == 1
    assert first.ordering(TextRange(4, 6)) == 0
    assert TextRange.empty(3).is_empty()
    assert first.shift(10) == TextRange(12, 15)
    assert first.cover(second).contains_range(second)
    assert not first.contains_range(second)


def test_line_index_maps_offsets_to_positions_and_back() -> None:
    source = "name: A;\n%%\n(c4) A(f)"
    index = LineIndex(source)

    assert index.line_count == 3
    assert index.line_start(2) == 12
    assert index.position(0) == Position(0, 0)
    assert index.position(9) == Position(1, 0)
    assert index.position(len(source)) == Position(2, 9)
    assert index.offset(Position(2, 5)) == source.index("A(f)")
    assert index.range(TextRange(12, 16)) == Range.on_line(2, 0, 4)


def test_line_index_clamps_out_of_bounds_offsets() -> None:
    index = LineIndex("ab")

    assert index.position(99) == Position(0, 2)
    assert index.offset(Position(5, 0)) == 2


def test_range_cover_and_contains() -> None:
    first = Range.on_line(0, 1, 3)
    second = Range(Position(0, 2), Position(1, 0))

    covered = first.cover(second)

    assert covered == Range(Position(0, 1), Position(1, 0))
    assert covered.contains(Position(0, 5))
    assert not covered.contains(Position(1, 0))
    assert Range.zero().is_empty()


def test_slice_text_range_matches_python_slicing() -> None:
    source = "(c4) Al(e)"

    assert slice_text_range(source, TextRange(5, 7)) == "Al"
