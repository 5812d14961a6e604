import pytest

from gabcpy.model import AlterationKind, ModifierType, Note, NoteShape, NoteTokenKind
from gabcpy.parser import GabcScan, alteration_length, tokenize_notes
from gabcpy.text import LineIndex


def _scan(text: str) -> GabcScan:
    return tokenize_notes(text, 0, LineIndex(text))


def _notes(text: str) -> tuple[Note, ...]:
    scan = _scan(text)
    assert scan.diagnostics == ()
    return scan.notes


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("x", 1),
        ("X", 1),
        ("y", 1),
        ("Y", 1),
        ("#", 1),
        ("##", 2),
        ("x?", 2),
        ("X?", 2),
        ("y?", 2),
        ("Y?", 2),
        ("#?", 2),
        ("##?", 3),
    ],
)
def test_alteration_length(text: str, expected: int) -> None:
    assert alteration_length(text, 0) == expected


def test_alteration_is_recorded_with_exact_length_and_range() -> None:
    (note,) = _notes("g##?")

    assert note.alteration is not None
    assert note.alteration.kind is AlterationKind.DOUBLE_SHARP
    assert note.alteration.length == 3
    assert note.alteration.parenthesized is True
    assert note.shape is NoteShape.SHARP
    assert (note.alteration.range.start.character, note.alteration.range.end.character) == (1, 4)


def test_flat_alteration_sets_flat_shape() -> None:
    (note,) = _notes("ix")

    assert note.alteration is not None
    assert note.alteration.kind is AlterationKind.FLAT
    assert note.shape is NoteShape.FLAT
    assert note.tokens_of(NoteTokenKind.ALTERATION)[0].text == "x"


@pytest.mark.parametrize(
    ("text", "has_orientation"),
    [("eo0", True), ("eo1", True), ("eO0", True), ("eO1", True), ("eo2", False)],
)
def test_oriscus_orientation_digit(text: str, has_orientation: bool) -> None:
    note = _notes(text)[0]

    assert bool(note.tokens_of(NoteTokenKind.ORIENTATION)) is has_orientation


def test_orientation_value_is_stored_on_modifier() -> None:
    (note,) = _notes("eO1")

    modifier = note.modifier(ModifierType.ORISCUS_SCAPUS)
    assert note.shape is NoteShape.ORISCUS_SCAPUS
    assert modifier is not None
    assert modifier.value == 1


@pytest.mark.parametrize(
    ("text", "shape"),
    [
        ("g", NoteShape.PUNCTUM),
        ("G", NoteShape.PUNCTUM_INCLINATUM),
        ("gv", NoteShape.VIRGA),
        ("gV", NoteShape.VIRGA_REVERSA),
        ("gw", NoteShape.QUILISMA),
        ("gW", NoteShape.QUILISMA),
        ("go", NoteShape.ORISCUS),
        ("gO", NoteShape.ORISCUS_SCAPUS),
        ("gs", NoteShape.STROPHA),
        ("gr", NoteShape.CAVUM),
        ("g=", NoteShape.LINEA),
        ("g~", NoteShape.LIQUESCENT),
        ("gv<", NoteShape.VIRGA),
    ],
)
def test_shape_characters(text: str, shape: NoteShape) -> None:
    (note,) = _notes(text)

    assert note.shape is shape


def test_uppercase_pitch_is_inclinatum_with_leaning() -> None:
    (note,) = _notes("G1")

    assert note.pitch == "g"
    assert note.inclinatum is True
    leaning = note.modifier(ModifierType.LEANING)
    assert leaning is not None
    assert leaning.value == 1


def test_virga_followed_by_o_is_strata() -> None:
    (note,) = _notes("gvo")

    assert note.shape is NoteShape.VIRGA
    assert note.has_modifier(ModifierType.STRATA)
    assert not note.has_modifier(ModifierType.ORISCUS)


@pytest.mark.parametrize("text", ["go", "gso", "gwo"], ids=["punctum", "stropha", "quilisma"])
def test_o_after_non_virga_is_never_strata(text: str) -> None:
    (note,) = _notes(text)

    assert note.has_modifier(ModifierType.ORISCUS)
    assert not note.has_modifier(ModifierType.STRATA)


def test_repeated_virga_and_stropha_count() -> None:
    virga, stropha = _notes("gvvv hss")

    repeat = virga.modifier(ModifierType.REPEAT)
    assert repeat is not None and repeat.value == 3
    repeat = stropha.modifier(ModifierType.REPEAT)
    assert repeat is not None and repeat.value == 2


def test_rhythmic_signs() -> None:
    (note,) = _notes("-g_2'1..")

    assert note.has_modifier(ModifierType.INITIO_DEBILIS)
    episema = note.modifier(ModifierType.HORIZONTAL_EPISEMA)
    ictus = note.modifier(ModifierType.VERTICAL_EPISEMA)
    mora = note.modifier(ModifierType.PUNCTUM_MORA)
    assert episema is not None and episema.value == 2
    assert ictus is not None and ictus.value == 1
    assert mora is not None and mora.value == 2
    assert [token.kind for token in note.tokens] == [
        NoteTokenKind.INITIO_DEBILIS,
        NoteTokenKind.PITCH,
        NoteTokenKind.EPISEMA,
        NoteTokenKind.ICTUS,
        NoteTokenKind.MORA,
    ]


def test_fusion_marks_the_note_before_at_sign() -> None:
    first, second, third = _notes("e@f @g")

    assert first.has_modifier(ModifierType.FUSION)
    assert second.has_modifier(ModifierType.FUSION)
    assert not third.has_modifier(ModifierType.FUSION)


def test_connector_applies_to_following_note() -> None:
    first, second = _notes("f!gw")

    assert not first.has_modifier(ModifierType.CONNECTOR)
    assert second.has_modifier(ModifierType.CONNECTOR)
    assert second.shape is NoteShape.QUILISMA


def test_attributes_are_collected() -> None:
    scan = _scan("f[nv:1]g[alt]")

    assert [note.pitch for note in scan.notes] == ["f", "g"]
    assert [(attribute.name, attribute.value) for attribute in scan.attributes] == [("nv", "1"), ("alt", None)]


def test_unterminated_attribute_is_an_error() -> None:
    scan = _scan("f[nv:1")

    assert [diagnostic.code for diagnostic in scan.diagnostics] == ["unterminated-attribute"]
    assert scan.diagnostics[0].severity == "error"


def test_unrecognized_character_is_informational() -> None:
    scan = _scan("f$g")

    assert [note.pitch for note in scan.notes] == ["f", "g"]
    assert [diagnostic.code for diagnostic in scan.diagnostics] == ["unrecognized-gabc-character"]
    assert scan.diagnostics[0].severity == "info"


def test_note_ranges_are_offset_by_base() -> None:
    source = "%%\nA(fgh)"
    scan = tokenize_notes("fgh", 5, LineIndex(source))

    assert [(note.range.start.character, note.range.end.character) for note in scan.notes] == [
        (2, 3),
        (3, 4),
        (4, 5),
    ]
