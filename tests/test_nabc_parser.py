from gabcpy.model import (
    NabcDescriptorKind,
    NabcGlyphCode,
    NabcGlyphModifier,
    SignificantLetterFamily,
)
from gabcpy.parser import NabcParse, parse_nabc_segment
from gabcpy.text import LineIndex


def _parse(text: str) -> NabcParse:
    return parse_nabc_segment(text, 0, LineIndex(text))


def test_glyph_with_modifiers_and_pitch() -> None:
    parsed = _parse("viS2-hk")

    assert parsed.diagnostics == ()
    (descriptor,) = parsed.segment.descriptors
    assert descriptor.kind is NabcDescriptorKind.GLYPH
    assert descriptor.code is NabcGlyphCode.VIRGA
    assert descriptor.pitch == "k"
    assert [(item.modifier, item.variant) for item in descriptor.modifiers] == [
        (NabcGlyphModifier.MARK, 2),
        (NabcGlyphModifier.EPISEMA, None),
    ]
    assert descriptor.has_modifier(NabcGlyphModifier.EPISEMA)


def test_fusion_links_descriptors_into_one_chain() -> None:
    segment = _parse("vihk!tahj pu").segment

    assert segment.heads == (0, 2)
    assert segment.descriptors[0].next_fusion == 1
    assert segment.descriptors[1].next_fusion is None
    chains = segment.chains()
    assert [[descriptor.text for descriptor in chain] for chain in chains] == [["vihk", "tahj"], ["pu"]]
    assert [descriptor.text for descriptor in segment.head_descriptors()] == ["vihk", "pu"]


def test_significant_letters() -> None:
    segment = _parse("lsc2 lsal3 ltsb5").segment

    letter, second, tironian = segment.descriptors
    assert letter.kind is NabcDescriptorKind.SIGNIFICANT_LETTER
    assert letter.family is SignificantLetterFamily.LETTER
    assert (letter.letters, letter.position) == ("c", 2)
    assert (second.letters, second.position) == ("al", 3)
    assert tironian.family is SignificantLetterFamily.TIRONIAN
    assert (tironian.letters, tironian.position) == ("sb", 5)


def test_laon_letter_keeps_trailing_dash() -> None:
    (descriptor,) = _parse("lseq-2").segment.descriptors

    assert descriptor.letters == "eq-"
    assert descriptor.position == 2


def test_punctis_descriptors() -> None:
    segment = _parse("sut3 pp2 su").segment

    subpunctis, prepunctis, bare = segment.descriptors
    assert subpunctis.kind is NabcDescriptorKind.SUBPUNCTIS
    assert (subpunctis.punctis_modifier, subpunctis.count) == ("t", 3)
    assert prepunctis.kind is NabcDescriptorKind.PREPUNCTIS
    assert (prepunctis.punctis_modifier, prepunctis.count) == (None, 2)
    assert bare.count is None


def test_letters_and_punctis_attach_to_preceding_glyph() -> None:
    (descriptor,) = _parse("clsut2lsc1").segment.descriptors

    assert descriptor.code is NabcGlyphCode.CLIVIS
    assert [attachment.kind for attachment in descriptor.attachments] == [
        NabcDescriptorKind.SUBPUNCTIS,
        NabcDescriptorKind.SIGNIFICANT_LETTER,
    ]


def test_invalid_descriptor_is_skipped_with_warning() -> None:
    parsed = _parse("xx vi")

    assert [descriptor.text for descriptor in parsed.segment.descriptors] == ["vi"]
    assert len(parsed.diagnostics) == 1
    diagnostic = parsed.diagnostics[0]
    assert diagnostic.code == "nabc-invalid-descriptor"
    assert diagnostic.severity == "warning"
    assert "`xx`" in diagnostic.message
    assert (diagnostic.range.start.character, diagnostic.range.end.character) == (0, 2)


def test_fusion_after_invalid_descriptor_starts_new_chain() -> None:
    segment = _parse("xx!vi").segment

    assert segment.heads == (0,)
    assert segment.descriptors[0].next_fusion is None
