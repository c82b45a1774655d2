import pytest

from tamilglyph import convert, get_transliterator
from tamilglyph.engine.segmenter import (
    CONSONANTS, RIDING_MARKS, ComposedEntity, Consonant, MarkKind, Other,
    SeparateEntity, SpecialEntity, Vowel,
)
from tamilglyph.engine.transliterator import GlyphLookupError, Transliterator

# Consonants in font order
CONSONANT_ORDER = "கஙசஜஞடணதநனபமயரறலளழவஶஷஸஹ"

AA_SUFFIX = "\uF056"
E_PREFIX = "\uF057"
EE_PREFIX = "\uF058"
AI_PREFIX = "\uF059"
AU_PREFIX = "\uF0D8"
AU_SUFFIX = "\uF065"
SRI_GLYPH = "\uF070"


def bare(consonant):
    return chr(0xF0A1 + CONSONANT_ORDER.index(consonant))


@pytest.fixture(scope="module")
def engine():
    return Transliterator()


def test_packaged_tables_are_complete(engine):
    assert engine.validate_tables() == []
    assert len(engine.letter_map) == 36
    assert len(engine.pair_map) == 115
    assert len(engine.mark_templates) == 7


def test_pair_glyphs_are_distinct(engine):
    glyphs = list(engine.pair_map.values()) + list(engine.letter_map.values())
    assert len(set(glyphs)) == len(glyphs)


def test_ka_virama():
    assert convert("க்") == "\uF0C2"


@pytest.mark.parametrize("consonant", sorted(CONSONANTS))
def test_virama_is_single_glyph(consonant, engine):
    out = convert(consonant + "்")
    assert len(out) == 1
    assert out == engine.pair_map[(consonant, "்")]


@pytest.mark.parametrize("consonant", sorted(CONSONANTS))
def test_aa_follows_consonant(consonant):
    assert convert(consonant + "ா") == bare(consonant) + AA_SUFFIX


@pytest.mark.parametrize("consonant", sorted(CONSONANTS))
def test_au_surrounds_consonant(consonant):
    assert convert(consonant + "ௌ") == AU_PREFIX + bare(consonant) + AU_SUFFIX


@pytest.mark.parametrize("mark,expected", [
    ("ெ", E_PREFIX + bare("க")),
    ("ே", EE_PREFIX + bare("க")),
    ("ை", AI_PREFIX + bare("க")),
    ("ொ", E_PREFIX + bare("க") + AA_SUFFIX),
    ("ோ", E_PREFIX + bare("க") + AA_SUFFIX),
])
def test_reordered_vowel_signs(mark, expected):
    assert convert("க" + mark) == expected


def test_riding_marks_cover_every_consonant(engine):
    for mark in RIDING_MARKS:
        for consonant in CONSONANTS:
            assert len(engine.transliterate_entity(SeparateEntity(consonant, mark))) == 1


def test_amma():
    assert convert("அம்மா") == "\uF041" + "\uF0CD" + bare("ம") + AA_SUFFIX


def test_sri_is_atomic():
    assert convert("ஸ்ரீ") == SRI_GLYPH
    assert convert("திரு ஸ்ரீ ராம்").count(SRI_GLYPH) == 1
    assert convert("ஸ்ரீஸ்ரீ") == SRI_GLYPH * 2


@pytest.mark.parametrize("text", [
    "Hello, world!",
    "0123456789",
    " \t\n",
    "¿Qué? ok…",
    "ा",
])
def test_non_tamil_is_identity(text):
    assert convert(text) == text


def test_mixed_text_keeps_passthrough_in_place():
    assert convert("a க b") == "a " + bare("க") + " b"


def test_conversion_is_deterministic():
    text = "ஸ்ரீ கௌசல்யா 2024 தமிழ்நாடு"
    assert convert(text) == convert(text)
    assert Transliterator().transliterate(text) == convert(text)


def test_default_transliterator_is_shared():
    assert get_transliterator() is get_transliterator()


def test_rejects_non_string():
    with pytest.raises(TypeError):
        convert(b"\xe0\xae\x95")


def test_empty_input():
    assert convert("") == ""


@pytest.mark.parametrize("entity,expected", [
    (Vowel("ஃ"), "\uF04D"),
    (Consonant("ஹ"), "\uF0B7"),
    (ComposedEntity("ப", MarkKind.PRECEDING, "ே"), EE_PREFIX + bare("ப")),
    (SpecialEntity("ஸ்ரீ"), SRI_GLYPH),
    (Other("!"), "!"),
])
def test_transliterate_entity(entity, expected, engine):
    assert engine.transliterate_entity(entity) == expected


@pytest.mark.parametrize("entity", [
    Vowel("x"),
    Consonant("a"),
    SeparateEntity("x", "்"),
    ComposedEntity("x", MarkKind.FOLLOWING, "ா"),
    ComposedEntity("க", MarkKind.FOLLOWING, "?"),
    SpecialEntity("ஶ்ரீ"),
])
def test_unknown_entity_is_a_lookup_error(entity, engine):
    with pytest.raises(GlyphLookupError):
        engine.transliterate_entity(entity)


def test_composed_entity_kind_must_match_mark(engine):
    with pytest.raises(GlyphLookupError):
        engine.transliterate_entity(ComposedEntity("க", MarkKind.PRECEDING, "ா"))


def test_transliterate_entity_rejects_non_entity(engine):
    with pytest.raises(TypeError):
        engine.transliterate_entity("க")


def test_coverage_stats(engine):
    stats = engine.get_coverage_stats("அம்மா 1")
    assert stats['total_characters'] == 7
    assert stats['entity_counts'] == {
        'Vowel': 1, 'SeparateEntity': 1, 'ComposedEntity': 1, 'Other': 2,
    }
    assert stats['converted_characters'] == 5
    assert stats['passthrough_characters'] == 2
    assert stats['tamil_coverage'] == pytest.approx(5 / 7 * 100)


def test_coverage_stats_empty(engine):
    assert engine.get_coverage_stats("")['tamil_coverage'] == 0


def test_default_transliterator_built_once_across_threads(monkeypatch):
    import threading

    import tamilglyph

    monkeypatch.setattr(tamilglyph, "_default_transliterator", None)
    results = []
    workers = [
        threading.Thread(target=lambda: results.append(get_transliterator()))
        for _ in range(8)
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert len(results) == 8
    assert all(result is results[0] for result in results)
