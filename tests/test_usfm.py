"""Tests for the aligned USFM parser."""

from conftest import (
    APSEUDES,
    DOULOS,
    ELPIDI,
    HASHOFETIM,
    HO,
    PAULOS,
    THEOS,
    UGNT_TIT,
    UHB_RUT,
    ULT_TIT,
)

from origl_quotes.models import SubType
from origl_quotes.usfm import (
    ALIGNMENT_SCOPE_PREFIX,
    parse_attributes,
    parse_book_code,
    parse_usfm,
)


def payloads(tokens):
    return [t.payload for t in tokens if t.is_word]


def label(word):
    return f"{ALIGNMENT_SCOPE_PREFIX}/{word}:1"


class TestOriginalText:
    """Tests for parsing original-language books."""

    def test_verses_and_words(self):
        verses = parse_usfm(UGNT_TIT)
        assert set(verses) == {"1:1", "1:2"}
        assert payloads(verses["1:1"])[:3] == [PAULOS, DOULOS, "Θεοῦ"]
        assert payloads(verses["1:2"])[0] == ELPIDI
        assert payloads(verses["1:2"])[-1] == THEOS

    def test_punctuation_and_whitespace_tokens(self):
        tokens = parse_usfm(UGNT_TIT)["1:1"]
        assert tokens[0].payload == PAULOS
        assert tokens[1].payload == ","
        assert tokens[1].sub_type == SubType.PUNCTUATION
        assert tokens[2].sub_type == SubType.EOL
        assert [t.position for t in tokens] == list(range(len(tokens)))

    def test_footnotes_and_headings_are_not_verse_text(self):
        verses = parse_usfm(UGNT_TIT)
        all_words = [w for tokens in verses.values() for w in payloads(tokens)]
        assert "footnote" not in all_words
        assert "Titus" not in all_words

    def test_original_words_have_no_alignment_refs(self):
        tokens = parse_usfm(UGNT_TIT)["1:1"]
        assert all(t.alignment_refs == frozenset() for t in tokens)

    def test_hebrew_word_joiner_stays_in_word(self):
        tokens = [t for t in parse_usfm(UHB_RUT)["1:1"] if t.sub_type != SubType.EOL]
        assert payloads(tokens)[-1] == HASHOFETIM
        assert tokens[-1].payload == "׃"
        assert tokens[-1].sub_type == SubType.PUNCTUATION


class TestAlignedText:
    """Tests for alignment labels on gloss tokens."""

    def test_gloss_words(self):
        verses = parse_usfm(ULT_TIT)
        assert payloads(verses["1:1"])[:4] == ["Paul", "a", "servant", "of"]

    def test_alignment_labels(self):
        tokens = [t for t in parse_usfm(ULT_TIT)["1:1"] if t.is_word]
        assert tokens[0].alignment_refs == frozenset({label(PAULOS)})
        assert tokens[1].alignment_refs == frozenset({label(DOULOS)})
        assert tokens[2].alignment_refs == frozenset({label(DOULOS)})

    def test_nested_milestones_give_one_label_each(self):
        tokens = [t for t in parse_usfm(ULT_TIT)["1:2"] if t.is_word]
        who = next(t for t in tokens if t.payload == "who")
        assert who.alignment_refs == frozenset({label(HO), label(APSEUDES)})

    def test_punctuation_outside_milestones_has_no_refs(self):
        tokens = parse_usfm(ULT_TIT)["1:1"]
        comma = next(t for t in tokens if t.payload == ",")
        assert comma.alignment_refs == frozenset()

    def test_unclosed_milestone_does_not_leak_into_next_verse(self):
        usfm = "\n".join([
            r"\c 1",
            r'\v 1 \zaln-s |x-content="λόγος"\*\w word\w*',
            r"\v 2 \w other\w*",
        ])
        verses = parse_usfm(usfm)
        assert verses["1:1"][0].alignment_refs == frozenset({label("λόγος")})
        other = [t for t in verses["1:2"] if t.is_word][0]
        assert other.alignment_refs == frozenset()


class TestStructure:
    def test_chapter_preamble_is_dropped(self):
        usfm = "\n".join([
            r"\c 2",
            r"\cl Chapter Two",
            r"\p intro words",
            r"\v 1 \w first\w*",
        ])
        verses = parse_usfm(usfm)
        assert set(verses) == {"2:1"}
        assert payloads(verses["2:1"]) == ["first"]

    def test_verse_bridge_maps_every_verse(self):
        usfm = "\n".join([
            r"\c 3",
            r"\v 1-3 \w bridged\w* text",
            r"\v 4 \w single\w*",
        ])
        verses = parse_usfm(usfm)
        assert set(verses) == {"3:1", "3:2", "3:3", "3:4"}
        assert payloads(verses["3:2"]) == ["bridged", "text"]
        assert verses["3:1"] == verses["3:3"]
        assert payloads(verses["3:4"]) == ["single"]

    def test_section_headings_inside_chapter(self):
        usfm = "\n".join([
            r"\c 1",
            r"\v 1 \w one\w*",
            r"\s1 A Heading",
            r"\v 2 \w two\w*",
        ])
        verses = parse_usfm(usfm)
        assert payloads(verses["1:1"]) == ["one"]
        assert payloads(verses["1:2"]) == ["two"]

    def test_character_markers_keep_their_text(self):
        usfm = r"\c 1" + "\n" + r"\v 1 \add implied\add* \w word\w*"
        assert payloads(parse_usfm(usfm)["1:1"]) == ["implied", "word"]


def test_parse_book_code():
    assert parse_book_code(UGNT_TIT) == "TIT"
    assert parse_book_code(r"\id rut" + "\n") == "RUT"
    assert parse_book_code(r"\c 1") is None


def test_parse_attributes():
    attrs = parse_attributes('x-occurrence="1" x-occurrences="2" x-content="Θεοῦ"')
    assert attrs == {"x-occurrence": "1", "x-occurrences": "2", "x-content": "Θεοῦ"}
    assert parse_attributes(None) == {}
