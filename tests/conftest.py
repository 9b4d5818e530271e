"""Shared fixtures: small aligned USFM books written to a local source directory."""

from pathlib import Path

import pytest

from origl_quotes.data.document_source import LocalDocumentSource
from origl_quotes.resolver import QuoteResolver

# Titus 1:1-2, UGNT words
PAULOS = "Παῦλος"
DOULOS = "δοῦλος"
THEOU = "Θεοῦ"
APOSTOLOS = "ἀπόστολος"
DE = "δὲ"
IESOU = "Ἰησοῦ"
CHRISTOU = "Χριστοῦ"
ELPIDI = "ἐλπίδι"
ZOES = "ζωῆς"
AIONIOU = "αἰωνίου"
HEN = "ἣν"
EPENGEILATO = "ἐπηγγείλατο"
HO = "ὁ"
APSEUDES = "ἀψευδὴς"
THEOS = "Θεὸς"

# Ruth 1:1 (start), UHB words; U+2060 joins morphemes inside a word
VAYHI = "וַ⁠יְהִ֗י"
BIMEI = "בִּ⁠ימֵי֙"
SHEFOT = "שְׁפֹ֣ט"
HASHOFETIM = "הַ⁠שֹּׁפְטִ֔ים"


def original_word(word: str) -> str:
    return rf'\w {word}|lemma="{word}" x-morph="Gr,N,,,,,NMS,"\w*'


def gloss_word(word: str) -> str:
    return rf'\w {word}|x-occurrence="1" x-occurrences="1"\w*'


def aligned(contents, *words: str) -> str:
    """Gloss words wrapped in one alignment milestone per original word in `contents`."""
    if isinstance(contents, str):
        contents = [contents]
    starts = "".join(
        rf'\zaln-s |x-occurrence="1" x-occurrences="1" x-content="{content}"\*' for content in contents
    )
    ends = r"\zaln-e\*" * len(contents)
    return starts + "\n".join(gloss_word(w) for w in words) + ends


UGNT_TIT = "\n".join([
    r"\id TIT EL-X-KOINE_UGNT Titus",
    r"\usfm 3.0",
    r"\h Titus",
    r"\mt Titus",
    "",
    r"\c 1",
    r"\p",
    r"\v 1 " + original_word(PAULOS) + ",",
    original_word(DOULOS),
    original_word(THEOU) + ",",
    original_word(APOSTOLOS),
    original_word(DE),
    original_word(IESOU),
    original_word(CHRISTOU) + ",",
    r"\v 2 " + original_word(ELPIDI),
    original_word(ZOES),
    original_word(AIONIOU) + ",",
    original_word(HEN),
    original_word(EPENGEILATO),
    original_word(HO),
    original_word(APSEUDES),
    original_word(THEOS),
    r"\f + \ft A footnote that is not verse text.\f*.",
    "",
])

ULT_TIT = "\n".join([
    r"\id TIT EN_ULT en_English_ltr unfoldingWord Literal Text",
    r"\usfm 3.0",
    r"\h Titus",
    r"\mt Titus",
    "",
    r"\s5",
    r"\c 1",
    r"\p",
    r"\v 1 " + aligned(PAULOS, "Paul") + ",",
    aligned(DOULOS, "a", "servant"),
    aligned(THEOU, "of", "God"),
    aligned(DE, "and"),
    aligned(APOSTOLOS, "an", "apostle"),
    aligned(IESOU, "of", "Jesus"),
    aligned(CHRISTOU, "Christ") + ",",
    r"\v 2 " + aligned(ELPIDI, "in", "hope"),
    aligned(ZOES, "of"),
    aligned(AIONIOU, "eternal"),
    aligned(ZOES, "life"),
    aligned(HEN, "that"),
    aligned(THEOS, "God") + ",",
    aligned([HO, APSEUDES], "who", "does", "not", "lie") + ",",
    aligned(EPENGEILATO, "promised") + ".",
    "",
])

UHB_RUT = "\n".join([
    r"\id RUT",
    r"\c 1",
    r"\p",
    r"\v 1 " + original_word(VAYHI),
    original_word(BIMEI),
    original_word(SHEFOT),
    original_word(HASHOFETIM) + "׃",
    "",
])

ULT_RUT = "\n".join([
    r"\id RUT EN_ULT",
    r"\c 1",
    r"\p",
    r"\v 1 " + aligned(VAYHI, "Now", "it", "happened"),
    aligned(BIMEI, "in", "the", "days"),
    aligned(HASHOFETIM, "when", "the", "judges"),
    aligned(SHEFOT, "judged") + ",",
    "",
])

HEADER = "Reference\tID\tTags\tSupportReference\tQuote\tOccurrence\tNote"


def make_table(*rows) -> str:
    """Build TSV7 content from (ref, id, quote, occurrence) tuples."""
    lines = [HEADER]
    for ref, row_id, quote, occurrence in rows:
        lines.append(f"{ref}\t{row_id}\t\tfigs-metaphor\t{quote}\t{occurrence}\tA note with \"quotes\".")
    return "\n".join(lines) + "\n"


@pytest.fixture
def usfm_dir(tmp_path) -> Path:
    """Local source directory holding Titus (NT) and Ruth (OT)."""
    files = {
        "el-x-koine_ugnt/57-TIT.usfm": UGNT_TIT,
        "en_ult/57-TIT.usfm": ULT_TIT,
        "hbo_uhb/08-RUT.usfm": UHB_RUT,
        "en_ult/08-RUT.usfm": ULT_RUT,
    }
    root = tmp_path / "usfm"
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def local_source(usfm_dir) -> LocalDocumentSource:
    return LocalDocumentSource(usfm_dir)


@pytest.fixture
def resolver(local_source) -> QuoteResolver:
    return QuoteResolver(local_source)
