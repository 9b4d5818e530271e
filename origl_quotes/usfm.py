"""Parsing of aligned USFM into per-verse token sequences."""

import logging
import re
from typing import Dict, List, Optional

from .models import SubType, WordToken

logger = logging.getLogger(__name__)

# Prefix of the alignment labels attached to gloss tokens. A label is
# "<prefix>/<original word>:<occurrence>", so it contains "/<word>:".
ALIGNMENT_SCOPE_PREFIX = "attribute/milestone/zaln/x-align"

BOOK_ID_RE = re.compile(r"^\\id\s+(\w+)", re.MULTILINE)
# Footnotes, endnotes and cross references are not part of the verse text
NOTE_RE = re.compile(r"\\(f|fe|x)\s.*?\\\1\*", re.DOTALL)
# Identification, titles and headings: the rest of the line is not verse text
HEADING_LINE_RE = re.compile(
    r"^\\(?:id|ide|usfm|h|toc\d*|toca\d*|mt\d*|mte\d*|ms\d*|mr|sr|s\d*|sp|sd\d*|r|rem|cl|cp|sts)\b.*$",
    re.MULTILINE,
)

MARKER_RE = re.compile(
    r"\\c\s+(?P<chapter>\d+)"
    r"|\\v\s+(?P<verse>\d+)[a-z]?(?:-(?P<verse_end>\d+)[a-z]?)?\s?"
    r"|\\\+?w\s+(?P<word>[^|\\]*)(?:\|[^\\]*)?\\\+?w\*"
    r"|\\(?P<milestone>[a-z0-9]+(?:-[se])?)\s*(?:\|(?P<attributes>[^\\]*))?\\\*"
    r"|\\\+?[a-z0-9]+\*?"
)
ATTRIBUTE_RE = re.compile(r'([\w-]+)="([^"]*)"')

# ASCII punctuation, Latin-1 punctuation, general punctuation, Greek question
# mark and ano teleia, Hebrew maqaf, paseq, sof pasuq, nun hafukha, geresh
# and gershayim. Word joiners stay inside words.
PUNCTUATION = (
    r"!-/:-@\[-`{-~\u00A1-\u00BF\u2010-\u2027\u2030-\u205E"
    r"\u037E\u0387\u05BE\u05C0\u05C3\u05C6\u05F3\u05F4"
)
TEXT_TOKEN_RE = re.compile(
    rf"(?P<space>\s+)|(?P<punct>[{PUNCTUATION}])|(?P<word>[^\s{PUNCTUATION}]+)"
)


def parse_book_code(usfm: str) -> Optional[str]:
    """Return the book code from the \\id line, if any."""
    match = BOOK_ID_RE.search(usfm)
    return match.group(1).upper() if match else None


def parse_attributes(text: str) -> Dict[str, str]:
    """Parse `key="value"` pairs from a marker's attribute section."""
    return dict(ATTRIBUTE_RE.findall(text or ""))


class UsfmAlignmentParser:
    """
    Turns a USFM book into {"chapter:verse": [WordToken, ...]}.

    Words inside \\w markers become wordLike tokens (with any punctuation
    inside them split off as separate tokens, as for plain text). Each
    wordLike token inside \\zaln-s ... \\zaln-e milestones receives one
    alignment label per enclosing milestone. Text before the first verse of
    a chapter is dropped. Every verse of a bridge (\\v 1-2) maps to the same
    token sequence.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self._verses: Dict[str, List[WordToken]] = {}
        self._chapter: Optional[str] = None
        self._current: List[str] = []
        self._tokens: List[WordToken] = []
        self._alignment_stack: List[str] = []

    def parse(self, usfm: str) -> Dict[str, List[WordToken]]:
        """
        Parse a USFM document.

        Args:
            usfm: Full text of one book.

        Returns:
            Mapping of "chapter:verse" to the verse's tokens in document order.
        """
        self._reset()
        text = NOTE_RE.sub("", usfm)
        text = HEADING_LINE_RE.sub("", text)

        position = 0
        for match in MARKER_RE.finditer(text):
            self._add_text(text[position:match.start()])
            position = match.end()

            if match.group("chapter") is not None:
                self._flush()
                self._chapter = match.group("chapter")
                self._current = []
            elif match.group("verse") is not None:
                self._flush()
                start = int(match.group("verse"))
                end = int(match.group("verse_end") or start)
                self._current = [str(v) for v in range(start, max(start, end) + 1)]
            elif match.group("word") is not None:
                self._add_text(match.group("word").strip())
            elif match.group("milestone") is not None:
                self._handle_milestone(match.group("milestone"), match.group("attributes"))
            # Any other marker (\p, \q1, \add, ...) carries no text itself

        self._add_text(text[position:])
        self._flush()

        logger.debug(f"Parsed {len(self._verses)} verses")
        return self._verses

    def _handle_milestone(self, name: str, attributes: Optional[str]) -> None:
        if name == "zaln-s":
            attrs = parse_attributes(attributes)
            content = attrs.get("x-content", "")
            occurrence = attrs.get("x-occurrence", "1")
            self._alignment_stack.append(f"{ALIGNMENT_SCOPE_PREFIX}/{content}:{occurrence}")
        elif name == "zaln-e":
            if self._alignment_stack:
                self._alignment_stack.pop()
            else:
                logger.debug(f"Unbalanced \\zaln-e in {self._chapter}:{self._current}")

    def _add_text(self, text: str) -> None:
        if not text or not self._current:
            return
        refs = frozenset(self._alignment_stack)
        for match in TEXT_TOKEN_RE.finditer(text):
            payload = match.group(0)
            if match.group("word") is not None:
                sub_type = SubType.WORD_LIKE
            elif match.group("punct") is not None:
                sub_type = SubType.PUNCTUATION
            elif "\n" in payload:
                sub_type = SubType.EOL
            else:
                sub_type = SubType.LINE_SPACE
            self._tokens.append(
                WordToken(
                    payload=payload,
                    position=len(self._tokens),
                    sub_type=sub_type,
                    alignment_refs=refs if sub_type == SubType.WORD_LIKE else frozenset(),
                )
            )

    def _flush(self) -> None:
        if self._alignment_stack:
            logger.debug(f"Unclosed alignment milestones at end of {self._chapter}:{self._current}")
            self._alignment_stack = []
        if self._chapter is not None and self._current:
            for verse in self._current:
                self._verses[f"{self._chapter}:{verse}"] = self._tokens
        self._tokens = []


def parse_usfm(usfm: str) -> Dict[str, List[WordToken]]:
    """Convenience function: parse a USFM book into verse token lists."""
    return UsfmAlignmentParser().parse(usfm)
