"""Row-by-row resolution of gloss quotes into original-language quotes."""

import logging
import re
from typing import List, Optional, Sequence

from tqdm import tqdm

from .books import BookInfo, get_book
from .config import DEFAULT_DCS_URL, SourceConfig
from .data.document_source import DCSDocumentSource, DocumentSource
from .data.tsv import parse_tsv_records, record_to_line
from .index import VerseTokenIndex
from .matcher import match_gloss_phrase
from .models import Matched, PhraseResult, QuoteRecord, ResolutionResult, Unmatched, WordToken
from .normalizer import QuoteNormalizer
from .projector import join_parts, project_to_original, tidy_words
from .tokenizer import tokenize_phrase

logger = logging.getLogger(__name__)

VERSE_RANGE_RE = re.compile(r"^\s*(\d+)[a-z]?\s*-\s*(\d+)")
VERSE_RE = re.compile(r"^\s*(\d+)")


def expand_verse_spec(verse_spec: str) -> List[int]:
    """
    Expand a verse specifier into concrete verse numbers.

    "3" -> [3], "3,4" -> [3, 4], "3-5" -> [3, 4, 5], "1,3-4" -> [1, 3, 4].
    Parts that are not verse numbers (e.g. "intro") are ignored.
    """
    verses: List[int] = []
    for part in verse_spec.strip().split(","):
        if "-" in part:
            match = VERSE_RANGE_RE.match(part)
            if match:
                verses.extend(range(int(match.group(1)), int(match.group(2)) + 1))
        else:
            match = VERSE_RE.match(part)
            if match:
                verses.append(int(match.group(1)))
    return verses


def is_passthrough(record: QuoteRecord) -> bool:
    """Rows that are not gloss quotes about a verse are emitted unchanged."""
    return (
        not record.ref
        or not record.quote.strip()
        or not record.occurrence
        or record.ref == QuoteNormalizer.HEADER_REF
        or QuoteNormalizer.contains_hebrew_or_greek(record.quote)
    )


class QuoteResolver:
    """
    Resolves every row of a notes table for one book.

    Rows are processed sequentially against a verse token index populated
    once per book by the document source.
    """

    def __init__(
        self,
        source: DocumentSource,
        index: Optional[VerseTokenIndex] = None,
        show_progress: bool = False,
    ):
        """
        Initialize the resolver.

        Args:
            source: Provides the gloss and original-language documents.
            index: Token index to use; a new empty one if not given.
            show_progress: Show a progress bar over the table rows.
        """
        self.source = source
        self.index = index if index is not None else VerseTokenIndex()
        self.show_progress = show_progress

    def resolve_quotes(self, book: str, table_content: str) -> ResolutionResult:
        """
        Resolve all rows of a table.

        Args:
            book: Book code, e.g. "TIT".
            table_content: TSV7 table text.

        Returns:
            One output line per input row, in input order, plus the
            diagnostics of the rows that failed.

        Raises:
            InvalidBook: If the book code is unknown.
            DocumentUnavailable: If no corpus at all is available for the book.
        """
        info = get_book(book)
        self.source.ensure_verse_index(info.code, self.index)

        result = ResolutionResult()
        records = parse_tsv_records(table_content)
        for record in tqdm(records, desc=f"Resolving {info.code}", disable=not self.show_progress):
            if is_passthrough(record):
                result.counts.skipped += 1
            else:
                error = self.resolve_record(info, record)
                if error is None:
                    result.counts.passed += 1
                else:
                    result.counts.failed += 1
                    logger.error(error)
                    result.errors.append(error)
            result.output.append(record_to_line(record))

        logger.info(
            f"{info.code}: {result.counts.passed} passed, {result.counts.failed} failed, "
            f"{result.counts.skipped} passed through"
        )
        return result

    def resolve_record(self, book: BookInfo, record: QuoteRecord) -> Optional[str]:
        """
        Resolve one row in place.

        On success the row's quote becomes the original-language quote; on
        failure it is prefixed with the failure tag.

        Returns:
            None on success, otherwise the error diagnostic.
        """
        record.quote = QuoteNormalizer.strip_failure_tag(record.quote)

        chapter, separator, verse_spec = record.ref.partition(":")
        chapter = chapter.strip()
        verses = expand_verse_spec(verse_spec) if separator else []
        logger.debug(f"{book.code} {record.ref}: trying verses {verses}")
        if not verses:
            record.quote = QuoteNormalizer.FAILURE_TAG + record.quote
            return f"Error: {book.code} {record.ref} {record.id} Cannot expand reference to verse numbers"

        cv = ""
        last: PhraseResult = Unmatched("No verses tried")
        for verse in verses:
            cv = f"{chapter}:{verse}"
            last = self.resolve_verse(book, cv, record.quote, record.occurrence)
            if isinstance(last, Matched):
                record.quote = tidy_words(last.data)
                return None

        record.quote = QuoteNormalizer.FAILURE_TAG + record.quote
        return f"Error: {book.code} {cv} {record.id} {last.error}"

    def resolve_verse(self, book: BookInfo, cv: str, quote: str, occurrence: str = "") -> PhraseResult:
        """Try every quote variant against one verse; the first full resolution wins."""
        original = self.source.original_corpus(book)
        source_tokens = self.index.get_words(original.abbr, book.code, cv)
        gloss_tokens = self.index.get_words(self.source.gloss.abbr, book.code, cv)

        result: PhraseResult = Unmatched("No quote variants to try")
        for variant in QuoteNormalizer.build_variants(quote):
            if isinstance(variant, str):
                result = self.resolve_phrase(book.code, cv, variant, occurrence, source_tokens, gloss_tokens)
            else:
                result = self.resolve_parts(book.code, cv, variant, occurrence, source_tokens, gloss_tokens)
            if isinstance(result, Matched):
                return result
        return result

    def resolve_parts(
        self,
        book: str,
        cv: str,
        parts: Sequence[str],
        occurrence: str,
        source_tokens: Sequence[WordToken],
        gloss_tokens: Sequence[WordToken],
    ) -> PhraseResult:
        """Resolve each ellipsis part separately; all parts must resolve."""
        converted: List[str] = []
        for part in parts:
            result = self.resolve_phrase(book, cv, part, occurrence, source_tokens, gloss_tokens)
            if not isinstance(result, Matched):
                result = self.resolve_phrase(
                    book, cv, QuoteNormalizer.uppercase_first_letter(part), occurrence,
                    source_tokens, gloss_tokens,
                )
                if not isinstance(result, Matched):
                    return result
            converted.append(tidy_words(result.data))
        return Matched([join_parts(converted)])

    @staticmethod
    def resolve_phrase(
        book: str,
        cv: str,
        phrase: str,
        occurrence: str,
        source_tokens: Sequence[WordToken],
        gloss_tokens: Sequence[WordToken],
    ) -> PhraseResult:
        """Tokenize, match and project a single phrase."""
        if not source_tokens or not gloss_tokens:
            missing = [
                name for name, tokens in (("original-language", source_tokens), ("gloss", gloss_tokens))
                if not tokens
            ]
            return Unmatched(
                error=f"DOCUMENT UNAVAILABLE: no {' or '.join(missing)} tokens for {book} {cv} '{phrase}'",
                kind="document_unavailable",
            )

        triples = match_gloss_phrase(tokenize_phrase(phrase), gloss_tokens)
        return project_to_original(
            book, cv, source_tokens, triples,
            phrase=phrase, occurrence=occurrence, gloss_tokens=gloss_tokens,
        )


def resolve_quotes(
    book: str,
    table_content: str,
    dcs_url: str = DEFAULT_DCS_URL,
    index: Optional[VerseTokenIndex] = None,
) -> ResolutionResult:
    """
    Resolve a notes table against documents fetched from a content service.

    Raises:
        InvalidBook: If the book code is unknown.
    """
    get_book(book)
    source = DCSDocumentSource(SourceConfig(dcs_url=dcs_url))
    return QuoteResolver(source, index=index).resolve_quotes(book, table_content)
