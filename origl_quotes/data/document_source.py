"""Sources of aligned USFM documents and population of the verse index."""

import base64
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

import requests

from ..books import BookInfo, get_book
from ..config import CorpusConfig, SourceConfig
from ..errors import DocumentUnavailable
from ..index import VerseTokenIndex
from ..usfm import parse_book_code, parse_usfm

logger = logging.getLogger(__name__)


class DocumentSource(ABC):
    """
    Base class for document sources.

    A source knows three corpora: the gloss translation and the Hebrew and
    Greek original-language texts. Subclasses implement fetch_usfm().
    """

    def __init__(self, config: Optional[SourceConfig] = None):
        """
        Initialize the source.

        Args:
            config: Source configuration; defaults select the unfoldingWord
                ULT, UHB and UGNT repositories.
        """
        self.config = config or SourceConfig()

    @property
    def gloss(self) -> CorpusConfig:
        return self.config.gloss

    def original_corpus(self, book: BookInfo) -> CorpusConfig:
        """The original-language corpus for the book's testament."""
        return self.config.hebrew if book.testament == "old" else self.config.greek

    def corpora_for(self, book: BookInfo) -> List[CorpusConfig]:
        """Corpora needed to resolve quotes in a book, original language first."""
        return [self.original_corpus(book), self.gloss]

    @abstractmethod
    def fetch_usfm(self, corpus: CorpusConfig, book: BookInfo) -> str:
        """
        Return the USFM text of one book of one corpus.

        Raises:
            DocumentUnavailable: If the book cannot be located in the corpus.
        """
        pass

    def ensure_verse_index(self, book: str, index: VerseTokenIndex) -> VerseTokenIndex:
        """
        Import the book's corpora into the index unless already present.

        A corpus that cannot be located is logged and skipped; rows that
        need it then fail individually.

        Args:
            book: Book code.
            index: Index to populate.

        Returns:
            The same index.

        Raises:
            InvalidBook: If the book code is unknown.
            DocumentUnavailable: If none of the book's corpora is available.
        """
        info = get_book(book)
        corpora = self.corpora_for(info)

        for corpus in corpora:
            if index.has_book(corpus.abbr, info.code):
                logger.debug(f"{corpus.repo} {info.code} already imported")
                continue
            try:
                usfm = self.fetch_usfm(corpus, info)
            except DocumentUnavailable as e:
                logger.error(f"ERROR: {e}")
                continue

            book_code = parse_book_code(usfm)
            if book_code and book_code != info.code:
                logger.warning(f"{corpus.repo} document for {info.code} identifies itself as {book_code}")
            verses = parse_usfm(usfm)
            index.add_book(corpus.abbr, info.code, verses)
            logger.info(f"Imported {corpus.repo} {info.code}: {len(verses)} verses")

        if not any(index.has_book(corpus.abbr, info.code) for corpus in corpora):
            raise DocumentUnavailable(
                f"Book {info.code} not found in {' or '.join(c.repo for c in corpora)}",
                book=info.code,
            )
        return index

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(gloss={self.gloss.repo})"


class DCSDocumentSource(DocumentSource):
    """Fetches USFM files through the Door43 Content Service repository API."""

    def __init__(self, config: Optional[SourceConfig] = None, session: Optional[requests.Session] = None):
        super().__init__(config)
        self.session = session or requests.Session()

    def content_url(self, corpus: CorpusConfig, book: BookInfo) -> str:
        return (
            f"{self.config.dcs_url}/api/v1/repos/{corpus.org}/{corpus.repo}"
            f"/contents/{book.usfm_name}.usfm"
        )

    def fetch_usfm(self, corpus: CorpusConfig, book: BookInfo) -> str:
        url = self.content_url(corpus, book)
        logger.info(f"Downloading {corpus.org}/{corpus.repo} {book.usfm_name}.usfm")

        response = self.session.get(url, timeout=self.config.timeout)
        if response.status_code == 404:
            raise DocumentUnavailable(
                f"Book {book.code} not found at {url}", corpus=corpus.repo, book=book.code
            )
        response.raise_for_status()

        content = response.json().get("content")
        if not content:
            raise DocumentUnavailable(
                f"No content for {book.code} in {corpus.repo}", corpus=corpus.repo, book=book.code
            )
        return base64.b64decode(content).decode("utf-8")


class LocalDocumentSource(DocumentSource):
    """Reads USFM files from <root>/<lang>_<abbr>/<NN-BOOK>.usfm."""

    def __init__(self, root: Union[str, Path], config: Optional[SourceConfig] = None):
        super().__init__(config)
        self.root = Path(root)

    def fetch_usfm(self, corpus: CorpusConfig, book: BookInfo) -> str:
        path = self.root / corpus.repo / f"{book.usfm_name}.usfm"
        if not path.exists():
            raise DocumentUnavailable(
                f"Book {book.code} not found at {path}", corpus=corpus.repo, book=book.code
            )
        return path.read_text(encoding="utf-8")


def build_document_source(config: SourceConfig) -> DocumentSource:
    """Create the document source selected by the configuration."""
    if config.kind == "local":
        if config.local_dir is None:
            raise ValueError("source.local_dir is required when source.kind is 'local'")
        return LocalDocumentSource(config.local_dir, config)
    return DCSDocumentSource(config)
