"""Cache of verse token sequences keyed by corpus, book and verse."""

from typing import Dict, List, Mapping

from .models import WordToken


class VerseTokenIndex:
    """
    Token sequences per (corpus abbreviation, book code, "chapter:verse").

    A resolver owns one index for its lifetime. Callers that want to reuse
    imported books across runs pass the same index to each resolver.
    """

    def __init__(self):
        self._books: Dict[str, Dict[str, Dict[str, List[WordToken]]]] = {}

    @staticmethod
    def _keys(corpus: str, book: str):
        return corpus.lower(), book.upper()

    def add_book(self, corpus: str, book: str, verses: Mapping[str, List[WordToken]]) -> None:
        """Store all verses of one book of one corpus."""
        corpus_key, book_key = self._keys(corpus, book)
        self._books.setdefault(corpus_key, {})[book_key] = dict(verses)

    def has_book(self, corpus: str, book: str) -> bool:
        corpus_key, book_key = self._keys(corpus, book)
        return book_key in self._books.get(corpus_key, {})

    def get_tokens(self, corpus: str, book: str, cv: str) -> List[WordToken]:
        """Return the verse tokens, or an empty list if the verse is unknown."""
        corpus_key, book_key = self._keys(corpus, book)
        return list(self._books.get(corpus_key, {}).get(book_key, {}).get(cv, []))

    def get_words(self, corpus: str, book: str, cv: str) -> List[WordToken]:
        """Return only the wordLike tokens of a verse."""
        return [t for t in self.get_tokens(corpus, book, cv) if t.is_word]

    def verse_count(self, corpus: str, book: str) -> int:
        corpus_key, book_key = self._keys(corpus, book)
        return len(self._books.get(corpus_key, {}).get(book_key, {}))

    def __len__(self) -> int:
        """Number of (corpus, book) pairs held."""
        return sum(len(books) for books in self._books.values())
