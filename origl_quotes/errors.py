"""Exceptions raised while resolving gloss quotes."""


class QuoteResolutionError(Exception):
    """Base class for errors that abort a whole resolution run."""


class InvalidBook(QuoteResolutionError, ValueError):
    """The book identifier is not a canonical Bible book code."""

    def __init__(self, book: str):
        self.book = book
        super().__init__(f"Book {book} not a valid Bible book")


class DocumentUnavailable(QuoteResolutionError):
    """A corpus document could not be located or parsed for a book."""

    def __init__(self, message: str, corpus: str = "", book: str = ""):
        self.corpus = corpus
        self.book = book
        super().__init__(message)
