"""origl-quotes - Resolve gloss-translation quotes to aligned original-language quotes."""

__version__ = "0.1.0"

from .errors import DocumentUnavailable, InvalidBook
from .index import VerseTokenIndex
from .models import QuoteRecord, ResolutionResult, WordToken
from .pipeline import QuotesPipeline
from .resolver import QuoteResolver, resolve_quotes

__all__ = [
    "DocumentUnavailable",
    "InvalidBook",
    "VerseTokenIndex",
    "QuoteRecord",
    "ResolutionResult",
    "WordToken",
    "QuotesPipeline",
    "QuoteResolver",
    "resolve_quotes",
]
