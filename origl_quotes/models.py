"""Data models for quote resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, List, Optional, Union


class SubType(str, Enum):
    """Lexical category of a document token."""

    WORD_LIKE = "wordLike"
    PUNCTUATION = "punctuation"
    LINE_SPACE = "lineSpace"
    EOL = "eol"


@dataclass(frozen=True)
class WordToken:
    """One token of a parsed verse, in document order."""

    payload: str
    position: int
    sub_type: SubType = SubType.WORD_LIKE
    # Alignment labels, only populated on gloss tokens. Each label contains
    # a "/<original word>:" marker for the original word it was aligned to.
    alignment_refs: FrozenSet[str] = frozenset()

    @property
    def is_word(self) -> bool:
        return self.sub_type == SubType.WORD_LIKE

    def to_dict(self) -> dict:
        """Compact form used in diagnostics."""
        return {"payload": self.payload, "scopes": sorted(self.alignment_refs)}


@dataclass(frozen=True)
class MatchTriple:
    """A phrase word, whether it follows an ellipsis, and its alignment refs once matched."""

    word: str
    follows_ellipsis: bool = False
    alignment_refs: Optional[FrozenSet[str]] = None

    def __str__(self) -> str:
        refs = "" if self.alignment_refs is None else ",".join(sorted(self.alignment_refs))
        return f"{self.word},{str(self.follows_ellipsis).lower()},{refs}"


@dataclass(frozen=True)
class Matched:
    """Successful projection: original-language words in document order."""

    data: List[str]


@dataclass(frozen=True)
class Unmatched:
    """Failed projection with a diagnostic string."""

    error: str
    kind: str = "no_match"  # or "document_unavailable"


PhraseResult = Union[Matched, Unmatched]


# TSV7 column order: Reference, ID, Tags, SupportReference, Quote, Occurrence, Note
TSV7_FIELDS = ("ref", "id", "tags", "support_reference", "quote", "occurrence", "note")


@dataclass
class QuoteRecord:
    """One row of a translation-notes table."""

    ref: str = ""
    id: str = ""
    tags: str = ""
    support_reference: str = ""
    quote: str = ""
    occurrence: str = ""
    note: str = ""
    # Any columns beyond the seven TSV7 ones, passed through untouched
    extra_fields: List[str] = field(default_factory=list)

    @classmethod
    def from_fields(cls, fields: List[str]) -> "QuoteRecord":
        """Create a record from the cells of one row."""
        cells = list(fields) + [""] * max(0, len(TSV7_FIELDS) - len(fields))
        known = dict(zip(TSV7_FIELDS, cells[: len(TSV7_FIELDS)]))
        return cls(**known, extra_fields=cells[len(TSV7_FIELDS):])

    def to_fields(self) -> List[str]:
        """Return the row cells in their original column order."""
        return [getattr(self, name) for name in TSV7_FIELDS] + list(self.extra_fields)


@dataclass
class ResolutionCounts:
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped


@dataclass
class ResolutionResult:
    """Serialized output rows plus the diagnostics of every failed row."""

    output: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    counts: ResolutionCounts = field(default_factory=ResolutionCounts)
