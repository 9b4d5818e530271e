"""Canonical Bible book catalogue (codes, USFM file names and testaments)."""

from dataclasses import dataclass
from typing import Dict, Literal

from .errors import InvalidBook


@dataclass(frozen=True)
class BookInfo:
    """A canonical book with its USFM file stem and testament."""

    code: str  # Upper-case USFM book code, e.g. "TIT"
    number: int  # unfoldingWord file number, e.g. 57
    testament: Literal["old", "new"]

    @property
    def usfm_name(self) -> str:
        """File stem used for the book in USFM repositories, e.g. '57-TIT'."""
        return f"{self.number:02d}-{self.code}"


# unfoldingWord numbering: the Old Testament runs 01-39, the New Testament 41-67.
_OLD_TESTAMENT = [
    "GEN", "EXO", "LEV", "NUM", "DEU", "JOS", "JDG", "RUT", "1SA", "2SA",
    "1KI", "2KI", "1CH", "2CH", "EZR", "NEH", "EST", "JOB", "PSA", "PRO",
    "ECC", "SNG", "ISA", "JER", "LAM", "EZK", "DAN", "HOS", "JOL", "AMO",
    "OBA", "JON", "MIC", "NAM", "HAB", "ZEP", "HAG", "ZEC", "MAL",
]
_NEW_TESTAMENT = [
    "MAT", "MRK", "LUK", "JHN", "ACT", "ROM", "1CO", "2CO", "GAL", "EPH",
    "PHP", "COL", "1TH", "2TH", "1TI", "2TI", "TIT", "PHM", "HEB", "JAS",
    "1PE", "2PE", "1JN", "2JN", "3JN", "JUD", "REV",
]

BOOKS: Dict[str, BookInfo] = {}
for _index, _code in enumerate(_OLD_TESTAMENT, start=1):
    BOOKS[_code.lower()] = BookInfo(code=_code, number=_index, testament="old")
for _index, _code in enumerate(_NEW_TESTAMENT, start=41):
    BOOKS[_code.lower()] = BookInfo(code=_code, number=_index, testament="new")


def get_book(book: str) -> BookInfo:
    """
    Look up a book by its code, case-insensitively.

    Raises:
        InvalidBook: If the code is not in the catalogue.
    """
    info = BOOKS.get((book or "").strip().lower())
    if info is None:
        raise InvalidBook(book)
    return info
