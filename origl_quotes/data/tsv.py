"""Reading and writing TSV7 translation-notes tables."""

import csv
import io
import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd

from ..models import QuoteRecord

logger = logging.getLogger(__name__)

# Line breaks recognized by the pandas parser; cells may contain other
# characters that str.splitlines() would treat as breaks (U+2028, \x0c, ...)
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def parse_tsv_records(content: str) -> List[QuoteRecord]:
    """
    Parse TSV7 table content into records, one per non-blank line.

    The header line is returned as a record like any other row. Cells are
    kept verbatim: no quote processing, no NA conversion. Rows shorter than
    the widest row are padded with empty cells.

    Args:
        content: The table text.

    Returns:
        Records in input order.
    """
    lines = [line for line in LINE_BREAK_RE.split(content) if line]
    if not lines:
        return []

    width = max(line.count("\t") + 1 for line in lines)
    df = pd.read_csv(
        io.StringIO(content),
        sep="\t",
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        quoting=csv.QUOTE_NONE,
        skip_blank_lines=True,
    )
    df = df.fillna("")

    logger.debug(f"Parsed {len(df)} rows of width {width}")
    return [QuoteRecord.from_fields(list(row)) for row in df.itertuples(index=False, name=None)]


def record_to_line(record: QuoteRecord) -> str:
    """Serialize a record back to one TSV line."""
    return "\t".join(record.to_fields())


def read_tsv_file(path: Union[str, Path]) -> str:
    """Read a table file as text."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8")


def write_lines(path: Union[str, Path], lines: Iterable[str]) -> None:
    """Write lines to a file, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    text = "\n".join(lines)
    path.write_text(text + "\n" if text else "", encoding="utf-8")
