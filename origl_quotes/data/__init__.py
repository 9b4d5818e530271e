"""Document sources and table I/O."""

from .document_source import (
    DCSDocumentSource,
    DocumentSource,
    LocalDocumentSource,
    build_document_source,
)
from .tsv import parse_tsv_records, read_tsv_file, record_to_line, write_lines

__all__ = [
    "DocumentSource",
    "DCSDocumentSource",
    "LocalDocumentSource",
    "build_document_source",
    "parse_tsv_records",
    "read_tsv_file",
    "record_to_line",
    "write_lines",
]
