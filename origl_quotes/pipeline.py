"""Batch pipeline: one notes table in, one resolved table out."""

import logging
from typing import Optional

from .config import Config
from .data import build_document_source, read_tsv_file, write_lines
from .data.document_source import DocumentSource
from .index import VerseTokenIndex
from .models import ResolutionResult
from .resolver import QuoteResolver

logger = logging.getLogger(__name__)


class QuotesPipeline:
    """
    Pipeline converting gloss quotes in a notes table to original-language quotes.

    Reads the input table, resolves every row for the configured book and
    writes the output table plus an optional error report.
    """

    def __init__(
        self,
        config: Config,
        source: Optional[DocumentSource] = None,
        index: Optional[VerseTokenIndex] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration.
            source: Document source; built from config.source if not given.
            index: Token index to reuse across pipelines, if any.
        """
        self.config = config
        self.source = source or build_document_source(config.source)
        self.resolver = QuoteResolver(self.source, index=index, show_progress=config.show_progress)

    def _write_output(self, result: ResolutionResult) -> None:
        output_path = self.config.output_path
        logger.info(f"Writing {len(result.output)} rows to: {output_path}")
        write_lines(output_path, result.output)

        if self.config.errors_path is not None:
            logger.info(f"Writing {len(result.errors)} errors to: {self.config.errors_path}")
            # One line per failed row; diagnostics may span several lines
            write_lines(self.config.errors_path, (e.replace("\n", " ") for e in result.errors))

    def run(self) -> ResolutionResult:
        """
        Execute the pipeline.

        Returns:
            The resolution result (rows, errors and counts).
        """
        logger.info("Starting quote resolution pipeline")
        logger.info(f"Book: {self.config.book}")
        logger.info(f"Input: {self.config.input_path}")
        logger.info(f"Output: {self.config.output_path}")
        logger.info(f"Source: {self.source!r}")

        content = read_tsv_file(self.config.input_path)
        result = self.resolver.resolve_quotes(self.config.book, content)
        self._write_output(result)

        logger.info(
            f"Pipeline complete. {result.counts.passed} resolved, "
            f"{result.counts.failed} not found, {result.counts.skipped} passed through"
        )
        return result
