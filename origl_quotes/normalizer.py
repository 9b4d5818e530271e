"""Normalization of gloss quotes into the variants tried during resolution."""

import logging
import re
from typing import List, Union

logger = logging.getLogger(__name__)

QuoteVariant = Union[str, List[str]]


class QuoteNormalizer:
    """Clean gloss quotes and expand them into matching variants."""

    ELLIPSIS = "\u2026"  # …
    # Ellipsis marker as written in the notes tables
    AMPERSAND = "&"
    FAILURE_TAG = "QUOTE_NOT_FOUND: "
    HEADER_REF = "Reference"

    # Hebrew, Hebrew presentation forms, Greek and Coptic, Greek extended
    HEBREW_OR_GREEK = re.compile(r"[\u0590-\u05FF\uFB1D-\uFB4F\u0370-\u03FF\u1F00-\u1FFF]")
    BRACES = re.compile(r"[{}]")
    ELLIPSIS_SPLIT = re.compile(r" *\u2026 *")
    LOWERCASE_LETTER = re.compile(r"[a-z]")

    @classmethod
    def contains_hebrew_or_greek(cls, text: str) -> bool:
        """Return True if the text has any Hebrew or Greek script character."""
        return bool(cls.HEBREW_OR_GREEK.search(text or ""))

    @classmethod
    def strip_failure_tag(cls, quote: str) -> str:
        """Remove leading QUOTE_NOT_FOUND tags left by an earlier run."""
        while quote.startswith(cls.FAILURE_TAG):
            quote = quote[len(cls.FAILURE_TAG):]
        return quote

    @classmethod
    def clean_quote(cls, quote: str) -> str:
        """
        Canonicalize the ellipsis marker and drop braces.

        Every '&' becomes '…' and all '{' / '}' are removed. Applying this
        twice gives the same result as applying it once.
        """
        return cls.BRACES.sub("", quote.replace(cls.AMPERSAND, cls.ELLIPSIS))

    @classmethod
    def uppercase_first_letter(cls, text: str) -> str:
        """Upper-case only the first lowercase ASCII letter found in the text."""
        return cls.LOWERCASE_LETTER.sub(lambda m: m.group(0).upper(), text, count=1)

    @classmethod
    def split_ellipsis(cls, text: str) -> List[str]:
        """Split a quote into its ellipsis-separated parts."""
        return cls.ELLIPSIS_SPLIT.split(text)

    @classmethod
    def build_variants(cls, quote: str) -> List[QuoteVariant]:
        """
        Expand a quote into the ordered variants to try.

        Order: cleaned quote, raw quote, ellipsis splits of both, then the
        first-letter-uppercased cleaned quote and its ellipsis split. String
        variants are single phrases, list variants are ellipsis parts that
        must all resolve.

        Args:
            quote: The quote with any failure tag already stripped.

        Returns:
            Variants in priority order.
        """
        clean = cls.clean_quote(quote)
        clean_uc = cls.uppercase_first_letter(clean)

        variants: List[QuoteVariant] = [clean]
        if quote != clean:
            variants.append(quote)
        if cls.ELLIPSIS in clean:
            variants.append(cls.split_ellipsis(clean))
            if quote != clean:
                variants.append(cls.split_ellipsis(quote))
        if clean != clean_uc:
            variants.append(clean_uc)
            if cls.ELLIPSIS in clean_uc:
                variants.append(cls.split_ellipsis(clean_uc))

        logger.debug(f"Variants for {quote!r}: {variants}")
        return variants
