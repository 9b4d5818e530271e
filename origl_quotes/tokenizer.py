"""Splits a search phrase into matchable words."""

import re
from typing import List

from .models import MatchTriple
from .normalizer import QuoteNormalizer

# Whitespace, ASCII hyphen and Hebrew maqaf
WORD_SEPARATORS = re.compile(r"[-\s\u05BE]")
# Gloss documents keep punctuation as separate tokens, so it is stripped
# from the search words (all occurrences, e.g. "(word),").
SENTENCE_PUNCTUATION = re.compile(r"[\"'\u201C\u2018\u201D\u2019{}(),?:;.!]")
PASEQ = "\u05C0"  # ׀


def tokenize_phrase(phrase: str) -> List[MatchTriple]:
    """
    Split a phrase into (word, follows_ellipsis) triples.

    Words joined by an ellipsis ("servant…apostle") become several
    entries; every part after the first is flagged as following an
    ellipsis. A bare paseq is dropped.

    Args:
        phrase: A gloss-language search phrase.

    Returns:
        Triples without alignment references.
    """
    triples: List[MatchTriple] = []
    for expr in WORD_SEPARATORS.split(phrase):
        expr = SENTENCE_PUNCTUATION.sub("", expr)
        if QuoteNormalizer.ELLIPSIS in expr:
            first, *rest = expr.split(QuoteNormalizer.ELLIPSIS)
            triples.append(MatchTriple(first, False))
            triples.extend(MatchTriple(part, True) for part in rest)
        else:
            triples.append(MatchTriple(expr, False))
    return [t for t in triples if t.word != PASEQ]
