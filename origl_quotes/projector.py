"""Projection of matched gloss words onto the original-language word order."""

import json
import logging
import re
from typing import List, Sequence

from .models import Matched, MatchTriple, PhraseResult, Unmatched, WordToken
from .normalizer import QuoteNormalizer

logger = logging.getLogger(__name__)

# Alignment reference sets are expected to hold one label, or two when a
# gloss word sits inside two nested alignment milestones.
SUPPORTED_REF_COUNTS = (1, 2)

_ELLIPSIS_GAP = re.compile(r"\s*\u2026\s*")


def project_to_original(
    book: str,
    cv: str,
    source_tokens: Sequence[WordToken],
    triples: Sequence[MatchTriple],
    phrase: str = "",
    occurrence: str = "",
    gloss_tokens: Sequence[WordToken] = (),
) -> PhraseResult:
    """
    Collect the original-language words referenced by the matched triples.

    Original words are visited in document order and each is emitted at
    most once: as soon as one triple references it ("/<word>:" inside any
    of its alignment labels) the remaining triples are not checked.

    Args:
        book: Book code, for diagnostics.
        cv: "chapter:verse", for diagnostics.
        source_tokens: Original-language tokens of the verse.
        triples: Output of the gloss matcher.
        phrase: The search phrase, for diagnostics.
        occurrence: The row's occurrence value, for diagnostics.
        gloss_tokens: The gloss tokens searched, for diagnostics.

    Returns:
        Matched with the words, or Unmatched with a diagnostic dump.
    """
    word_tokens = [t for t in source_tokens if t.is_word]

    words: List[str] = []
    for token in word_tokens:
        search_key = f"/{token.payload}:"
        for triple in triples:
            refs = triple.alignment_refs
            if refs is None or len(refs) not in SUPPORTED_REF_COUNTS:
                logger.warning(
                    f"Cannot project {0 if refs is None else len(refs)} alignment references: "
                    f"searching for {token.payload!r} in {triple}"
                )
                continue
            if any(search_key in ref for ref in refs):
                words.append(token.payload)
                break

    if not words:
        return Unmatched(
            error=(
                "EMPTY MATCH IN OrigL SOURCE\n"
                f"    Search String: {book} {cv} '{phrase}' occurrence={occurrence}\n"
                f"      from gloss tokens ({len(gloss_tokens)}) "
                f"{json.dumps([t.to_dict() for t in gloss_tokens], ensure_ascii=False)}\n"
                f"       then search triples ({len(triples)}) {[str(t) for t in triples]}\n"
                f"       then wordLike OrigL tokens ({len(word_tokens)}) "
                f"{json.dumps([t.payload for t in word_tokens], ensure_ascii=False)}"
            )
        )
    return Matched(words)


def tidy_words(words: Sequence[str]) -> str:
    """Join words with spaces and turn the first ellipsis gap into ' & '."""
    return _ELLIPSIS_GAP.sub(" & ", " ".join(words), count=1)


def join_parts(parts: Sequence[str]) -> str:
    """Join tidied ellipsis parts into one quote."""
    return f" {QuoteNormalizer.AMPERSAND} ".join(parts)
