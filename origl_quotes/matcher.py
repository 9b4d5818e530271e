"""Matching of tokenized phrases against gloss-language verse tokens."""

import logging
from dataclasses import replace
from typing import List, Sequence

from .models import MatchTriple, WordToken

logger = logging.getLogger(__name__)


def find_first_word_index(word: str, tokens: Sequence[WordToken], start_at: int = 0) -> int:
    """Return the index of the first token at or after `start_at` whose payload is `word`, or -1."""
    for index in range(max(start_at, 0), len(tokens)):
        if tokens[index].payload == word:
            return index
    return -1


def match_gloss_phrase(phrase: Sequence[MatchTriple], gloss_tokens: Sequence[WordToken]) -> List[MatchTriple]:
    """
    Find the phrase as a contiguous run of gloss tokens.

    Every candidate start is an occurrence of the first phrase word; from
    there each following phrase word must equal the payload at the same
    offset. Ellipsis flags do not allow gaps.

    Args:
        phrase: Tokenized search phrase.
        gloss_tokens: The verse's wordLike gloss tokens in document order.

    Returns:
        The phrase triples with the matched tokens' alignment references
        attached, or an empty list if the phrase is not in the verse.
    """
    if not phrase:
        return []

    first_word = phrase[0].word
    start = find_first_word_index(first_word, gloss_tokens)
    while start != -1:
        end = start + len(phrase)
        if end <= len(gloss_tokens) and all(
            gloss_tokens[start + offset].payload == triple.word
            for offset, triple in enumerate(phrase)
        ):
            return [
                replace(triple, alignment_refs=gloss_tokens[start + offset].alignment_refs)
                for offset, triple in enumerate(phrase)
            ]
        start = find_first_word_index(first_word, gloss_tokens, start + 1)

    logger.debug(
        f"Couldn't find {[t.word for t in phrase]} in {[t.payload for t in gloss_tokens]}"
    )
    return []
