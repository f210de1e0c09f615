"""Description similarity: bag-of-words overlap ratio in [0, 1]."""

import re

_WORD_SPLIT = re.compile(r"\W+")


def tokenize(text: str | None) -> list[str]:
    """Lower-case and split on runs of non-word characters. Empty pieces are dropped."""
    if not text:
        return []
    return [t for t in _WORD_SPLIT.split(text.lower()) if t]


def similarity(a: str | None, b: str | None) -> float:
    """
    Share of a's tokens that also occur in b, over the longer token list.
    Duplicate tokens in a are each counted. Empty input on both sides -> 0.0.
    """
    words_a = tokenize(a)
    words_b = tokenize(b)
    vocab_b = set(words_b)
    overlap = sum(1 for w in words_a if w in vocab_b)
    return overlap / max(len(words_a), max(len(words_b), 1))
