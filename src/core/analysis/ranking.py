#!/usr/bin/env python3
"""
Word ranking for analyzed text.

Turns the unordered per-word statistics returned by the language model into
the categorized, sorted summary: total word count, content words, stopwords
and the most frequent content words.
"""

import unicodedata
from typing import Iterable, List, Tuple

from ..models.analysis import WordStat, RankedWords

DEFAULT_TOP_N = 5


def collation_key(word: str) -> Tuple[str, str, str, str]:
    """
    Locale-aware sort key for a word.

    Compares base letters first ignoring case and accents, then accents,
    then case with lowercase first, and finally raw code points.
    """
    decomposed = unicodedata.normalize('NFD', word)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), decomposed.casefold(), word.swapcase(), word)


def ranking_key(stat: WordStat) -> Tuple[int, Tuple[str, str, str, str]]:
    """Sort key: count descending, then word ascending."""
    return (-stat.count, collation_key(stat.word))


def sort_words(words: Iterable[WordStat]) -> List[WordStat]:
    """Sort word statistics by ranking order (stable for equal keys)."""
    return sorted(words, key=ranking_key)


def rank_words(words: Iterable[WordStat], top_n: int = DEFAULT_TOP_N) -> RankedWords:
    """
    Rank word statistics.

    Args:
        words: Unordered word statistics; duplicates are kept as distinct entries
        top_n: Number of content words to include in the top list

    Returns:
        RankedWords with total count, both sorted partitions and the top list
    """
    words = list(words)

    total_words = sum(w.count for w in words)
    non_stopwords = sort_words(w for w in words if not w.is_stop_word)
    stopwords = sort_words(w for w in words if w.is_stop_word)

    return RankedWords(
        total_words=total_words,
        top_5_words=non_stopwords[:max(top_n, 0)],
        non_stopwords=non_stopwords,
        stopwords=stopwords
    )
