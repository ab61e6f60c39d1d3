from collections import Counter

import pytest

from core.analysis.ranking import rank_words, sort_words, collation_key
from core.models.analysis import WordStat


def ws(word, count, is_stop_word=False):
    return WordStat(word=word, count=count, is_stop_word=is_stop_word)


SAMPLE_BAG = [
    ws("the", 5, True),
    ws("cat", 3),
    ws("dog", 3),
    ws("and", 2, True),
    ws("sat", 1),
    ws("mat", 4),
    ws("on", 1, True),
    ws("hat", 2),
    ws("bat", 7),
]


def test_tie_broken_alphabetically():
    """Equal counts are ordered by word."""
    ranked = rank_words([ws("the", 5, True), ws("dog", 3), ws("cat", 3)])

    assert [(w.word, w.count) for w in ranked.non_stopwords] == [("cat", 3), ("dog", 3)]
    assert [w.word for w in ranked.stopwords] == ["the"]
    assert ranked.total_words == 11


def test_empty_input():
    ranked = rank_words([])

    assert ranked.total_words == 0
    assert ranked.top_5_words == []
    assert ranked.non_stopwords == []
    assert ranked.stopwords == []


def test_fewer_than_five_content_words_not_padded():
    ranked = rank_words([ws("a", 1), ws("b", 1)])

    assert len(ranked.top_5_words) == 2
    assert [w.word for w in ranked.top_5_words] == ["a", "b"]


def test_total_words_includes_stopwords():
    ranked = rank_words(SAMPLE_BAG)
    assert ranked.total_words == sum(w.count for w in SAMPLE_BAG)


def test_partitions_cover_input_bag():
    ranked = rank_words(SAMPLE_BAG)

    assert Counter(ranked.non_stopwords) + Counter(ranked.stopwords) == Counter(SAMPLE_BAG)
    assert all(not w.is_stop_word for w in ranked.non_stopwords)
    assert all(w.is_stop_word for w in ranked.stopwords)


def test_top_words_is_prefix_of_non_stopwords():
    ranked = rank_words(SAMPLE_BAG)

    assert len(ranked.top_5_words) == 5
    assert ranked.top_5_words == ranked.non_stopwords[:5]
    assert [w.word for w in ranked.top_5_words] == ["bat", "mat", "cat", "dog", "hat"]


def test_count_descending():
    ranked = rank_words(SAMPLE_BAG)
    counts = [w.count for w in ranked.non_stopwords]
    assert counts == sorted(counts, reverse=True)


def test_all_stopwords():
    ranked = rank_words([ws("the", 2, True), ws("a", 1, True)])

    assert ranked.total_words == 3
    assert ranked.top_5_words == []
    assert ranked.non_stopwords == []
    assert [w.word for w in ranked.stopwords] == ["the", "a"]


def test_duplicate_entries_keep_input_order():
    first = ws("echo", 2)
    second = ws("echo", 2)
    ranked = rank_words([first, ws("zulu", 9), second])

    assert ranked.total_words == 13
    assert ranked.non_stopwords[1] is first
    assert ranked.non_stopwords[2] is second


def test_ranking_is_deterministic_regardless_of_input_order():
    shuffled = list(reversed(SAMPLE_BAG))
    assert rank_words(shuffled).non_stopwords == rank_words(SAMPLE_BAG).non_stopwords


def test_custom_top_n():
    assert len(rank_words(SAMPLE_BAG, top_n=3).top_5_words) == 3
    assert rank_words(SAMPLE_BAG, top_n=0).top_5_words == []


@pytest.mark.parametrize("words,expected", [
    (["banana", "Apple", "cherry"], ["Apple", "banana", "cherry"]),
    (["Zebra", "apple"], ["apple", "Zebra"]),
    (["b", "B", "a"], ["a", "b", "B"]),
    (["été", "ete", "etre"], ["ete", "été", "etre"]),
])
def test_locale_aware_word_order(words, expected):
    """Case and accents only break ties after base letters compare equal."""
    sorted_words = sort_words(ws(w, 1) for w in words)
    assert [w.word for w in sorted_words] == expected


def test_collation_key_groups_accented_forms():
    assert collation_key("Éclair")[0] == collation_key("eclair")[0]
    assert collation_key("eclair") < collation_key("Éclair")
