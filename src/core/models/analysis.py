#!/usr/bin/env python3
"""
Analysis result data models.

Contains the per-word statistics produced by the language model and the
ranked summary returned to API callers.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

SENTIMENTS = ('positive', 'negative', 'neutral')


@dataclass(frozen=True)
class WordStat:
    """One distinct token with its frequency and stopword flag."""
    word: str
    count: int
    is_stop_word: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire format (camelCase stopword flag)."""
        return {
            'word': self.word,
            'count': self.count,
            'isStopWord': self.is_stop_word
        }


@dataclass
class RankedWords:
    """Word statistics after partitioning and ranking."""
    total_words: int = 0
    top_5_words: List[WordStat] = field(default_factory=list)
    non_stopwords: List[WordStat] = field(default_factory=list)
    stopwords: List[WordStat] = field(default_factory=list)


@dataclass
class ModelAnalysis:
    """Raw analysis returned by the language model, before ranking."""
    idiom: str
    sentiment: str
    words: List[WordStat]


@dataclass
class AnalysisSummary:
    """Complete structured result of one text analysis."""
    idiom: str
    sentiment: str
    ranked: RankedWords

    def __post_init__(self):
        # Known labels are normalized, anything else is passed through untouched
        label = self.sentiment.strip().lower()
        if label in SENTIMENTS:
            self.sentiment = label

    @property
    def total_words(self) -> int:
        return self.ranked.total_words

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for the HTTP response body."""
        return {
            'idiom': self.idiom,
            'sentiment': self.sentiment,
            'total_words': self.ranked.total_words,
            'top_5_words': [w.to_dict() for w in self.ranked.top_5_words],
            'non_stopwords': [w.to_dict() for w in self.ranked.non_stopwords],
            'stopwords': [w.to_dict() for w in self.ranked.stopwords]
        }
