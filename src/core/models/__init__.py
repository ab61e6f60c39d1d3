#!/usr/bin/env python3
"""
Core data models for text analysis.

Contains all data structures used throughout the application.
"""

from .analysis import WordStat, RankedWords, ModelAnalysis, AnalysisSummary, SENTIMENTS
from .last_analysis import LastAnalysis

__all__ = ['WordStat', 'RankedWords', 'ModelAnalysis', 'AnalysisSummary', 'SENTIMENTS', 'LastAnalysis']
