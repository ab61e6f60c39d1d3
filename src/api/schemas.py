#!/usr/bin/env python3
"""
Request and response models for the HTTP API.
"""

from typing import List, Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeTextRequest(BaseModel):
    text: Optional[str] = Field(None, description="Text to analyze")


class WordStatModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str = Field(..., description="Word exactly as it appears in the text")
    count: int = Field(..., ge=1, description="Occurrences of the word")
    is_stop_word: bool = Field(..., alias="isStopWord", description="Whether the word is a stopword")


class AnalysisResponse(BaseModel):
    idiom: str = Field(..., description="Detected language")
    sentiment: str = Field(..., description="positive, negative or neutral")
    total_words: int = Field(..., ge=0, description="Sum of all word counts, stopwords included")
    top_5_words: List[WordStatModel] = Field(..., description="Most frequent content words")
    non_stopwords: List[WordStatModel] = Field(..., description="Content words by rank")
    stopwords: List[WordStatModel] = Field(..., description="Stopwords by rank")


class SearchTermResponse(BaseModel):
    term: str
    found: bool


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    store: Dict[str, Any]
    llm_configured: bool
