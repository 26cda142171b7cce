"""Keyword detection and template matching engine.

Turns raw email text into tokens and n-grams, detects which template
triggers occur, and ranks templates by the share of their triggers found.

Public API:
    - tokenize: Normalize text into significant words
    - extract_ngrams: Contiguous n-token phrases
    - detect_keywords: Detected trigger phrases for a template library
    - calculate_match_score: Relevance of one template
    - find_matching_templates: Ranked matches for an email
    - DetectionResult, MatchEntry: Result models
"""

from .keyword_detector import (
    calculate_match_score,
    detect_keywords,
    find_matching_templates,
    normalize_trigger,
)
from .models import DetectionResult, MatchEntry
from .tokenizer import STOP_WORDS, extract_ngrams, tokenize

__all__ = [
    "tokenize",
    "extract_ngrams",
    "STOP_WORDS",
    "normalize_trigger",
    "detect_keywords",
    "calculate_match_score",
    "find_matching_templates",
    "DetectionResult",
    "MatchEntry",
]
