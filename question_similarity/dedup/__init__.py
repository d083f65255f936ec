"""
Deduplication module - lexical question similarity.

Pipeline:
1. tokenize() once per text
2. calculate_similarity() once per (query, candidate) pair
3. find_similar_questions() / find_duplicates() apply thresholds and sort
4. get_answer_suggestions() shapes answered matches for presentation
"""

from .tokenizer import STOP_WORDS, tokenize
from .similarity import calculate_similarity
from .retriever import find_similar_questions
from .duplicates import find_duplicates, find_duplicates_in_questionnaire
from .suggestions import get_answer_suggestions
from .engine import SimilarityEngine

__all__ = [
    "STOP_WORDS",
    "tokenize",
    "calculate_similarity",
    "find_similar_questions",
    "find_duplicates",
    "find_duplicates_in_questionnaire",
    "get_answer_suggestions",
    "SimilarityEngine",
]
