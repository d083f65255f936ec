"""
Question text tokenizer.

Lowercases, strips punctuation to whitespace, splits, and drops short
tokens and stop words. Order and repeats are preserved; set semantics are
applied later by the scorer.
"""

import re
from typing import Any, FrozenSet, List

from question_similarity.errors import InvalidQuestionTextError
from question_similarity.infra.settings import DEFAULT_MIN_TOKEN_LENGTH

# ASCII \w: [A-Za-z0-9_]
_NON_WORD = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")

STOP_WORDS: FrozenSet[str] = frozenset([
    # articles, auxiliaries, modals
    "a", "an", "the", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can",
    # prepositions, conjunctions
    "to", "of", "in", "for", "on", "with", "at", "by", "from", "or", "and",
    "that", "this", "it", "its", "as", "if",
    # pronouns
    "your", "you", "we", "our", "their",
    # question framing
    "what", "which", "who", "how", "when", "where", "why",
    "please", "describe", "explain", "provide", "regarding",
])


def _check_text(text: Any) -> str:
    if not isinstance(text, str):
        raise InvalidQuestionTextError(text)
    return text


def tokenize(text: str, min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> List[str]:
    """
    Normalize and split question text into comparison tokens.

    Args:
        text: Raw question text (may be empty)
        min_token_length: Shortest token to keep

    Returns:
        List[str]: Filtered tokens in input order, duplicates kept

    Raises:
        InvalidQuestionTextError: If text is not a string

    Example:
        >>> tokenize("Do you encrypt data at rest?")
        ['encrypt', 'data', 'rest']
    """
    normalized = _NON_WORD.sub(" ", _check_text(text).lower())

    # re.split keeps leading/trailing empties; the length filter drops them
    return [
        word for word in _WHITESPACE.split(normalized)
        if len(word) >= min_token_length and word not in STOP_WORDS
    ]
