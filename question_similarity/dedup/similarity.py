"""
Lexical similarity scorer.

score = min(round(jaccard_percent + overlap_bonus), 100)

- jaccard_percent: |A & B| / |A | B| * 100 over the distinct tokens
- overlap_bonus: min(|A & B| * 3, 20), rewarding absolute shared-term count

Short compliance questions that share a few specific terms ("encryption",
"penetration") score higher than their ratio alone would give.
"""

from typing import Iterable

MAX_SCORE = 100
OVERLAP_BONUS_PER_TOKEN = 3
OVERLAP_BONUS_CAP = 20


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; scores follow the usual x.5 -> up
    return int(value + 0.5)


def calculate_similarity(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> int:
    """
    Score the lexical overlap of two token sequences.

    Symmetric, deterministic and bounded to [0, 100]. Repeated tokens count
    once.

    Args:
        tokens_a: Tokens of the first text
        tokens_b: Tokens of the second text

    Returns:
        int: Similarity score between 0 and 100
    """
    set_a = set(tokens_a)
    set_b = set(tokens_b)

    if not set_a or not set_b:
        return 0

    intersection = len(set_a & set_b)
    union = len(set_a) + len(set_b) - intersection

    jaccard = (intersection / union) * 100
    overlap_bonus = min(intersection * OVERLAP_BONUS_PER_TOKEN, OVERLAP_BONUS_CAP)

    return min(_round_half_up(jaccard + overlap_bonus), MAX_SCORE)
