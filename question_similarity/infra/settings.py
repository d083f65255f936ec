"""
Similarity engine configuration.

Defaults reproduce the documented scoring scenarios. Every value can be
overridden from the environment so tuning does not need a code change.

Environment Variables:
- SIMILARITY_THRESHOLD: Minimum score (exclusive) for similar questions (default: 20)
- DUPLICATE_THRESHOLD: Minimum score (inclusive) for duplicates (default: 70)
- CANDIDATE_CAP: Maximum corpus items scored per retrieval (default: 500)
- MIN_TOKEN_LENGTH: Shortest token kept by the tokenizer (default: 3)
- SIMILAR_QUESTIONS_LIMIT: Default number of similar questions (default: 10)
- ANSWER_SUGGESTIONS_LIMIT: Default number of answer suggestions (default: 5)
"""

import logging
import os
from dataclasses import dataclass

from question_similarity.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 20.0
DEFAULT_DUPLICATE_THRESHOLD = 70.0
DEFAULT_CANDIDATE_CAP = 500
DEFAULT_MIN_TOKEN_LENGTH = 3
DEFAULT_SIMILAR_LIMIT = 10
DEFAULT_SUGGESTION_LIMIT = 5


def _get_env_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    val = os.getenv(key, "").lower()
    if val in ("true", "1", "yes", "on"):
        return True
    elif val in ("false", "0", "no", "off"):
        return False
    return default


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    val = os.getenv(key)
    if val is not None:
        try:
            return int(val)
        except ValueError:
            logger.warning(f"[Settings] Invalid integer for {key}: {val}, using default: {default}")
    return default


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable."""
    val = os.getenv(key)
    if val is not None:
        try:
            return float(val)
        except ValueError:
            logger.warning(f"[Settings] Invalid number for {key}: {val}, using default: {default}")
    return default


@dataclass(frozen=True)
class SimilarityConfig:
    """
    Tunable thresholds and caps.

    Attributes:
        similarity_threshold: Scores at or below this are noise, not similarity
        duplicate_threshold: Scores at or above this mark a duplicate pair
        candidate_cap: Maximum corpus items considered per retrieval
        min_token_length: Tokens shorter than this are dropped
        default_limit: Result limit for find_similar_questions
        suggestion_limit: Result limit for get_answer_suggestions
    """
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    duplicate_threshold: float = DEFAULT_DUPLICATE_THRESHOLD
    candidate_cap: int = DEFAULT_CANDIDATE_CAP
    min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH
    default_limit: int = DEFAULT_SIMILAR_LIMIT
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT

    def __post_init__(self):
        for name in ("similarity_threshold", "duplicate_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigurationError(f"{name} must be within [0, 100], got {value}")

        for name in ("candidate_cap", "min_token_length", "default_limit", "suggestion_limit"):
            value = getattr(self, name)
            if value < 1:
                raise ConfigurationError(f"{name} must be positive, got {value}")

    @classmethod
    def from_env(cls) -> "SimilarityConfig":
        """Build a config from environment variables, falling back to defaults."""
        return cls(
            similarity_threshold=_get_env_float("SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD),
            duplicate_threshold=_get_env_float("DUPLICATE_THRESHOLD", DEFAULT_DUPLICATE_THRESHOLD),
            candidate_cap=_get_env_int("CANDIDATE_CAP", DEFAULT_CANDIDATE_CAP),
            min_token_length=_get_env_int("MIN_TOKEN_LENGTH", DEFAULT_MIN_TOKEN_LENGTH),
            default_limit=_get_env_int("SIMILAR_QUESTIONS_LIMIT", DEFAULT_SIMILAR_LIMIT),
            suggestion_limit=_get_env_int("ANSWER_SUGGESTIONS_LIMIT", DEFAULT_SUGGESTION_LIMIT),
        )


DEFAULT_CONFIG = SimilarityConfig()
