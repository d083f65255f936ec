"""
API schemas package.
"""

from .questions import (
    SourceQuestionnaireSchema,
    SimilarQuestionResponse,
    DuplicateMatchSchema,
    DuplicateClusterResponse,
    AnswerSuggestionResponse,
)

__all__ = [
    "SourceQuestionnaireSchema",
    "SimilarQuestionResponse",
    "DuplicateMatchSchema",
    "DuplicateClusterResponse",
    "AnswerSuggestionResponse",
]
