"""
Similarity engine exceptions.

Well-formed input never raises: empty text, empty corpora and empty
questionnaires all produce empty results. The errors below cover the
cases that must stay distinguishable from "no matches".
"""

from typing import Any, List, Optional


class SimilarityError(Exception):
    """Base exception for all similarity engine errors."""
    pass


class ConfigurationError(SimilarityError):
    """Raised when a SimilarityConfig value is out of range."""
    pass


class InvalidQuestionTextError(SimilarityError, TypeError):
    """Raised when question text is not a string."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Question text must be a string, got {type(value).__name__}"
        )


class CandidateRetrievalError(SimilarityError):
    """
    Raised when the corpus cannot produce a candidate snapshot.

    Storage outages and unknown tenants end up here. Callers must not
    treat this as an empty result: a compliance reviewer would read an
    outage as "no duplicates".
    """

    def __init__(self, message: str, organization_id: Optional[str] = None):
        self.organization_id = organization_id
        super().__init__(message)


class QuestionnaireNotFoundError(SimilarityError):
    """Raised when a requested questionnaire does not exist."""

    def __init__(self, questionnaire_id: str):
        self.questionnaire_id = questionnaire_id
        super().__init__(f"Questionnaire not found: {questionnaire_id}")


class ScanCancelledError(SimilarityError):
    """
    Raised when a cancellation signal stops a scoring loop.

    partial_results holds what was computed before the signal was seen,
    already filtered and sorted the same way a full result would be.
    """

    def __init__(self, partial_results: Optional[List[Any]] = None):
        self.partial_results = partial_results or []
        super().__init__(
            f"Scan cancelled after {len(self.partial_results)} result(s)"
        )
