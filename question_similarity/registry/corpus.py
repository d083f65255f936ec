"""
Corpus collaborator interface.

The engine never reaches into storage itself: every operation receives an
object implementing QuestionCorpus.
"""

from typing import List, Optional, Protocol, runtime_checkable

from question_similarity.models import CandidateQuestion, QuestionItem


@runtime_checkable
class QuestionCorpus(Protocol):
    """Protocol for organization-scoped question storage."""

    def fetch_candidates(
        self,
        organization_id: str,
        exclude_id: Optional[str] = None,
        limit: int = 500,
    ) -> List[CandidateQuestion]:
        """
        Return at most `limit` completed, answered questions of one organization.

        Args:
            organization_id: Tenant scope
            exclude_id: Question id to leave out
            limit: Candidate cap

        Raises:
            CandidateRetrievalError: If no snapshot can be produced
        """
        ...

    def load_questionnaire_questions(self, questionnaire_id: str) -> List[QuestionItem]:
        """
        Return every question of one questionnaire, in questionnaire order.

        Raises:
            QuestionnaireNotFoundError: If the questionnaire does not exist
        """
        ...
