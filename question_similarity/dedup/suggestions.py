"""
Answer suggestions built on top of similar-question retrieval.
"""

import logging
from typing import List, Optional

from question_similarity.infra.settings import DEFAULT_CONFIG, SimilarityConfig
from question_similarity.models import AnswerSuggestion
from question_similarity.registry.corpus import QuestionCorpus

from .retriever import find_similar_questions

logger = logging.getLogger(__name__)


def get_answer_suggestions(
    corpus: QuestionCorpus,
    organization_id: str,
    question_text: str,
    limit: Optional[int] = None,
    config: Optional[SimilarityConfig] = None,
    cancel_event=None,
) -> List[AnswerSuggestion]:
    """
    Suggest reusable answers for question_text.

    The limit is applied to retrieval; unanswered candidates are then
    dropped, so fewer than limit suggestions may come back.

    Args:
        corpus: QuestionCorpus providing fetch_candidates()
        organization_id: Tenant whose corpus is searched
        question_text: The new question
        limit: Maximum suggestions (config.suggestion_limit if None)
        config: Thresholds and caps (defaults if None)
        cancel_event: Optional object with is_set()

    Returns:
        List[AnswerSuggestion]: Highest similarity first
    """
    config = config or DEFAULT_CONFIG
    limit = config.suggestion_limit if limit is None else limit

    similar = find_similar_questions(
        corpus,
        organization_id,
        question_text,
        limit=limit,
        config=config,
        cancel_event=cancel_event,
    )

    # Answered only, regardless of what the corpus filter let through
    suggestions = [
        AnswerSuggestion(
            question=result.candidate.question_text,
            answer=result.candidate.answer_text,
            source=result.candidate.questionnaire.provenance,
            similarity=result.similarity_score,
        )
        for result in similar
        if result.candidate.answer_text
    ]

    if len(suggestions) < len(similar):
        logger.warning(
            f"[Suggestions] Dropped {len(similar) - len(suggestions)} unanswered candidate(s) "
            f"for org={organization_id}"
        )
    return suggestions
