"""
SimilarityEngine - binds one corpus and one config.

Stateless apart from those two references; safe to share between
concurrent callers.
"""

from typing import List, Optional

from question_similarity.infra.settings import DEFAULT_CONFIG, SimilarityConfig
from question_similarity.models import (
    AnswerSuggestion,
    DuplicateCluster,
    SimilarQuestionResult,
)
from question_similarity.registry.corpus import QuestionCorpus

from .duplicates import find_duplicates_in_questionnaire
from .retriever import find_similar_questions
from .suggestions import get_answer_suggestions


class SimilarityEngine:
    """Facade over the retrieval, duplicate and suggestion operations."""

    def __init__(self, corpus: QuestionCorpus, config: Optional[SimilarityConfig] = None):
        self.corpus = corpus
        self.config = config or DEFAULT_CONFIG

    def find_similar_questions(
        self,
        organization_id: str,
        question_text: str,
        exclude_question_id: Optional[str] = None,
        limit: Optional[int] = None,
        cancel_event=None,
    ) -> List[SimilarQuestionResult]:
        return find_similar_questions(
            self.corpus,
            organization_id,
            question_text,
            exclude_question_id=exclude_question_id,
            limit=limit,
            config=self.config,
            cancel_event=cancel_event,
        )

    def find_duplicates_in_questionnaire(
        self,
        questionnaire_id: str,
        cancel_event=None,
    ) -> List[DuplicateCluster]:
        return find_duplicates_in_questionnaire(
            self.corpus,
            questionnaire_id,
            config=self.config,
            cancel_event=cancel_event,
        )

    def get_answer_suggestions(
        self,
        organization_id: str,
        question_text: str,
        limit: Optional[int] = None,
        cancel_event=None,
    ) -> List[AnswerSuggestion]:
        return get_answer_suggestions(
            self.corpus,
            organization_id,
            question_text,
            limit=limit,
            config=self.config,
            cancel_event=cancel_event,
        )
