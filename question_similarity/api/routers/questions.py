"""
Questionnaire similarity router.

Endpoints:
- GET /questionnaires/similar-questions - Rank answered questions against a query
- GET /questionnaires/answer-suggestions - Reusable answers for a query
- GET /questionnaires/{questionnaire_id}/duplicates - Duplicate clusters in one questionnaire
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from question_similarity.dedup import SimilarityEngine
from question_similarity.errors import CandidateRetrievalError, QuestionnaireNotFoundError

from ..dependencies.engine import get_engine
from ..schemas.questions import (
    AnswerSuggestionResponse,
    DuplicateClusterResponse,
    SimilarQuestionResponse,
)
from ..services import similarity_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _retrieval_unavailable(e: CandidateRetrievalError) -> HTTPException:
    logger.error(f"[QuestionsRouter] Candidate retrieval failed: {e}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Candidate retrieval failed: {e}",
    )


@router.get("/similar-questions", response_model=List[SimilarQuestionResponse])
async def find_similar_questions(
    organization_id: str = Query(..., alias="organizationId"),
    question_text: str = Query(..., alias="questionText"),
    exclude_id: Optional[str] = Query(default=None, alias="excludeId"),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    engine: SimilarityEngine = Depends(get_engine),
):
    """
    Find previously answered questions similar to questionText.

    Only completed, answered questions of the organization are considered.
    Results are sorted by similarityScore, highest first.
    """
    try:
        return await similarity_service.find_similar_questions(
            engine,
            organization_id=organization_id,
            question_text=question_text,
            exclude_id=exclude_id,
            limit=limit,
        )
    except CandidateRetrievalError as e:
        raise _retrieval_unavailable(e)


@router.get("/answer-suggestions", response_model=List[AnswerSuggestionResponse])
async def get_answer_suggestions(
    organization_id: str = Query(..., alias="organizationId"),
    question_text: str = Query(..., alias="questionText"),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    engine: SimilarityEngine = Depends(get_engine),
):
    """Suggest answers reused from similar questions, with their source."""
    try:
        return await similarity_service.get_answer_suggestions(
            engine,
            organization_id=organization_id,
            question_text=question_text,
            limit=limit,
        )
    except CandidateRetrievalError as e:
        raise _retrieval_unavailable(e)


@router.get("/{questionnaire_id}/duplicates", response_model=List[DuplicateClusterResponse])
async def find_duplicates(
    questionnaire_id: str,
    engine: SimilarityEngine = Depends(get_engine),
):
    """
    Find near-duplicate questions within one questionnaire.

    Only questions with at least one duplicate are listed.
    """
    try:
        return await similarity_service.find_duplicates(engine, questionnaire_id)
    except QuestionnaireNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except CandidateRetrievalError as e:
        raise _retrieval_unavailable(e)
