"""
Duplicate detection within one questionnaire.

All-pairs comparison: O(n^2) scores for n questions. n is bounded by a
single questionnaire (tens to a few hundred questions); callers with larger
containers should split or reject them before calling in.

The duplicate threshold is inclusive and stricter than the similarity
threshold: a duplicate tells the reviewer "answer this once".
"""

import logging
from typing import Dict, List, Optional, Sequence

from question_similarity.errors import (
    CandidateRetrievalError,
    QuestionnaireNotFoundError,
    ScanCancelledError,
)
from question_similarity.infra.settings import DEFAULT_CONFIG, SimilarityConfig
from question_similarity.models import DuplicateCluster, DuplicateMatch, QuestionItem
from question_similarity.registry.corpus import QuestionCorpus

from .retriever import is_cancelled
from .similarity import calculate_similarity
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def _build_clusters(
    questions: Sequence[QuestionItem],
    matches: Dict[int, List[DuplicateMatch]],
) -> List[DuplicateCluster]:
    """Emit clusters in question order, partners highest score first."""
    clusters = []
    for index, question in enumerate(questions):
        partners = matches.get(index)
        if not partners:
            continue
        clusters.append(DuplicateCluster(
            question_id=question.id,
            duplicates=sorted(partners, key=lambda m: m.similarity, reverse=True),
        ))
    return clusters


def find_duplicates(
    questions: Sequence[QuestionItem],
    config: Optional[SimilarityConfig] = None,
    cancel_event=None,
) -> List[DuplicateCluster]:
    """
    Cluster near-duplicate questions of one questionnaire.

    Each question is tokenized once. The score is symmetric, so every
    unordered pair is scored once and recorded for both sides.

    Args:
        questions: Every question of one container
        config: Thresholds (defaults if None)
        cancel_event: Optional object with is_set(); checked per question

    Returns:
        List[DuplicateCluster]: One entry per question with at least one
        duplicate, in input order. Empty if no pair qualifies.

    Raises:
        InvalidQuestionTextError: If any question text is not a string
        ScanCancelledError: If cancel_event is set; carries clusters built
            from the pairs scored so far
    """
    config = config or DEFAULT_CONFIG
    threshold = config.duplicate_threshold

    token_lists = [tokenize(q.question_text, config.min_token_length) for q in questions]
    matches: Dict[int, List[DuplicateMatch]] = {}

    for i in range(len(questions)):
        if is_cancelled(cancel_event):
            logger.info(f"[Duplicates] Cancelled after {i}/{len(questions)} questions")
            raise ScanCancelledError(_build_clusters(questions, matches))

        for j in range(i + 1, len(questions)):
            similarity = calculate_similarity(token_lists[i], token_lists[j])
            if similarity < threshold:
                continue

            matches.setdefault(i, []).append(DuplicateMatch(
                id=questions[j].id,
                question_text=questions[j].question_text,
                similarity=similarity,
            ))
            matches.setdefault(j, []).append(DuplicateMatch(
                id=questions[i].id,
                question_text=questions[i].question_text,
                similarity=similarity,
            ))

    clusters = _build_clusters(questions, matches)
    logger.debug(f"[Duplicates] {len(questions)} questions, {len(clusters)} with duplicates")
    return clusters


def find_duplicates_in_questionnaire(
    corpus: QuestionCorpus,
    questionnaire_id: str,
    config: Optional[SimilarityConfig] = None,
    cancel_event=None,
) -> List[DuplicateCluster]:
    """
    Load a questionnaire through the corpus and cluster its duplicates.

    Raises:
        QuestionnaireNotFoundError: If the corpus does not know the questionnaire
        CandidateRetrievalError: If the corpus fails to load it
    """
    try:
        questions = corpus.load_questionnaire_questions(questionnaire_id)
    except (QuestionnaireNotFoundError, CandidateRetrievalError):
        raise
    except Exception as e:
        logger.error(f"[Duplicates] Loading questionnaire {questionnaire_id} failed: {e}")
        raise CandidateRetrievalError(f"Could not load questionnaire {questionnaire_id}: {e}") from e

    logger.info(f"[Duplicates] Checking questionnaire {questionnaire_id} ({len(questions)} questions)")
    return find_duplicates(questions, config=config, cancel_event=cancel_event)
