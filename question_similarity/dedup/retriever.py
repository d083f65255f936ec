"""
Candidate retrieval - rank previously answered questions against a query.

Brute-force scan over a bounded corpus snapshot: the corpus returns at most
candidate_cap completed, answered questions, and every one of them is
scored. Cost is O(candidate_cap) per query regardless of corpus size.
"""

import logging
from typing import List, Optional

from question_similarity.errors import CandidateRetrievalError, ScanCancelledError
from question_similarity.infra.settings import DEFAULT_CONFIG, SimilarityConfig
from question_similarity.models import CandidateQuestion, SimilarQuestionResult
from question_similarity.registry.corpus import QuestionCorpus

from .similarity import calculate_similarity
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


def is_cancelled(cancel_event) -> bool:
    """True if an optional Event-like cancellation signal is set."""
    return cancel_event is not None and cancel_event.is_set()


def rank_results(
    results: List[SimilarQuestionResult],
    threshold: float,
    limit: int,
) -> List[SimilarQuestionResult]:
    """
    Drop noise-level scores, sort highest first, truncate.

    list.sort is stable, so equal scores keep retrieval order.
    """
    kept = [r for r in results if r.similarity_score > threshold]
    kept.sort(key=lambda r: r.similarity_score, reverse=True)
    return kept[:max(limit, 0)]


def fetch_candidate_snapshot(
    corpus: QuestionCorpus,
    organization_id: str,
    exclude_question_id: Optional[str],
    cap: int,
) -> List[CandidateQuestion]:
    """
    Fetch the candidate snapshot, surfacing any corpus failure.

    Raises:
        CandidateRetrievalError: If the corpus cannot produce a snapshot
    """
    try:
        candidates = corpus.fetch_candidates(
            organization_id,
            exclude_id=exclude_question_id,
            limit=cap,
        )
    except CandidateRetrievalError:
        raise
    except Exception as e:
        logger.error(f"[Retriever] Candidate fetch failed for org={organization_id}: {e}")
        raise CandidateRetrievalError(
            f"Could not load candidate questions: {e}",
            organization_id=organization_id,
        ) from e

    # The cap bounds scoring cost even if the corpus ignores the limit
    return list(candidates)[:cap]


def find_similar_questions(
    corpus: QuestionCorpus,
    organization_id: str,
    question_text: str,
    exclude_question_id: Optional[str] = None,
    limit: Optional[int] = None,
    config: Optional[SimilarityConfig] = None,
    cancel_event=None,
) -> List[SimilarQuestionResult]:
    """
    Find previously answered questions similar to question_text.

    Args:
        corpus: QuestionCorpus providing fetch_candidates()
        organization_id: Tenant whose corpus is searched
        question_text: The new question
        exclude_question_id: Question id to skip (usually the query itself)
        limit: Maximum results (config.default_limit if None)
        config: Thresholds and caps (defaults if None)
        cancel_event: Optional object with is_set(); checked per candidate

    Returns:
        List[SimilarQuestionResult]: Highest score first, possibly empty

    Raises:
        InvalidQuestionTextError: If question_text is not a string
        CandidateRetrievalError: If the corpus fails
        ScanCancelledError: If cancel_event is set during scoring
    """
    config = config or DEFAULT_CONFIG
    limit = config.default_limit if limit is None else limit

    query_tokens = tokenize(question_text, config.min_token_length)
    if not query_tokens:
        logger.debug("[Retriever] Query has no comparable tokens, skipping corpus")
        return []

    candidates = fetch_candidate_snapshot(
        corpus, organization_id, exclude_question_id, config.candidate_cap
    )

    scored: List[SimilarQuestionResult] = []
    for candidate in candidates:
        if is_cancelled(cancel_event):
            logger.info(f"[Retriever] Cancelled after {len(scored)}/{len(candidates)} candidates")
            raise ScanCancelledError(
                rank_results(scored, config.similarity_threshold, limit)
            )

        candidate_tokens = tokenize(candidate.question_text, config.min_token_length)
        scored.append(SimilarQuestionResult(
            candidate=candidate,
            similarity_score=calculate_similarity(query_tokens, candidate_tokens),
        ))

    results = rank_results(scored, config.similarity_threshold, limit)

    logger.debug(
        f"[Retriever] org={organization_id} tokens={len(query_tokens)} "
        f"candidates={len(candidates)} matches={len(results)}"
    )
    return results
