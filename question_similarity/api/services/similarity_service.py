"""
Similarity service - runs engine calls off the event loop.

Scoring is CPU-bound and the registry read is blocking, so each call runs
in the default executor. If the request task is cancelled, the engine's
cancel event is set and the scan stops at its next check.
"""

import asyncio
import logging
import threading
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from question_similarity.dedup import SimilarityEngine

logger = logging.getLogger(__name__)


async def _run_cancellable(func: Callable[..., List[Any]], **kwargs) -> List[Any]:
    cancel_event = threading.Event()
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, partial(func, cancel_event=cancel_event, **kwargs))
    except asyncio.CancelledError:
        logger.info("[SimilarityService] Request cancelled, stopping scan")
        cancel_event.set()
        raise


async def find_similar_questions(
    engine: SimilarityEngine,
    organization_id: str,
    question_text: str,
    exclude_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    results = await _run_cancellable(
        engine.find_similar_questions,
        organization_id=organization_id,
        question_text=question_text,
        exclude_question_id=exclude_id,
        limit=limit,
    )
    return [r.to_dict() for r in results]


async def find_duplicates(engine: SimilarityEngine, questionnaire_id: str) -> List[Dict[str, Any]]:
    clusters = await _run_cancellable(
        engine.find_duplicates_in_questionnaire,
        questionnaire_id=questionnaire_id,
    )
    return [c.to_dict() for c in clusters]


async def get_answer_suggestions(
    engine: SimilarityEngine,
    organization_id: str,
    question_text: str,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    suggestions = await _run_cancellable(
        engine.get_answer_suggestions,
        organization_id=organization_id,
        question_text=question_text,
        limit=limit,
    )
    return [s.to_dict() for s in suggestions]
