"""
In-memory question corpus.

Applies the same filters as the SQLite registry. Backs the CLI (loaded from
a JSON file) and unit tests.

JSON format:
{
  "questionnaires": [
    {
      "id": "qn-1", "organizationId": "org-1", "title": "Vendor Review",
      "requesterName": "Jane Doe", "company": "Acme", "completedAt": null,
      "deletedAt": null,
      "questions": [
        {"id": "q-1", "questionText": "...", "answerText": "...",
         "status": "completed", "category": "encryption"}
      ]
    }
  ]
}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from question_similarity.errors import QuestionnaireNotFoundError
from question_similarity.models import (
    CandidateQuestion,
    QuestionItem,
    QuestionStatus,
    SourceQuestionnaire,
)

logger = logging.getLogger(__name__)


@dataclass
class StoredQuestionnaire:
    """A questionnaire with its questions, as held in memory."""
    source: SourceQuestionnaire
    organization_id: str
    deleted: bool = False
    questions: List[CandidateQuestion] = field(default_factory=list)


class InMemoryQuestionCorpus:
    """List-backed QuestionCorpus."""

    def __init__(self):
        self._questionnaires: Dict[str, StoredQuestionnaire] = {}

    def add_questionnaire(
        self,
        questionnaire_id: str,
        organization_id: str,
        title: str,
        requester_name: str,
        company: Optional[str] = None,
        completed_at: Optional[str] = None,
        deleted: bool = False,
    ) -> SourceQuestionnaire:
        source = SourceQuestionnaire(
            id=questionnaire_id,
            title=title,
            requester_name=requester_name,
            company=company,
            completed_at=completed_at,
        )
        self._questionnaires[questionnaire_id] = StoredQuestionnaire(
            source=source,
            organization_id=organization_id,
            deleted=deleted,
        )
        return source

    def add_question(
        self,
        questionnaire_id: str,
        question_id: str,
        question_text: str,
        answer_text: Optional[str] = None,
        status: str = QuestionStatus.DRAFT,
        category: Optional[str] = None,
    ) -> CandidateQuestion:
        stored = self._questionnaires.get(questionnaire_id)
        if stored is None:
            raise QuestionnaireNotFoundError(questionnaire_id)

        question = CandidateQuestion(
            id=question_id,
            question_text=question_text,
            answer_text=answer_text,
            status=status,
            category=category,
            questionnaire=stored.source,
        )
        stored.questions.append(question)
        return question

    def fetch_candidates(
        self,
        organization_id: str,
        exclude_id: Optional[str] = None,
        limit: int = 500,
    ) -> List[CandidateQuestion]:
        candidates = []
        for stored in self._questionnaires.values():
            if stored.organization_id != organization_id or stored.deleted:
                continue
            for question in stored.questions:
                if question.status != QuestionStatus.COMPLETED or question.answer_text is None:
                    continue
                if exclude_id is not None and question.id == exclude_id:
                    continue
                candidates.append(question)
                if len(candidates) >= limit:
                    return candidates
        return candidates

    def load_questionnaire_questions(self, questionnaire_id: str) -> List[QuestionItem]:
        stored = self._questionnaires.get(questionnaire_id)
        if stored is None:
            raise QuestionnaireNotFoundError(questionnaire_id)
        return [QuestionItem(id=q.id, question_text=q.question_text) for q in stored.questions]

    def questionnaire_ids(self) -> List[str]:
        return list(self._questionnaires)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryQuestionCorpus":
        """Build a corpus from the JSON structure described in the module docstring."""
        corpus = cls()
        for qn in data.get("questionnaires", []):
            corpus.add_questionnaire(
                questionnaire_id=qn["id"],
                organization_id=qn["organizationId"],
                title=qn.get("title", ""),
                requester_name=qn.get("requesterName", ""),
                company=qn.get("company"),
                completed_at=qn.get("completedAt"),
                deleted=qn.get("deletedAt") is not None,
            )
            for q in qn.get("questions", []):
                corpus.add_question(
                    questionnaire_id=qn["id"],
                    question_id=q["id"],
                    question_text=q["questionText"],
                    answer_text=q.get("answerText"),
                    status=q.get("status", QuestionStatus.DRAFT),
                    category=q.get("category"),
                )
        return corpus

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "InMemoryQuestionCorpus":
        """Load a corpus from a JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        corpus = cls.from_dict(data)
        logger.info(f"[MemoryCorpus] Loaded {len(corpus._questionnaires)} questionnaire(s) from {path}")
        return corpus
