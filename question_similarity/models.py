"""
Data classes shared by the similarity engine, corpus and API layers.

All results are ephemeral: built fresh per call and never persisted by the
engine. to_dict() produces the camelCase shapes consumed by the API layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class QuestionStatus:
    """Question lifecycle values owned by the corpus."""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    UNDER_REVIEW = "under_review"
    COMPLETED = "completed"

    ALL = (DRAFT, IN_PROGRESS, UNDER_REVIEW, COMPLETED)


@dataclass
class SourceQuestionnaire:
    """The questionnaire a candidate question was answered in."""
    id: str
    title: str
    requester_name: str
    company: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def provenance(self) -> str:
        """Human-readable source, e.g. 'Vendor Review 2025 - Acme Corp'."""
        return f"{self.title} - {self.company or self.requester_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "requesterName": self.requester_name,
            "company": self.company,
            "completedAt": self.completed_at,
        }


@dataclass
class CandidateQuestion:
    """A previously answered question from the organization corpus."""
    id: str
    question_text: str
    answer_text: Optional[str]
    status: str
    category: Optional[str]
    questionnaire: SourceQuestionnaire

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "questionText": self.question_text,
            "answerText": self.answer_text,
            "status": self.status,
            "category": self.category,
            "questionnaire": self.questionnaire.to_dict(),
        }


@dataclass
class SimilarQuestionResult:
    """A candidate question scored against one query."""
    candidate: CandidateQuestion
    similarity_score: int

    def to_dict(self) -> Dict[str, Any]:
        result = self.candidate.to_dict()
        result["similarityScore"] = self.similarity_score
        return result


@dataclass
class QuestionItem:
    """Minimal question shape accepted by the duplicate detector."""
    id: str
    question_text: str


@dataclass
class DuplicateMatch:
    """One qualifying partner inside a duplicate cluster."""
    id: str
    question_text: str
    similarity: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "questionText": self.question_text,
            "similarity": self.similarity,
        }


@dataclass
class DuplicateCluster:
    """
    Duplicates of one question within its questionnaire.

    duplicates is sorted by similarity, highest first, and is never empty:
    questions without partners are not emitted at all.
    """
    question_id: str
    duplicates: List[DuplicateMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "questionId": self.question_id,
            "duplicates": [d.to_dict() for d in self.duplicates],
        }


@dataclass
class AnswerSuggestion:
    """Presentation shape of an answered similar question."""
    question: str
    answer: str
    source: str
    similarity: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "answer": self.answer,
            "source": self.source,
            "similarity": self.similarity,
        }
