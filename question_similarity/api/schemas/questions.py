"""
Question similarity schemas.

Field names serialize in camelCase to match the engine's to_dict() output.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing snake_case fields as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SourceQuestionnaireSchema(CamelModel):
    """Questionnaire a matched question was answered in."""

    id: str
    title: str
    requester_name: str
    company: Optional[str] = None
    completed_at: Optional[str] = None


class SimilarQuestionResponse(CamelModel):
    """A previously answered question similar to the query."""

    id: str
    question_text: str
    answer_text: Optional[str] = None
    status: str
    category: Optional[str] = None
    questionnaire: SourceQuestionnaireSchema
    similarity_score: int = Field(..., ge=0, le=100, description="Lexical similarity (0-100)")


class DuplicateMatchSchema(CamelModel):
    """One duplicate partner of a question."""

    id: str
    question_text: str
    similarity: int = Field(..., ge=0, le=100)


class DuplicateClusterResponse(CamelModel):
    """Duplicates of one question inside its questionnaire."""

    question_id: str
    duplicates: List[DuplicateMatchSchema] = Field(
        ..., description="Partners sorted by similarity, highest first"
    )


class AnswerSuggestionResponse(BaseModel):
    """Reusable answer from a similar, already answered question."""

    question: str
    answer: str
    source: str = Field(..., description="'<questionnaire title> - <company or requester>'")
    similarity: int = Field(..., ge=0, le=100)
