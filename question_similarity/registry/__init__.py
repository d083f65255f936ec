"""
Registry module - question corpus collaborators for the similarity engine.
"""

from .corpus import QuestionCorpus
from .memory import InMemoryQuestionCorpus
from .question_registry import (
    QuestionRegistry,
    init_registry,
    get_registry,
    close_registry,
)

__all__ = [
    "QuestionCorpus",
    "InMemoryQuestionCorpus",
    "QuestionRegistry",
    "init_registry",
    "get_registry",
    "close_registry",
]
