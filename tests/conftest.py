"""
Pytest configuration and shared fixtures.
"""

import importlib
import logging
import os

import pytest

from question_similarity.models import QuestionStatus
from question_similarity.registry import InMemoryQuestionCorpus


@pytest.fixture(autouse=True, scope="function")
def reset_auth_module():
    """
    Reset auth module state after each test.

    Tests run with API_AUTH_ENABLED=false by default, unless the test
    explicitly sets it otherwise.
    """
    original_auth_enabled = os.environ.get("API_AUTH_ENABLED")
    original_api_key = os.environ.get("API_KEY")

    os.environ["API_AUTH_ENABLED"] = "false"

    yield

    if original_auth_enabled is not None:
        os.environ["API_AUTH_ENABLED"] = original_auth_enabled
    elif "API_AUTH_ENABLED" in os.environ:
        del os.environ["API_AUTH_ENABLED"]

    if original_api_key is not None:
        os.environ["API_KEY"] = original_api_key
    elif "API_KEY" in os.environ:
        del os.environ["API_KEY"]

    # Reload so the app is rebuilt without auth for the next test
    import question_similarity.api.dependencies.auth as auth_module
    import question_similarity.api.main as main_module
    importlib.reload(auth_module)
    importlib.reload(main_module)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so handlers and propagation don't leak between tests."""
    yield
    logger = logging.getLogger("question_similarity")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def memory_corpus():
    """
    Two organizations, three questionnaires.

    org-1 candidates in retrieval order: q-1, q-2, q-4, q-5
    (q-3 is not completed, q-6 belongs to org-2).
    """
    corpus = InMemoryQuestionCorpus()

    corpus.add_questionnaire(
        "qn-1", "org-1", "SOC 2 Vendor Review", "Jane Doe", company="Acme Corp",
        completed_at="2026-03-01T10:00:00",
    )
    corpus.add_question(
        "qn-1", "q-1", "Do you encrypt data at rest?",
        answer_text="Yes, AES-256 for all storage.", status=QuestionStatus.COMPLETED,
        category="encryption",
    )
    corpus.add_question(
        "qn-1", "q-2", "Do you have a written information security policy?",
        answer_text="Yes, reviewed annually by the CISO.", status=QuestionStatus.COMPLETED,
        category="governance",
    )
    corpus.add_question(
        "qn-1", "q-3", "Do you perform annual penetration testing?",
        status=QuestionStatus.IN_PROGRESS, category="testing",
    )

    corpus.add_questionnaire(
        "qn-2", "org-1", "Annual Security Questionnaire", "John Smith",
        completed_at="2026-05-12T09:30:00",
    )
    corpus.add_question(
        "qn-2", "q-4", "Do you maintain a written information security policy?",
        answer_text="Yes, see the attached policy.", status=QuestionStatus.COMPLETED,
        category="governance",
    )
    corpus.add_question(
        "qn-2", "q-5", "Is data encrypted while stored?",
        answer_text="Yes.", status=QuestionStatus.COMPLETED, category="encryption",
    )

    corpus.add_questionnaire("qn-3", "org-2", "Other Tenant Review", "Eve Adams")
    corpus.add_question(
        "qn-3", "q-6", "Do you encrypt data at rest?",
        answer_text="No.", status=QuestionStatus.COMPLETED,
    )

    return corpus
