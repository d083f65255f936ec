"""
Tests for InMemoryQuestionCorpus.
"""

import json

import pytest

from question_similarity.errors import QuestionnaireNotFoundError
from question_similarity.models import QuestionStatus
from question_similarity.registry import InMemoryQuestionCorpus, QuestionCorpus

CORPUS_DATA = {
    "questionnaires": [
        {
            "id": "qn-1",
            "organizationId": "org-1",
            "title": "Vendor Review",
            "requesterName": "Jane Doe",
            "company": "Acme",
            "completedAt": "2026-02-01T00:00:00",
            "questions": [
                {"id": "q-1", "questionText": "Do you encrypt data at rest?",
                 "answerText": "Yes.", "status": "completed", "category": "encryption"},
                {"id": "q-2", "questionText": "Do you have an incident response plan?"},
            ],
        },
        {
            "id": "qn-2",
            "organizationId": "org-1",
            "title": "Old Review",
            "requesterName": "John Smith",
            "deletedAt": "2026-01-01T00:00:00",
            "questions": [
                {"id": "q-3", "questionText": "Do you encrypt backups?",
                 "answerText": "Yes.", "status": "completed"},
            ],
        },
    ]
}


class TestFetchCandidates:
    """Tests for fetch_candidates filtering."""

    def test_only_completed_and_answered(self, memory_corpus):
        ids = [c.id for c in memory_corpus.fetch_candidates("org-1")]

        assert ids == ["q-1", "q-2", "q-4", "q-5"]

    def test_other_organization(self, memory_corpus):
        assert [c.id for c in memory_corpus.fetch_candidates("org-2")] == ["q-6"]

    def test_unknown_organization(self, memory_corpus):
        assert memory_corpus.fetch_candidates("org-unknown") == []

    def test_exclude_id(self, memory_corpus):
        ids = [c.id for c in memory_corpus.fetch_candidates("org-1", exclude_id="q-2")]

        assert ids == ["q-1", "q-4", "q-5"]

    def test_limit(self, memory_corpus):
        ids = [c.id for c in memory_corpus.fetch_candidates("org-1", limit=2)]

        assert ids == ["q-1", "q-2"]

    def test_completed_without_answer_skipped(self):
        corpus = InMemoryQuestionCorpus()
        corpus.add_questionnaire("qn", "org", "Review", "Jo")
        corpus.add_question("qn", "q", "Do you encrypt data?", status=QuestionStatus.COMPLETED)

        assert corpus.fetch_candidates("org") == []

    def test_candidate_carries_source(self, memory_corpus):
        candidate = memory_corpus.fetch_candidates("org-1")[0]

        assert candidate.questionnaire.title == "SOC 2 Vendor Review"
        assert candidate.questionnaire.company == "Acme Corp"


class TestLoadQuestionnaireQuestions:
    """Tests for load_questionnaire_questions."""

    def test_all_questions_in_order(self, memory_corpus):
        items = memory_corpus.load_questionnaire_questions("qn-1")

        assert [i.id for i in items] == ["q-1", "q-2", "q-3"]

    def test_unknown_questionnaire(self, memory_corpus):
        with pytest.raises(QuestionnaireNotFoundError) as exc_info:
            memory_corpus.load_questionnaire_questions("missing")

        assert exc_info.value.questionnaire_id == "missing"

    def test_add_question_to_unknown_questionnaire(self):
        corpus = InMemoryQuestionCorpus()

        with pytest.raises(QuestionnaireNotFoundError):
            corpus.add_question("missing", "q-1", "Do you encrypt data?")


class TestFromDict:
    """Tests for loading the JSON corpus format."""

    def test_from_dict(self):
        corpus = InMemoryQuestionCorpus.from_dict(CORPUS_DATA)

        assert corpus.questionnaire_ids() == ["qn-1", "qn-2"]
        assert [c.id for c in corpus.fetch_candidates("org-1")] == ["q-1"]

    def test_missing_status_defaults_to_draft(self):
        corpus = InMemoryQuestionCorpus.from_dict(CORPUS_DATA)

        assert [i.id for i in corpus.load_questionnaire_questions("qn-1")] == ["q-1", "q-2"]
        assert "q-2" not in [c.id for c in corpus.fetch_candidates("org-1")]

    def test_deleted_questionnaire_excluded(self):
        corpus = InMemoryQuestionCorpus.from_dict(CORPUS_DATA)

        assert "q-3" not in [c.id for c in corpus.fetch_candidates("org-1")]

    def test_load_json(self, tmp_path):
        path = tmp_path / "corpus.json"
        path.write_text(json.dumps(CORPUS_DATA), encoding="utf-8")

        corpus = InMemoryQuestionCorpus.load_json(path)

        assert corpus.fetch_candidates("org-1")[0].question_text == "Do you encrypt data at rest?"

    def test_empty_document(self):
        assert InMemoryQuestionCorpus.from_dict({}).questionnaire_ids() == []


def test_satisfies_corpus_protocol(memory_corpus):
    assert isinstance(memory_corpus, QuestionCorpus)
