"""
Tests for the command line interface.
"""

import json
import logging

import pytest

from question_similarity.cli import EXIT_ENGINE_ERROR, EXIT_SUCCESS, EXIT_USAGE, main
from question_similarity.infra.logging_config import LOGGER_NAME

CORPUS_DATA = {
    "questionnaires": [
        {
            "id": "qn-1",
            "organizationId": "org-1",
            "title": "Vendor Review",
            "requesterName": "Jane Doe",
            "company": "Acme",
            "questions": [
                {"id": "q-1", "questionText": "Do you have a written information security policy?",
                 "answerText": "Yes.", "status": "completed"},
                {"id": "q-2", "questionText": "Do you maintain a written information security policy?",
                 "answerText": "Yes, reviewed yearly.", "status": "completed"},
                {"id": "q-3", "questionText": "Do you encrypt data at rest?"},
            ],
        },
        {
            "id": "qn-2",
            "organizationId": "org-1",
            "title": "Empty Review",
            "requesterName": "John Smith",
            "questions": [],
        },
    ]
}


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps(CORPUS_DATA), encoding="utf-8")
    return str(path)


class TestDuplicatesCommand:
    """Tests for the duplicates command."""

    def test_all_questionnaires(self, corpus_file, capsys):
        assert main(["duplicates", corpus_file]) == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert [o["questionnaireId"] for o in output] == ["qn-1", "qn-2"]
        assert [c["questionId"] for c in output[0]["clusters"]] == ["q-1", "q-2"]
        assert output[1]["clusters"] == []

    def test_single_questionnaire(self, corpus_file, capsys):
        assert main(["duplicates", corpus_file, "--questionnaire", "qn-1"]) == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert len(output) == 1
        assert output[0]["clusters"][0]["duplicates"][0]["similarity"] == 92

    def test_unknown_questionnaire(self, corpus_file, capsys):
        assert main(["duplicates", corpus_file, "--questionnaire", "missing"]) == EXIT_ENGINE_ERROR

        assert "Questionnaire not found" in capsys.readouterr().err


class TestSimilarCommand:
    """Tests for the similar command."""

    def test_similar(self, corpus_file, capsys):
        args = ["similar", corpus_file, "--org", "org-1",
                "--text", "Do you maintain a written information security policy?"]
        assert main(args) == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert [(o["id"], o["similarityScore"]) for o in output] == [("q-2", 100), ("q-1", 92)]

    def test_exclude(self, corpus_file, capsys):
        args = ["similar", corpus_file, "--org", "org-1", "--exclude", "q-2",
                "--text", "Do you maintain a written information security policy?"]
        assert main(args) == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert [o["id"] for o in output] == ["q-1"]


class TestSuggestCommand:
    """Tests for the suggest command."""

    def test_suggest(self, corpus_file, capsys):
        args = ["suggest", corpus_file, "--org", "org-1", "--limit", "1",
                "--text", "Do you have a written information security policy?"]
        assert main(args) == EXIT_SUCCESS

        output = json.loads(capsys.readouterr().out)
        assert output == [{
            "question": "Do you have a written information security policy?",
            "answer": "Yes.",
            "source": "Vendor Review - Acme",
            "similarity": 100,
        }]


class TestErrors:
    """Tests for usage and input errors."""

    def test_no_command(self, capsys):
        assert main([]) == EXIT_USAGE

    def test_missing_file(self, tmp_path, capsys):
        assert main(["duplicates", str(tmp_path / "nope.json")]) == EXIT_USAGE

        assert "could not read corpus" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        assert main(["duplicates", str(path)]) == EXIT_USAGE


class TestLogging:
    """Tests for --log-level and --log-dir."""

    def test_log_dir_writes_daily_file(self, corpus_file, tmp_path, capsys):
        log_dir = tmp_path / "logs"

        exit_code = main([
            "--log-level", "INFO", "--log-dir", str(log_dir),
            "duplicates", corpus_file,
        ])

        assert exit_code == EXIT_SUCCESS
        log_file = next(log_dir.glob("question_similarity_*.log"))
        assert "Logging started - level: INFO" in log_file.read_text(encoding="utf-8")
        json.loads(capsys.readouterr().out)

    def test_default_is_console_only(self, corpus_file, capsys):
        assert main(["duplicates", corpus_file]) == EXIT_SUCCESS

        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert [type(h) for h in handlers] == [logging.StreamHandler]
