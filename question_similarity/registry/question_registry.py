"""
Question Registry - SQLite persistent storage for questionnaires.

Serves as the corpus collaborator for the similarity engine:
- fetch_candidates: completed, answered questions of one organization
- load_questionnaire_questions: every question of one questionnaire

Design principles:
- Minimal schema, versioned through a meta table
- Configurable DB path via environment variable
- No external dependencies (stdlib sqlite3 only)
"""

import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from question_similarity.errors import CandidateRetrievalError, QuestionnaireNotFoundError
from question_similarity.models import (
    CandidateQuestion,
    QuestionItem,
    QuestionStatus,
    SourceQuestionnaire,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================

DEFAULT_DB_PATH = "./data/question_registry.db"
SCHEMA_VERSION = "1.0.0"
DEFAULT_CANDIDATE_LIMIT = 500


# =============================================================================
# Question Registry Class
# =============================================================================

class QuestionRegistry:
    """
    Persistent questionnaire registry using SQLite.

    Provides:
    - Schema versioning for future migrations
    - Writes for questionnaires and questions
    - Read-only candidate snapshots for the similarity engine
    """

    def __init__(self, db_path: Optional[str] = None, check_same_thread: bool = True):
        """
        Initialize the question registry.

        Args:
            db_path: Path to SQLite database file. If None, uses env var or default.
            check_same_thread: Passed to sqlite3.connect; False for use from
                a threaded server.
        """
        self.db_path = db_path or os.getenv("QUESTION_REGISTRY_DB_PATH", DEFAULT_DB_PATH)
        self._check_same_thread = check_same_thread
        self._conn: Optional[sqlite3.Connection] = None

        logger.info(f"[QuestionRegistry] Initializing: {self.db_path}")

        self._ensure_directory()
        self._init_db()

    def _ensure_directory(self) -> None:
        """Create parent directory if it doesn't exist."""
        db_dir = Path(self.db_path).parent
        if not db_dir.exists():
            db_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"[QuestionRegistry] Created directory: {db_dir}")

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=self._check_same_thread)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_db(self) -> None:
        """Initialize database schema with version tracking."""
        conn = self._get_connection()
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS meta (
                key TEXT PRIMARY KEY,
                value TEXT
            )
        """)

        cursor.execute("SELECT value FROM meta WHERE key = 'schema_version'")
        row = cursor.fetchone()
        current_version = row["value"] if row else None

        if current_version is None:
            self._create_schema(cursor)
            cursor.execute(
                "INSERT INTO meta (key, value) VALUES ('schema_version', ?)",
                (SCHEMA_VERSION,)
            )
            logger.info(f"[QuestionRegistry] Schema created (v{SCHEMA_VERSION})")
        elif current_version != SCHEMA_VERSION:
            logger.warning(
                f"[QuestionRegistry] Unknown schema version {current_version}, "
                f"expected {SCHEMA_VERSION}"
            )
        else:
            logger.debug(f"[QuestionRegistry] Schema version OK: v{current_version}")

        conn.commit()

    def _create_schema(self, cursor: sqlite3.Cursor) -> None:
        """Create the database schema."""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS questionnaires (
                id TEXT PRIMARY KEY,
                organization_id TEXT NOT NULL,
                title TEXT NOT NULL,
                requester_name TEXT NOT NULL,
                company TEXT,
                completed_at TEXT,
                deleted_at TEXT,
                created_at TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS questions (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                questionnaire_id TEXT NOT NULL,
                question_text TEXT NOT NULL,
                answer_text TEXT,
                status TEXT NOT NULL,
                category TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY (questionnaire_id) REFERENCES questionnaires(id)
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_questionnaires_org
            ON questionnaires(organization_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_questions_questionnaire
            ON questions(questionnaire_id)
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_questions_status
            ON questions(status)
        """)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def add_questionnaire(
        self,
        questionnaire_id: str,
        organization_id: str,
        title: str,
        requester_name: str,
        company: Optional[str] = None,
        completed_at: Optional[str] = None,
    ) -> None:
        """
        Add or replace a questionnaire.

        Args:
            questionnaire_id: Unique questionnaire identifier
            organization_id: Owning organization (tenant)
            title: Questionnaire title
            requester_name: Person who sent the questionnaire
            company: Requesting company, if known
            completed_at: ISO timestamp of completion, if completed
        """
        conn = self._get_connection()
        conn.execute("""
            INSERT OR REPLACE INTO questionnaires
            (id, organization_id, title, requester_name, company, completed_at, deleted_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, NULL, ?)
        """, (
            questionnaire_id,
            organization_id,
            title,
            requester_name,
            company,
            completed_at,
            datetime.now().isoformat(),
        ))
        conn.commit()
        logger.info(f"[QuestionRegistry] Saved questionnaire {questionnaire_id} (org={organization_id})")

    def add_question(
        self,
        questionnaire_id: str,
        question_id: str,
        question_text: str,
        answer_text: Optional[str] = None,
        status: str = QuestionStatus.DRAFT,
        category: Optional[str] = None,
    ) -> None:
        """
        Add a question to an existing questionnaire.

        Raises:
            QuestionnaireNotFoundError: If the questionnaire does not exist
            ValueError: If status is not a known QuestionStatus
        """
        if status not in QuestionStatus.ALL:
            raise ValueError(f"Unknown question status: {status}")

        conn = self._get_connection()
        if not self._questionnaire_exists(questionnaire_id):
            raise QuestionnaireNotFoundError(questionnaire_id)

        conn.execute("""
            INSERT INTO questions
            (id, questionnaire_id, question_text, answer_text, status, category, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?)
        """, (
            question_id,
            questionnaire_id,
            question_text,
            answer_text,
            status,
            category,
            datetime.now().isoformat(),
        ))
        conn.commit()
        logger.debug(f"[QuestionRegistry] Saved question {question_id} -> {questionnaire_id}")

    def answer_question(
        self,
        question_id: str,
        answer_text: str,
        status: str = QuestionStatus.COMPLETED,
    ) -> bool:
        """
        Record an answer and move the question to `status`.

        Returns:
            True if the question existed and was updated
        """
        conn = self._get_connection()
        cursor = conn.execute(
            "UPDATE questions SET answer_text = ?, status = ? WHERE id = ?",
            (answer_text, status, question_id)
        )
        conn.commit()
        return cursor.rowcount > 0

    def delete_questionnaire(self, questionnaire_id: str) -> bool:
        """
        Soft-delete a questionnaire. Its questions stop being candidates.

        Returns:
            True if the questionnaire existed and was not already deleted
        """
        conn = self._get_connection()
        cursor = conn.execute(
            "UPDATE questionnaires SET deleted_at = ? WHERE id = ? AND deleted_at IS NULL",
            (datetime.now().isoformat(), questionnaire_id)
        )
        conn.commit()
        if cursor.rowcount:
            logger.info(f"[QuestionRegistry] Soft-deleted questionnaire {questionnaire_id}")
        return cursor.rowcount > 0

    # -------------------------------------------------------------------------
    # Reads (QuestionCorpus)
    # -------------------------------------------------------------------------

    def _questionnaire_exists(self, questionnaire_id: str) -> bool:
        cursor = self._get_connection().execute(
            "SELECT 1 FROM questionnaires WHERE id = ?", (questionnaire_id,)
        )
        return cursor.fetchone() is not None

    def fetch_candidates(
        self,
        organization_id: str,
        exclude_id: Optional[str] = None,
        limit: int = DEFAULT_CANDIDATE_LIMIT,
    ) -> List[CandidateQuestion]:
        """
        Load completed, answered questions of one organization.

        Questions of soft-deleted questionnaires are skipped. Rows come back
        in insertion order so tie-breaking downstream is stable.

        Args:
            organization_id: Tenant scope
            exclude_id: Question id to leave out
            limit: Candidate cap

        Returns:
            List of CandidateQuestion, at most `limit` long

        Raises:
            CandidateRetrievalError: If the database cannot be read
        """
        query = """
            SELECT q.id, q.question_text, q.answer_text, q.status, q.category,
                   n.id AS questionnaire_id, n.title, n.requester_name,
                   n.company, n.completed_at
            FROM questions q
            JOIN questionnaires n ON n.id = q.questionnaire_id
            WHERE n.organization_id = ?
              AND n.deleted_at IS NULL
              AND q.status = ?
              AND q.answer_text IS NOT NULL
        """
        params: list = [organization_id, QuestionStatus.COMPLETED]

        if exclude_id is not None:
            query += " AND q.id != ?"
            params.append(exclude_id)

        query += " ORDER BY q.seq LIMIT ?"
        params.append(limit)

        try:
            rows = self._get_connection().execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"[QuestionRegistry] Candidate query failed: {e}")
            raise CandidateRetrievalError(
                f"Question registry unavailable: {e}",
                organization_id=organization_id,
            ) from e

        candidates = [
            CandidateQuestion(
                id=row["id"],
                question_text=row["question_text"],
                answer_text=row["answer_text"],
                status=row["status"],
                category=row["category"],
                questionnaire=SourceQuestionnaire(
                    id=row["questionnaire_id"],
                    title=row["title"],
                    requester_name=row["requester_name"],
                    company=row["company"],
                    completed_at=row["completed_at"],
                ),
            )
            for row in rows
        ]

        logger.debug(f"[QuestionRegistry] {len(candidates)} candidate(s) for org={organization_id}")
        return candidates

    def load_questionnaire_questions(self, questionnaire_id: str) -> List[QuestionItem]:
        """
        Load every question of one questionnaire, in insertion order.

        Raises:
            QuestionnaireNotFoundError: If the questionnaire does not exist
            CandidateRetrievalError: If the database cannot be read
        """
        try:
            if not self._questionnaire_exists(questionnaire_id):
                raise QuestionnaireNotFoundError(questionnaire_id)

            rows = self._get_connection().execute(
                "SELECT id, question_text FROM questions WHERE questionnaire_id = ? ORDER BY seq",
                (questionnaire_id,)
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"[QuestionRegistry] Questionnaire query failed: {e}")
            raise CandidateRetrievalError(f"Question registry unavailable: {e}") from e

        return [QuestionItem(id=row["id"], question_text=row["question_text"]) for row in rows]

    def close(self) -> None:
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
            logger.info("[QuestionRegistry] Connection closed")


# =============================================================================
# Module-level convenience functions
# =============================================================================

_registry: Optional[QuestionRegistry] = None


def init_registry(db_path: Optional[str] = None, check_same_thread: bool = True) -> QuestionRegistry:
    """
    Initialize the process-wide question registry.

    The engine itself never reads this; entry points pass it in explicitly.
    """
    global _registry
    _registry = QuestionRegistry(db_path=db_path, check_same_thread=check_same_thread)
    return _registry


def get_registry() -> Optional[QuestionRegistry]:
    """Get the process-wide question registry instance."""
    return _registry


def close_registry() -> None:
    """Close the process-wide question registry."""
    global _registry
    if _registry:
        _registry.close()
        _registry = None
