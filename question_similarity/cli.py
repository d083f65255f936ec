"""
Question similarity CLI.

Runs the engine against a JSON corpus file (see registry/memory.py for the
format) and prints JSON results to stdout.

Usage:
    python -m question_similarity.cli [--log-level L] [--log-dir DIR] duplicates corpus.json [--questionnaire QN]
    python -m question_similarity.cli similar corpus.json --org ORG --text "..."
    python -m question_similarity.cli suggest corpus.json --org ORG --text "..."
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from question_similarity.dedup import SimilarityEngine
from question_similarity.errors import SimilarityError
from question_similarity.infra.logging_config import setup_logging
from question_similarity.infra.settings import SimilarityConfig
from question_similarity.registry import InMemoryQuestionCorpus

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_ENGINE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Questionnaire similarity and duplicate detection")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (default: WARNING, logs go to stderr)"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Also write daily log files to this directory (default: stderr only)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    dup_parser = subparsers.add_parser("duplicates", help="Find duplicate questions")
    dup_parser.add_argument("corpus", type=str, help="Path to corpus JSON file")
    dup_parser.add_argument(
        "--questionnaire",
        type=str,
        default=None,
        help="Only check this questionnaire (default: all)"
    )

    for name, help_text in (
        ("similar", "Find similar answered questions"),
        ("suggest", "Suggest answers from similar questions"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("corpus", type=str, help="Path to corpus JSON file")
        sub.add_argument("--org", type=str, required=True, help="Organization ID")
        sub.add_argument("--text", type=str, required=True, help="Question text")
        sub.add_argument("--limit", type=int, default=None, help="Maximum results")
        if name == "similar":
            sub.add_argument("--exclude", type=str, default=None, help="Question ID to exclude")

    return parser


def run_command(args: argparse.Namespace) -> list:
    """Execute the parsed command and return JSON-ready results."""
    corpus = InMemoryQuestionCorpus.load_json(args.corpus)
    engine = SimilarityEngine(corpus, SimilarityConfig.from_env())

    if args.command == "duplicates":
        ids = [args.questionnaire] if args.questionnaire else corpus.questionnaire_ids()
        return [
            {
                "questionnaireId": qn_id,
                "clusters": [c.to_dict() for c in engine.find_duplicates_in_questionnaire(qn_id)],
            }
            for qn_id in ids
        ]

    if args.command == "similar":
        results = engine.find_similar_questions(
            args.org, args.text, exclude_question_id=args.exclude, limit=args.limit
        )
        return [r.to_dict() for r in results]

    suggestions = engine.get_answer_suggestions(args.org, args.text, limit=args.limit)
    return [s.to_dict() for s in suggestions]


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE

    setup_logging(args.log_level, log_dir=args.log_dir)

    try:
        output = run_command(args)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"[CLI] Could not read corpus: {e}")
        print(f"Error: could not read corpus: {e}", file=sys.stderr)
        return EXIT_USAGE
    except SimilarityError as e:
        logger.error(f"[CLI] {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ENGINE_ERROR

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
