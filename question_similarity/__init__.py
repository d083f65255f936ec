"""
Question similarity and deduplication engine.

Lexical-overlap scoring for security/due-diligence questionnaires:
- similar previously answered questions for a new question
- near-duplicate clusters inside one questionnaire
- answer suggestions with provenance
"""

__version__ = "1.0.0"
